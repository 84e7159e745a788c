"""
Real HTTP integration clients.

These clients talk to GitHub over HTTP:
- Contents API for reads with revision handles and for commits
- raw.githubusercontent.com for plain downloads

Important:
- Must implement the same interface as the mock clients
- Must return data shaped according to src/integrations/contracts/*
"""
