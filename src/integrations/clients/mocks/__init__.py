"""
Mock integration clients.

These clients return realistic responses without calling any external API.
They are used when:
- No GitHub repository or token is available (local UI development)
- We want to test the catalog routes end-to-end without network access

Important:
- Mock clients must follow the SAME interface as real HTTP clients.
- Mock clients should return data shaped according to src/integrations/contracts/*
"""
