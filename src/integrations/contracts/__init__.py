"""
Contracts (data models).

This folder defines the request/response shapes for the remote catalog store:
- the stored file with its revision handle
- the commit returned by a successful write
- the error raised when the store rejects a call

Both mock and real HTTP clients use these contracts.
"""
