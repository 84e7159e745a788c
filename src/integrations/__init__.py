"""
Integrations layer.
This package contains all code used to communicate with the remote catalog store
(a GitHub repository holding data.json).

Key rule:
- Catalog operations MUST NOT call GitHub directly.
- They call a CatalogStore client (under src/integrations/clients).
- The in-memory mock is used in development/tests; the GitHub client otherwise.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (src/api/dependencies.py).
"""

from .contracts.catalog_store import (
    CatalogStore,
    CatalogStoreError,
    CommitResult,
    StoredFile,
    WriteAttempt,
)

__all__ = [
    "CatalogStore", "CatalogStoreError", "CommitResult", "StoredFile", "WriteAttempt",
]
