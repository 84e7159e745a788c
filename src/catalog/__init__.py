"""
Catalog operations: read, write (sync to the remote store) and admin gate.
"""
from .admin_gate import verify_admin_password
from .reader import CatalogReader, empty_catalog
from .writer import CatalogWriter, encode_catalog

__all__ = [
    "CatalogReader",
    "CatalogWriter",
    "empty_catalog",
    "encode_catalog",
    "verify_admin_password",
]
