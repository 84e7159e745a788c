"""
Utility modules for the catalog API
"""
from .store_config_loader import AppConfig, StoreSettings, load_store_settings
from .timestamps import utc_timestamp

__all__ = [
    'AppConfig',
    'StoreSettings',
    'load_store_settings',
    'utc_timestamp',
]
