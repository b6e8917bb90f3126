"""
Configuration module for settings, database and local store connections.
"""
from .settings import Settings, get_settings
from .database import (
    PostgresConfig,
    LocalStoreConfig,
    get_postgres_config,
    get_local_store_config,
    create_postgres_pool,
    create_blob_backend,
    create_keyed_store,
)

__all__ = [
    'Settings',
    'get_settings',
    'PostgresConfig',
    'LocalStoreConfig',
    'get_postgres_config',
    'get_local_store_config',
    'create_postgres_pool',
    'create_blob_backend',
    'create_keyed_store',
]
