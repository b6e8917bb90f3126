"""
Database Configuration
======================

Centralized connection configuration for the API server and the local store.
Handles PostgreSQL (relational store) and the blob backend behind the
local keyed store (file directory, Redis or memory).
"""
from typing import Optional
from dataclasses import dataclass

from .settings import Settings, get_settings


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""
    host: str
    port: int
    user: str
    password: str
    database: str
    min_size: int = 2
    max_size: int = 10

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> 'PostgresConfig':
        """Create config from application settings."""
        settings = settings or get_settings()
        return cls(
            host=settings.postgres_host,
            port=settings.postgres_port,
            user=settings.postgres_user,
            password=settings.postgres_password,
            database=settings.postgres_db,
            min_size=settings.postgres_min_pool_size,
            max_size=settings.postgres_max_pool_size,
        )

    def to_asyncpg_kwargs(self) -> dict:
        """Convert to asyncpg.create_pool kwargs."""
        return {
            'host': self.host,
            'port': self.port,
            'user': self.user,
            'password': self.password,
            'database': self.database,
            'min_size': self.min_size,
            'max_size': self.max_size,
        }


@dataclass
class LocalStoreConfig:
    """Local keyed store configuration."""
    backend: str
    path: str
    namespace: str
    quota_bytes: int
    redis_url: str

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> 'LocalStoreConfig':
        settings = settings or get_settings()
        return cls(
            backend=settings.local_store_backend,
            path=settings.local_store_path,
            namespace=settings.local_store_namespace,
            quota_bytes=settings.local_store_quota_bytes,
            redis_url=settings.redis_url,
        )


def get_postgres_config() -> PostgresConfig:
    """Get PostgreSQL configuration from settings."""
    return PostgresConfig.from_settings()


def get_local_store_config() -> LocalStoreConfig:
    """Get local store configuration from settings."""
    return LocalStoreConfig.from_settings()


async def create_postgres_pool(config: Optional[PostgresConfig] = None):
    """Create PostgreSQL connection pool from settings."""
    import asyncpg
    config = config or get_postgres_config()
    return await asyncpg.create_pool(**config.to_asyncpg_kwargs())


def create_blob_backend(config: Optional[LocalStoreConfig] = None):
    """Create the blob backend named by the local store configuration."""
    from services.blob_store import FileBlobBackend, MemoryBlobBackend, RedisBlobBackend

    config = config or get_local_store_config()
    if config.backend == "redis":
        return RedisBlobBackend(config.redis_url)
    if config.backend == "memory":
        return MemoryBlobBackend(quota_bytes=config.quota_bytes)
    return FileBlobBackend(config.path, quota_bytes=config.quota_bytes)


def create_keyed_store(config: Optional[LocalStoreConfig] = None):
    """Create a KeyedStore over the configured blob backend."""
    from services.keyed_store import KeyedStore

    config = config or get_local_store_config()
    return KeyedStore(create_blob_backend(config), namespace=config.namespace)
