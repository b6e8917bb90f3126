from pydantic_settings import BaseSettings
from pydantic import field_validator
from functools import lru_cache
from pathlib import Path
from typing import Optional
import os


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables can come from:
    - docker-compose.yml environment section
    - .env file (for secrets like AWS and Stripe keys)
    - System environment

    Variable names match docker-compose conventions:
    - POSTGRES_HOST, POSTGRES_PORT, etc. (for database)
    - AWS_ACCESS_KEY_ID, AWS_BUCKET_NAME, ... (for uploads)
    - STRIPE_WEBHOOK_SECRET (for webhook signature checks)
    """

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    # JWT - uses JWT_SECRET / SECRET_KEY from .env or the dev default
    jwt_secret_key: str = "dev-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 7  # 7 days

    # PostgreSQL (from docker-compose)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "startupos_user"
    postgres_password: str = "startupos_pass"
    postgres_db: str = "startupos"
    postgres_min_pool_size: int = 2
    postgres_max_pool_size: int = 10

    # Development bootstrap admin (first login seeds a demo company)
    bootstrap_enabled: Optional[bool] = None
    bootstrap_admin_email: str = "admin@startupos.com"
    bootstrap_admin_password: str = "admin123"
    bootstrap_company_name: str = "StartupOS Demo"

    # Users carry no password hash yet. Setting this to false makes login
    # refuse every request until a credential check is wired in.
    allow_unverified_passwords: bool = True

    # S3 uploads (mock URLs are returned when no access key is configured)
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_region: str = "us-east-1"
    aws_bucket_name: str = ""
    mock_storage_base_url: str = "https://mock-s3.startupos.dev"

    # Stripe (empty secret = accept unsigned payloads)
    stripe_webhook_secret: str = ""

    # Local keyed store
    local_store_backend: str = "file"  # file | memory | redis
    local_store_path: str = str(Path.home() / ".startupos")
    local_store_namespace: str = "startupos_"
    local_store_quota_bytes: int = 5 * 1024 * 1024
    redis_url: str = "redis://localhost:6379"

    # Used by the local health check
    api_url: str = "http://localhost:8000"

    cors_origins: str = "*"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra env vars

    @field_validator('jwt_secret_key', mode='before')
    @classmethod
    def get_jwt_secret(cls, v):
        """Use JWT_SECRET or SECRET_KEY from env if JWT_SECRET_KEY not set"""
        if v and v != "dev-secret-key-change-in-production":
            return v
        return os.getenv('JWT_SECRET') or os.getenv('SECRET_KEY') or v or 'dev-secret-key-change-in-production'

    @field_validator('local_store_backend')
    @classmethod
    def check_store_backend(cls, v):
        v = v.lower()
        if v not in ("file", "memory", "redis"):
            raise ValueError(f"Unknown local store backend: {v}")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def bootstrap_allowed(self) -> bool:
        """Bootstrap login defaults to on everywhere except production"""
        if self.bootstrap_enabled is None:
            return not self.is_production
        return self.bootstrap_enabled

    @property
    def storage_configured(self) -> bool:
        return bool(self.aws_access_key_id)

    @property
    def cors_origin_list(self) -> list:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
