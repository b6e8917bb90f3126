"""
FastAPI dependency providers

Routers never build repositories themselves; they ask for them here, which
lets tests swap in other implementations through app.dependency_overrides.
"""
from repositories import (
    InvestorRepository,
    MigrationRepository,
    UserRepository,
    get_db_pool,
)
from services.file_storage import FileStorage


async def get_user_repository() -> UserRepository:
    return UserRepository(await get_db_pool())


async def get_investor_repository() -> InvestorRepository:
    return InvestorRepository(await get_db_pool())


async def get_migration_repository() -> MigrationRepository:
    return MigrationRepository(await get_db_pool())


def get_file_storage() -> FileStorage:
    return FileStorage()
