"""
Repository Pattern - Storage abstraction layer

Repositories hide PostgreSQL details from the API routers. Routers work
with domain models (models.domain), not asyncpg records.

- UserRepository:      users (+ bootstrap of the demo company/admin)
- CompanyRepository:   companies
- InvestorRepository:  investors scoped to a company
- MigrationRepository: transactional bulk import of a whole company
"""
import asyncio
import logging

from config import create_postgres_pool
from .schema import ensure_schema

logger = logging.getLogger(__name__)

# Shared database connection pool (initialized on first use)
db_pool = None
_pool_lock = asyncio.Lock()


async def get_db_pool():
    """Get or create shared database connection pool"""
    global db_pool
    if db_pool is None:
        async with _pool_lock:
            if db_pool is None:
                pool = await create_postgres_pool()
                await ensure_schema(pool)
                db_pool = pool
                logger.info("PostgreSQL pool created")
    return db_pool


async def close_db_pool():
    """Close the shared pool (application shutdown)"""
    global db_pool
    if db_pool is not None:
        await db_pool.close()
        db_pool = None
        logger.info("PostgreSQL pool closed")


from .user_repository import UserRepository
from .company_repository import CompanyRepository
from .investor_repository import InvestorRepository
from .migration_repository import MigrationRepository

__all__ = [
    'UserRepository',
    'CompanyRepository',
    'InvestorRepository',
    'MigrationRepository',
    'db_pool',
    'get_db_pool',
    'close_db_pool',
]
