"""
Company Repository - PostgreSQL storage for tenants

Storage: PostgreSQL (companies table)
"""
import logging
from typing import Optional
import asyncpg

from models.domain.company import Company

logger = logging.getLogger(__name__)


class CompanyRepository:
    """Repository for Company domain model"""

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    async def create(self, company: Company, conn: Optional[asyncpg.Connection] = None) -> Company:
        """Insert a company (inside `conn`'s transaction when given)"""
        if conn is None:
            async with self.db_pool.acquire() as conn:
                return await self.create(company, conn)

        row = await conn.fetchrow("""
            INSERT INTO companies (id, name, subscription_status, created_at)
            VALUES ($1, $2, $3, NOW())
            RETURNING created_at
        """, company.id, company.name, company.subscription_status)

        company.created_at = row['created_at']
        logger.info(f"Created company {company.id} ({company.name})")
        return company
