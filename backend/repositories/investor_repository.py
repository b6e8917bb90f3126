"""
Investor Repository - PostgreSQL storage for investor pipelines

Storage: PostgreSQL (investors table)

Every query is scoped by company_id; there is no cross-tenant read.
"""
import logging
from typing import List
import asyncpg

from models.domain.investor import Investor

logger = logging.getLogger(__name__)


def row_to_investor(row) -> Investor:
    return Investor(
        id=row['id'],
        company_id=row['company_id'],
        name=row['name'],
        firm=row['firm'],
        status=row['status'],
        check_size=row['check_size'],
        last_contact=row['last_contact'],
        notes=row['notes'],
        created_at=row['created_at'],
    )


class InvestorRepository:
    """Repository for Investor domain model"""

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    async def list_by_company(self, company_id: str) -> List[Investor]:
        """All investors of one company, oldest first"""
        async with self.db_pool.acquire() as conn:
            rows = await conn.fetch("""
                SELECT id, company_id, name, firm, status, check_size,
                       last_contact, notes, created_at
                FROM investors
                WHERE company_id = $1
                ORDER BY created_at, id
            """, company_id)
            return [row_to_investor(r) for r in rows]

    async def create(self, investor: Investor) -> Investor:
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow("""
                INSERT INTO investors (
                    id, company_id, name, firm, status, check_size,
                    last_contact, notes, created_at
                )
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8, NOW())
                RETURNING created_at
            """,
                investor.id,
                investor.company_id,
                investor.name,
                investor.firm,
                investor.status,
                investor.check_size,
                investor.last_contact,
                investor.notes
            )

            investor.created_at = row['created_at']
            logger.info(f"Created investor {investor.id} for company {investor.company_id}")
            return investor
