"""
Migration Repository - bulk import of a client's local data

Storage: PostgreSQL (companies, users, investors, sales_deals,
product_features)

One call creates a company with its admin user and inserts every supplied
investor, deal and feature inside a single transaction. Any failing row
rolls back the whole import, company included.
"""
import logging
from dataclasses import dataclass
import asyncpg

from models.api.migration import MigrationRequest
from models.domain.company import Company
from models.domain.investor import Investor, ProductFeature, SalesDeal
from models.domain.user import User, UserRole
from repositories.company_repository import CompanyRepository
from repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_COMPANY_NAME = "My Startup"


@dataclass
class MigrationResult:
    company: Company
    admin: User
    records_created: int


class MigrationRepository:
    """Transactional importer for MigrationRequest payloads"""

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    def _build_rows(self, request: MigrationRequest, company_id: str):
        investors = [
            Investor(
                id="",
                company_id=company_id,
                name=inv.name,
                firm=inv.firm,
                status=inv.status,
                check_size=inv.check_size,
            )
            for inv in request.investors
        ]
        deals = [
            SalesDeal(
                id="",
                company_id=company_id,
                company_name=deal.company,
                lead_name=deal.lead_name,
                value=deal.value,
                stage=deal.stage,
                probability=deal.probability,
            )
            for deal in request.deals
        ]
        features = [
            ProductFeature(
                id="",
                company_id=company_id,
                name=feat.name,
                status=feat.status,
                priority=feat.priority,
            )
            for feat in request.features
        ]
        return investors, deals, features

    async def import_company(self, request: MigrationRequest, admin_email: str) -> MigrationResult:
        """
        Create the company, its FOUNDER user and all rows atomically.

        Returns:
            MigrationResult with the number of investor/deal/feature rows
            inserted (company and user are not counted)
        """
        company = Company(id="", name=request.company_name or DEFAULT_COMPANY_NAME)
        admin = User(
            id="",
            email=admin_email,
            name="Admin User",
            role=UserRole.FOUNDER.value,
            company_id=company.id,
        )
        investors, deals, features = self._build_rows(request, company.id)

        async with self.db_pool.acquire() as conn:
            async with conn.transaction():
                await CompanyRepository(self.db_pool).create(company, conn)
                await UserRepository(self.db_pool).create(admin, conn)

                if investors:
                    await conn.executemany("""
                        INSERT INTO investors (id, company_id, name, firm, status, check_size, created_at)
                        VALUES ($1, $2, $3, $4, $5, $6, NOW())
                    """, [
                        (i.id, i.company_id, i.name, i.firm, i.status, i.check_size)
                        for i in investors
                    ])

                if deals:
                    await conn.executemany("""
                        INSERT INTO sales_deals (
                            id, company_id, company_name, lead_name, value, stage, probability, created_at
                        )
                        VALUES ($1, $2, $3, $4, $5, $6, $7, NOW())
                    """, [
                        (d.id, d.company_id, d.company_name, d.lead_name, d.value, d.stage, d.probability)
                        for d in deals
                    ])

                if features:
                    await conn.executemany("""
                        INSERT INTO product_features (id, company_id, name, status, priority, created_at)
                        VALUES ($1, $2, $3, $4, $5, NOW())
                    """, [
                        (f.id, f.company_id, f.name, f.status, f.priority)
                        for f in features
                    ])

        created = len(investors) + len(deals) + len(features)
        logger.info(
            f"Migrated company {company.id} ({company.name}): "
            f"{len(investors)} investors, {len(deals)} deals, {len(features)} features"
        )
        return MigrationResult(company=company, admin=admin, records_created=created)
