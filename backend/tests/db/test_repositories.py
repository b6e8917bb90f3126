"""
PostgreSQL repository tests

Key invariants tested:
1. Bootstrap reuses the demo company by name
2. Investor reads never cross company boundaries
3. A migration is all-or-nothing, company included
"""
import asyncpg
import pytest

from models.api.migration import MigrationRequest
from models.domain import Company, Investor, User
from repositories import (
    CompanyRepository,
    InvestorRepository,
    MigrationRepository,
    UserRepository,
)

pytestmark = pytest.mark.integration


async def _count(pool, table: str) -> int:
    async with pool.acquire() as conn:
        return await conn.fetchval(f"SELECT COUNT(*) FROM {table}")


async def test_bootstrap_admin_reuses_company(db_pool):
    users = UserRepository(db_pool)

    first = await users.bootstrap_admin("admin@startupos.com", "StartupOS Demo")
    second = await users.bootstrap_admin("admin2@startupos.com", "StartupOS Demo")

    assert first.role == "ADMIN"
    assert first.company_id == second.company_id
    assert await _count(db_pool, "companies") == 1
    assert (await users.get_by_email("admin@startupos.com")).id == first.id


async def test_email_lookup_ignores_case(db_pool):
    users = UserRepository(db_pool)
    admin = await users.bootstrap_admin("ADMIN@startupos.com", "StartupOS Demo")

    assert admin.email == "admin@startupos.com"
    assert (await users.get_by_email("Admin@StartupOS.com")).id == admin.id

    with pytest.raises(asyncpg.UniqueViolationError):
        await users.bootstrap_admin("admin@startupos.com", "StartupOS Demo")


async def test_duplicate_email_rejected(db_pool):
    users = UserRepository(db_pool)
    await users.bootstrap_admin("admin@startupos.com", "StartupOS Demo")

    with pytest.raises(asyncpg.UniqueViolationError):
        await users.bootstrap_admin("admin@startupos.com", "StartupOS Demo")


async def test_investors_scoped_by_company(db_pool):
    companies = CompanyRepository(db_pool)
    investors = InvestorRepository(db_pool)
    acme = await companies.create(Company(id="", name="Acme"))
    globex = await companies.create(Company(id="", name="Globex"))

    await investors.create(Investor(id="", company_id=acme.id, name="A"))
    await investors.create(Investor(id="", company_id=globex.id, name="G"))

    assert [i.name for i in await investors.list_by_company(acme.id)] == ["A"]
    assert [i.name for i in await investors.list_by_company(globex.id)] == ["G"]


async def test_migration_imports_everything(db_pool):
    request = MigrationRequest.model_validate({
        "companyName": "Acme",
        "investors": [{"name": "A"}, {"name": "B"}],
        "deals": [{"company": "C"}],
        "features": [],
    })

    result = await MigrationRepository(db_pool).import_company(request, "admin-1@startupos.io")

    assert result.records_created == 3
    async with db_pool.acquire() as conn:
        name = await conn.fetchval("SELECT name FROM companies WHERE id = $1", result.company.id)
    assert name == "Acme"
    assert (await UserRepository(db_pool).get_by_id(result.admin.id)).role == "FOUNDER"
    names = [i.name for i in await InvestorRepository(db_pool).list_by_company(result.company.id)]
    assert sorted(names) == ["A", "B"]


async def test_failed_migration_rolls_back_company(db_pool):
    users = UserRepository(db_pool)
    await users.bootstrap_admin("taken@startupos.io", "StartupOS Demo")
    request = MigrationRequest.model_validate({"companyName": "Acme", "investors": [{"name": "A"}]})

    # Admin email collides with an existing user, so the insert fails mid-way
    with pytest.raises(asyncpg.UniqueViolationError):
        await MigrationRepository(db_pool).import_company(request, "taken@startupos.io")

    assert await _count(db_pool, "companies") == 1
    assert await _count(db_pool, "investors") == 0


async def test_user_round_trip(db_pool):
    company = await CompanyRepository(db_pool).create(Company(id="", name="Acme"))
    user = await UserRepository(db_pool).create(
        User(id="", email="founder@acme.io", company_id=company.id, role="FOUNDER")
    )

    loaded = await UserRepository(db_pool).get_by_id(user.id)

    assert loaded.email == "founder@acme.io"
    assert loaded.created_at is not None
