"""
Data migration API router

Uploads a client's local collections as a brand-new company.
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_migration_repository
from models.api.migration import MigrationRequest
from repositories.migration_repository import MigrationRepository
from utils.datetime_utils import epoch_millis

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["migration"])


@router.post("/migrate")
async def migrate(
    payload: MigrationRequest,
    migrations: MigrationRepository = Depends(get_migration_repository),
):
    """
    Create a company, its admin and every supplied record in one transaction

    Returns the new company id and the number of investor/deal/feature
    rows created.
    """
    admin_email = f"admin-{epoch_millis()}@startupos.io"
    result = await migrations.import_company(payload, admin_email)

    return {
        "success": True,
        "companyId": result.company.id,
        "recordsCreated": result.records_created,
    }
