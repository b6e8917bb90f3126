"""
Investor API router (tenant-scoped by the caller's companyId)
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_investor_repository
from middleware.auth import get_current_user
from models.api.investor import InvestorCreate
from models.api.user import TokenClaims
from models.domain.investor import Investor
from repositories.investor_repository import InvestorRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/investors", tags=["investors"])


@router.get("")
async def list_investors(
    current_user: TokenClaims = Depends(get_current_user),
    investors: InvestorRepository = Depends(get_investor_repository),
):
    """All investors of the caller's company"""
    rows = await investors.list_by_company(current_user.company_id)
    return [i.to_dict() for i in rows]


@router.post("")
async def create_investor(
    data: InvestorCreate,
    current_user: TokenClaims = Depends(get_current_user),
    investors: InvestorRepository = Depends(get_investor_repository),
):
    """Create an investor in the caller's company"""
    investor = Investor(
        id="",
        company_id=current_user.company_id,
        name=data.name,
        firm=data.firm,
        status=data.status,
        check_size=data.check_size,
        last_contact=data.last_contact,
        notes=data.notes,
    )
    created = await investors.create(investor)
    return created.to_dict()
