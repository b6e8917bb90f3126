"""
Pydantic models for the investor endpoints
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class InvestorCreate(BaseModel):
    """Body of POST /api/v1/investors (companyId comes from the token)"""
    name: str
    firm: Optional[str] = None
    status: Optional[str] = None
    check_size: Optional[str] = None
    last_contact: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )
