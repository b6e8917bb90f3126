"""
Pydantic models for the bulk migration endpoint

Clients upload their local collections to create a server-side company.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelIn(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class MigrationInvestor(_CamelIn):
    name: str
    firm: Optional[str] = None
    status: Optional[str] = None
    check_size: Optional[str] = None


class MigrationDeal(_CamelIn):
    company: str
    lead_name: Optional[str] = None
    value: float = 0
    stage: Optional[str] = None
    probability: float = 0


class MigrationFeature(_CamelIn):
    name: str
    status: Optional[str] = None
    priority: Optional[str] = None


class MigrationRequest(_CamelIn):
    """Body of POST /api/v1/migrate"""
    company_name: Optional[str] = None
    investors: List[MigrationInvestor] = Field(default_factory=list)
    deals: List[MigrationDeal] = Field(default_factory=list)
    features: List[MigrationFeature] = Field(default_factory=list)
