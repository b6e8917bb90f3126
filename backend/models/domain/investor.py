"""
Investor, sales deal and product feature rows

All three are scoped to a company (company_id foreign key).
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from utils.id_generator import (
    generate_investor_id,
    generate_product_feature_id,
    generate_sales_deal_id,
    validate_id,
)


@dataclass
class Investor:
    """ID format: iv_xxxxxxxx"""
    id: str
    company_id: str
    name: str
    firm: Optional[str] = None
    status: Optional[str] = None
    check_size: Optional[str] = None
    last_contact: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.id or not validate_id(self.id):
            self.id = generate_investor_id()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "companyId": self.company_id,
            "name": self.name,
            "firm": self.firm,
            "status": self.status,
            "checkSize": self.check_size,
            "lastContact": self.last_contact,
            "notes": self.notes,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class SalesDeal:
    """ID format: dl_xxxxxxxx"""
    id: str
    company_id: str
    company_name: str
    lead_name: Optional[str] = None
    value: float = 0
    stage: Optional[str] = None
    probability: float = 0
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.id or not validate_id(self.id):
            self.id = generate_sales_deal_id()


@dataclass
class ProductFeature:
    """ID format: ft_xxxxxxxx"""
    id: str
    company_id: str
    name: str
    status: Optional[str] = None
    priority: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.id or not validate_id(self.id):
            self.id = generate_product_feature_id()
