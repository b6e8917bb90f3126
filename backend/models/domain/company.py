"""
Company domain model (the tenant every server row is scoped to)
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from utils.id_generator import generate_company_id, validate_id


@dataclass
class Company:
    """
    Storage: PostgreSQL (companies table)

    ID format: co_xxxxxxxx
    """
    id: str
    name: str
    subscription_status: str = "TRIALING"
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.id or not validate_id(self.id):
            self.id = generate_company_id()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "subscriptionStatus": self.subscription_status,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
