"""
User domain model
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional
import uuid


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    FOUNDER = "FOUNDER"
    MEMBER = "MEMBER"


@dataclass
class User:
    """
    User domain model - storage-agnostic representation

    Storage: PostgreSQL (users table)

    Users keep UUIDs; every other row uses short prefixed IDs.
    There is no password hash yet (see api.auth.login).
    """
    id: str  # UUID format
    email: str
    company_id: str
    name: Optional[str] = None
    role: str = UserRole.MEMBER.value
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Generate UUID if not provided"""
        if not self.id:
            self.id = str(uuid.uuid4())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
            "companyId": self.company_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
