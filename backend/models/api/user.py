"""
Pydantic models for users and authentication
"""

from pydantic import BaseModel, ConfigDict, EmailStr
from pydantic.alias_generators import to_camel


class LoginRequest(BaseModel):
    """Body of POST /api/auth/login"""
    email: EmailStr
    password: str


class TokenClaims(BaseModel):
    """Claims carried by a bearer token (attached to authenticated requests)"""
    id: str
    email: str
    role: str
    company_id: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
