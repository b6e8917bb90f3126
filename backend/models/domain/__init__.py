"""
Domain Models - Storage-agnostic data structures for the API server

Architecture:
- Domain models are pure Python objects (dataclasses)
- Storage details (PostgreSQL) are abstracted via repositories
- Routers operate on these models, not database rows
"""

from .company import Company
from .user import User, UserRole
from .investor import Investor, SalesDeal, ProductFeature

__all__ = [
    'Company',
    'User',
    'UserRole',
    'Investor',
    'SalesDeal',
    'ProductFeature',
]
