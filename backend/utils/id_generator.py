"""
Short prefixed ID generator for StartupOS records.

Format: {prefix}_{base36_random}
- co_xxxxxxxx  - company
- iv_xxxxxxxx  - investor
- dl_xxxxxxxx  - sales deal
- ft_xxxxxxxx  - product feature
- ws_xxxxxxxx  - workspace
- rc_xxxxxxxx  - any other local record

8 chars base36 = 36^8 = 2.8 trillion unique IDs per type
Users keep UUIDs (see models.domain.user).
"""
import secrets
import re
from typing import Any, Optional

# Base36 alphabet (lowercase letters + digits)
ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
BASE = len(ALPHABET)  # 36

PREFIXES = {
    'company': 'co',
    'investor': 'iv',
    'sales_deal': 'dl',
    'product_feature': 'ft',
    'workspace': 'ws',
    'record': 'rc',
}

PREFIX_TO_TYPE = {v: k for k, v in PREFIXES.items()}

ID_PATTERN = re.compile(r'^(co|iv|dl|ft|ws|rc)_[0-9a-z]{8}$')


def _random_base36(length: int = 8) -> str:
    """Generate random base36 string"""
    result = []
    for _ in range(length):
        result.append(ALPHABET[secrets.randbelow(BASE)])
    return ''.join(result)


def generate_id(entity_type: str) -> str:
    """
    Generate a new short ID for the given entity type.

    Args:
        entity_type: One of the keys of PREFIXES

    Returns:
        Short ID like 'iv_x5b8r2yj'

    Raises:
        ValueError: If entity_type is invalid
    """
    if entity_type not in PREFIXES:
        raise ValueError(f"Invalid entity type: {entity_type}. "
                        f"Must be one of: {list(PREFIXES.keys())}")

    prefix = PREFIXES[entity_type]
    return f"{prefix}_{_random_base36(8)}"


def validate_id(id_str: str) -> bool:
    """Check if a string is a valid short ID."""
    if not id_str or not isinstance(id_str, str):
        return False
    return bool(ID_PATTERN.match(id_str))


def get_id_type(id_str: str) -> Optional[str]:
    """Extract the entity type from an ID, or None if it is not a short ID."""
    if not validate_id(id_str):
        return None
    return PREFIX_TO_TYPE.get(id_str[:2])


def normalize_id(value: Any) -> str:
    """
    Normalize a record id to its canonical string form.

    Local records were historically keyed by a mix of strings ('1') and
    integers (1). Every comparison goes through this function so that
    matching is always strict string equality.

    Raises:
        ValueError: for None, booleans and empty strings
    """
    if value is None or isinstance(value, bool):
        raise ValueError(f"Invalid record id: {value!r}")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    normalized = str(value).strip()
    if not normalized:
        raise ValueError("Record id must not be empty")
    return normalized


def generate_company_id() -> str:
    """Generate a new company ID"""
    return generate_id('company')


def generate_investor_id() -> str:
    """Generate a new investor ID"""
    return generate_id('investor')


def generate_sales_deal_id() -> str:
    """Generate a new sales deal ID"""
    return generate_id('sales_deal')


def generate_product_feature_id() -> str:
    """Generate a new product feature ID"""
    return generate_id('product_feature')
