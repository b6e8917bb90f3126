"""
Utility functions
"""
from .id_generator import generate_id, normalize_id, validate_id
from .datetime_utils import utc_now, epoch_millis

__all__ = ['generate_id', 'normalize_id', 'validate_id', 'utc_now', 'epoch_millis']
