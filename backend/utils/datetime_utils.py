"""
Datetime utility functions shared by the API and the local store
"""
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Timezone-aware current UTC time"""
    return datetime.now(timezone.utc)


def epoch_millis(dt: Optional[datetime] = None) -> int:
    """Milliseconds since the epoch, used to prefix uploaded object keys"""
    return int((dt or utc_now()).timestamp() * 1000)
