"""
System health and maintenance for the local store
"""
import logging
import time
from typing import Any, Dict, Optional

import httpx

from services.keyed_store import KeyedStore

logger = logging.getLogger(__name__)

HEALTH_TIMEOUT = 1.5


async def check_system_health(
    store: KeyedStore,
    api_url: str,
    client: Optional[httpx.AsyncClient] = None,
) -> Dict[str, Any]:
    """
    Ping the API server and summarize local storage usage.

    The database is reported SYNCED when the API answers (it fronts the
    relational store), LOCAL_ONLY otherwise.
    """
    start = time.perf_counter()
    health = {
        "backend": "OFFLINE",
        "database": "LOCAL_ONLY",
        "localStorage": {"used": 0, "count": 0},
        "latency": 0,
    }

    url = f"{api_url.rstrip('/')}/health"
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=HEALTH_TIMEOUT) as own_client:
                response = await own_client.get(url)
        else:
            response = await client.get(url, timeout=HEALTH_TIMEOUT)
        if response.status_code == 200:
            health["backend"] = "ONLINE"
            health["database"] = "SYNCED"
    except httpx.HTTPError as e:
        logger.info(f"API health check failed: {e}")

    health["localStorage"] = await store.stats()
    health["latency"] = round((time.perf_counter() - start) * 1000)
    return health


async def factory_reset(store: KeyedStore) -> int:
    """
    Remove every key of the store's namespace.

    Collections are seeded again on their next access.
    """
    removed = await store.clear()
    logger.warning(f"Factory reset removed {removed} keys")
    return removed
