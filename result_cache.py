#!/usr/bin/env python3
"""
Result Cache - last scan's dips, held in memory for the /get endpoint.

The cache is overwritten wholesale after each completed scan and never
holds Telegram delivery data.

Usage:
    from result_cache import get_result_cache

    cache = get_result_cache()
    cache.set_last(dips)
    dips = cache.get_last()
"""

import copy
import logging
import threading
from typing import Dict, List

logger = logging.getLogger(__name__)

DELIVERY_FIELD = 'telegram'


def strip_delivery(dip: Dict) -> Dict:
    """Copy of a dip record without its delivery result"""
    return {key: value for key, value in dip.items() if key != DELIVERY_FIELD}


class ResultCache:
    """Thread-safe holder for the most recent list of dip records"""

    def __init__(self):
        self._lock = threading.Lock()
        self._dips: List[Dict] = []

    def get_last(self) -> List[Dict]:
        """Return a copy of the last scan's dips (empty before the first scan)"""
        with self._lock:
            return copy.deepcopy(self._dips)

    def set_last(self, dips: List[Dict]):
        """Replace cached dips; delivery results are dropped"""
        stripped = [strip_delivery(dip) for dip in dips]
        with self._lock:
            self._dips = stripped
        logger.debug(f"Result cache updated with {len(stripped)} dip(s)")


# Singleton instance
_cache_instance = None
_cache_lock = threading.Lock()


def get_result_cache() -> ResultCache:
    """
    Get the process-wide result cache.

    Returns:
        ResultCache instance
    """
    global _cache_instance

    with _cache_lock:
        if _cache_instance is None:
            _cache_instance = ResultCache()
        return _cache_instance
