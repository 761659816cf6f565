# agents/institution_cache.py
import logging
from typing import Callable, Optional

from cachetools import Cache

logger = logging.getLogger(__name__)


class InstitutionCache:
    """
    Process-lifetime mapping from an exact institution string to its OpenAlex ID.
    Entries are never expired; the cache empties only on restart (or clear()).
    Failed or empty lookups are not cached so the next run retries them.
    """

    def __init__(self, maxsize: int = 10000):
        self._ids = Cache(maxsize=maxsize)

    def __contains__(self, name: str) -> bool:
        return name in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def get_or_lookup(self, name: str, lookup: Callable[[str], Optional[str]]) -> Optional[str]:
        if name in self._ids:
            logger.info(f"✅ Found cached institution ID for {name}: {self._ids[name]}")
            return self._ids[name]

        logger.info(f"🔍 Looking up OpenAlex institution ID for: {name}")
        institution_id = lookup(name)
        if institution_id:
            self._ids[name] = institution_id
            logger.info(f"✅ Found institution ID for {name}: {institution_id}")
        else:
            logger.warning(f"⚠️ No institution found for: {name}")
        return institution_id

    def clear(self) -> None:
        self._ids.clear()


institution_cache = InstitutionCache()
