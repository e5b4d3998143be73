"""
Parse result cache for the step grammar
Keeps recently parsed sentences in memory for a limited time
"""
import threading
from datetime import datetime
from typing import Any, Dict, Optional

from stepgrammar.utils.logger import setup_logger

logger = setup_logger(__name__)


class ParseCache:
    """In-memory TTL cache keyed by the raw step sentence"""

    def __init__(self, ttl: float = 300, max_entries: int = 1000):
        self.ttl = ttl  # Time to live in seconds
        self.max_entries = max_entries
        self.cache: Dict[str, Dict[str, Any]] = {}
        self.hits = 0
        self.misses = 0
        self._lock = threading.Lock()

    def _clean_expired(self) -> None:
        """Remove expired cache entries"""
        current_time = datetime.now().timestamp()
        expired_keys = [key for key, data in self.cache.items()
                        if current_time - data['timestamp'] > self.ttl]

        for key in expired_keys:
            del self.cache[key]

        if expired_keys:
            logger.debug(f"Evicted {len(expired_keys)} expired parse results")

    def get(self, key: str) -> Optional[Any]:
        """Get a cached parse result"""
        with self._lock:
            data = self.cache.get(key)
            if data and datetime.now().timestamp() - data['timestamp'] <= self.ttl:
                self.hits += 1
                return data['value']
            self.misses += 1
            return None

    def save(self, key: str, value: Any) -> None:
        """Store a parse result"""
        with self._lock:
            self._clean_expired()
            if len(self.cache) >= self.max_entries and key not in self.cache:
                # oldest entry first, dicts keep insertion order
                oldest = next(iter(self.cache))
                del self.cache[oldest]
            self.cache[key] = {
                'value': value,
                'timestamp': datetime.now().timestamp()
            }

    def clear_cache(self) -> None:
        """Clear all cache"""
        with self._lock:
            self.cache = {}
            self.hits = 0
            self.misses = 0

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {'entries': len(self.cache), 'hits': self.hits, 'misses': self.misses}
