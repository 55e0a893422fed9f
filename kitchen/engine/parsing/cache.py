"""
In-memory cache for parsed recipes.

Caches Recipe results so the same document text is not re-parsed on every
view or shopping-list build.
"""

import hashlib
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional

from kitchen.config import settings
from kitchen.models.recipe import Recipe

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A cached recipe with expiration time."""

    recipe: Recipe
    expires_at: float  # Unix timestamp


class RecipeParseCache:
    """
    In-memory cache for parsed recipe documents.

    Keys are the hash of the document text. Entries expire after the
    configured TTL (default: 24 hours); past max_entries the oldest entry
    is evicted.

    Note: This is a simple in-memory cache. For multi-worker deployments,
    consider upgrading to Redis.
    """

    def __init__(self, ttl_hours: Optional[int] = None, max_entries: Optional[int] = None):
        """
        Initialize the cache.

        Args:
            ttl_hours: Time-to-live in hours. Defaults to config setting.
            max_entries: Maximum number of cached recipes. Defaults to config setting.
        """
        self._cache: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()
        self._ttl_seconds = (
            ttl_hours or settings.parse_cache_ttl_hours
        ) * 3600
        self._max_entries = max_entries or settings.parse_cache_max_entries

    def _generate_key(self, text: str) -> str:
        """Generate a cache key from the document text."""
        return hashlib.sha256(text.encode()).hexdigest()[:32]

    def get(self, text: str) -> Optional[Recipe]:
        """
        Get a cached recipe if available and not expired.

        Args:
            text: The recipe document text.

        Returns:
            The cached Recipe or None if not found/expired.
        """
        key = self._generate_key(text)
        with self._lock:
            entry = self._cache.get(key)

            if entry is None:
                return None

            if time.time() > entry.expires_at:
                # Entry expired, remove it
                del self._cache[key]
                return None

        logger.debug(f"Cache hit for recipe: {entry.recipe.title[:50]}")
        return entry.recipe

    def set(self, text: str, recipe: Recipe) -> None:
        """
        Cache a parsed recipe.

        Args:
            text: The recipe document text.
            recipe: The parsed recipe to cache.
        """
        key = self._generate_key(text)
        expires_at = time.time() + self._ttl_seconds

        with self._lock:
            self._cache[key] = CacheEntry(recipe=recipe, expires_at=expires_at)
            self._cache.move_to_end(key)
            while len(self._cache) > self._max_entries:
                self._cache.popitem(last=False)
        logger.debug(f"Cached recipe: {recipe.title[:50]}")

    def clear(self) -> None:
        """Clear all cached entries."""
        with self._lock:
            self._cache.clear()
        logger.info("Recipe parse cache cleared")

    def cleanup_expired(self) -> int:
        """
        Remove all expired entries from the cache.

        Returns:
            Number of entries removed.
        """
        now = time.time()
        with self._lock:
            expired_keys = [
                key for key, entry in self._cache.items() if now > entry.expires_at
            ]

            for key in expired_keys:
                del self._cache[key]

        if expired_keys:
            logger.debug(f"Cleaned up {len(expired_keys)} expired cache entries")

        return len(expired_keys)

    @property
    def size(self) -> int:
        """Return the number of entries in the cache."""
        return len(self._cache)


# Global cache instance
_parse_cache: Optional[RecipeParseCache] = None


def get_parse_cache() -> RecipeParseCache:
    """Get or create the global recipe parse cache."""
    global _parse_cache
    if _parse_cache is None:
        _parse_cache = RecipeParseCache()
    return _parse_cache
