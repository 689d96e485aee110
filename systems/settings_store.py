"""Settings store passed to components that read or write platform settings.

Components receive a `SettingsStore` explicitly (see `get_settings_store()`
for the default wiring) instead of reaching for a global. Reads are cached in
Django's cache framework; writes and deletes invalidate the cached entry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, overload

from django.conf import settings
from django.core.cache import BaseCache, caches

from systems.models import Setting

logger = logging.getLogger(__name__)

CACHE_PREFIX = "orchid:setting:"


class SettingsStore:
    """Key/value access to `Setting` rows.

    Args:
        cache: Cache backend; defaults to the `default` cache.
        use_cache: Disable to always hit the database.
        timeout: Cache timeout in seconds; None keeps entries until they are
            invalidated by a write.
    """

    def __init__(
        self,
        *,
        cache: BaseCache | None = None,
        use_cache: bool = True,
        timeout: int | None = None,
    ) -> None:
        self.cache = cache if cache is not None else caches["default"]
        self.use_cache = use_cache
        self.timeout = timeout

    @staticmethod
    def _cache_key(key: str) -> str:
        return f"{CACHE_PREFIX}{key}"

    def _fetch(self, key: str) -> tuple[bool, Any]:
        """Return `(found, value)` for one key, consulting the cache first."""

        if self.use_cache:
            cached = self.cache.get(self._cache_key(key))
            if cached is not None:
                return True, cached[0]

        row = Setting.objects.filter(key=key).only("value").first()
        if row is None:
            return False, None
        if self.use_cache:
            # Wrapped so that a stored JSON null is cached as well.
            self.cache.set(self._cache_key(key), (row.value,), self.timeout)
        return True, row.value

    @overload
    def get(self, key: str, default: Any = None) -> Any: ...

    @overload
    def get(self, key: Iterable[str], default: Any = None) -> dict[str, Any]: ...

    def get(self, key: str | Iterable[str], default: Any = None) -> Any:
        """Return a setting value.

        Args:
            key: A key, or several keys.
            default: Returned for a single missing key.

        Returns:
            The stored value (or `default`) for one key; for several keys, a
            dict holding only the keys that exist.
        """

        if isinstance(key, str):
            found, value = self._fetch(key)
            return value if found else default

        result: dict[str, Any] = {}
        for item in key:
            found, value = self._fetch(item)
            if found:
                result[item] = value
        return result

    def set(self, key: str, value: Any) -> Setting:
        """Create or update a setting and refresh its cache entry."""

        row, created = Setting.objects.update_or_create(key=key, defaults={"value": value})
        if self.use_cache:
            self.cache.delete(self._cache_key(key))
        logger.debug("%s setting %r", "Created" if created else "Updated", key)
        return row

    def forget(self, key: str) -> bool:
        """Delete a setting; return True when a row was removed."""

        deleted, _ = Setting.objects.filter(key=key).delete()
        if self.use_cache:
            self.cache.delete(self._cache_key(key))
        if deleted:
            logger.debug("Forgot setting %r", key)
        return bool(deleted)


def get_settings_store() -> SettingsStore:
    """Return a store configured from project settings."""

    return SettingsStore(timeout=getattr(settings, "ORCHID_SETTINGS_CACHE_TIMEOUT", None))
