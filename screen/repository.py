"""Read-only data bag handed to layouts at render time."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Any

_MISSING = object()


def _lookup(source: Any, segment: str) -> Any:
    """Resolve one path segment against a mapping, sequence, or object."""

    if isinstance(source, Mapping):
        return source.get(segment, _MISSING)
    if isinstance(source, Sequence) and not isinstance(source, (str, bytes)):
        try:
            return source[int(segment)]
        except (ValueError, IndexError):
            return _MISSING
    return getattr(source, segment, _MISSING)


class Repository:
    """Immutable keyed view over the data a screen passes to its layouts.

    Keys are resolved exactly first, then as dotted paths: `"user.name"`,
    `"rows.0.title"`. Each segment walks a mapping key, a sequence index, or
    an object attribute, so ORM model instances can be used as rows.

    Args:
        data: Mapping of top-level keys, or any object whose attributes are
            looked up by name.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] | object | None = None) -> None:
        if data is None:
            data = {}
        if isinstance(data, Repository):
            data = data._data
        elif isinstance(data, Mapping):
            data = MappingProxyType(dict(data))
        self._data: Any = data

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under `key` (plain or dotted)."""

        value = _lookup(self._data, key)
        if value is not _MISSING:
            return value

        value = self._data
        for segment in key.split("."):
            value = _lookup(value, segment)
            if value is _MISSING:
                return default
        return value

    def get_content(self, key: str) -> Any:
        """Return the dataset stored under `key`, or None when absent."""

        return self.get(key)

    def has(self, key: str) -> bool:
        """Return True when `key` resolves to a value (None included)."""

        return self.get(key, _MISSING) is not _MISSING

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the top-level mapping."""

        if isinstance(self._data, Mapping):
            return dict(self._data)
        return dict(vars(self._data))

    def __len__(self) -> int:
        return len(self.to_dict())

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_dict())

    def __repr__(self) -> str:
        return f"Repository({self._data!r})"
