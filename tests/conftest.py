"""Pytest fixtures shared across Django integration tests."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache

from systems.relations import ScopeFunction, registry


@pytest.fixture
def user(db):
    """Return a regular User without any permissions."""

    user_model = get_user_model()
    return user_model.objects.create_user(username="alice", password="password")


@pytest.fixture
def clear_cache() -> Iterator[None]:
    """Clear the default cache around a test."""

    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def temporary_scope() -> Iterator:
    """Register relation scopes for one test and remove them afterwards."""

    registered: list[tuple[str, str]] = []

    def _register(model_label: str, name: str, fn: ScopeFunction) -> None:
        registry.register(model_label, name, fn)
        registered.append((model_label, name))

    yield _register

    for model_label, name in registered:
        registry.unregister(model_label, name)


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no database access.
    - `integration`: tests touching Django views, templates, or the database.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
