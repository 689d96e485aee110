"""Django integration tests for the settings store."""

from __future__ import annotations

import pytest
from django.core.cache import cache

from systems.models import Setting
from systems.settings_store import CACHE_PREFIX, SettingsStore, get_settings_store

pytestmark = pytest.mark.integration


@pytest.mark.django_db
def test_get_returns_default_for_missing_key(clear_cache) -> None:
    store = SettingsStore()

    assert store.get("site.name") is None
    assert store.get("site.name", "Orchid") == "Orchid"


@pytest.mark.django_db
def test_set_then_get_round_trips_json_values(clear_cache) -> None:
    store = SettingsStore()

    store.set("site.name", "Orchid")
    store.set("mail.recipients", ["a@example.com", "b@example.com"])

    assert store.get("site.name") == "Orchid"
    assert store.get("mail.recipients") == ["a@example.com", "b@example.com"]
    assert Setting.objects.get(key="site.name").value == "Orchid"


@pytest.mark.django_db
def test_get_many_returns_only_existing_keys(clear_cache) -> None:
    store = SettingsStore()
    store.set("a", 1)
    store.set("b", None)

    assert store.get(["a", "b", "c"]) == {"a": 1, "b": None}


@pytest.mark.django_db
def test_reads_are_cached_and_writes_invalidate(clear_cache, django_assert_num_queries) -> None:
    """A cached value is served without a query until it is rewritten."""

    store = SettingsStore()
    store.set("theme", "dark")
    store.get("theme")

    with django_assert_num_queries(0):
        assert store.get("theme") == "dark"

    store.set("theme", "light")
    assert store.get("theme") == "light"


@pytest.mark.django_db
def test_cached_null_values_are_not_treated_as_missing(clear_cache) -> None:
    store = SettingsStore()
    store.set("maintenance", None)
    store.get("maintenance")

    assert cache.get(f"{CACHE_PREFIX}maintenance") == (None,)
    assert store.get("maintenance", "default") is None


@pytest.mark.django_db
def test_forget_removes_row_and_cache(clear_cache) -> None:
    store = SettingsStore()
    store.set("banner", "Hello")
    store.get("banner")

    assert store.forget("banner") is True
    assert store.get("banner") is None
    assert store.forget("banner") is False
    assert cache.get(f"{CACHE_PREFIX}banner") is None


@pytest.mark.django_db
def test_uncached_store_always_reads_database(clear_cache, django_assert_num_queries) -> None:
    store = SettingsStore(use_cache=False)
    store.set("theme", "dark")

    with django_assert_num_queries(1):
        assert store.get("theme") == "dark"
    assert cache.get(f"{CACHE_PREFIX}theme") is None


def test_get_settings_store_uses_configured_timeout(settings) -> None:
    settings.ORCHID_SETTINGS_CACHE_TIMEOUT = 30

    assert get_settings_store().timeout == 30
