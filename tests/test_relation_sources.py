"""Tests for relation sources and the scope registry."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from django.contrib.auth import get_user_model
from django.core.exceptions import ImproperlyConfigured

from systems.relations import (
    InMemorySource,
    ModelNotFoundError,
    QueryableSource,
    ScopeNotFoundError,
    ScopeRegistry,
    as_relation_source,
    build_relation_source,
    registry,
    relation_items,
    resolve_model,
)


@pytest.mark.unit
def test_in_memory_source_takes_first_ten_in_order_ignoring_search() -> None:
    """Collections are capped at ten items and not filtered by the term."""

    items = [{"id": index, "title": f"Item {index}"} for index in range(15)]
    source = as_relation_source(items, name="title", key="id")

    assert isinstance(source, InMemorySource)
    result = relation_items(source, "does-not-match")
    assert list(result) == list(range(10))
    assert result[9] == "Item 9"


@pytest.mark.unit
def test_in_memory_source_uses_append_and_reads_objects_and_mapping_values() -> None:
    rows = {
        "a": SimpleNamespace(pk=1, name="Ann", full_name="Ann Lee"),
        "b": SimpleNamespace(pk=2, name="Bo", full_name="Bo Chan"),
    }
    source = as_relation_source(rows, name="name", key="pk", append="full_name")

    assert source.search("") == [(1, "Ann Lee"), (2, "Bo Chan")]


@pytest.mark.unit
def test_resolve_model_rejects_unknown_labels() -> None:
    with pytest.raises(ModelNotFoundError):
        resolve_model("nope.Missing")
    with pytest.raises(ModelNotFoundError):
        resolve_model("not-a-label")
    assert resolve_model("auth.User") is get_user_model()


@pytest.mark.unit
def test_registry_rejects_unknown_scope_names() -> None:
    scopes = ScopeRegistry()
    scopes.register("auth.User", "staff", lambda queryset: queryset.filter(is_staff=True))

    assert scopes.names("auth.user") == ["staff"]
    with pytest.raises(ScopeNotFoundError):
        scopes.get(get_user_model(), "superusers")


@pytest.mark.unit
def test_registry_validation_fails_for_uninstalled_models() -> None:
    scopes = ScopeRegistry()
    scopes.register("auth.User", "staff", lambda queryset: queryset)
    scopes.validate()

    scopes.register("ghost.Model", "all", lambda queryset: queryset)
    with pytest.raises(ImproperlyConfigured):
        scopes.validate()


@pytest.mark.unit
def test_builtin_scopes_are_registered() -> None:
    assert registry.names("auth.User") == ["active", "recent"]


@pytest.mark.django_db
@pytest.mark.integration
def test_queryable_source_filters_by_search_and_caps_at_ten() -> None:
    """Only rows whose `name` contains the term are returned, at most ten."""

    user_model = get_user_model()
    for index in range(12):
        user_model.objects.create_user(username=f"abc_{index:02d}", password="password")
    user_model.objects.create_user(username="zzz", password="password")

    source = build_relation_source(model="auth.User", name="username", key="id")

    assert isinstance(source, QueryableSource)
    labels = list(relation_items(source, "abc").values())
    assert len(labels) == 10
    assert all("abc" in label for label in labels)
    assert "zzz" not in labels


@pytest.mark.django_db
@pytest.mark.integration
def test_null_scope_does_not_call_any_scope() -> None:
    """Without a scope the registry is never consulted."""

    class ExplodingRegistry(ScopeRegistry):
        def get(self, model, name):
            raise AssertionError("scope lookup must not happen")

    source = build_relation_source(
        model="auth.User", name="username", key="id", scope=None, scopes=ExplodingRegistry()
    )

    assert isinstance(source, QueryableSource)


@pytest.mark.django_db
@pytest.mark.integration
def test_unknown_scope_fails_instead_of_falling_back() -> None:
    with pytest.raises(ScopeNotFoundError):
        build_relation_source(model="auth.User", name="username", key="id", scope="missing")


@pytest.mark.django_db
@pytest.mark.integration
def test_list_returning_scope_becomes_in_memory_source() -> None:
    user_model = get_user_model()
    for name in ("first", "second", "third"):
        user_model.objects.create_user(username=name, password="password")

    source = build_relation_source(model="auth.User", name="username", key="id", scope="recent")

    assert isinstance(source, InMemorySource)
    assert list(relation_items(source, "no-match").values()) == ["third", "second", "first"]


@pytest.mark.django_db
@pytest.mark.integration
def test_sliced_queryset_scope_is_still_searchable(temporary_scope) -> None:
    """A scope may slice its queryset; the search runs within those rows."""

    user_model = get_user_model()
    for index in range(6):
        user_model.objects.create_user(username=f"abc_{index}", password="password")
    temporary_scope("auth.User", "newest_four", lambda queryset: queryset.order_by("-pk")[:4])

    source = build_relation_source(model="auth.User", name="username", key="id", scope="newest_four")

    assert isinstance(source, QueryableSource)
    assert list(relation_items(source, "abc").values()) == ["abc_5", "abc_4", "abc_3", "abc_2"]
    assert list(relation_items(source, "abc_1").values()) == []
