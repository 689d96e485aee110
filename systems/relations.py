"""Relation search sources backing the relation field autocomplete.

A relation lookup names a model, the column shown to the user (`name`), the
column submitted as the value (`key`) and optionally a registered scope that
narrows the rows. The scope result is normalized into one of two sources:

- `QueryableSource` wraps a QuerySet and filters it by the search term in SQL.
- `InMemorySource` wraps an already materialized collection. It only takes the
  first items and does not filter by the search term.

Both answer `search(term, limit)` with ordered `(key, label)` pairs.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from django.apps import apps
from django.core.exceptions import ImproperlyConfigured
from django.db.models import Model, QuerySet

RELATION_LIMIT = 10

ScopeFunction = Callable[[QuerySet], Any]


class RelationError(LookupError):
    """Base class for relation lookups that cannot be resolved."""


class ModelNotFoundError(RelationError):
    """Raised when the requested model label is not installed."""

    def __init__(self, label: str) -> None:
        super().__init__(f"Model {label!r} is not installed.")
        self.label = label


class ScopeNotFoundError(RelationError):
    """Raised when a scope name is not registered for the model."""

    def __init__(self, label: str, scope: str) -> None:
        super().__init__(f"Scope {scope!r} is not registered for {label!r}.")
        self.label = label
        self.scope = scope


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


@dataclass(frozen=True, slots=True)
class InMemorySource:
    """Relation source over a materialized collection.

    Args:
        items: Rows as mappings or objects.
        name: Field used as the label.
        key: Field used as the value.
        append: Optional field used as the label instead of `name`.
    """

    items: tuple[Any, ...]
    name: str
    key: str
    append: str | None = None

    def search(self, term: str, limit: int = RELATION_LIMIT) -> list[tuple[Any, Any]]:
        """Return the first `limit` rows; `term` is not applied."""

        label = self.append or self.name
        return [(_field(item, self.key), _field(item, label)) for item in self.items[:limit]]


@dataclass(frozen=True, slots=True)
class QueryableSource:
    """Relation source over a QuerySet.

    Args:
        queryset: Rows to search.
        name: Column filtered by the search term and used as the label.
        key: Column used as the value.
        append: Optional attribute used as the label instead of `name`.
    """

    queryset: QuerySet
    name: str
    key: str
    append: str | None = None

    def search(self, term: str, limit: int = RELATION_LIMIT) -> list[tuple[Any, Any]]:
        """Return up to `limit` rows whose `name` contains `term`."""

        label = self.append or self.name
        rows = self.queryset.filter(**{f"{self.name}__contains": term})[:limit]
        return [(_field(row, self.key), _field(row, label)) for row in rows]


RelationSource = InMemorySource | QueryableSource


def as_relation_source(
    value: Any, *, name: str, key: str, append: str | None = None
) -> RelationSource:
    """Normalize a scope result (or a base queryset) into a relation source.

    Args:
        value: QuerySet, model class, mapping, or any iterable of rows.
        name: Label column.
        key: Value column.
        append: Optional alternate label attribute.

    Returns:
        QueryableSource for querysets and model classes, InMemorySource for
        everything else. Mappings contribute their values. A sliced queryset
        keeps its rows but can still be filtered by the search term.
    """

    if isinstance(value, type) and issubclass(value, Model):
        value = value._default_manager.all()
    if isinstance(value, QuerySet):
        if value.query.is_sliced:
            value = _unsliced(value)
        return QueryableSource(queryset=value, name=name, key=key, append=append)
    if isinstance(value, Mapping):
        value = value.values()
    return InMemorySource(items=tuple(value), name=name, key=key, append=append)


def _unsliced(queryset: QuerySet) -> QuerySet:
    """Return a filterable queryset over the rows of a sliced one, keeping its order."""

    unsliced = queryset.model._default_manager.filter(pk__in=queryset.values("pk"))
    if queryset.query.order_by:
        unsliced = unsliced.order_by(*queryset.query.order_by)
    return unsliced


class ScopeRegistry:
    """Named, parameterless query scopes keyed by model label.

    A scope receives the model's base queryset and returns either a narrowed
    QuerySet or a materialized collection of rows.
    """

    def __init__(self) -> None:
        self._scopes: dict[tuple[str, str], ScopeFunction] = {}

    @staticmethod
    def _normalize(model: type[Model] | str) -> str:
        if isinstance(model, str):
            return model.lower()
        return model._meta.label_lower

    def register(self, model: type[Model] | str, name: str, fn: ScopeFunction) -> None:
        self._scopes[(self._normalize(model), name)] = fn

    def unregister(self, model: type[Model] | str, name: str) -> None:
        self._scopes.pop((self._normalize(model), name), None)

    def scope(self, model: type[Model] | str, name: str) -> Callable[[ScopeFunction], ScopeFunction]:
        """Decorator form of `register`."""

        def decorator(fn: ScopeFunction) -> ScopeFunction:
            self.register(model, name, fn)
            return fn

        return decorator

    def get(self, model: type[Model] | str, name: str) -> ScopeFunction:
        """Return the scope function.

        Raises:
            ScopeNotFoundError: When nothing is registered under `name`.
        """

        label = self._normalize(model)
        try:
            return self._scopes[(label, name)]
        except KeyError:
            raise ScopeNotFoundError(label, name) from None

    def names(self, model: type[Model] | str) -> list[str]:
        label = self._normalize(model)
        return sorted(name for (model_label, name) in self._scopes if model_label == label)

    def validate(self) -> None:
        """Check that every registered scope targets an installed model.

        Raises:
            ImproperlyConfigured: When a registered model label is unknown.
        """

        for label, name in self._scopes:
            try:
                resolve_model(label)
            except ModelNotFoundError as exc:
                raise ImproperlyConfigured(f"Relation scope {name!r}: {exc}") from exc


registry = ScopeRegistry()


def resolve_model(label: str) -> type[Model]:
    """Return the installed model for an `app_label.ModelName` label.

    Raises:
        ModelNotFoundError: When the label is malformed or not installed.
    """

    try:
        return apps.get_model(label)
    except (LookupError, ValueError):
        raise ModelNotFoundError(label) from None


def build_relation_source(
    *,
    model: str,
    name: str,
    key: str,
    scope: str | None = None,
    append: str | None = None,
    scopes: ScopeRegistry | None = None,
) -> RelationSource:
    """Resolve decrypted relation parameters into a searchable source.

    Args:
        model: Model label.
        name: Label column.
        key: Value column.
        scope: Optional registered scope; None leaves the model untouched.
        append: Optional alternate label attribute.
        scopes: Registry to look scopes up in (defaults to the global one).

    Returns:
        The relation source to search.

    Raises:
        ModelNotFoundError: When `model` is not installed.
        ScopeNotFoundError: When `scope` is not registered for `model`.
    """

    model_class = resolve_model(model)
    value: Any = model_class._default_manager.all()
    if scope is not None:
        value = (scopes or registry).get(model_class, scope)(value)
    return as_relation_source(value, name=name, key=key, append=append)


def relation_items(source: RelationSource, term: str, limit: int = RELATION_LIMIT) -> dict[Any, Any]:
    """Return the `{key: label}` mapping sent back to the widget.

    Keys JSON cannot encode as object keys (UUIDs, decimals) are stringified.
    """

    return {_json_key(key): label for key, label in source.search(term, limit)}


def _json_key(key: Any) -> Any:
    if key is None or isinstance(key, (str, int, float, bool)):
        return key
    return str(key)
