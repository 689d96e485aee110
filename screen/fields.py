"""Form fields whose widgets call back into the platform endpoints."""

from __future__ import annotations

from typing import Self

from django.db.models import Model
from django.urls import reverse

from systems.crypt import encrypt_string


class Relation:
    """Autocomplete select backed by the `systems:relation` endpoint.

    The model, columns and scope are encrypted into the markup so the browser
    can send them back without being able to choose other tables::

        Relation.make("post.author").from_model(User, "username").apply_scope("active")
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._model: str | None = None
        self._label_field: str | None = None
        self._key_field = "id"
        self._scope: str | None = None
        self._append: str | None = None

    @classmethod
    def make(cls, name: str) -> Self:
        return cls(name)

    def from_model(self, model: type[Model] | str, name: str, key: str = "id") -> Self:
        """Search `model`, showing `name` and submitting `key`."""

        self._model = model if isinstance(model, str) else model._meta.label
        self._label_field = name
        self._key_field = key
        return self

    def apply_scope(self, scope: str) -> Self:
        """Narrow the rows with a registered relation scope."""

        self._scope = scope
        return self

    def display_append(self, attribute: str) -> Self:
        """Show `attribute` (e.g. a model property) instead of `name`."""

        self._append = attribute
        return self

    def query_params(self, search: str = "") -> dict[str, str]:
        """Return the request payload the widget sends for `search`."""

        if self._model is None or self._label_field is None:
            raise ValueError(f"Relation field {self.name!r} has no model; call from_model().")

        params = {
            "model": encrypt_string(self._model),
            "name": encrypt_string(self._label_field),
            "key": encrypt_string(self._key_field),
        }
        if self._scope is not None:
            params["scope"] = encrypt_string(self._scope)
        if self._append is not None:
            params["append"] = encrypt_string(self._append)
        params["search"] = search
        return params

    def attributes(self) -> dict[str, str]:
        """Return the `data-relation-*` attributes rendered on the widget."""

        params = self.query_params()
        params.pop("search")
        attrs = {f"data-relation-{field}": value for field, value in params.items()}
        attrs["data-relation-route"] = reverse("systems:relation")
        attrs["name"] = self.name
        return attrs
