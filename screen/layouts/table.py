"""Table layout composed of `TD` columns."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, ClassVar

from django.http import QueryDict
from django.utils.translation import gettext

from screen.layout import Layout, LayoutView
from screen.repository import Repository
from screen.td import TD


class Table(Layout):
    """Abstract table layout.

    Subclasses set `target` to the repository key holding the rows and
    return their columns from `columns()`. Rows may be mappings or objects
    (e.g. model instances); each one is wrapped in a `Repository` before it
    reaches the columns.
    """

    template: ClassVar[str] = "platform/layouts/table.html"

    title: ClassVar[str | None] = None
    target: ClassVar[str] = ""
    text_not_found: ClassVar[str] = "There are no records in this view"

    def columns(self) -> list[TD]:
        raise NotImplementedError

    def rows(self, repository: Repository) -> list[Repository]:
        """Return the rows at `target`, each wrapped as a Repository."""

        content = repository.get_content(self.target) or []
        if isinstance(content, Mapping):
            content = content.values()
        return [Repository(row) for row in content]

    def build(
        self,
        repository: Repository,
        *,
        user: Any = None,
        query: QueryDict | None = None,
    ) -> LayoutView | None:
        if not self.check_permission(repository, user=user):
            return None

        columns = [column for column in self.columns() if column.is_visible]
        rows = self.rows(repository)
        return LayoutView(
            template=self.template,
            context={
                "title": gettext(self.title) if self.title else None,
                "columns": [column.build_th(query) for column in columns],
                "rows": [_render_row(columns, row) for row in rows],
                "text_not_found": gettext(self.text_not_found),
            },
        )


def _render_row(columns: Iterable[TD], row: Repository) -> list[str]:
    return [column.build_td(row) for column in columns]
