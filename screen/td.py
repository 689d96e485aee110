"""Table column descriptor.

A `TD` is configured once per column and then asked to render the header
cell and one body cell per row::

    TD.set("email", "Email").width(200).sort().render(lambda row: row.get("email"))
"""

from __future__ import annotations

import math
from collections.abc import Callable
from decimal import Decimal
from typing import Any, Literal, Self

from django.http import QueryDict
from django.utils.html import format_html
from django.utils.safestring import SafeString

from .encoding import is_numeric_string
from .repository import Repository

Align = Literal["left", "center", "right"]


def _plain_float(value: float) -> str:
    """Render a float in positional notation without a trailing `.0`."""

    if not math.isfinite(value):
        raise ValueError(f"Column width must be finite: {value!r}")
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_width(value: int | float | str | None) -> str | None:
    """Return a CSS width value for a column.

    Numbers, and strings that are entirely numeric, get a `px` unit. Strings
    that already carry a unit (`"100em"`, `"25%"`) are returned unchanged.

    Args:
        value: Width as configured on the column.

    Returns:
        The CSS value, or None when no width is configured.

    Raises:
        TypeError: When `value` is a bool or another unsupported type.
        ValueError: When `value` is an infinite or NaN float.
    """

    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise TypeError("Column width must be a number or a string, not bool.")
    if isinstance(value, int):
        return f"{value}px"
    if isinstance(value, float):
        return f"{_plain_float(value)}px"
    if isinstance(value, str):
        return f"{value}px" if is_numeric_string(value) else value
    raise TypeError(f"Unsupported column width: {value!r}")


def _toggle_sort(column: str, current_sort: str | None) -> str:
    """Ascending on first click, descending when already ascending."""

    if current_sort == column:
        return f"-{column}"
    return column


class TD:
    """Fluent description of one table column."""

    def __init__(self, name: str, title: str | None = None) -> None:
        self.name = name
        self.title = title if title is not None else name
        self._width: int | float | str | None = None
        self._popover: str | None = None
        self._sort = False
        self._align: Align = "left"
        self._render: Callable[[Repository], Any] | None = None
        self._visible = True

    @classmethod
    def set(cls, name: str, title: str | None = None) -> Self:
        """Create a column reading `name` from each row."""

        return cls(name, title)

    def width(self, value: int | float | str | None) -> Self:
        self._width = value
        return self

    def popover(self, text: str) -> Self:
        """Attach help text shown from the header cell."""

        self._popover = text
        return self

    def sort(self, enabled: bool = True) -> Self:
        self._sort = bool(enabled)
        return self

    def align(self, value: Align) -> Self:
        if value not in ("left", "center", "right"):
            raise ValueError(f"Unknown alignment: {value!r}")
        self._align = value
        return self

    def align_left(self) -> Self:
        return self.align("left")

    def align_center(self) -> Self:
        return self.align("center")

    def align_right(self) -> Self:
        return self.align("right")

    def render(self, callback: Callable[[Repository], Any]) -> Self:
        """Compute the cell value from the row instead of reading `name`."""

        self._render = callback
        return self

    def can_see(self, visible: bool) -> Self:
        self._visible = bool(visible)
        return self

    @property
    def is_visible(self) -> bool:
        return self._visible

    @property
    def css_width(self) -> str | None:
        return format_width(self._width)

    def value_for(self, repository: Repository) -> Any:
        """Return the raw cell value for one row."""

        if self._render is not None:
            value = self._render(repository)
        else:
            value = repository.get(self.name)
        return "" if value is None else value

    def build_th(self, query: QueryDict | None = None) -> SafeString:
        """Render the header cell.

        Args:
            query: Current request query parameters. Sortable columns link to
                the same query with `sort` toggled and `page` dropped.

        Returns:
            `<th>` markup.
        """

        label = format_html("{}", self.title)
        if self._sort:
            params = query.copy() if query is not None else QueryDict(mutable=True)
            params.pop("page", None)
            params["sort"] = _toggle_sort(self.name, params.get("sort"))
            label = format_html('<a href="?{}">{}</a>', params.urlencode(), label)

        popover = ""
        if self._popover:
            popover = format_html(
                ' <button type="button" class="btn-popover" data-bs-toggle="popover" '
                'data-bs-trigger="focus" data-bs-content="{}">?</button>',
                self._popover,
            )

        width = self.css_width
        style = format_html(' style="width:{}"', width) if width else ""
        return format_html(
            '<th class="text-{}" data-column="{}"{}>{}{}</th>',
            self._align,
            self.name,
            style,
            label,
            popover,
        )

    def build_td(self, repository: Repository) -> SafeString:
        """Render the body cell for one row."""

        width = self.css_width
        if width:
            inner = format_html('<div style="width:{}">{}</div>', width, self.value_for(repository))
        else:
            inner = format_html("<div>{}</div>", self.value_for(repository))
        return format_html(
            '<td class="text-{}" data-column="{}">{}</td>',
            self._align,
            self.name,
            inner,
        )
