"""Chart layout: configuration holder for the client-side chart widget.

Subclasses override the class attributes below and point `target` at a
repository key holding the datasets. Each dataset is a mapping (or an object
with the same attributes) such as::

    {"name": "Sales", "labels": ["Mon", "Tue"], "values": ["10", "12.5"]}

`build()` turns the configuration and the datasets into JSON strings the chart
template passes straight to the widget.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Literal

from django.utils.text import slugify
from django.utils.translation import gettext

from screen import encoding
from screen.layout import Layout, LayoutView
from screen.repository import Repository

ChartType = Literal["bar", "line", "pie", "percentage", "axis-mixed"]


@dataclass(frozen=True, slots=True)
class ChartViewModel:
    """Template variables for `platform/layouts/chart.html`.

    All option fields are JSON text ready to be embedded in the page.
    """

    title: str
    slug: str
    type: str
    height: int
    labels: str
    export: bool
    data: str
    colors: str
    maxSlices: str
    valuesOverPoints: str
    axisOptions: str
    barOptions: str
    lineOptions: str
    markers: str


def _flatten(values: Iterable[Any]) -> Iterable[Any]:
    for value in values:
        if isinstance(value, (list, tuple)):
            yield from _flatten(value)
        elif isinstance(value, Mapping):
            yield from _flatten(value.values())
        else:
            yield value


def _dataset_labels(dataset: Any) -> Any:
    if isinstance(dataset, Mapping):
        return dataset.get("labels") or []
    return getattr(dataset, "labels", None) or []


def _unique(values: Iterable[Any]) -> list[Any]:
    """Deduplicate while keeping the first occurrence of each value.

    Values are compared with `==`, so coerce numeric strings first to have
    `"1"` and `1` collapse.
    """

    seen: list[Any] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


class Chart(Layout):
    """Abstract chart layout.

    Attributes:
        title: Chart title; translated for display and slugified for the DOM id.
        type: One of `bar`, `line`, `pie`, `percentage`, `axis-mixed`.
        height: Chart height in pixels.
        labels: Deprecated manual label override. When empty, labels are
            collected from the `labels` entry of every dataset at `target`.
        target: Repository key holding the list of datasets.
        colors: Series colors in order.
        export: Whether the export button is shown.
        max_slices: Pie/percentage charts bundle the smallest values beyond
            this many slices into one.
        values_over_points: Show data values over bars or dots (0 or 1).
    """

    template: ClassVar[str] = "platform/layouts/chart.html"

    title: ClassVar[str] = "My Chart"
    type: ClassVar[ChartType] = "line"
    height: ClassVar[int] = 250
    labels: ClassVar[list[Any]] = []
    target: ClassVar[str] = ""
    colors: ClassVar[list[str]] = [
        "#2274A5",
        "#F75C03",
        "#F1C40F",
        "#D90368",
        "#00CC66",
    ]
    export: ClassVar[bool] = True
    max_slices: ClassVar[int] = 7
    values_over_points: ClassVar[int] = 0
    bar_options: ClassVar[dict[str, Any]] = {
        "spaceRatio": 0.5,
        "stacked": 0,
        "height": 20,
        "depth": 2,
    }
    line_options: ClassVar[dict[str, Any]] = {
        "regionFill": 0,
        "hideDots": 0,
        "hideLine": 0,
        "heatline": 0,
        "dotSize": 4,
    }
    axis_options: ClassVar[dict[str, Any]] = {
        "xIsSeries": True,
        "xAxisMode": "span",  # or "tick"
    }

    def markers(self) -> list[dict[str, Any]] | None:
        """Return Y-axis markers drawn as dashed lines, or None."""

        return None

    def compute_labels(self, repository: Repository) -> str:
        """Return the JSON label list for the chart's x-axis."""

        if self.labels:
            return encoding.dumps(list(self.labels))

        datasets = repository.get_content(self.target) or []
        if isinstance(datasets, Mapping):
            datasets = datasets.values()
        flat = encoding.coerce_numeric(list(_flatten(_dataset_labels(dataset) for dataset in datasets)))
        return encoding.dumps(_unique(flat))

    def view_model(self, repository: Repository) -> ChartViewModel:
        """Assemble the chart template variables from `repository`."""

        return ChartViewModel(
            title=gettext(self.title),
            slug=slugify(self.title),
            type=self.type,
            height=self.height,
            labels=self.compute_labels(repository),
            export=self.export,
            data=encoding.dumps(repository.get_content(self.target), numeric_check=True),
            colors=encoding.dumps(self.colors),
            maxSlices=encoding.dumps(self.max_slices),
            valuesOverPoints=encoding.dumps(self.values_over_points),
            axisOptions=encoding.dumps(self.axis_options),
            barOptions=encoding.dumps(self.bar_options),
            lineOptions=encoding.dumps(self.line_options),
            markers=encoding.dumps(self.markers()),
        )

    def build(self, repository: Repository, *, user: Any = None) -> LayoutView | None:
        if not self.check_permission(repository, user=user):
            return None
        return LayoutView(template=self.template, context=asdict(self.view_model(repository)))
