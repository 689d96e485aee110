"""Concrete layouts built on `screen.layout.Layout`."""

from .chart import Chart
from .table import Table

__all__ = ["Chart", "Table"]
