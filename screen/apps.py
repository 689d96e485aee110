"""App configuration for the screen Django app."""

from __future__ import annotations

from django.apps import AppConfig


class ScreenConfig(AppConfig):
    """Configuration for the `screen` app (layout templates live here)."""

    name = "screen"
