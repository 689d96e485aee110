"""Database models for platform settings."""

from __future__ import annotations

from django.db import models


class Setting(models.Model):
    """A single platform setting stored as JSON under a string key.

    Read and write settings through `systems.settings_store.SettingsStore`,
    which keeps the cache in sync.
    """

    key = models.CharField(max_length=255, primary_key=True)
    value = models.JSONField(null=True, blank=True)

    class Meta:
        db_table = "orchid_settings"
        ordering = ("key",)

    def __str__(self) -> str:
        """Return the setting key for display contexts."""

        return self.key
