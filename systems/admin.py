"""Admin registrations for the systems app."""

from __future__ import annotations

from django.contrib import admin

from systems.models import Setting


@admin.register(Setting)
class SettingAdmin(admin.ModelAdmin):
    """Admin configuration for Setting."""

    list_display = ("key", "value")
    search_fields = ("key",)
