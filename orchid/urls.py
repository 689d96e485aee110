"""URL configuration for the Orchid admin panel."""

from __future__ import annotations

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("systems/", include("systems.urls")),
    path("admin/", admin.site.urls),
]
