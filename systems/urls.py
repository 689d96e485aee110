"""URL configuration for platform system endpoints."""

from __future__ import annotations

from django.urls import path

from systems import views

app_name = "systems"

urlpatterns = [
    path("relation", views.relation, name="relation"),
]
