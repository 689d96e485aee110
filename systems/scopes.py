"""Relation scopes shipped with the platform.

Imported from `SystemsConfig.ready()` so the registry is complete (and
validated) before the first request.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.db.models import QuerySet

from systems.relations import registry

RECENT_USERS_LIMIT = 50

User = get_user_model()


@registry.scope(User, "active")
def active_users(queryset: QuerySet) -> QuerySet:
    """Users allowed to sign in."""

    return queryset.filter(is_active=True)


@registry.scope(User, "recent")
def recent_users(queryset: QuerySet) -> list:
    """The most recently joined users, newest first, as a plain list."""

    return list(queryset.order_by("-date_joined", "-pk")[:RECENT_USERS_LIMIT])
