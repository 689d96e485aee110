"""App configuration for the systems Django app."""

from __future__ import annotations

from django.apps import AppConfig


class SystemsConfig(AppConfig):
    """Configuration for the `systems` app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "systems"

    def ready(self) -> None:
        """Register built-in relation scopes, then validate them and the crypt key."""

        from systems import scopes  # noqa: F401
        from systems.crypt import validate_crypt_key
        from systems.relations import registry

        registry.validate()
        validate_crypt_key()
