"""Base layout contract shared by every screen layout.

A layout is built against a `Repository` and either produces a `LayoutView`
(template name + context) or nothing at all when the current user may not see
it. Callers decide what "nothing" means on their page; layouts never raise for
a permission denial.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Self

from django.http import HttpRequest
from django.template.loader import render_to_string
from django.utils.safestring import SafeString

from .repository import Repository


@dataclass(frozen=True, slots=True)
class LayoutView:
    """A built layout ready for template rendering.

    Args:
        template: Django template name.
        context: Template variables assembled by the layout.
    """

    template: str
    context: Mapping[str, Any] = field(default_factory=dict)

    def render(self, request: HttpRequest | None = None) -> SafeString:
        """Render the template with the assembled context."""

        return SafeString(render_to_string(self.template, dict(self.context), request=request))


class Layout:
    """Abstract layout with permission gating.

    Subclasses set `template` and implement `build()`. `permission` lists
    Django permission codenames (`"app_label.codename"`); a user holding any
    one of them may see the layout. An empty tuple means everyone may.
    """

    template: ClassVar[str] = ""
    permission: ClassVar[tuple[str, ...]] = ()

    def __init__(self) -> None:
        self._visible = True

    def can_see(self, visible: bool) -> Self:
        """Show or hide the layout regardless of permissions."""

        self._visible = bool(visible)
        return self

    def check_permission(self, repository: Repository, *, user: Any = None) -> bool:
        """Return True when the layout may be rendered for `user`.

        Args:
            repository: Data the layout would be built with.
            user: Current user (anything with `has_perm`), or None.

        Returns:
            False when hidden via `can_see(False)` or when permissions are
            required and the user holds none of them.
        """

        if not self._visible:
            return False
        if not self.permission:
            return True
        if user is None:
            return False
        return any(user.has_perm(codename) for codename in self.permission)

    def build(self, repository: Repository, *, user: Any = None) -> LayoutView | None:
        """Build the layout view, or return None when it must not render."""

        raise NotImplementedError
