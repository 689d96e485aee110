"""Forms validating requests sent by front-end widgets."""

from __future__ import annotations

from typing import Any

from django import forms


class RelationRequestForm(forms.Form):
    """Validate relation search parameters.

    `model`, `name`, `key`, `scope` and `append` arrive encrypted; this form
    only checks presence. `search` is plain text.
    """

    model = forms.CharField()
    name = forms.CharField()
    key = forms.CharField()
    scope = forms.CharField(required=False)
    append = forms.CharField(required=False)
    search = forms.CharField(required=False, strip=False)

    def clean(self) -> dict[str, Any]:
        """Normalize optional encrypted parameters to None when missing."""

        cleaned = super().clean()
        for field in ("scope", "append"):
            if not cleaned.get(field):
                cleaned[field] = None
        cleaned["search"] = cleaned.get("search") or ""
        return cleaned
