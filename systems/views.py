"""JSON endpoints used by platform widgets."""

from __future__ import annotations

import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_http_methods

from systems.crypt import DecryptionError, decrypt_nullable
from systems.forms import RelationRequestForm
from systems.relations import RelationError, build_relation_source, relation_items

logger = logging.getLogger(__name__)

ENCRYPTED_FIELDS = ("model", "name", "key", "scope", "append")


@require_http_methods(["GET", "POST"])
def relation(request: HttpRequest) -> JsonResponse:
    """Return `{key: label}` pairs for a relation field search.

    The response holds at most ten entries. Missing parameters answer 400
    with field errors, undecryptable ones 400, and unknown models or scopes
    404.
    """

    form = RelationRequestForm(request.POST if request.method == "POST" else request.GET)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors.get_json_data()}, status=400)

    try:
        params = {field: decrypt_nullable(form.cleaned_data[field]) for field in ENCRYPTED_FIELDS}
    except DecryptionError as exc:
        logger.warning("Rejected relation request with an undecryptable parameter: %s", exc)
        return JsonResponse({"error": str(exc)}, status=400)

    try:
        source = build_relation_source(**params)
    except RelationError as exc:
        logger.warning("Relation lookup failed: %s", exc)
        return JsonResponse({"error": str(exc)}, status=404)

    return JsonResponse(relation_items(source, form.cleaned_data["search"]))
