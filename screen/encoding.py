"""JSON helpers for values handed to client-side widgets.

The chart widget expects numbers, not numeric strings, so datasets pulled from
a repository (often straight from form input, CSV rows or ORM aggregates) are
normalized before encoding: any string or Decimal that reads entirely as a
number is emitted unquoted. Dates, times and UUIDs are encoded the way Django
encodes them elsewhere.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from django.core.serializers.json import DjangoJSONEncoder

_NUMERIC_RE = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$")
_INTEGER_RE = re.compile(r"^\s*[+-]?\d+\s*$")


def is_numeric_string(value: str) -> bool:
    """Return True when `value` is a complete decimal or scientific number.

    Args:
        value: Candidate string (surrounding whitespace allowed).

    Returns:
        True for strings such as `"100"`, `"-2.5"`, `" 1e3"`; False for
        `"100px"`, `""` or `"abc"`.
    """

    return bool(_NUMERIC_RE.match(value))


def coerce_numeric(value: Any) -> Any:
    """Recursively replace numeric strings and Decimals with int/float values.

    Mapping keys are left untouched; only values are converted. Non-finite
    Decimals are kept as strings.
    """

    if isinstance(value, Decimal):
        return coerce_numeric(str(value))
    if isinstance(value, str):
        if not is_numeric_string(value):
            return value
        if _INTEGER_RE.match(value):
            return int(value)
        return float(value)
    if isinstance(value, Mapping):
        return {key: coerce_numeric(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [coerce_numeric(item) for item in value]
    return value


def dumps(value: Any, *, numeric_check: bool = False) -> str:
    """Encode a value as compact JSON.

    Args:
        value: JSON-serializable value, or one `DjangoJSONEncoder` handles
            (dates, times, Decimals, UUIDs, lazy translations).
        numeric_check: When True, numeric strings are emitted as numbers.

    Returns:
        JSON text using `,`/`:` separators.
    """

    if numeric_check:
        value = coerce_numeric(value)
    return json.dumps(value, separators=(",", ":"), cls=DjangoJSONEncoder)
