"""Typed payload schemas for the HTTP contracts.

Every endpoint receives and returns a JSON object.  These ``TypedDict``
definitions make the contracts explicit so that pyright catches key
mismatches at analysis time and ``validate_payload`` catches them at
runtime.

Usage::

    from wkt_antimeridian.models.payloads import WktRequest, validate_payload

    def handle(raw: dict) -> ...:
        validate_payload(raw, WktRequest, activity="normalize")
        # raw is now known to contain all required keys
"""

from __future__ import annotations

from typing import Any, NotRequired, TypedDict

from wkt_antimeridian.core.exceptions import ContractError

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class WktRequest(TypedDict):
    """Client → any ``/wkt/*`` endpoint."""

    wkt: str
    correlation_id: NotRequired[str]


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class WktResponse(TypedDict):
    """``/wkt/normalize`` → client."""

    wkt: str


class FlattenResponse(TypedDict):
    """``/wkt/flatten`` → client."""

    polygons: list[str]
    count: int


# ``/wkt/split`` returns a serialised SplitReport (models.report).


class ErrorResponse(TypedDict):
    """Any endpoint → client on failure; ``error`` is ``to_error_dict()``."""

    error: dict[str, Any]


# ---------------------------------------------------------------------------
# Required-key registrations (used by validate_payload)
# ---------------------------------------------------------------------------

_REQUIRED_KEYS: dict[type, frozenset[str]] = {
    WktRequest: frozenset({"wkt"}),
}

_STRING_KEYS: dict[type, frozenset[str]] = {
    WktRequest: frozenset({"wkt", "correlation_id"}),
}


# ---------------------------------------------------------------------------
# Runtime validation
# ---------------------------------------------------------------------------


def validate_payload(
    raw: dict[str, Any],
    schema: type,
    *,
    activity: str,
) -> None:
    """Validate that *raw* contains the required keys for *schema*.

    Raises:
        ContractError: If required keys are missing or a text field is
            not a string.
    """
    required = _REQUIRED_KEYS.get(schema)
    if required is None:
        return

    missing = required - raw.keys()
    if missing:
        msg = f"{activity}: missing required payload key(s): {', '.join(sorted(missing))}"
        raise ContractError(msg, stage=activity, code="PAYLOAD_MISSING_KEYS")

    text_keys = _STRING_KEYS.get(schema, frozenset()) & raw.keys()
    wrong_type = sorted(key for key in text_keys if not isinstance(raw[key], str))
    if wrong_type:
        msg = f"{activity}: payload key(s) must be strings: {', '.join(wrong_type)}"
        raise ContractError(msg, stage=activity, code="PAYLOAD_INVALID_TYPE")
