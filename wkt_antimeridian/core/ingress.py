"""Thin ingress boundary helpers for the Azure Functions HTTP surface.

Centralises transport concerns so that ``function_app.py`` contains
only route bindings and handoff:

- **decode_request_body** — turns the raw HTTP body into a dict,
  enforcing the configured size limit.
- **handle_normalize / handle_split / handle_flatten** — validate the
  payload, run the matching entry point and map domain errors to a
  structured ``IngressResponse``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from wkt_antimeridian.antimeridian import (
    describe_split,
    normalize_wkt,
    wkt_multipoly_to_single_polygons,
)
from wkt_antimeridian.core.config import AntimeridianConfig
from wkt_antimeridian.core.exceptions import AntimeridianError, ContractError
from wkt_antimeridian.models.payloads import (
    ErrorResponse,
    FlattenResponse,
    WktRequest,
    WktResponse,
    validate_payload,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

logger = logging.getLogger("wkt_antimeridian.core.ingress")

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_PAYLOAD_TOO_LARGE = 413

PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"


@dataclass(frozen=True, slots=True)
class IngressResponse:
    """Transport-neutral HTTP response: status code and JSON body."""

    status_code: int
    body: Mapping[str, Any]

    def to_json(self) -> str:
        return json.dumps(self.body)


# ---------------------------------------------------------------------------
# Request decoding
# ---------------------------------------------------------------------------


def decode_request_body(raw: bytes | str, *, max_length: int) -> dict[str, Any]:
    """Decode a JSON object request body.

    Args:
        raw: The HTTP request body.
        max_length: Largest accepted body, in characters.

    Returns:
        Parsed dict payload.

    Raises:
        ContractError: If the body is too large, not UTF-8, not JSON or
            not a JSON object.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"Request body is not valid UTF-8: {exc}"
            raise ContractError(msg, stage="ingress", code="INVALID_ENCODING") from exc

    if len(raw) > max_length:
        msg = f"Request body has {len(raw)} characters, limit is {max_length}"
        raise ContractError(msg, stage="ingress", code=PAYLOAD_TOO_LARGE)

    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, ValueError) as exc:
        msg = f"Request body is not valid JSON: {exc}"
        raise ContractError(msg, stage="ingress", code="INVALID_JSON") from exc
    if not isinstance(parsed, dict):
        msg = f"Request body JSON must be an object, got {type(parsed).__name__}"
        raise ContractError(msg, stage="ingress", code="INVALID_INPUT_TYPE")
    return parsed


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle(
    raw: bytes | str,
    operation: str,
    run: Callable[[str, AntimeridianConfig], Mapping[str, Any]],
    *,
    config: AntimeridianConfig | None,
    correlation_id: str,
) -> IngressResponse:
    config = config or AntimeridianConfig()
    try:
        payload = decode_request_body(raw, max_length=config.max_wkt_length)
        validate_payload(payload, WktRequest, activity=operation)
        correlation_id = correlation_id or payload.get("correlation_id", "")
        body = run(payload["wkt"], config)
    except AntimeridianError as exc:
        exc.correlation_id = exc.correlation_id or correlation_id
        status = HTTP_PAYLOAD_TOO_LARGE if exc.code == PAYLOAD_TOO_LARGE else HTTP_BAD_REQUEST
        logger.warning(
            "Rejected %s request | code=%s | correlation_id=%s | %s",
            operation,
            exc.code,
            exc.correlation_id,
            exc.message,
        )
        error_body: ErrorResponse = {"error": exc.to_error_dict()}
        return IngressResponse(status, error_body)

    logger.info("Handled %s request | correlation_id=%s", operation, correlation_id)
    return IngressResponse(HTTP_OK, body)


def handle_normalize(
    raw: bytes | str,
    *,
    config: AntimeridianConfig | None = None,
    correlation_id: str = "",
) -> IngressResponse:
    """``POST /wkt/normalize`` — body ``{"wkt": ...}`` → ``{"wkt": ...}``."""

    def run(wkt: str, _config: AntimeridianConfig) -> WktResponse:
        return {"wkt": normalize_wkt(wkt)}

    return _handle(raw, "normalize", run, config=config, correlation_id=correlation_id)


def handle_split(
    raw: bytes | str,
    *,
    config: AntimeridianConfig | None = None,
    correlation_id: str = "",
) -> IngressResponse:
    """``POST /wkt/split`` — body ``{"wkt": ...}`` → serialised ``SplitReport``."""
    return _handle(
        raw,
        "split",
        lambda wkt, cfg: describe_split(wkt, config=cfg).model_dump(),
        config=config,
        correlation_id=correlation_id,
    )


def handle_flatten(
    raw: bytes | str,
    *,
    config: AntimeridianConfig | None = None,
    correlation_id: str = "",
) -> IngressResponse:
    """``POST /wkt/flatten`` — body ``{"wkt": ...}`` → ``{"polygons": [...], "count": n}``."""

    def run(wkt: str, _config: AntimeridianConfig) -> FlattenResponse:
        polygons = wkt_multipoly_to_single_polygons(wkt)
        return {"polygons": polygons, "count": len(polygons)}

    return _handle(raw, "flatten", run, config=config, correlation_id=correlation_id)
