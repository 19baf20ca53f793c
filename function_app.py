"""Azure Functions entry point — WKT antimeridian service.

This module registers the HTTP functions using the Python v2
programming model.

All business logic lives in the wkt_antimeridian package. This file is
purely the wiring layer between Azure Functions bindings and
application code.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import azure.functions as func

from wkt_antimeridian.core.config import AntimeridianConfig
from wkt_antimeridian.core.ingress import handle_flatten, handle_normalize, handle_split

if TYPE_CHECKING:
    from wkt_antimeridian.core.ingress import IngressResponse

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)

logger = logging.getLogger("wkt_antimeridian.function_app")

CORRELATION_HEADER = "x-correlation-id"


def _correlation_id(req: func.HttpRequest) -> str:
    return req.headers.get(CORRELATION_HEADER, "") or req.params.get("correlation_id", "")


def _to_http(response: IngressResponse) -> func.HttpResponse:
    logger.debug("Responding with HTTP %d", response.status_code)
    return func.HttpResponse(
        response.to_json(),
        status_code=response.status_code,
        mimetype="application/json",
    )


# ---------------------------------------------------------------------------
# HTTP: normalise longitudes only
# ---------------------------------------------------------------------------


@app.function_name("normalize_wkt")
@app.route(route="wkt/normalize", methods=["POST"])
def normalize_wkt_http(req: func.HttpRequest) -> func.HttpResponse:
    """Normalise every longitude of the posted WKT into [-180, 180]."""
    return _to_http(
        handle_normalize(
            req.get_body(),
            config=AntimeridianConfig.from_env(),
            correlation_id=_correlation_id(req),
        )
    )


# ---------------------------------------------------------------------------
# HTTP: normalise and split at the antimeridian
# ---------------------------------------------------------------------------


@app.function_name("split_wkt")
@app.route(route="wkt/split", methods=["POST"])
def split_wkt_http(req: func.HttpRequest) -> func.HttpResponse:
    """Normalise and split the posted WKT, returning a split report."""
    return _to_http(
        handle_split(
            req.get_body(),
            config=AntimeridianConfig.from_env(),
            correlation_id=_correlation_id(req),
        )
    )


# ---------------------------------------------------------------------------
# HTTP: flatten a multipolygon
# ---------------------------------------------------------------------------


@app.function_name("flatten_wkt")
@app.route(route="wkt/flatten", methods=["POST"])
def flatten_wkt_http(req: func.HttpRequest) -> func.HttpResponse:
    """Return one POLYGON WKT per member of the posted MULTIPOLYGON."""
    return _to_http(
        handle_flatten(
            req.get_body(),
            config=AntimeridianConfig.from_env(),
            correlation_id=_correlation_id(req),
        )
    )
