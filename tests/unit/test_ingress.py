"""Tests for the HTTP ingress boundary helpers.

Validates:
- ``decode_request_body`` handles bytes, strings, size limits and bad JSON
- Each handler returns 200 with the documented body
- Domain and contract errors map to 400 / 413 structured error bodies
- Correlation ids propagate into error payloads
"""

from __future__ import annotations

import json

import pytest

from wkt_antimeridian.core.config import AntimeridianConfig
from wkt_antimeridian.core.exceptions import ContractError
from wkt_antimeridian.core.ingress import (
    HTTP_BAD_REQUEST,
    HTTP_OK,
    HTTP_PAYLOAD_TOO_LARGE,
    IngressResponse,
    decode_request_body,
    handle_flatten,
    handle_normalize,
    handle_split,
)
from wkt_antimeridian.models.payloads import ErrorResponse, FlattenResponse, WktResponse


def _body(wkt: object, **extra: object) -> bytes:
    return json.dumps({"wkt": wkt, **extra}).encode("utf-8")


# ---------------------------------------------------------------------------
# decode_request_body
# ---------------------------------------------------------------------------


class TestDecodeRequestBody:
    """Raw body → dict."""

    def test_bytes_parsed(self) -> None:
        assert decode_request_body(b'{"wkt": "POINT (1 2)"}', max_length=100) == {
            "wkt": "POINT (1 2)"
        }

    def test_string_parsed(self) -> None:
        assert decode_request_body('{"a": 1}', max_length=100) == {"a": 1}

    def test_invalid_json_raises_contract_error(self) -> None:
        with pytest.raises(ContractError, match="not valid JSON") as exc_info:
            decode_request_body("{not-json", max_length=100)
        assert exc_info.value.code == "INVALID_JSON"
        assert exc_info.value.stage == "ingress"

    def test_json_array_raises_contract_error(self) -> None:
        with pytest.raises(ContractError, match="must be an object") as exc_info:
            decode_request_body("[1, 2, 3]", max_length=100)
        assert exc_info.value.code == "INVALID_INPUT_TYPE"

    def test_invalid_utf8_raises_contract_error(self) -> None:
        with pytest.raises(ContractError, match="not valid UTF-8") as exc_info:
            decode_request_body(b"\xff\xfe{}", max_length=100)
        assert exc_info.value.code == "INVALID_ENCODING"

    def test_oversized_body_raises_contract_error(self) -> None:
        with pytest.raises(ContractError, match="limit is 5") as exc_info:
            decode_request_body('{"wkt": "POINT (1 2)"}', max_length=5)
        assert exc_info.value.code == "PAYLOAD_TOO_LARGE"


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


class TestHandleNormalize:
    def test_success(self) -> None:
        response = handle_normalize(_body("POINT (190 10)"))
        assert response.status_code == HTTP_OK
        assert response.body == {"wkt": "POINT (-170 10)"}

    def test_parse_error_is_bad_request(self) -> None:
        response = handle_normalize(_body("-170, 10"), correlation_id="req-1")
        assert response.status_code == HTTP_BAD_REQUEST
        error = response.body["error"]
        assert error["category"] == "validation"
        assert error["code"] == "WKT_PARSE_FAILED"
        assert error["stage"] == "parse_wkt"
        assert error["correlation_id"] == "req-1"

    def test_correlation_id_from_payload(self) -> None:
        response = handle_normalize(_body("NOT WKT", correlation_id="from-body"))
        assert response.body["error"]["correlation_id"] == "from-body"

    def test_missing_wkt_is_bad_request(self) -> None:
        response = handle_normalize(b'{"geometry": "POINT (1 2)"}')
        assert response.status_code == HTTP_BAD_REQUEST
        assert response.body["error"]["code"] == "PAYLOAD_MISSING_KEYS"
        assert response.body["error"]["category"] == "contract"

    def test_oversized_body_is_413(self) -> None:
        config = AntimeridianConfig(max_wkt_length=10)
        response = handle_normalize(_body("POINT (190 10)"), config=config)
        assert response.status_code == HTTP_PAYLOAD_TOO_LARGE
        assert response.body["error"]["code"] == "PAYLOAD_TOO_LARGE"


class TestHandleSplit:
    def test_success_returns_report(
        self, crossing_polygon_wkt: str, crossing_polygon_split_wkt: str
    ) -> None:
        response = handle_split(_body(crossing_polygon_wkt))
        assert response.status_code == HTTP_OK
        assert response.body["output_wkt"] == crossing_polygon_split_wkt
        assert response.body["crossing_count"] == 2
        assert response.body["polygon_count"] == 2
        assert response.body["split"] is True

    def test_unsplittable_polygon_is_bad_request(self) -> None:
        response = handle_split(_body("POLYGON ((0 80, 90 80, 180 80, -90 80, 0 80))"))
        assert response.status_code == HTTP_BAD_REQUEST
        assert response.body["error"]["code"] == "GEOMETRY_INVALID"
        assert response.body["error"]["stage"] == "split_polygon"

    def test_body_is_json_serialisable(self, crossing_polygon_wkt: str) -> None:
        response = handle_split(_body(crossing_polygon_wkt))
        assert json.loads(response.to_json())["input_wkt"] == crossing_polygon_wkt


class TestHandleFlatten:
    def test_success(self, crossing_polygon_split_wkt: str) -> None:
        response = handle_flatten(_body(crossing_polygon_split_wkt))
        assert response.status_code == HTTP_OK
        assert response.body == {
            "polygons": [
                "POLYGON ((-180 26, -180 70, -134 70, -134 26, -180 26))",
                "POLYGON ((180 70, 180 26, 162 26, 162 70, 180 70))",
            ],
            "count": 2,
        }

    def test_non_string_wkt_is_bad_request(self) -> None:
        response = handle_flatten(_body(["POLYGON EMPTY"]))
        assert response.status_code == HTTP_BAD_REQUEST
        assert response.body["error"]["code"] == "PAYLOAD_INVALID_TYPE"

    def test_point_rejected(self) -> None:
        response = handle_flatten(_body("POINT (1 2)"))
        assert response.status_code == HTTP_BAD_REQUEST
        assert response.body["error"]["stage"] == "flatten"


class TestIngressResponse:
    def test_to_json(self) -> None:
        assert IngressResponse(HTTP_OK, {"wkt": "POINT (1 2)"}).to_json() == (
            '{"wkt": "POINT (1 2)"}'
        )


class TestResponseShapes:
    """Handler bodies carry exactly the keys of their response types."""

    def test_normalize_body_matches_wkt_response(self) -> None:
        response = handle_normalize(_body("POINT (1e40 0)"))
        assert response.body == {"wkt": "POINT (-80 0)"}
        assert set(response.body) == set(WktResponse.__annotations__)

    def test_flatten_body_matches_flatten_response(self, crossing_polygon_split_wkt: str) -> None:
        response = handle_flatten(_body(crossing_polygon_split_wkt))
        assert set(response.body) == set(FlattenResponse.__annotations__)

    @pytest.mark.parametrize("handler", [handle_normalize, handle_split, handle_flatten])
    def test_error_body_matches_error_response(self, handler) -> None:
        response = handler(_body("NOT WKT"))
        assert response.status_code == HTTP_BAD_REQUEST
        assert set(response.body) == set(ErrorResponse.__annotations__)
