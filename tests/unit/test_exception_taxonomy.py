"""Tests for the unified exception taxonomy.

Validates:
- AntimeridianError hierarchy and structured attributes
- Category classification (validation, permanent, contract)
- ``to_error_dict()`` produces stable payload keys
- Domain errors carry their default stage and code
"""

from __future__ import annotations

from typing import ClassVar

import pytest

from wkt_antimeridian.core.config import ConfigValidationError
from wkt_antimeridian.core.exceptions import (
    AntimeridianError,
    ContractError,
    InvalidGeometryError,
    ParseError,
    PermanentError,
    SplitIntegrityError,
    ValidationError,
)


class TestAntimeridianErrorBase:
    """AntimeridianError base class behavior."""

    def test_default_attributes(self) -> None:
        err = AntimeridianError("boom")
        assert err.message == "boom"
        assert err.stage == ""
        assert err.code == ""
        assert err.correlation_id == ""

    def test_custom_attributes(self) -> None:
        err = AntimeridianError(
            "fail",
            stage="split_polygon",
            code="SPLIT_FAILED",
            correlation_id="abc-123",
        )
        assert err.stage == "split_polygon"
        assert err.code == "SPLIT_FAILED"
        assert err.correlation_id == "abc-123"

    def test_str_is_message(self) -> None:
        assert str(AntimeridianError("human-readable error")) == "human-readable error"

    def test_error_dict_keys_are_stable(self) -> None:
        err = ContractError("bad", stage="ingress", code="INVALID_JSON", correlation_id="c-1")
        assert err.to_error_dict() == {
            "category": "contract",
            "code": "INVALID_JSON",
            "stage": "ingress",
            "message": "bad",
            "correlation_id": "c-1",
        }


class TestCategories:
    """Category follows the concrete class."""

    CASES: ClassVar[list[tuple[type[AntimeridianError], str]]] = [
        (ValidationError, "validation"),
        (ParseError, "validation"),
        (InvalidGeometryError, "validation"),
        (PermanentError, "permanent"),
        (SplitIntegrityError, "permanent"),
        (ContractError, "contract"),
        (AntimeridianError, "permanent"),
    ]

    @pytest.mark.parametrize(("cls", "category"), CASES)
    def test_category(self, cls: type[AntimeridianError], category: str) -> None:
        assert cls("x").category == category

    def test_config_error_is_permanent(self) -> None:
        err = ConfigValidationError("KEY", 1, "bad")
        assert isinstance(err, AntimeridianError)
        assert err.category == "permanent"


class TestDomainDefaults:
    """Default stage and code per domain error."""

    def test_parse_error(self) -> None:
        err = ParseError("Expected ')'", position=12)
        assert err.stage == "parse_wkt"
        assert err.code == "WKT_PARSE_FAILED"
        assert err.position == 12
        assert err.message == "Expected ')' (at position 12)"

    def test_parse_error_without_position(self) -> None:
        err = ParseError("WKT text is empty")
        assert err.position == -1
        assert err.message == "WKT text is empty"

    def test_invalid_geometry_error(self) -> None:
        err = InvalidGeometryError("ring not closed")
        assert err.stage == "validate_geometry"
        assert err.code == "GEOMETRY_INVALID"

    def test_stage_override(self) -> None:
        assert InvalidGeometryError("x", stage="flatten").stage == "flatten"

    def test_split_integrity_error(self) -> None:
        err = SplitIntegrityError("area changed")
        assert err.stage == "split_polygon"
        assert err.code == "SPLIT_AREA_MISMATCH"

    def test_caught_as_base(self) -> None:
        with pytest.raises(AntimeridianError):
            raise ParseError("x")
