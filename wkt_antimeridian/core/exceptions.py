"""Unified exception taxonomy.

Provides a shared base exception hierarchy for the WKT codec, the
antimeridian splitter and the HTTP ingress.  Every domain exception
inherits from ``AntimeridianError`` and carries structured context
fields that enable consistent error payloads and operator diagnostics.

Taxonomy categories
-------------------
- ``ValidationError``   — malformed WKT or invalid geometry, caller error.
- ``PermanentError``    — internal consistency failure (e.g. area check).
- ``ContractError``     — HTTP payload/schema drift.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for HTTP responses and logging.
"""

from __future__ import annotations


class AntimeridianError(Exception):
    """Base exception for all package errors.

    Attributes:
        message: Human-readable error description.
        stage: Processing stage where the error occurred
            (e.g. ``"parse_wkt"``, ``"split_polygon"``).
        code: Machine-readable error code (e.g. ``"WKT_PARSE_FAILED"``).
        correlation_id: Request correlation identifier, if any.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.correlation_id = correlation_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        return "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(AntimeridianError):
    """Input or geometry validation failure."""


class PermanentError(AntimeridianError):
    """Unrecoverable processing failure."""


class ContractError(AntimeridianError):
    """Payload or schema drift at the HTTP boundary."""


# ---------------------------------------------------------------------------
# Domain errors
# ---------------------------------------------------------------------------


class ParseError(ValidationError):
    """Raised when text is not well-formed WKT.

    Attributes:
        position: Zero-based character offset where parsing failed,
            or ``-1`` when the failure is not tied to a position.
    """

    default_stage = "parse_wkt"
    default_code = "WKT_PARSE_FAILED"

    def __init__(self, message: str = "", *, position: int = -1, **kwargs: str) -> None:
        self.position = position
        if position >= 0:
            message = f"{message} (at position {position})"
        super().__init__(message, **kwargs)


class InvalidGeometryError(ValidationError):
    """Raised when a geometry is structurally parseable but not usable."""

    default_stage = "validate_geometry"
    default_code = "GEOMETRY_INVALID"


class SplitIntegrityError(PermanentError):
    """Raised when a split result does not conserve the input area."""

    default_stage = "split_polygon"
    default_code = "SPLIT_AREA_MISMATCH"
