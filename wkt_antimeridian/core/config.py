"""Splitter configuration loaded from environment variables.

All configuration values have sensible defaults.  Azure Functions app
settings (or ``local.settings.json`` for local dev) are the source of
truth when running behind the HTTP surface; library callers can build an
``AntimeridianConfig`` directly.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any numeric
    value is out of its valid range.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from wkt_antimeridian.core.exceptions import AntimeridianError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigValidationError(AntimeridianError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class AntimeridianConfig:
    """Immutable splitter configuration.

    Attributes:
        verify_area: Compare input and output planar area after splitting
            and raise ``SplitIntegrityError`` on mismatch.
        area_rel_tolerance: Relative tolerance for the area comparison.
        area_abs_tolerance: Absolute tolerance (square degrees) for the
            area comparison.
        max_wkt_length: Largest WKT request body accepted over HTTP, in
            characters.
    """

    verify_area: bool = True
    area_rel_tolerance: float = 1e-9
    area_abs_tolerance: float = 1e-9
    max_wkt_length: int = 1_000_000

    @classmethod
    def from_env(cls) -> AntimeridianConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a
                boolean flag is not recognised.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``ANTIMERIDIAN_MAX_WKT_LENGTH=abc``).
        """
        config = cls(
            verify_area=_env_bool("ANTIMERIDIAN_VERIFY_AREA", default=True),
            area_rel_tolerance=float(os.getenv("ANTIMERIDIAN_AREA_REL_TOLERANCE", "1e-9")),
            area_abs_tolerance=float(os.getenv("ANTIMERIDIAN_AREA_ABS_TOLERANCE", "1e-9")),
            max_wkt_length=int(os.getenv("ANTIMERIDIAN_MAX_WKT_LENGTH", "1000000")),
        )
        _validate(config)
        return config


def _env_bool(key: str, *, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean (true/false)")


def _validate(config: AntimeridianConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.area_rel_tolerance <= 0:
        raise ConfigValidationError(
            "ANTIMERIDIAN_AREA_REL_TOLERANCE",
            config.area_rel_tolerance,
            "must be > 0",
        )

    if config.area_abs_tolerance < 0:
        raise ConfigValidationError(
            "ANTIMERIDIAN_AREA_ABS_TOLERANCE",
            config.area_abs_tolerance,
            "must be >= 0 (square degrees)",
        )

    if config.max_wkt_length <= 0:
        raise ConfigValidationError(
            "ANTIMERIDIAN_MAX_WKT_LENGTH",
            config.max_wkt_length,
            "must be > 0 (characters)",
        )
