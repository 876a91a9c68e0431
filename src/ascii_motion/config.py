import math
import numbers
from dataclasses import dataclass, replace
from typing import Optional

from .glyphs import ASCII_RAMP

# -----------------------------
# Defaults
# -----------------------------

DEFAULT_CELL_WIDTH = 6
DEFAULT_MAX_COLUMNS = 120
DEFAULT_FONT_SIZE = 8
DEFAULT_COVERAGE_THRESHOLD = 0.3
DEFAULT_COLOR = "#d4d4d4"
DEFAULT_BACKGROUND_DISTANCE = 50.0
DEFAULT_BRIGHTNESS_DELTA = 30.0
DEFAULT_FRAME_COUNT = 8


class ConfigError(ValueError):
    """Raised for option values that would make a conversion meaningless."""


def default_cell_height(cell_width: int) -> int:
    # half rounds up: width 3 -> 5, width 6 -> 9
    return int(math.floor(cell_width * 1.5 + 0.5))


def _is_number(v) -> bool:
    return isinstance(v, numbers.Real) and not isinstance(v, bool) and math.isfinite(v)


def _require_positive_int(name: str, v) -> None:
    if not isinstance(v, numbers.Integral) or isinstance(v, bool):
        raise ConfigError(f"{name} must be an integer, got {v!r}")
    if v <= 0:
        raise ConfigError(f"{name} must be > 0, got {v}")


def _require_non_negative(name: str, v) -> None:
    if not _is_number(v):
        raise ConfigError(f"{name} must be a number, got {v!r}")
    if v < 0:
        raise ConfigError(f"{name} must be >= 0, got {v}")


def require_frame_count(frame_count) -> None:
    _require_positive_int("frame_count", frame_count)


# -----------------------------
# Grid options
# -----------------------------


@dataclass(frozen=True)
class GridConfig:
    cell_width: int = DEFAULT_CELL_WIDTH
    cell_height: Optional[int] = None  # None => round(cell_width * 1.5)
    max_columns: int = DEFAULT_MAX_COLUMNS
    font_size: float = DEFAULT_FONT_SIZE
    coverage_threshold: float = DEFAULT_COVERAGE_THRESHOLD
    color: str = DEFAULT_COLOR
    remove_background: bool = False
    background_distance_threshold: float = DEFAULT_BACKGROUND_DISTANCE
    brightness_delta_threshold: float = DEFAULT_BRIGHTNESS_DELTA
    invert: bool = False
    ramp: str = ASCII_RAMP

    def __post_init__(self):
        _require_positive_int("cell_width", self.cell_width)
        if self.cell_height is None:
            object.__setattr__(self, "cell_height", default_cell_height(self.cell_width))
        _require_positive_int("cell_height", self.cell_height)
        _require_positive_int("max_columns", self.max_columns)

        if not _is_number(self.font_size) or self.font_size <= 0:
            raise ConfigError(f"font_size must be a positive number, got {self.font_size!r}")

        if not _is_number(self.coverage_threshold):
            raise ConfigError(
                f"coverage_threshold must be a number, got {self.coverage_threshold!r}"
            )
        if not 0.0 <= self.coverage_threshold <= 1.0:
            raise ConfigError(
                f"coverage_threshold must be within [0, 1], got {self.coverage_threshold}"
            )

        _require_non_negative("background_distance_threshold", self.background_distance_threshold)
        _require_non_negative("brightness_delta_threshold", self.brightness_delta_threshold)

        if not isinstance(self.color, str) or not self.color.strip():
            raise ConfigError(f"color must be a non-empty string, got {self.color!r}")
        if not isinstance(self.ramp, str) or len(self.ramp) < 2:
            raise ConfigError("ramp must hold at least two characters")

    def replace(self, **changes) -> "GridConfig":
        """Copy with overrides; an overridden cell_width re-derives a defaulted height."""
        if "cell_width" in changes and "cell_height" not in changes:
            changes["cell_height"] = None
        return replace(self, **changes)
