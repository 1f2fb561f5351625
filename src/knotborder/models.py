"""
Pydantic data models for the Knot Border generator.

All render data flows through these validated models to ensure consistency.
Content-based ID generation keeps outputs deterministic.
"""

import hashlib
import math
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from knotborder.tracer import get_tracer


class Pattern(str, Enum):
    """Fill pattern for interior band cells."""
    BRAID = "braid"
    TWIST_X = "twist-x"
    TWIST_Y = "twist-y"
    BOX = "box"


class CornerStyle(str, Enum):
    """Visual style of corner and edge strands."""
    ROUND = "round"
    SHARP = "sharp"
    BOX = "box"


class EmblemPlacement(str, Enum):
    """Where the host places the emblem on the page."""
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_CENTER = "bottom-center"
    WATERMARK = "watermark"
    SIGNATURE_LEFT = "signature-left"
    SIGNATURE_RIGHT = "signature-right"


class Archetype(str, Enum):
    """Closed set of tile archetypes a band cell can be classified as."""
    CORNER_TL = "corner-tl"
    CORNER_TR = "corner-tr"
    CORNER_BL = "corner-bl"
    CORNER_BR = "corner-br"
    INNER_CORNER_TL = "inner-corner-tl"
    INNER_CORNER_TR = "inner-corner-tr"
    INNER_CORNER_BL = "inner-corner-bl"
    INNER_CORNER_BR = "inner-corner-br"
    EDGE_T = "edge-t"
    EDGE_B = "edge-b"
    EDGE_L = "edge-l"
    EDGE_R = "edge-r"
    CROSS_A = "cross-a"
    CROSS_B = "cross-b"
    BOX_V = "box-v"
    BOX_H = "box-h"


class BandRole(str, Enum):
    """Which classification rule placed a cell in the band."""
    OUTER_CORNER = "outer-corner"
    INNER_CORNER = "inner-corner"
    OUTER_EDGE = "outer-edge"
    INNER_EDGE = "inner-edge"
    INTERIOR = "interior"


class Severity(str, Enum):
    """Severity levels for validation checks."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"


class Emblem(BaseModel):
    """An externally supplied emblem the band may have to make room for."""
    placement: EmblemPlacement = EmblemPlacement.BOTTOM_CENTER
    clearance_scale: float = Field(default=1.0, gt=0.0)

    model_config = ConfigDict(extra="forbid", frozen=True)


class BorderSpec(BaseModel):
    """Everything one render needs. Immutable once built."""
    outer_width: float
    outer_height: float
    cell_size: float = Field(default=25.0, gt=0.0)
    thickness_rows: int = Field(default=2, ge=1, le=3)
    inset: float = 0.0
    stroke_color: str = "currentColor"
    stroke_width_px: float = Field(default=3.0, ge=0.0)
    ribbon_color: Optional[str] = None
    pattern: Pattern = Pattern.BRAID
    corner_style: CornerStyle = CornerStyle.ROUND
    emblem: Optional[Emblem] = None
    enabled: bool = True

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("pattern", mode="before")
    @classmethod
    def _fallback_pattern(cls, value):
        return _coerce_or_default(value, Pattern, Pattern.BRAID, "pattern")

    @field_validator("corner_style", mode="before")
    @classmethod
    def _fallback_corner_style(cls, value):
        return _coerce_or_default(value, CornerStyle, CornerStyle.ROUND, "corner_style")


def _coerce_or_default(value, enum_cls, default, field_name):
    """Map unknown selector values to the default instead of failing."""
    try:
        return enum_cls(value)
    except ValueError:
        get_tracer().event(
            f"Unknown {field_name} {value!r}, using {default.value}",
            level="WARN",
        )
        return default


class Grid(BaseModel):
    """Column/row counts and pixel origin of the cell grid."""
    cols: int = 0
    rows: int = 0
    x_offset: float = 0.0
    y_offset: float = 0.0
    cell_size: float = 0.0

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def is_empty(self):
        return self.cols <= 0 or self.rows <= 0

    @property
    def width(self):
        return self.cols * self.cell_size

    @property
    def height(self):
        return self.rows * self.cell_size


class Tile(BaseModel):
    """A classified cell with its pixel origin."""
    cell_x: int
    cell_y: int
    pixel_x: float
    pixel_y: float
    archetype: Archetype
    role: BandRole

    model_config = ConfigDict(extra="forbid", frozen=True)


class GeometryKey(BaseModel):
    """Cache key for shared geometry: only the fields that change its shape."""
    corner_style: CornerStyle
    gap_id: int

    model_config = ConfigDict(extra="forbid", frozen=True)


class CheckResult(BaseModel):
    """Result of a single validation check."""
    rule_id: str
    severity: Severity
    passed: bool
    message: str
    evidence: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class ValidationReport(BaseModel):
    """Collection of validation check results."""
    checks: List[CheckResult] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @property
    def has_errors(self):
        """Check if any errors exist."""
        return self.error_count > 0

    @property
    def error_count(self):
        """Count of failed error-level checks."""
        return sum(1 for c in self.checks if c.severity == Severity.ERROR and not c.passed)

    @property
    def warning_count(self):
        """Count of failed warning-level checks."""
        return sum(1 for c in self.checks if c.severity == Severity.WARN and not c.passed)


class BorderRender(BaseModel):
    """Result of one render pass, handed to the host."""
    render_id: str
    width: float
    height: float
    grid: Grid = Field(default_factory=Grid)
    tiles: List[Tile] = Field(default_factory=list)
    geometry_key: Optional[GeometryKey] = None
    path_ids: List[str] = Field(default_factory=list)
    mask_ids: List[str] = Field(default_factory=list)
    svg: str = ""
    validation: ValidationReport = Field(default_factory=ValidationReport)

    model_config = ConfigDict(extra="forbid")

    @property
    def is_empty(self):
        return not self.tiles


# ID generation functions for deterministic outputs

def generate_render_id(spec):
    """
    Generate deterministic render ID from the full spec contents.
    """
    data = spec.model_dump_json()
    h = hashlib.sha256(data.encode()).hexdigest()[:12]
    return f"border_{h}"


def compute_gap_size(stroke_width_px, cell_size, visual_gap_px):
    """
    Width of the gap cut into an under-strand, in 100-unit tile space.
    """
    return (stroke_width_px + visual_gap_px) * (100.0 / cell_size)


def compute_gap_id(stroke_width_px, cell_size, visual_gap_px):
    """
    Integer identity of the gap size, stable under float noise.
    """
    return int(math.floor(compute_gap_size(stroke_width_px, cell_size, visual_gap_px) * 100 + 0.5))


def make_geometry_key(spec, visual_gap_px):
    """Build the geometry cache key for a spec."""
    return GeometryKey(
        corner_style=spec.corner_style,
        gap_id=compute_gap_id(spec.stroke_width_px, spec.cell_size, visual_gap_px),
    )
