"""
Weave compositor for Knot Border.

Turns classified tiles into strands. Crossing tiles draw the under diagonal
through an occlusion mask, then the over diagonal on top, so the over strand
appears to pass through a gap cut in the under strand.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from knotborder.geometry.catalogue import STYLED_ARCHETYPES
from knotborder.models import Archetype, CornerStyle
from knotborder.tracer import get_tracer, trace

A = Archetype


class Strand(BaseModel):
    """One stroked path reference, optionally drawn through a mask."""
    path_id: str
    mask_id: Optional[str] = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class ComposedTile(BaseModel):
    """A tile ready for output: origin, scale and strands in draw order."""
    pixel_x: float
    pixel_y: float
    scale: float
    archetype: Archetype
    strands: List[Strand] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class StrandStyle(BaseModel):
    """Stroke attributes shared by every strand, in 100-unit tile space."""
    color: str
    width: float
    ribbon_color: Optional[str] = None
    ribbon_width: float = 0.0
    linejoin: str = "round"
    linecap: str = "round"
    miter_limit: float = 10.0

    model_config = ConfigDict(extra="forbid", frozen=True)


def strand_style(spec, config):
    """Derive the stroke attributes for a spec."""
    width = spec.stroke_width_px * (100.0 / spec.cell_size)
    ribbon_width = max(config.weave.min_ribbon_width, width * config.weave.ribbon_ratio)
    return StrandStyle(
        color=spec.stroke_color,
        width=width,
        ribbon_color=spec.ribbon_color or None,
        ribbon_width=ribbon_width if spec.ribbon_color else 0.0,
        linejoin="round" if spec.corner_style == CornerStyle.ROUND else "miter",
        miter_limit=config.weave.miter_limit,
    )


def _crossing(archetype, catalogue):
    under_id, over_id, mask_id = catalogue.crossing_ids(archetype)
    return [Strand(path_id=under_id, mask_id=mask_id), Strand(path_id=over_id)]


def _pair(first, second):
    def strands(archetype, catalogue):
        return [Strand(path_id=catalogue.path_id(first)), Strand(path_id=catalogue.path_id(second))]
    return strands


def _single(archetype, catalogue):
    return [Strand(path_id=catalogue.path_id(archetype))]


STRAND_BUILDERS = {
    A.CROSS_A: _crossing,
    A.CROSS_B: _crossing,
    A.BOX_V: _pair(A.EDGE_R, A.EDGE_L),
    A.BOX_H: _pair(A.EDGE_B, A.EDGE_T),
}
STRAND_BUILDERS.update({a: _single for a in STYLED_ARCHETYPES})

_missing = set(Archetype) - set(STRAND_BUILDERS)
if _missing:
    raise RuntimeError(f"No strand builder for archetypes: {sorted(a.value for a in _missing)}")


@trace(label="compose_tiles")
def compose_tiles(tiles, spec, catalogue):
    """
    Build the strand list for every tile.

    Returns ComposedTile objects in the same order as the input tiles.
    """
    tracer = get_tracer()
    scale = spec.cell_size / 100.0

    composed = [
        ComposedTile(
            pixel_x=tile.pixel_x,
            pixel_y=tile.pixel_y,
            scale=scale,
            archetype=tile.archetype,
            strands=STRAND_BUILDERS[tile.archetype](tile.archetype, catalogue),
        )
        for tile in tiles
    ]

    masked = sum(1 for c in composed for s in c.strands if s.mask_id)
    tracer.event(f"Composed {len(composed)} tiles", masked_strands=masked)

    return composed
