"""
Emblem clearance for Knot Border.

Opens a gap in the bottom of the band so a centered emblem can sit in it.
"""

import math

from knotborder.models import EmblemPlacement
from knotborder.tracer import get_tracer, trace


def clearance_radius(emblem, config):
    """Half-width of the cleared span, in columns."""
    return math.ceil(emblem.clearance_scale * config.emblem.clearance_cells)


def clears_bottom_center(spec):
    return spec.emblem is not None and spec.emblem.placement == EmblemPlacement.BOTTOM_CENTER


@trace(label="apply_clearance")
def apply_clearance(tiles, grid, spec, config):
    """
    Drop bottom-band tiles around the middle column.

    Only a bottom-center emblem clears anything; every other placement
    returns the tiles unchanged.
    """
    tracer = get_tracer()

    if not clears_bottom_center(spec):
        return list(tiles)

    # Doubled offsets keep the midpoint exact on even grids.
    span = 2 * clearance_radius(spec.emblem, config)

    kept = [
        t for t in tiles
        if not (grid.rows - 1 - t.cell_y < spec.thickness_rows
                and abs(2 * t.cell_x - (grid.cols - 1)) <= span)
    ]

    tracer.event(f"Cleared {len(tiles) - len(kept)} tiles for emblem",
                 mid=(grid.cols - 1) / 2, radius=span // 2)

    return kept
