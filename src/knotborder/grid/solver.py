"""
Grid solver for Knot Border.

Fits a whole number of square cells into the rectangle, centered inside the
inset, keeping counts odd when the fill pattern alternates.
"""

import math

from knotborder.models import Grid, Pattern
from knotborder.tracer import get_tracer, trace

ALTERNATING_PATTERNS = (Pattern.BRAID, Pattern.TWIST_X, Pattern.TWIST_Y)


def requires_odd_grid(pattern, config):
    """
    Whether the pattern needs odd column/row counts.

    An even count breaks the A-B-A alternation at the far edge and leaves a
    seam in the corner.
    """
    if pattern in ALTERNATING_PATTERNS:
        return True
    return pattern == Pattern.BOX and config.grid.odd_for_box


def fit_count(usable, cell_size, force_odd):
    """Number of cells along one axis, never less than one."""
    count = math.floor(usable / cell_size)
    if force_odd and count % 2 == 0:
        count -= 1
    return max(count, 1)


@trace(label="solve_grid")
def solve_grid(spec, config):
    """
    Derive column/row counts and pixel offsets for a spec.

    Returns an empty Grid when either outer dimension is not positive.
    """
    tracer = get_tracer()

    if spec.outer_width <= 0 or spec.outer_height <= 0:
        tracer.event("Non-positive rectangle, empty grid",
                     width=spec.outer_width, height=spec.outer_height)
        return Grid(x_offset=spec.inset, y_offset=spec.inset, cell_size=spec.cell_size)

    usable_w = spec.outer_width - 2 * spec.inset
    usable_h = spec.outer_height - 2 * spec.inset
    force_odd = requires_odd_grid(spec.pattern, config)

    cols = fit_count(usable_w, spec.cell_size, force_odd)
    rows = fit_count(usable_h, spec.cell_size, force_odd)

    grid = Grid(
        cols=cols,
        rows=rows,
        x_offset=spec.inset + (usable_w - cols * spec.cell_size) / 2,
        y_offset=spec.inset + (usable_h - rows * spec.cell_size) / 2,
        cell_size=spec.cell_size,
    )

    tracer.event(f"Grid {cols}x{rows}", force_odd=force_odd)

    return grid
