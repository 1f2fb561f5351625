"""
Tile classification for Knot Border.

Assigns every band cell an archetype from its distances to the four grid
edges, the band thickness and the fill pattern. Cells in the interior void
get nothing.
"""

from knotborder.models import Archetype, BandRole, Pattern, Tile
from knotborder.tracer import get_tracer, trace

A = Archetype

OUTER_CORNERS = {
    ("top", "left"): A.CORNER_TL,
    ("top", "right"): A.CORNER_TR,
    ("bottom", "left"): A.CORNER_BL,
    ("bottom", "right"): A.CORNER_BR,
}

INNER_CORNERS = {
    ("top", "left"): A.INNER_CORNER_TL,
    ("top", "right"): A.INNER_CORNER_TR,
    ("bottom", "left"): A.INNER_CORNER_BL,
    ("bottom", "right"): A.INNER_CORNER_BR,
}

OUTER_EDGES = {
    "top": A.EDGE_T,
    "bottom": A.EDGE_B,
    "left": A.EDGE_L,
    "right": A.EDGE_R,
}

# The inner ring mirrors the outer one: its top side bulges downward.
INNER_EDGES = {
    "top": A.EDGE_B,
    "bottom": A.EDGE_T,
    "left": A.EDGE_R,
    "right": A.EDGE_L,
}

ROTATED_180 = {
    A.CORNER_TL: A.CORNER_BR,
    A.CORNER_TR: A.CORNER_BL,
    A.CORNER_BL: A.CORNER_TR,
    A.CORNER_BR: A.CORNER_TL,
    A.INNER_CORNER_TL: A.INNER_CORNER_BR,
    A.INNER_CORNER_TR: A.INNER_CORNER_BL,
    A.INNER_CORNER_BL: A.INNER_CORNER_TR,
    A.INNER_CORNER_BR: A.INNER_CORNER_TL,
    A.EDGE_T: A.EDGE_B,
    A.EDGE_B: A.EDGE_T,
    A.EDGE_L: A.EDGE_R,
    A.EDGE_R: A.EDGE_L,
    A.CROSS_A: A.CROSS_A,
    A.CROSS_B: A.CROSS_B,
    A.BOX_V: A.BOX_V,
    A.BOX_H: A.BOX_H,
}


def rotate_archetype_180(archetype):
    """Archetype seen after turning the whole grid half a revolution."""
    return ROTATED_180[archetype]


def interior_fill(x, y, pattern):
    """Fill archetype for a cell strictly inside the band's two rings."""
    if pattern == Pattern.BOX:
        return A.BOX_V if (x + y) % 2 == 0 else A.BOX_H
    if pattern == Pattern.TWIST_X:
        return A.CROSS_A if x % 2 == 0 else A.BOX_V
    if pattern == Pattern.TWIST_Y:
        return A.CROSS_A if y % 2 == 0 else A.BOX_H
    return A.CROSS_A if (x + y) % 2 == 0 else A.CROSS_B


def classify_cell(x, y, cols, rows, thickness, pattern):
    """
    Classify one cell.

    Returns (Archetype, BandRole), or None when the cell lies in the void.
    Rules are tried in order; the first match wins:
    outer corner, inner corner, outer edge, inner edge, interior fill.
    """
    dist = {
        "left": x,
        "right": cols - 1 - x,
        "top": y,
        "bottom": rows - 1 - y,
    }
    if min(dist.values()) >= thickness:
        return None

    outer_v = next((s for s in ("top", "bottom") if dist[s] == 0), None)
    outer_h = next((s for s in ("left", "right") if dist[s] == 0), None)

    if outer_v and outer_h:
        return OUTER_CORNERS[(outer_v, outer_h)], BandRole.OUTER_CORNER

    inner = thickness > 1
    inner_v = next((s for s in ("top", "bottom") if dist[s] == thickness - 1), None) if inner else None
    inner_h = next((s for s in ("left", "right") if dist[s] == thickness - 1), None) if inner else None

    if inner_v and inner_h:
        return INNER_CORNERS[(inner_v, inner_h)], BandRole.INNER_CORNER

    outer_side = outer_v or outer_h
    if outer_side:
        return OUTER_EDGES[outer_side], BandRole.OUTER_EDGE

    inner_side = inner_v or inner_h
    if inner_side:
        return INNER_EDGES[inner_side], BandRole.INNER_EDGE

    return interior_fill(x, y, pattern), BandRole.INTERIOR


@trace(label="classify_grid")
def classify_grid(grid, spec):
    """
    Classify every cell of the grid, row by row.

    Returns the list of Tile objects for occupied cells.
    """
    tracer = get_tracer()
    tiles = []

    for y in range(grid.rows):
        for x in range(grid.cols):
            result = classify_cell(x, y, grid.cols, grid.rows, spec.thickness_rows, spec.pattern)
            if result is None:
                continue
            archetype, role = result
            tiles.append(Tile(
                cell_x=x,
                cell_y=y,
                pixel_x=x * grid.cell_size + grid.x_offset,
                pixel_y=y * grid.cell_size + grid.y_offset,
                archetype=archetype,
                role=role,
            ))

    tracer.event(f"Classified {len(tiles)} band tiles")

    return tiles
