"""
Geometry library for Knot Border.

Holds the fixed strand paths for each corner style, drawn in a 100x100 cell
and scaled at render time, and the render-scoped catalogue that hands out
shared path and mask ids.
"""

from knotborder.models import Archetype, CornerStyle

A = Archetype

ROUND_PATHS = {
    A.CORNER_TL: "M100,0 Q0,0 0,100",
    A.CORNER_TR: "M0,0 Q100,0 100,100",
    A.CORNER_BL: "M0,0 Q0,100 100,100",
    A.CORNER_BR: "M0,100 Q100,100 100,0",
    A.EDGE_T: "M0,100 C20,20 80,20 100,100",
    A.EDGE_B: "M0,0 C20,80 80,80 100,0",
    A.EDGE_L: "M100,0 C20,20 20,80 100,100",
    A.EDGE_R: "M0,0 C80,20 80,80 0,100",
    A.INNER_CORNER_TL: "M100,0 Q0,0 0,100",
    A.INNER_CORNER_TR: "M0,0 Q100,0 100,100",
    A.INNER_CORNER_BL: "M0,0 Q0,100 100,100",
    A.INNER_CORNER_BR: "M0,100 Q100,100 100,0",
}

SHARP_PATHS = {
    A.CORNER_TL: "M100,0 L0,0 L0,100",
    A.CORNER_TR: "M0,0 L100,0 L100,100",
    A.CORNER_BL: "M100,100 L0,100 L0,0",
    A.CORNER_BR: "M0,100 L100,100 L100,0",
    A.EDGE_T: "M0,100 L50,0 L100,100",
    A.EDGE_B: "M0,0 L50,100 L100,0",
    A.EDGE_L: "M100,0 L0,50 L100,100",
    A.EDGE_R: "M0,0 L100,50 L0,100",
    A.INNER_CORNER_TL: "M100,0 L0,0 L0,100",
    A.INNER_CORNER_TR: "M0,0 L100,0 L100,100",
    A.INNER_CORNER_BL: "M100,100 L0,100 L0,0",
    A.INNER_CORNER_BR: "M0,100 L100,100 L100,0",
}

BOX_PATHS = {
    A.CORNER_TL: "M100,0 L0,0 L0,100",
    A.CORNER_TR: "M0,0 L100,0 L100,100",
    A.CORNER_BL: "M100,100 L0,100 L0,0",
    A.CORNER_BR: "M0,100 L100,100 L100,0",
    A.EDGE_T: "M0,100 L0,20 L100,20 L100,100",
    A.EDGE_B: "M0,0 L0,80 L100,80 L100,0",
    A.EDGE_L: "M100,0 L20,0 L20,100 L100,100",
    A.EDGE_R: "M0,0 L80,0 L80,100 L0,100",
    A.INNER_CORNER_TL: "M100,0 L0,0 L0,100",
    A.INNER_CORNER_TR: "M0,0 L100,0 L100,100",
    A.INNER_CORNER_BL: "M100,100 L0,100 L0,0",
    A.INNER_CORNER_BR: "M0,100 L100,100 L100,0",
}

STYLE_PATHS = {
    CornerStyle.ROUND: ROUND_PATHS,
    CornerStyle.SHARP: SHARP_PATHS,
    CornerStyle.BOX: BOX_PATHS,
}

DIAGONAL_RISING = "M0,100 L100,0"
DIAGONAL_FALLING = "M0,0 L100,100"

# (under, over) for each crossing; the same lines in every style
CROSSINGS = {
    A.CROSS_A: (DIAGONAL_RISING, DIAGONAL_FALLING),
    A.CROSS_B: (DIAGONAL_FALLING, DIAGONAL_RISING),
}

STYLED_ARCHETYPES = frozenset(ROUND_PATHS)


def style_paths(corner_style):
    """Path table for a corner style, round when the style is unknown."""
    return STYLE_PATHS.get(corner_style, ROUND_PATHS)


class GeometryCatalogue:
    """
    Shared geometry for one render.

    Paths and masks are registered the first time they are asked for and
    reused afterwards. Ids depend only on the namespace and the geometry
    key, so two renders with the same stroke width, cell size and corner
    style produce the same ids.
    """

    def __init__(self, key, gap_size, namespace="knot"):
        self.key = key
        self.gap_size = gap_size
        self.namespace = namespace
        self._paths = {}
        self._masks = {}

    def _register_path(self, path_id, d):
        self._paths.setdefault(path_id, d)
        return path_id

    def path_id(self, archetype):
        """Id of the single-strand path for a corner, edge or inner corner."""
        d = style_paths(self.key.corner_style)[archetype]
        return self._register_path(
            f"{self.namespace}-path-{archetype.value}-{self.key.corner_style.value}", d
        )

    def crossing_ids(self, archetype):
        """
        Ids for a crossing tile: (under path, over path, mask).

        The mask hides a band of width gap_size along the over diagonal.
        """
        under_d, over_d = CROSSINGS[archetype]
        under_id = self._register_path(f"{self.namespace}-path-{archetype.value}-under", under_d)
        over_id = self._register_path(f"{self.namespace}-path-{archetype.value}-over", over_d)

        mask_id = f"{self.namespace}-mask-{self.key.gap_id}-{archetype.value}-over"
        self._masks.setdefault(mask_id, over_d)
        return under_id, over_id, mask_id

    @property
    def paths(self):
        """Registered paths as (id, d) pairs, sorted by id."""
        return sorted(self._paths.items())

    @property
    def masks(self):
        """Registered masks as (id, cut path) pairs, sorted by id."""
        return sorted(self._masks.items())
