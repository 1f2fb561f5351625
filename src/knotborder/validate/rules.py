"""
Validation rules for Knot Border.

Checks that a render keeps the weave seamless and leaves room for the
emblem.
"""

from shapely.geometry import box
from shapely.ops import unary_union

from knotborder.grid.solver import requires_odd_grid
from knotborder.models import CheckResult, EmblemPlacement, Severity, ValidationReport
from knotborder.tiles.classify import rotate_archetype_180
from knotborder.tracer import get_tracer, trace


@trace(label="run_validation")
def run_validation(spec, grid, band_tiles, tiles, config):
    """
    Run all validation checks on a render.

    band_tiles are the classified tiles before emblem clearance; tiles are
    the ones actually drawn.

    Returns ValidationReport with all check results.
    """
    tracer = get_tracer()

    checks = [
        check_grid_parity(spec, grid, config),
        check_band_symmetry(spec, grid, band_tiles),
        check_tile_overlap(tiles, grid),
        check_emblem_overlap(spec, tiles, grid, config),
    ]

    report = ValidationReport(checks=checks)

    tracer.event(f"Validation complete: {report.error_count} errors, {report.warning_count} warnings")

    return report


def check_grid_parity(spec, grid, config):
    """
    Check that alternating patterns got odd column and row counts.
    """
    if not requires_odd_grid(spec.pattern, config) or grid.is_empty:
        return CheckResult(
            rule_id="grid_parity",
            severity=Severity.INFO,
            passed=True,
            message=f"Pattern {spec.pattern.value} does not require odd counts",
            evidence={"cols": grid.cols, "rows": grid.rows},
        )

    passed = grid.cols % 2 == 1 and grid.rows % 2 == 1
    return CheckResult(
        rule_id="grid_parity",
        severity=Severity.ERROR,
        passed=passed,
        message="Grid counts are odd" if passed else f"Even grid {grid.cols}x{grid.rows} leaves a corner seam",
        evidence={"cols": grid.cols, "rows": grid.rows},
    )


def check_band_symmetry(spec, grid, band_tiles):
    """
    Check that the band looks the same after a half turn.

    Only meaningful once both rings fit, i.e. cols and rows >= 1 + 2*thickness.
    """
    minimum = 1 + 2 * spec.thickness_rows
    if grid.cols < minimum or grid.rows < minimum:
        return CheckResult(
            rule_id="band_symmetry",
            severity=Severity.INFO,
            passed=True,
            message=f"Grid {grid.cols}x{grid.rows} too small for a symmetry check",
            evidence={"minimum": minimum},
        )

    by_cell = {(t.cell_x, t.cell_y): t.archetype for t in band_tiles}
    mismatched = []
    for (x, y), archetype in by_cell.items():
        mirrored = by_cell.get((grid.cols - 1 - x, grid.rows - 1 - y))
        if mirrored != rotate_archetype_180(archetype):
            mismatched.append([x, y])

    if mismatched:
        return CheckResult(
            rule_id="band_symmetry",
            severity=Severity.WARN,
            passed=False,
            message=f"Band is not symmetric under rotation at {len(mismatched)} cells",
            evidence={"cells": mismatched[:5]},
        )

    return CheckResult(
        rule_id="band_symmetry",
        severity=Severity.WARN,
        passed=True,
        message="Band is symmetric under 180 degree rotation",
        evidence={"tiles": len(by_cell)},
    )


def _tile_box(tile, cell_size):
    return box(tile.pixel_x, tile.pixel_y, tile.pixel_x + cell_size, tile.pixel_y + cell_size)


def check_tile_overlap(tiles, grid):
    """
    Check that no two tiles cover the same area.
    """
    if not tiles:
        return CheckResult(
            rule_id="tile_overlap",
            severity=Severity.ERROR,
            passed=True,
            message="No tiles to check",
            evidence={},
        )

    boxes = [_tile_box(t, grid.cell_size) for t in tiles]
    union_area = unary_union(boxes).area
    total_area = sum(b.area for b in boxes)
    passed = abs(union_area - total_area) <= 1e-6 * total_area

    return CheckResult(
        rule_id="tile_overlap",
        severity=Severity.ERROR,
        passed=passed,
        message="Tiles are disjoint" if passed else "Tiles overlap",
        evidence={"union_area": round(union_area, 2), "total_area": round(total_area, 2)},
    )


def emblem_footprint(spec, config):
    """
    Pixel box the host draws a bottom-center emblem into.
    """
    size = config.emblem.base_size_px * spec.emblem.clearance_scale
    bottom = spec.outer_height - config.emblem.bottom_margin_px
    left = (spec.outer_width - size) / 2
    return box(left, bottom - size, left + size, bottom)


def check_emblem_overlap(spec, tiles, grid, config):
    """
    Check that the remaining weave does not run under a bottom-center emblem.
    """
    if spec.emblem is None or spec.emblem.placement != EmblemPlacement.BOTTOM_CENTER:
        return CheckResult(
            rule_id="emblem_overlap",
            severity=Severity.INFO,
            passed=True,
            message="No bottom-center emblem",
            evidence={},
        )

    footprint = emblem_footprint(spec, config)
    hits = [
        [t.cell_x, t.cell_y] for t in tiles
        if _tile_box(t, grid.cell_size).intersection(footprint).area > 0
    ]

    if hits:
        return CheckResult(
            rule_id="emblem_overlap",
            severity=Severity.WARN,
            passed=False,
            message=f"Emblem overlaps {len(hits)} tiles",
            evidence={"cells": hits[:5], "footprint": [round(v, 1) for v in footprint.bounds]},
        )

    return CheckResult(
        rule_id="emblem_overlap",
        severity=Severity.WARN,
        passed=True,
        message="Emblem sits clear of the weave",
        evidence={"footprint": [round(v, 1) for v in footprint.bounds]},
    )
