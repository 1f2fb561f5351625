"""Tests for validation rules and reports."""

import json
import os

from knotborder.grid.solver import solve_grid
from knotborder.models import Archetype, BandRole, Emblem, Grid, Severity, Tile
from knotborder.tiles.classify import classify_grid
from knotborder.validate.report import format_check_result, generate_report
from knotborder.validate.rules import (
    check_band_symmetry, check_emblem_overlap, check_grid_parity,
    check_tile_overlap, emblem_footprint, run_validation,
)


def make_tile(x, y, archetype=Archetype.EDGE_T, cell=10.0):
    return Tile(cell_x=x, cell_y=y, pixel_x=x * cell, pixel_y=y * cell,
                archetype=archetype, role=BandRole.OUTER_EDGE)


class TestGridParity:
    """Tests for the odd-count rule."""

    def test_even_grid_fails(self, make_spec, default_config):
        """Test an even grid with a braid pattern is an error."""
        result = check_grid_parity(make_spec(), Grid(cols=22, rows=29, cell_size=25), default_config)

        assert result.severity == Severity.ERROR
        assert not result.passed

    def test_box_pattern_even_grid_allowed(self, make_spec, default_config):
        """Test box pattern is informational once odd_for_box is off."""
        default_config.grid.odd_for_box = False
        result = check_grid_parity(make_spec(pattern="box"), Grid(cols=22, rows=30, cell_size=25),
                                   default_config)

        assert result.passed
        assert result.severity == Severity.INFO


class TestBandSymmetry:
    """Tests for the half-turn symmetry rule."""

    def test_classified_band_is_symmetric(self, make_spec, default_config):
        """Test every pattern at thickness three passes."""
        for pattern in ("braid", "twist-x", "twist-y", "box"):
            spec = make_spec(thickness_rows=3, pattern=pattern)
            grid = solve_grid(spec, default_config)
            assert check_band_symmetry(spec, grid, classify_grid(grid, spec)).passed

    def test_tampered_band_fails(self, make_spec, default_config):
        """Test swapping one archetype breaks symmetry."""
        spec = make_spec()
        grid = solve_grid(spec, default_config)
        tiles = classify_grid(grid, spec)
        tiles[0] = tiles[0].model_copy(update={"archetype": Archetype.EDGE_B})

        result = check_band_symmetry(spec, grid, tiles)

        assert not result.passed
        assert [0, 0] in result.evidence["cells"]

    def test_small_grid_skipped(self, make_spec):
        """Test grids too small for two rings are not judged."""
        result = check_band_symmetry(make_spec(thickness_rows=3), Grid(cols=5, rows=5, cell_size=25), [])

        assert result.passed
        assert result.severity == Severity.INFO


class TestTileOverlap:
    """Tests for the disjoint-tiles rule."""

    def test_disjoint_tiles_pass(self):
        """Test adjacent tiles sharing an edge do not count as overlapping."""
        grid = Grid(cols=2, rows=1, cell_size=10)
        assert check_tile_overlap([make_tile(0, 0), make_tile(1, 0)], grid).passed

    def test_duplicate_tiles_fail(self):
        """Test two tiles on one cell fail."""
        grid = Grid(cols=1, rows=1, cell_size=10)
        result = check_tile_overlap([make_tile(0, 0), make_tile(0, 0)], grid)

        assert not result.passed
        assert result.severity == Severity.ERROR


class TestEmblemOverlap:
    """Tests for the emblem footprint rule."""

    def test_footprint_is_centered_above_margin(self, make_spec, default_config):
        """Test the footprint is centered and sits above the bottom margin."""
        spec = make_spec(emblem=Emblem(placement="bottom-center", clearance_scale=0.5))
        min_x, min_y, max_x, max_y = emblem_footprint(spec, default_config).bounds

        assert (min_x + max_x) / 2 == 300
        assert max_x - min_x == 64
        assert max_y == 800 - 48

    def test_uncleared_band_overlaps(self, make_spec, default_config):
        """Test the full band runs under a large emblem."""
        spec = make_spec(emblem=Emblem(placement="bottom-center", clearance_scale=1.0))
        grid = solve_grid(spec, default_config)
        tiles = classify_grid(grid, spec)

        result = check_emblem_overlap(spec, tiles, grid, default_config)

        assert not result.passed
        assert result.severity == Severity.WARN

    def test_other_placement_is_info(self, make_spec, default_config):
        """Test placements other than bottom-center are not checked."""
        spec = make_spec(emblem=Emblem(placement="top-left"))
        result = check_emblem_overlap(spec, [], Grid(), default_config)

        assert result.passed
        assert result.severity == Severity.INFO


class TestReport:
    """Tests for report files."""

    def test_generate_report_files(self, make_spec, default_config, temp_dir):
        """Test JSON and summary files are written."""
        spec = make_spec()
        grid = solve_grid(spec, default_config)
        tiles = classify_grid(grid, spec)
        report = run_validation(spec, grid, tiles, tiles, default_config)

        report_path, summary_path = generate_report(report, temp_dir)

        assert os.path.exists(report_path)
        with open(report_path, encoding="utf-8") as f:
            data = json.load(f)
        assert len(data["checks"]) == 4
        with open(summary_path, encoding="utf-8") as f:
            summary = f.read()
        assert "Total checks: 4" in summary

    def test_format_check_result(self, make_spec, default_config):
        """Test the one-line check format."""
        result = check_grid_parity(make_spec(), Grid(cols=21, rows=29, cell_size=25), default_config)
        assert format_check_result(result) == "[PASS][ERROR] grid_parity: Grid counts are odd"
