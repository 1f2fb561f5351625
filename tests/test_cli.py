"""Tests for the command-line interface and artifact writing."""

import json
import os

from knotborder.cli import main
from knotborder.io.save_artifacts import save_render
from knotborder.pipeline import render_border


class TestRenderCommand:
    """Tests for `knotborder render`."""

    def test_render_writes_outputs(self, temp_dir, capsys):
        """Test render writes the svg, render json and validation report."""
        code = main([
            "render", "--width", "600", "--height", "800", "--out", temp_dir,
            "--thickness", "2", "--pattern", "braid", "--stroke-width", "3",
        ])

        assert code == 0
        files = os.listdir(temp_dir)
        assert any(name.endswith(".svg") for name in files)
        assert "render.json" in files
        assert "validation_report.json" in files
        assert "validation_summary.txt" in files
        assert "Grid: 21x29" in capsys.readouterr().out

    def test_render_json_describes_tiles(self, temp_dir):
        """Test render.json carries the grid and tiles but not the svg text."""
        main(["render", "--width", "600", "--height", "800", "--out", temp_dir, "--no-ribbon"])

        with open(os.path.join(temp_dir, "render.json"), encoding="utf-8") as f:
            data = json.load(f)

        assert data["grid"]["cols"] == 21
        assert data["tiles"][0]["archetype"] == "corner-tl"
        assert "svg" not in data

    def test_render_with_emblem(self, temp_dir):
        """Test an emblem flag opens a gap in the band."""
        main(["render", "--width", "600", "--height", "800", "--out", temp_dir,
              "--thickness", "2", "--emblem", "bottom-center", "--emblem-scale", "1.0"])

        with open(os.path.join(temp_dir, "render.json"), encoding="utf-8") as f:
            data = json.load(f)

        assert len(data["tiles"]) == 21 * 29 - 17 * 25 - 14

    def test_empty_rectangle(self, temp_dir):
        """Test a zero-size rectangle writes no svg and still succeeds."""
        code = main(["render", "--width", "0", "--height", "0", "--out", temp_dir])

        assert code == 0
        assert not any(name.endswith(".svg") for name in os.listdir(temp_dir))

    def test_config_file_is_used(self, temp_dir):
        """Test YAML defaults feed the spec."""
        config_path = os.path.join(temp_dir, "config.yaml")
        main(["init-config", "--out", config_path])
        out_dir = os.path.join(temp_dir, "out")

        code = main(["render", "--width", "300", "--height", "300", "--out", out_dir,
                     "--config", config_path, "--corner-style", "sharp"])

        assert code == 0
        with open(os.path.join(out_dir, "render.json"), encoding="utf-8") as f:
            data = json.load(f)
        assert data["geometry_key"]["corner_style"] == "sharp"


class TestInitConfig:
    """Tests for `knotborder init-config`."""

    def test_writes_yaml(self, temp_dir):
        """Test the default config file is created."""
        path = os.path.join(temp_dir, "knot.yaml")

        assert main(["init-config", "--out", path]) == 0
        assert os.path.exists(path)

    def test_no_command_prints_help(self, capsys):
        """Test running without a command prints usage."""
        assert main([]) == 0
        assert "knotborder" in capsys.readouterr().out


class TestSaveRender:
    """Tests for writing a render to disk."""

    def test_svg_named_after_render(self, make_spec, temp_dir):
        """Test the svg file is named by render id and holds the document."""
        render = render_border(make_spec())

        written = save_render(render, temp_dir)

        svg_path = os.path.join(temp_dir, f"{render.render_id}.svg")
        assert svg_path in written
        with open(svg_path, encoding="utf-8") as f:
            assert f.read() == render.svg
