"""
Artifact saving utilities for Knot Border.

Handles writing JSON and SVG files and rasterizing SVG to PNG.
"""

import json
import os

from knotborder.tracer import get_tracer


def ensure_dir(path):
    """Create directory if it does not exist."""
    if path:
        os.makedirs(path, exist_ok=True)


def save_json(data, path, indent=2):
    """
    Save a dictionary or Pydantic model to JSON.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, default=str)

    tracer.event(f"Saved JSON: {path}")


def save_svg(svg_content, path):
    """
    Save SVG content (an svgwrite Drawing or a string) to file.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    if hasattr(svg_content, "tostring"):
        content = svg_content.tostring()
    else:
        content = str(svg_content)

    with open(path, "w", encoding="utf-8") as f:
        f.write(content)

    tracer.event(f"Saved SVG: {path}")


def render_svg_to_png(svg_path, png_path, dpi=150):
    """
    Render an SVG file to PNG using cairosvg.

    Returns True when a PNG was written.
    """
    tracer = get_tracer()

    try:
        import cairosvg
    except ImportError:
        tracer.event("cairosvg not available, skipping PNG render", level="WARN")
        return False

    ensure_dir(os.path.dirname(png_path))
    try:
        cairosvg.svg2png(url=svg_path, write_to=png_path, dpi=dpi)
    except Exception as e:
        tracer.event(f"Failed to render SVG: {str(e)}", level="WARN")
        return False

    tracer.event(f"Rendered SVG to PNG: {png_path}")
    return True


def save_render(render, out_dir, png=False, dpi=150):
    """
    Write a BorderRender to out_dir.

    Creates {render_id}.svg (unless the render is empty), render.json, and
    optionally {render_id}.png. Returns the list of written paths.
    """
    ensure_dir(out_dir)
    written = []

    json_path = os.path.join(out_dir, "render.json")
    save_json(render.model_dump(mode="json", exclude={"svg"}), json_path)
    written.append(json_path)

    if render.svg:
        svg_path = os.path.join(out_dir, f"{render.render_id}.svg")
        save_svg(render.svg, svg_path)
        written.append(svg_path)

        if png:
            png_path = os.path.join(out_dir, f"{render.render_id}.png")
            if render_svg_to_png(svg_path, png_path, dpi=dpi):
                written.append(png_path)

    return written
