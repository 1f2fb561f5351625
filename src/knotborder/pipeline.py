"""
Render orchestrator for Knot Border.

Runs grid solving, classification, emblem clearance, weave composition and
SVG assembly in one synchronous pass. Nothing is kept between calls.
"""

from knotborder.config import RenderConfig
from knotborder.export.svg_document import build_svg_document
from knotborder.geometry.catalogue import GeometryCatalogue
from knotborder.grid.solver import solve_grid
from knotborder.models import (
    BorderRender, BorderSpec, Emblem,
    compute_gap_size, generate_render_id, make_geometry_key,
)
from knotborder.tiles.classify import classify_grid
from knotborder.tiles.clearance import apply_clearance
from knotborder.tracer import get_tracer, trace
from knotborder.validate.rules import run_validation
from knotborder.weave.compositor import compose_tiles, strand_style


@trace(label="render_border", arg_names=["namespace"])
def render_border(spec, config=None, namespace=None):
    """
    Render a border for one rectangle.

    Args:
        spec: BorderSpec with rectangle size and styling
        config: RenderConfig (defaults when omitted)
        namespace: prefix for geometry ids; pass a distinct value per
            border when several share one page

    Returns:
        BorderRender. Disabled borders and non-positive rectangles give an
        empty render with no tiles and an empty svg string.
    """
    tracer = get_tracer()

    if config is None:
        config = RenderConfig()
    namespace = namespace or config.output.namespace

    render_id = generate_render_id(spec)

    if not spec.enabled or spec.outer_width <= 0 or spec.outer_height <= 0:
        tracer.event("Nothing to render", enabled=spec.enabled,
                     width=spec.outer_width, height=spec.outer_height)
        return BorderRender(render_id=render_id, width=spec.outer_width, height=spec.outer_height)

    with tracer.span("layout", module="pipeline"):
        grid = solve_grid(spec, config)
        band_tiles = classify_grid(grid, spec)
        tiles = apply_clearance(band_tiles, grid, spec, config)

    with tracer.span("weave", module="pipeline"):
        key = make_geometry_key(spec, config.weave.visual_gap_px)
        gap_size = compute_gap_size(spec.stroke_width_px, spec.cell_size, config.weave.visual_gap_px)
        catalogue = GeometryCatalogue(key, gap_size, namespace=namespace)
        composed = compose_tiles(tiles, spec, catalogue)
        style = strand_style(spec, config)

    dwg = build_svg_document(spec.outer_width, spec.outer_height, composed, catalogue, style)

    validation = run_validation(spec, grid, band_tiles, tiles, config)

    return BorderRender(
        render_id=render_id,
        width=spec.outer_width,
        height=spec.outer_height,
        grid=grid,
        tiles=tiles,
        geometry_key=key,
        path_ids=[path_id for path_id, _ in catalogue.paths],
        mask_ids=[mask_id for mask_id, _ in catalogue.masks],
        svg=dwg.tostring(),
        validation=validation,
    )


def spec_from_config(width, height, config, emblem=None, **overrides):
    """
    Build a BorderSpec from config defaults.

    Keyword overrides whose value is None are ignored. emblem may be an
    Emblem or a (placement, clearance_scale) pair.
    """
    defaults = config.border
    fields = {
        "cell_size": defaults.cell_size,
        "thickness_rows": defaults.thickness_rows,
        "inset": defaults.inset,
        "stroke_color": defaults.stroke_color,
        "stroke_width_px": defaults.stroke_width_px,
        "ribbon_color": defaults.ribbon_color or None,
        "pattern": defaults.pattern,
        "corner_style": defaults.corner_style,
    }
    fields.update({k: v for k, v in overrides.items() if v is not None})
    fields["ribbon_color"] = fields["ribbon_color"] or None

    if emblem is not None and not isinstance(emblem, Emblem):
        placement, scale = emblem
        emblem = Emblem(placement=placement, clearance_scale=scale)

    return BorderSpec(outer_width=width, outer_height=height, emblem=emblem, **fields)


def content_padding(spec, config=None):
    """
    Padding the host should keep between the rectangle edge and its text.

    Never less than the base padding for the page orientation, even when
    the border is thin or disabled.
    """
    if config is None:
        config = RenderConfig()
    output = config.output
    if spec.outer_width > spec.outer_height:
        base = output.base_padding_landscape_px
    else:
        base = output.base_padding_portrait_px
    if not spec.enabled:
        return base
    border = spec.thickness_rows * spec.cell_size + spec.inset + output.content_margin_px
    return max(base, border)
