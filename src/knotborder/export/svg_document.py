"""
SVG document assembly for Knot Border.

Emits shared geometry once in <defs>, then one small transformed group per
tile that references it, so document size grows with the tile count rather
than with tiles times path length.
"""

import svgwrite

from knotborder.tracer import get_tracer, trace


def fmt(value):
    """Format a number compactly and deterministically."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def tile_transform(composed):
    return f"translate({fmt(composed.pixel_x)}, {fmt(composed.pixel_y)}) scale({fmt(composed.scale)})"


@trace(label="build_svg_document")
def build_svg_document(width, height, composed_tiles, catalogue, style, render_id=None):
    """
    Create the SVG document for a render.

    Args:
        width: rectangle width in pixels
        height: rectangle height in pixels
        composed_tiles: list of ComposedTile objects
        catalogue: GeometryCatalogue holding the shared paths and masks
        style: StrandStyle for every strand
        render_id: optional id for the root element

    Returns:
        svgwrite.Drawing object
    """
    tracer = get_tracer()

    extra = {"id": render_id} if render_id else {}
    dwg = svgwrite.Drawing(
        size=(f"{fmt(width)}px", f"{fmt(height)}px"),
        style="pointer-events: none; overflow: visible",
        **extra,
    )
    dwg.viewbox(0, 0, fmt(width), fmt(height))

    for path_id, d in catalogue.paths:
        dwg.defs.add(dwg.path(d=d, id=path_id))

    for mask_id, cut_d in catalogue.masks:
        mask = dwg.mask(id=mask_id, maskUnits="userSpaceOnUse")
        mask.add(dwg.rect(insert=(-50, -50), size=(200, 200), fill="white"))
        mask.add(dwg.path(
            d=cut_d,
            stroke="black",
            stroke_width=fmt(catalogue.gap_size),
            fill="none",
            stroke_linecap="round",
        ))
        dwg.defs.add(mask)

    weave = dwg.g(
        id=f"{catalogue.namespace}-weave",
        fill="none",
        stroke=style.color,
        stroke_width=fmt(style.width),
        stroke_linecap=style.linecap,
        stroke_linejoin=style.linejoin,
        stroke_miterlimit=fmt(style.miter_limit),
    )

    for composed in composed_tiles:
        tile_group = dwg.g(transform=tile_transform(composed))
        for strand in composed.strands:
            tile_group.add(_strand_group(dwg, strand, style))
        weave.add(tile_group)

    dwg.add(weave)

    tracer.event(
        f"SVG assembled with {len(composed_tiles)} tiles",
        paths=len(catalogue.paths),
        masks=len(catalogue.masks),
    )

    return dwg


def _strand_group(dwg, strand, style):
    """A strand: the main stroke plus the optional ribbon on top."""
    extra = {"mask": f"url(#{strand.mask_id})"} if strand.mask_id else {}
    group = dwg.g(**extra)
    group.add(dwg.use(f"#{strand.path_id}"))
    if style.ribbon_color:
        group.add(dwg.use(
            f"#{strand.path_id}",
            stroke=style.ribbon_color,
            stroke_width=fmt(style.ribbon_width),
        ))
    return group
