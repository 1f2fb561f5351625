"""
Command-line interface for Knot Border.

Provides commands for rendering a border to disk and writing a default
configuration file.
"""

import argparse
import sys

from knotborder.config import load_config, save_default_config
from knotborder.models import CornerStyle, EmblemPlacement, Pattern
from knotborder.tracer import configure_tracer, get_tracer


def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="knotborder",
        description="Knot Border: render a Celtic knot border as SVG around a rectangle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Render command
    render_parser = subparsers.add_parser("render", help="Render a border")
    render_parser.add_argument("--width", type=float, required=True, help="Rectangle width in pixels")
    render_parser.add_argument("--height", type=float, required=True, help="Rectangle height in pixels")
    render_parser.add_argument("--out", "-o", required=True, help="Output directory")
    render_parser.add_argument("--config", "-c", default=None, help="Path to YAML configuration file")
    render_parser.add_argument("--cell-size", type=float, default=None, help="Cell size in pixels")
    render_parser.add_argument("--thickness", type=int, choices=[1, 2, 3], default=None,
                               help="Band thickness in cells")
    render_parser.add_argument("--inset", type=float, default=None, help="Padding from the rectangle edge")
    render_parser.add_argument("--color", default=None, help="Strand color")
    render_parser.add_argument("--stroke-width", type=float, default=None, help="Strand width in pixels")
    render_parser.add_argument("--ribbon-color", default=None, help="Second color drawn inside each strand")
    render_parser.add_argument("--no-ribbon", action="store_true", help="Draw plain strands")
    render_parser.add_argument("--pattern", choices=[p.value for p in Pattern], default=None,
                               help="Interior fill pattern")
    render_parser.add_argument("--corner-style", choices=[s.value for s in CornerStyle], default=None,
                               help="Corner and edge style")
    render_parser.add_argument("--emblem", choices=[p.value for p in EmblemPlacement], default=None,
                               help="Emblem placement")
    render_parser.add_argument("--emblem-scale", type=float, default=1.0, help="Emblem display scale")
    render_parser.add_argument("--namespace", default=None, help="Prefix for geometry ids")
    render_parser.add_argument("--png", action="store_true", help="Also rasterize to PNG (needs cairosvg)")
    render_parser.add_argument("--trace", action="store_true", help="Enable runtime tracing")
    render_parser.add_argument(
        "--trace-level",
        default="INFO",
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    render_parser.add_argument("--trace-file", default=None, help="Path to write trace logs")
    render_parser.add_argument("--trace-json", action="store_true", help="Enable JSON trace output")

    # Init config command
    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="knotborder_config.yaml",
        help="Output path for config file",
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "render":
        return handle_render(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def handle_render(args):
    """Handle the render command."""
    config = load_config(args.config)

    configure_tracer(
        enabled=args.trace or config.tracing.enabled,
        level=args.trace_level if args.trace else config.tracing.level,
        file_path=args.trace_file or config.tracing.file_path,
        json_output=args.trace_json or config.tracing.json_output,
    )

    tracer = get_tracer()

    try:
        from knotborder.io.save_artifacts import save_render
        from knotborder.pipeline import render_border, spec_from_config
        from knotborder.validate.report import generate_report

        with tracer.span("cli_render", module="cli"):
            spec = spec_from_config(
                args.width,
                args.height,
                config,
                emblem=(args.emblem, args.emblem_scale) if args.emblem else None,
                cell_size=args.cell_size,
                thickness_rows=args.thickness,
                inset=args.inset,
                stroke_color=args.color,
                stroke_width_px=args.stroke_width,
                ribbon_color="" if args.no_ribbon else args.ribbon_color,
                pattern=args.pattern,
                corner_style=args.corner_style,
            )
            render = render_border(spec, config=config, namespace=args.namespace)
            written = save_render(render, args.out, png=args.png, dpi=config.output.png_dpi)
            generate_report(render.validation, args.out)

        print("\nBorder rendered.")
        print(f"  Grid: {render.grid.cols}x{render.grid.rows}")
        print(f"  Tiles: {len(render.tiles)}")
        print(f"  Validation errors: {render.validation.error_count}")
        print(f"  Validation warnings: {render.validation.warning_count}")
        print(f"\nOutputs saved to: {args.out}/")
        for path in written:
            print(f"  - {path}")

        if render.validation.has_errors:
            print("\n[!] Validation errors detected. Review validation_report.json")
            return 1

        return 0

    except Exception as e:
        tracer.event(f"Render failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1
    finally:
        get_tracer().config.close()


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
