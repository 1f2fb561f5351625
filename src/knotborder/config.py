"""
Configuration management for Knot Border.

Loads YAML configuration with sensible defaults for every render stage.
"""

import os
from dataclasses import asdict, dataclass, field

import yaml


@dataclass
class BorderDefaults:
    """Spec values used when the caller does not provide them."""
    cell_size: float = 25.0
    thickness_rows: int = 3
    inset: float = 15.0
    stroke_color: str = "#7f1d1d"
    stroke_width_px: float = 4.0
    ribbon_color: str = "#fcd34d"  # empty string disables the ribbon
    pattern: str = "braid"
    corner_style: str = "round"


@dataclass
class GridConfig:
    """Configuration for the grid solver."""
    odd_for_box: bool = True


@dataclass
class WeaveConfig:
    """Configuration for strand rendering."""
    visual_gap_px: float = 2.5
    ribbon_ratio: float = 0.4
    min_ribbon_width: float = 1.0
    miter_limit: float = 10.0


@dataclass
class EmblemConfig:
    """Configuration for emblem clearance."""
    clearance_cells: float = 2.5
    base_size_px: float = 128.0
    bottom_margin_px: float = 48.0


@dataclass
class OutputConfig:
    """Configuration for the emitted document."""
    namespace: str = "knot"
    content_margin_px: float = 10.0
    base_padding_portrait_px: float = 48.0
    base_padding_landscape_px: float = 32.0
    png_dpi: int = 150


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class RenderConfig:
    """Complete renderer configuration."""
    border: BorderDefaults = field(default_factory=BorderDefaults)
    grid: GridConfig = field(default_factory=GridConfig)
    weave: WeaveConfig = field(default_factory=WeaveConfig)
    emblem: EmblemConfig = field(default_factory=EmblemConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)


SECTIONS = ("border", "grid", "weave", "emblem", "output", "tracing")


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values.
    """
    config = RenderConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass, ignoring unknown keys."""
    for section_name in SECTIONS:
        section_data = yaml_data.get(section_name)
        if not isinstance(section_data, dict):
            continue
        section = getattr(config, section_name)
        for key, value in section_data.items():
            if hasattr(section, key):
                setattr(section, key, value)

    return config


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    yaml_data = asdict(RenderConfig())
    yaml_data["tracing"].pop("file_path")

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
