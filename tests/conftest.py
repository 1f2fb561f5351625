"""Pytest fixtures for Knot Border tests."""

import tempfile

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def default_config():
    """Create default render configuration."""
    from knotborder.config import RenderConfig
    return RenderConfig()


@pytest.fixture
def make_spec():
    """Factory for specs based on the portrait scenario."""
    from knotborder.models import BorderSpec

    def _make(**overrides):
        fields = {
            "outer_width": 600,
            "outer_height": 800,
            "cell_size": 25,
            "thickness_rows": 2,
            "inset": 15,
            "stroke_color": "#7f1d1d",
            "stroke_width_px": 3,
            "pattern": "braid",
            "corner_style": "round",
        }
        fields.update(overrides)
        return BorderSpec(**fields)

    return _make


@pytest.fixture(autouse=True)
def quiet_tracer():
    """Keep the global tracer off between tests."""
    from knotborder.tracer import configure_tracer
    configure_tracer(enabled=False)
    yield
    configure_tracer(enabled=False)
