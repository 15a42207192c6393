"""Public API for rendering Mandelbrot zoom animations."""

from .assembler import save_frame_sequence, save_gif, write_gif
from .generator import frame_geometry, interpolation_fraction, plan_frames
from .orchestrator import Animation, RenderError, render_animation, render_frames
from .renderer import (
    DEFAULT_PALETTE,
    FrameGeometry,
    Palette,
    RenderedFrame,
    RenderParameters,
    escape_counts,
    escape_iterations,
    pixel_to_complex,
    render_frame,
    sample_grid,
)
from .spec import (
    TEST_PRESET,
    AnimationSpec,
    InvalidSpecError,
    ResolutionWarning,
    resolve_spec,
    validate_spec,
)

__all__ = [
    "DEFAULT_PALETTE",
    "TEST_PRESET",
    "Animation",
    "AnimationSpec",
    "FrameGeometry",
    "InvalidSpecError",
    "Palette",
    "RenderError",
    "RenderParameters",
    "RenderedFrame",
    "ResolutionWarning",
    "escape_counts",
    "escape_iterations",
    "frame_geometry",
    "interpolation_fraction",
    "pixel_to_complex",
    "plan_frames",
    "render_animation",
    "render_frame",
    "render_frames",
    "resolve_spec",
    "sample_grid",
    "save_frame_sequence",
    "save_gif",
    "validate_spec",
    "write_gif",
]
