"""Animation specification and resolution of partially specified input."""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass
from typing import Optional, Sequence, Union

DEFAULT_CANVAS_SIZE = (512, 512)
DEFAULT_MAX_ITERATIONS = 1000
DEFAULT_FRAME_DELAY = 8
DEFAULT_MOTION_FRAMES = 25
LOOP_FOREVER = 0

Zoom = tuple[float, float]
ZoomInput = Union[float, Sequence[float]]
PosInput = Union[complex, float, Sequence[float]]


class InvalidSpecError(ValueError):
    """Raised when an animation specification cannot be rendered."""


class ResolutionWarning(UserWarning):
    """Emitted when resolution overrides or ignores a supplied value."""


@dataclass(frozen=True)
class AnimationSpec:
    """A fully resolved description of an animation.

    ``start_zoom`` and ``end_zoom`` are ``(width, height)`` of the viewport in
    plane units. ``frame_delay`` is in hundredths of a second.
    """

    start_pos: complex
    end_pos: complex
    start_zoom: Zoom
    end_zoom: Zoom
    canvas_width: int = DEFAULT_CANVAS_SIZE[0]
    canvas_height: int = DEFAULT_CANVAS_SIZE[1]
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    frame_count: int = 1
    frame_delay: int = DEFAULT_FRAME_DELAY
    loop_count: int = LOOP_FOREVER


TEST_PRESET = AnimationSpec(
    start_pos=complex(-1.0, 0.0),
    end_pos=complex(-1.31, 0.0),
    start_zoom=(0.5, 0.5),
    end_zoom=(0.12, 0.12),
    canvas_width=512,
    canvas_height=512,
    max_iterations=1000,
    frame_count=25,
    frame_delay=8,
)


def _as_complex(value: PosInput) -> complex:
    if isinstance(value, (int, float, complex)):
        return complex(value)
    parts = list(value)
    if not 1 <= len(parts) <= 2:
        raise InvalidSpecError(f"a position takes one or two values, got {len(parts)}")
    re = float(parts[0])
    im = float(parts[1]) if len(parts) == 2 else 0.0
    return complex(re, im)


def _as_zoom(value: ZoomInput) -> Zoom:
    if isinstance(value, (int, float)):
        return (float(value), float(value))
    parts = list(value)
    if not 1 <= len(parts) <= 2:
        raise InvalidSpecError(f"a zoom takes one or two values, got {len(parts)}")
    width = float(parts[0])
    height = float(parts[1]) if len(parts) == 2 else width
    return (width, height)


def _as_size(value: Union[int, Sequence[int]]) -> tuple[int, int]:
    if isinstance(value, int):
        return (value, value)
    parts = list(value)
    if not 1 <= len(parts) <= 2:
        raise InvalidSpecError(f"a size takes one or two values, got {len(parts)}")
    width = int(parts[0])
    height = int(parts[1]) if len(parts) == 2 else width
    return (width, height)


def resolve_spec(
    *,
    start_pos: Optional[PosInput] = None,
    end_pos: Optional[PosInput] = None,
    start_zoom: Optional[ZoomInput] = None,
    end_zoom: Optional[ZoomInput] = None,
    size: Optional[Union[int, Sequence[int]]] = None,
    max_iterations: Optional[int] = None,
    frame_count: Optional[int] = None,
    frame_delay: Optional[int] = None,
    loop_count: int = LOOP_FOREVER,
) -> AnimationSpec:
    """Fill in defaults for every option that was not given.

    ``None`` means "not supplied". A single number is accepted for positions
    (imaginary part 0), zooms (square viewport) and sizes (square canvas).
    The result is validated with :func:`validate_spec`.
    """

    if start_pos is None:
        raise InvalidSpecError("need to specify start position")
    if start_zoom is None:
        raise InvalidSpecError("need to give start zoom")

    start = _as_complex(start_pos)
    end = _as_complex(end_pos) if end_pos is not None else start
    first_zoom = _as_zoom(start_zoom)
    last_zoom = _as_zoom(end_zoom) if end_zoom is not None else first_zoom
    width, height = _as_size(size) if size is not None else DEFAULT_CANVAS_SIZE

    has_motion = end_pos is not None or end_zoom is not None
    if frame_count is None:
        frame_count = DEFAULT_MOTION_FRAMES if has_motion else 1
    elif frame_count > 1 and not has_motion:
        warnings.warn("setting frames argument to 1 due to lack of movement", ResolutionWarning, stacklevel=2)
        frame_count = 1

    if frame_count == 1:
        if end_zoom is not None:
            warnings.warn("frames set to 1; ignoring end zoom", ResolutionWarning, stacklevel=2)
        if end_pos is not None:
            warnings.warn("frames set to 1; ignoring end position", ResolutionWarning, stacklevel=2)

    spec = AnimationSpec(
        start_pos=start,
        end_pos=end,
        start_zoom=first_zoom,
        end_zoom=last_zoom,
        canvas_width=width,
        canvas_height=height,
        max_iterations=DEFAULT_MAX_ITERATIONS if max_iterations is None else int(max_iterations),
        frame_count=int(frame_count),
        frame_delay=DEFAULT_FRAME_DELAY if frame_delay is None else int(frame_delay),
        loop_count=int(loop_count),
    )
    validate_spec(spec)
    return spec


def validate_spec(spec: AnimationSpec) -> None:
    """Raise :class:`InvalidSpecError` if ``spec`` cannot be rendered."""

    if spec.frame_count < 1:
        raise InvalidSpecError("number of frames must be at least 1")
    if spec.canvas_width < 1 or spec.canvas_height < 1:
        raise InvalidSpecError(f"canvas size must be positive, got {spec.canvas_width}x{spec.canvas_height}")
    if spec.max_iterations < 1:
        raise InvalidSpecError("iteration count must be at least 1")
    if spec.frame_delay < 1:
        raise InvalidSpecError("delay time must be at least 1")
    if spec.loop_count < 0:
        raise InvalidSpecError("loop count must not be negative")
    for name, zoom in (("start zoom", spec.start_zoom), ("end zoom", spec.end_zoom)):
        if not all(math.isfinite(v) and v > 0 for v in zoom):
            raise InvalidSpecError(f"{name} must be positive and finite, got {zoom}")
    for name, pos in (("start position", spec.start_pos), ("end position", spec.end_pos)):
        if not (math.isfinite(pos.real) and math.isfinite(pos.imag)):
            raise InvalidSpecError(f"{name} must be finite, got {pos}")
