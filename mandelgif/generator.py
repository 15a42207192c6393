"""Utilities for planning the viewport of every frame in an animation."""

from __future__ import annotations

from .renderer import FrameGeometry
from .spec import AnimationSpec


def interpolation_fraction(index: int, frame_count: int) -> float:
    """Return the position of frame ``index`` between start (0.0) and end (1.0).

    A single-frame animation always sits at the start.
    """

    denom = frame_count - 1 if frame_count > 1 else 1
    return index / denom


def _lerp(start: float, end: float, frac: float) -> float:
    # Exact at both ends: frac == 0 gives start, frac == 1 gives end.
    if start == end:
        return start
    return start * (1.0 - frac) + end * frac


def frame_geometry(spec: AnimationSpec, index: int) -> FrameGeometry:
    """Compute the viewport of frame ``index`` of ``spec``."""

    if not 0 <= index < spec.frame_count:
        raise IndexError(f"frame index {index} out of range for {spec.frame_count} frames")

    if spec.frame_count == 1:
        return FrameGeometry(
            center=spec.start_pos,
            width=spec.start_zoom[0],
            height=spec.start_zoom[1],
        )

    frac = interpolation_fraction(index, spec.frame_count)
    center = complex(
        _lerp(spec.start_pos.real, spec.end_pos.real, frac),
        _lerp(spec.start_pos.imag, spec.end_pos.imag, frac),
    )
    return FrameGeometry(
        center=center,
        width=_lerp(spec.start_zoom[0], spec.end_zoom[0], frac),
        height=_lerp(spec.start_zoom[1], spec.end_zoom[1], frac),
    )


def plan_frames(spec: AnimationSpec) -> list[FrameGeometry]:
    """Return the geometry of every frame, in frame order."""

    return [frame_geometry(spec, i) for i in range(spec.frame_count)]
