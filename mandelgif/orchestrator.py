"""Parallel, order-preserving rendering of every frame in an animation."""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .generator import plan_frames
from .renderer import DEFAULT_PALETTE, FrameGeometry, Palette, RenderedFrame, RenderParameters, render_frame
from .spec import AnimationSpec

RenderFn = Callable[..., RenderedFrame]
ProgressFn = Callable[[int, int], None]


class RenderError(RuntimeError):
    """A frame failed to render; the whole animation is abandoned."""

    def __init__(self, frame_index: int, cause: BaseException) -> None:
        super().__init__(f"frame {frame_index} failed to render: {cause}")
        self.frame_index = frame_index


@dataclass(frozen=True)
class Animation:
    """Rendered frames in display order plus their timing."""

    frames: tuple[RenderedFrame, ...]
    delay: int
    loop_count: int


def _render_into(
    slots: list[Optional[RenderedFrame]],
    index: int,
    render: RenderFn,
    geometry: FrameGeometry,
    params: RenderParameters,
    palette: Palette,
    device: Optional[str],
    failed: threading.Event,
) -> None:
    # A unit picked up after another one failed does no work.
    if failed.is_set():
        return
    try:
        slots[index] = render(geometry, params, palette=palette, device=device)
    except BaseException:
        failed.set()
        raise


def render_frames(
    geometries: Sequence[FrameGeometry],
    params: RenderParameters,
    *,
    palette: Palette = DEFAULT_PALETTE,
    max_workers: Optional[int] = None,
    device: Optional[str] = None,
    render: RenderFn = render_frame,
    progress: Optional[ProgressFn] = None,
) -> list[RenderedFrame]:
    """Render every geometry concurrently and return the frames in input order.

    Each frame is one unit of work that writes only its own slot of a
    pre-sized list, so no locking is needed. By default every frame gets its
    own worker thread; ``max_workers`` caps the pool for long animations.
    The call returns only after every unit has finished. If any unit fails,
    units that have not started are cancelled or skipped, and
    :class:`RenderError` is raised; no partial result is returned.
    """

    total = len(geometries)
    if total == 0:
        return []

    slots: list[Optional[RenderedFrame]] = [None] * total
    failed = threading.Event()
    workers = total if max_workers is None else max(1, min(max_workers, total))

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="mandelgif-frame") as executor:
        futures: dict[Future, int] = {
            executor.submit(_render_into, slots, index, render, geometry, params, palette, device, failed): index
            for index, geometry in enumerate(geometries)
        }
        for done, future in enumerate(as_completed(futures), start=1):
            exc = future.exception()
            if exc is not None:
                for pending in futures:
                    pending.cancel()
                raise RenderError(futures[future], exc) from exc
            if progress is not None:
                progress(done, total)

    return list(slots)  # type: ignore[arg-type]


def render_animation(
    spec: AnimationSpec,
    *,
    palette: Palette = DEFAULT_PALETTE,
    max_workers: Optional[int] = None,
    device: Optional[str] = None,
    progress: Optional[ProgressFn] = None,
) -> Animation:
    """Plan and render every frame of ``spec``."""

    params = RenderParameters(
        canvas_width=spec.canvas_width,
        canvas_height=spec.canvas_height,
        max_iterations=spec.max_iterations,
    )
    frames = render_frames(
        plan_frames(spec),
        params,
        palette=palette,
        max_workers=max_workers,
        device=device,
        progress=progress,
    )
    return Animation(frames=tuple(frames), delay=spec.frame_delay, loop_count=spec.loop_count)
