"""Writers that turn rendered frames into files."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Union

import imageio.v3 as iio
import numpy as np

from .orchestrator import Animation

# GIF delays are in hundredths of a second; Pillow takes milliseconds.
_MS_PER_DELAY_UNIT = 10


def write_gif(animation: Animation, fp: BinaryIO) -> None:
    """Encode ``animation`` as an animated GIF into the binary stream ``fp``.

    Frames are written in the order they appear in ``animation.frames``.
    Pillow folds a frame identical to its predecessor into the previous
    frame's duration, so the total display time is unchanged.
    """

    if not animation.frames:
        raise ValueError("cannot write an animation with no frames")

    images = [frame.to_image() for frame in animation.frames]
    first, rest = images[0], images[1:]
    first.save(
        fp,
        format="GIF",
        save_all=True,
        append_images=rest,
        duration=animation.delay * _MS_PER_DELAY_UNIT,
        loop=animation.loop_count,
        optimize=False,
    )


def save_gif(animation: Animation, path: Union[str, Path]) -> Path:
    """Write ``animation`` to ``path`` and return the resolved path."""

    output_path = Path(path).expanduser()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "wb") as fp:
        write_gif(animation, fp)
    return output_path.resolve()


def save_frame_sequence(
    animation: Animation,
    frame_dir: Union[str, Path],
    *,
    prefix: str = "frame",
) -> list[Path]:
    """Persist every frame as a numbered RGB PNG inside ``frame_dir``."""

    frame_dir = Path(frame_dir).expanduser()
    frame_dir.mkdir(parents=True, exist_ok=True)
    digits = max(3, len(str(max(len(animation.frames) - 1, 0))))

    paths = []
    for index, frame in enumerate(animation.frames):
        table = np.array([frame.palette.background, frame.palette.foreground], dtype=np.uint8)
        rgb = table[frame.pixels]
        frame_path = frame_dir / f"{prefix}{index:0{digits}d}.png"
        iio.imwrite(frame_path, rgb)
        paths.append(frame_path)
    return paths
