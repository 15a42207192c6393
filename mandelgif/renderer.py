"""Rendering primitives for two-color Mandelbrot frames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
import PIL.Image
import tensorflow as tf
from matplotlib import colors as mpl_colors

# A point has escaped once the real part of z reaches this value. Only the
# real component is tested, not |z|.
ESCAPE_THRESHOLD = 2.0

# FrameGeometry.width/height are the full span of the viewport.
VIEWPORT_SPAN_SCALE = 1.0

BACKGROUND_INDEX = 0
FOREGROUND_INDEX = 1

DEFAULT_DEVICE = "/CPU:0"

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class FrameGeometry:
    """The window of the complex plane that a single frame maps onto."""

    center: complex
    width: float
    height: float

    def bounds(self) -> tuple[float, float, float, float]:
        """Return ``(re_min, re_max, im_min, im_max)`` of the viewport."""

        half_width = self.width * VIEWPORT_SPAN_SCALE / 2.0
        half_height = self.height * VIEWPORT_SPAN_SCALE / 2.0
        return (
            self.center.real - half_width,
            self.center.real + half_width,
            self.center.imag - half_height,
            self.center.imag + half_height,
        )


@dataclass(frozen=True)
class RenderParameters:
    """Parameters shared by every frame of an animation."""

    canvas_width: int
    canvas_height: int
    max_iterations: int


@dataclass(frozen=True)
class Palette:
    """Two-entry color table; index 0 is the escaped background, index 1 the set."""

    background: RGB = (255, 255, 255)
    foreground: RGB = (0, 0, 0)

    @classmethod
    def from_names(cls, background: str, foreground: str) -> "Palette":
        """Build a palette from any color spec matplotlib understands."""

        return cls(background=_to_rgb(background), foreground=_to_rgb(foreground))

    def entries(self) -> list[int]:
        return [*self.background, *self.foreground]


def _to_rgb(spec: str) -> RGB:
    r, g, b = mpl_colors.to_rgb(spec)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))


DEFAULT_PALETTE = Palette()


@dataclass(frozen=True, eq=False)
class RenderedFrame:
    """An immutable indexed bitmap holding one rendered frame.

    ``pixels`` has shape ``(canvas_height, canvas_width)``; each entry is
    ``BACKGROUND_INDEX`` or ``FOREGROUND_INDEX``.
    """

    pixels: np.ndarray
    palette: Palette = DEFAULT_PALETTE

    def __post_init__(self) -> None:
        self.pixels.setflags(write=False)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def to_image(self) -> PIL.Image.Image:
        """Return the frame as a Pillow ``"P"`` image carrying its palette."""

        image = PIL.Image.frombytes("P", (self.width, self.height), self.pixels.tobytes())
        image.putpalette(self.palette.entries())
        return image


def pixel_to_complex(
    x: float,
    y: float,
    geometry: FrameGeometry,
    canvas_width: int,
    canvas_height: int,
) -> complex:
    """Map pixel ``(x, y)`` of the canvas onto the frame's viewport."""

    re = geometry.center.real + (x - canvas_width / 2) / canvas_width * (geometry.width * VIEWPORT_SPAN_SCALE)
    im = geometry.center.imag + (y - canvas_height / 2) / canvas_height * (geometry.height * VIEWPORT_SPAN_SCALE)
    return complex(re, im)


def sample_grid(geometry: FrameGeometry, canvas_width: int, canvas_height: int) -> np.ndarray:
    """Return the complex sample of every pixel, indexed ``[y, x]``.

    Uses the same arithmetic as :func:`pixel_to_complex`, so each entry is
    bit-identical to the scalar mapping of that pixel.
    """

    xs = np.arange(canvas_width, dtype=np.float64)
    ys = np.arange(canvas_height, dtype=np.float64)
    re = geometry.center.real + (xs - canvas_width / 2) / canvas_width * (geometry.width * VIEWPORT_SPAN_SCALE)
    im = geometry.center.imag + (ys - canvas_height / 2) / canvas_height * (geometry.height * VIEWPORT_SPAN_SCALE)

    grid = np.empty((canvas_height, canvas_width), dtype=np.complex128)
    grid.real = re[np.newaxis, :]
    grid.imag = im[:, np.newaxis]
    return grid


def escape_iterations(c: complex, max_iterations: int) -> int:
    """Count iterations of ``z = z*z + c`` from ``z = 0`` until escape.

    Returns ``max_iterations`` when the point never escapes.
    """

    z = 0j
    n = 0
    while n < max_iterations and z.real < ESCAPE_THRESHOLD:
        z = z * z + c
        n += 1
    return n


@tf.function
def _escape_step(zs: tf.Tensor, cs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance every point that has not escaped by one iteration."""

    zs_new = zs * zs + cs
    zs = tf.where(active, zs_new, zs)
    ns = ns + tf.cast(active, tf.int32)
    threshold = tf.constant(ESCAPE_THRESHOLD, dtype=tf.float64)
    new_active = tf.logical_and(active, tf.math.real(zs) < threshold)
    return zs, ns, new_active


@tf.function
def _escape_run(cs: tf.Tensor, max_iterations: tf.Tensor) -> tf.Tensor:
    """Iterate the recurrence for all points using a TensorFlow while loop."""

    max_iterations = tf.cast(max_iterations, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    zs = tf.zeros_like(cs)
    ns = tf.zeros(tf.shape(cs), dtype=tf.int32)
    active = tf.ones(tf.shape(cs), dtype=tf.bool)

    def cond(i: tf.Tensor, zs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor) -> tf.Tensor:
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i: tf.Tensor, zs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
        zs, ns, active = _escape_step(zs, cs, ns, active)
        return i + 1, zs, ns, active

    _, _, ns, _ = tf.while_loop(cond, body, (i, zs, ns, active))
    return ns


def escape_counts(points: np.ndarray, max_iterations: int, *, device: Optional[str] = None) -> np.ndarray:
    """Vectorized :func:`escape_iterations` over an array of complex points."""

    points = np.asarray(points, dtype=np.complex128)
    with tf.device(device if device is not None else DEFAULT_DEVICE):
        cs = tf.convert_to_tensor(points, dtype=tf.complex128)
        ns = _escape_run(cs, tf.constant(max_iterations, dtype=tf.int32))
    return ns.numpy()


def render_frame(
    geometry: FrameGeometry,
    params: RenderParameters,
    *,
    palette: Palette = DEFAULT_PALETTE,
    device: Optional[str] = None,
) -> RenderedFrame:
    """Render one frame, marking pixels that never escape as foreground."""

    grid = sample_grid(geometry, params.canvas_width, params.canvas_height)
    counts = escape_counts(grid, params.max_iterations, device=device)
    pixels = np.where(counts == params.max_iterations, FOREGROUND_INDEX, BACKGROUND_INDEX).astype(np.uint8)
    return RenderedFrame(pixels=pixels, palette=palette)
