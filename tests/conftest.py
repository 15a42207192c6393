import numpy as np
import pytest

from mandelgif import Animation, FrameGeometry, Palette, RenderedFrame, RenderParameters


@pytest.fixture
def small_params():
    return RenderParameters(canvas_width=8, canvas_height=6, max_iterations=20)


@pytest.fixture
def geometry():
    return FrameGeometry(center=complex(-0.75, 0.1), width=2.5, height=2.0)


@pytest.fixture
def striped_animation():
    """Three distinct 4x3 frames with a red/blue palette."""
    palette = Palette(background=(255, 0, 0), foreground=(0, 0, 255))
    frames = []
    for i in range(3):
        pixels = np.zeros((3, 4), dtype=np.uint8)
        pixels[:, i] = 1
        frames.append(RenderedFrame(pixels=pixels, palette=palette))
    return Animation(frames=tuple(frames), delay=8, loop_count=0)
