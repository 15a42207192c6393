import pytest

from mandelgif import AnimationSpec, FrameGeometry, frame_geometry, interpolation_fraction, plan_frames


def _spec(frame_count, **overrides):
    values = dict(
        start_pos=complex(-1.0, 0.0),
        end_pos=complex(-1.31, 0.2),
        start_zoom=(0.5, 0.4),
        end_zoom=(0.12, 0.1),
        canvas_width=16,
        canvas_height=16,
        max_iterations=50,
        frame_count=frame_count,
    )
    values.update(overrides)
    return AnimationSpec(**values)


def test_fraction_single_frame_is_zero():
    assert interpolation_fraction(0, 1) == 0.0


def test_fraction_spans_zero_to_one():
    assert interpolation_fraction(0, 5) == 0.0
    assert interpolation_fraction(2, 5) == 0.5
    assert interpolation_fraction(4, 5) == 1.0


def test_single_frame_ignores_end_values():
    spec = _spec(1)
    assert frame_geometry(spec, 0) == FrameGeometry(center=complex(-1.0, 0.0), width=0.5, height=0.4)


@pytest.mark.parametrize("frame_count", [2, 3, 25, 101])
def test_endpoints_are_exact(frame_count):
    spec = _spec(frame_count)
    assert frame_geometry(spec, 0) == FrameGeometry(spec.start_pos, *spec.start_zoom)
    assert frame_geometry(spec, frame_count - 1) == FrameGeometry(spec.end_pos, *spec.end_zoom)


def test_intermediate_frames_are_monotonic():
    frames = plan_frames(_spec(25))
    for previous, current in zip(frames, frames[1:]):
        assert current.center.real <= previous.center.real
        assert current.center.imag >= previous.center.imag
        assert current.width <= previous.width
        assert current.height <= previous.height


def test_midpoint_interpolates_each_component():
    geometry = frame_geometry(_spec(3), 1)
    assert geometry.center.real == pytest.approx(-1.155)
    assert geometry.center.imag == pytest.approx(0.1)
    assert geometry.width == pytest.approx(0.31)
    assert geometry.height == pytest.approx(0.25)


def test_static_animation_repeats_the_same_view():
    spec = _spec(7, end_pos=complex(-1.0, 0.0), end_zoom=(0.5, 0.4))
    frames = plan_frames(spec)
    assert len(frames) == 7
    assert all(frame == frames[0] for frame in frames)


def test_independent_of_call_order():
    spec = _spec(10)
    forward = [frame_geometry(spec, i) for i in range(10)]
    backward = [frame_geometry(spec, i) for i in reversed(range(10))]
    assert forward == list(reversed(backward))
    assert plan_frames(spec) == forward


@pytest.mark.parametrize("index", [-1, 4])
def test_out_of_range_index(index):
    with pytest.raises(IndexError):
        frame_geometry(_spec(4), index)
