import io

import PIL.Image
import pytest

import animate


def test_writes_gif_file(tmp_path):
    output = tmp_path / "zoom.gif"
    animate.main([
        "--start-pos", "-1", "0",
        "--end-pos", "-1.31",
        "--start-zoom", "0.5",
        "--end-zoom", "0.12",
        "--size", "16", "12",
        "--iters", "40",
        "--frames", "4",
        "--delay", "5",
        "--output", str(output),
    ])
    image = PIL.Image.open(output)
    assert image.size == (16, 12)
    assert image.info.get("duration") == 50


def test_writes_to_stdout_when_no_output(capsysbinary):
    animate.main(["--start-pos", "-0.75", "--start-zoom", "2.5", "--size", "8", "--iters", "20"])
    data = capsysbinary.readouterr().out
    assert data.startswith(b"GIF89a")
    assert PIL.Image.open(io.BytesIO(data)).n_frames == 1


def test_negative_values_parse_as_numbers():
    parser = animate.build_parser()
    opt = parser.parse_args(["--start-pos", "-1.5", "-0.25", "--start-zoom", "0.5"])
    assert opt.start_pos == [-1.5, -0.25]
    assert opt.start_zoom == [0.5]


def test_frame_dir_export(tmp_path):
    frame_dir = tmp_path / "frames"
    animate.main([
        "--start-pos", "-1",
        "--start-zoom", "0.5",
        "--end-zoom", "0.25",
        "--size", "6",
        "--iters", "10",
        "--frames", "3",
        "--output", str(tmp_path / "out.gif"),
        "--frame-dir", str(frame_dir),
    ])
    assert sorted(p.name for p in frame_dir.iterdir()) == ["frame000.png", "frame001.png", "frame002.png"]


def test_resolution_diagnostics_go_to_stderr(tmp_path, capsys):
    animate.main([
        "--start-pos", "0",
        "--start-zoom", "3",
        "--size", "4",
        "--iters", "5",
        "--frames", "3",
        "--output", str(tmp_path / "still.gif"),
    ])
    assert "lack of movement" in capsys.readouterr().err


@pytest.mark.parametrize(
    "argv",
    [
        ["--start-zoom", "1"],
        ["--start-pos", "0"],
        ["--start-pos", "0", "--start-zoom", "1", "--frames", "0"],
        ["--start-pos", "0", "1", "2", "--start-zoom", "1"],
        ["--start-pos", "0", "--start-zoom", "1", "--workers", "0"],
        ["--start-pos", "0", "--start-zoom", "1", "--background", "nope"],
    ],
)
def test_invalid_arguments_exit_with_usage_error(argv):
    with pytest.raises(SystemExit) as excinfo:
        animate.main(argv)
    assert excinfo.value.code == 2
