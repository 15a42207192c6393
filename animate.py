import io
import os
import sys
import warnings
from argparse import ArgumentParser
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, file=sys.stderr, **kwargs)


import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")

from mandelgif import (
    TEST_PRESET,
    InvalidSpecError,
    Palette,
    render_animation,
    resolve_spec,
    save_frame_sequence,
    save_gif,
    write_gif,
)


def build_parser():
    parser = ArgumentParser(description='Render an animated GIF zooming across the Mandelbrot set.')

    parser.add_argument('--start-pos', type=float, nargs='+', dest='start_pos',
                        help='center of the first frame as RE [IM]; IM defaults to 0',
                        metavar='VALUE')

    parser.add_argument('--end-pos', type=float, nargs='+', dest='end_pos',
                        help='center of the last frame as RE [IM]; defaults to the start position',
                        metavar='VALUE')

    parser.add_argument('--start-zoom', type=float, nargs='+', dest='start_zoom',
                        help='width and height of the first viewport in plane units as W [H]; H defaults to W',
                        metavar='VALUE')

    parser.add_argument('--end-zoom', type=float, nargs='+', dest='end_zoom',
                        help='width and height of the last viewport as W [H]; defaults to the start zoom',
                        metavar='VALUE')

    parser.add_argument('--size', type=int, nargs='+', dest='size',
                        help='canvas size in pixels as W [H] (default: 512 512)',
                        metavar='PIXELS')

    parser.add_argument('--iters', type=int, dest='iters',
                        help='maximum number of iterations before a point counts as inside the set (default: 1000)',
                        metavar='ITERS')

    parser.add_argument('--frames', type=int, dest='frames',
                        help='number of frames (default: 25 when moving, 1 otherwise)',
                        metavar='FRAMES')

    parser.add_argument('--delay', type=int, dest='delay',
                        help='delay between frames in hundredths of a second (default: 8)',
                        metavar='DELAY')

    parser.add_argument('--output', type=str, dest='output',
                        help='GIF file to write; standard output when omitted')

    parser.add_argument('--test', action='store_true',
                        help='render the built-in test animation to test.gif, ignoring other geometry options')

    parser.add_argument('--workers', type=int, dest='workers',
                        help='maximum number of frames rendered at once (default: one per frame)',
                        metavar='WORKERS')

    parser.add_argument('--frame-dir', type=str, dest='frame_dir',
                        help='also save every frame as a numbered PNG in this directory')

    parser.add_argument('--background', type=str, default='white',
                        help='color of points that escape (any matplotlib color, default: white)')

    parser.add_argument('--foreground', type=str, default='black',
                        help='color of points inside the set (any matplotlib color, default: black)')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow diagnostics.')

    return parser


def _check_arity(parser, opt):
    for name in ('start_pos', 'end_pos', 'start_zoom', 'end_zoom', 'size'):
        values = getattr(opt, name)
        if values is not None and len(values) > 2:
            flag = '--' + name.replace('_', '-')
            parser.error(f"{flag} takes one or two values, got {len(values)}")


def resolve_from_args(opt, parser):
    """Turn parsed options into an AnimationSpec, reporting diagnostics on stderr."""

    if opt.test:
        return TEST_PRESET

    _check_arity(parser, opt)
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            spec = resolve_spec(
                start_pos=opt.start_pos,
                end_pos=opt.end_pos,
                start_zoom=opt.start_zoom,
                end_zoom=opt.end_zoom,
                size=opt.size,
                max_iterations=opt.iters,
                frame_count=opt.frames,
                frame_delay=opt.delay,
            )
        except InvalidSpecError as exc:
            parser.error(str(exc))
    for warning in caught:
        print(warning.message, file=sys.stderr)
    return spec


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    spec = resolve_from_args(opt, parser)

    if opt.workers is not None and opt.workers < 1:
        parser.error("--workers must be at least 1")

    try:
        palette = Palette.from_names(opt.background, opt.foreground)
    except ValueError as exc:
        parser.error(str(exc))

    output = opt.output
    if output is None and opt.test:
        output = "test.gif"

    log("TensorFlow version: %s" % tf.__version__)
    log("rendering {0} frame(s) of {1}x{2} at {3} iterations".format(
        spec.frame_count, spec.canvas_width, spec.canvas_height, spec.max_iterations))

    def progress(done, total):
        log("frame {0} out of {1}".format(done, total), end='\r')

    animation = render_animation(spec, palette=palette, max_workers=opt.workers, progress=progress)
    log("")

    if opt.frame_dir is not None:
        paths = save_frame_sequence(animation, Path(opt.frame_dir))
        log("wrote {0} frame(s) to {1}".format(len(paths), opt.frame_dir))

    if output is None:
        buffer = io.BytesIO()
        write_gif(animation, buffer)
        sys.stdout.buffer.write(buffer.getvalue())
        sys.stdout.buffer.flush()
    else:
        path = save_gif(animation, output)
        log("wrote %s" % path)


if __name__ == '__main__':
    main()
