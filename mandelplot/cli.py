"""Command line interface for plotting the Mandelbrot set."""

import re
import sys
from argparse import ArgumentParser, ArgumentTypeError

from . import verbosity
from .verbosity import log

import tensorflow as tf

if verbosity.SUPPRESS_MESSAGES:
    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")

from .parsing import parse_complex, parse_pixels
from .renderer import BACKENDS, RenderParameters, render_frame
from .writer import write_image

USAGE_EXAMPLE = "mandelbrot.png 1024x768 -1.20,0.35 -1,0.20"


class PlotArgumentParser(ArgumentParser):
    """Argument parser that reports every command-line error with exit status 1."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Corner points such as -1.20,0.35 are positionals, not options.
        self._negative_number_matcher = re.compile(r"-\.?[0-9].*")

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"Example: {self.prog} {USAGE_EXAMPLE}\n{self.prog}: error: {message}\n")


def _pixels_argument(text):
    bounds = parse_pixels(text)
    if bounds is None:
        raise ArgumentTypeError(f"error parsing image dimensions: {text!r}")
    return bounds


def _point_argument(corner):
    def parse(text):
        point = parse_complex(text)
        if point is None:
            raise ArgumentTypeError(f"error parsing {corner} corner point: {text!r}")
        return point

    return parse


def build_parser():
    parser = PlotArgumentParser(
        prog="mandelplot",
        description="Plot the Mandelbrot set as a grayscale image.",
    )

    parser.add_argument('file', metavar='FILE',
                        help='path of the image file to write')

    parser.add_argument('pixels', type=_pixels_argument, metavar='PIXELS',
                        help='image size as WIDTHxHEIGHT, e.g. 1024x768')

    parser.add_argument('upper_left', type=_point_argument('upper-left'), metavar='UPPERLEFT',
                        help='upper-left corner of the plotted region as RE,IM, e.g. -1.20,0.35')

    parser.add_argument('lower_right', type=_point_argument('lower-right'), metavar='LOWERRIGHT',
                        help='lower-right corner of the plotted region as RE,IM, e.g. -1,0.20')

    parser.add_argument('--backend', choices=BACKENDS, default='python',
                        help='"python" evaluates one pixel at a time, "tensorflow" evaluates the whole grid at once.')

    parser.add_argument('--workers', type=int, dest='workers', metavar='WORKERS', default=1,
                        help='number of processes rendering row bands in parallel (python backend only)')

    parser.add_argument('--format', type=str, dest='format', metavar='FORMAT', default=None,
                        help='file format of the image. Can be any extension supported by Pillow. '
                             'Default: taken from FILE, else "png".')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    return parser


def select_device():
    """Use the first visible GPU for TensorFlow renders, else the CPU."""

    gpus = tf.config.list_physical_devices('GPU')
    if not gpus:
        log("No GPU found, using CPU")
        return '/CPU:0'
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
    except RuntimeError as e:
        log(e)
        return '/CPU:0'
    log("GPU found, using %s" % gpus[0].name)
    return '/GPU:0'


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    verbosity.set_verbose(opt.verbose)

    if opt.workers < 1:
        parser.error("--workers must be at least 1.")
    if opt.workers > 1 and opt.backend != 'python':
        parser.error("--workers is only valid with the python backend.")

    width, height = opt.pixels
    params = RenderParameters(
        width=width,
        height=height,
        upper_left=opt.upper_left,
        lower_right=opt.lower_right,
    )

    device = None
    if opt.backend == 'tensorflow':
        log("TensorFlow version: %s" % tf.__version__)
        device = select_device()

    log("Rendering {0}x{1} from {2} to {3} ({4} backend)".format(
        width, height, params.upper_left, params.lower_right, opt.backend))
    result = render_frame(params, backend=opt.backend, workers=opt.workers, device=device)
    log("The render took %.3f seconds" % result.elapsed)

    try:
        output_path = write_image(opt.file, result.pixels, params.bounds, opt.format)
    except (OSError, ValueError, KeyError) as e:
        sys.exit("error writing image file: %s" % e)

    log("Wrote %s" % output_path)


if __name__ == '__main__':
    main()
