import os
import sys
import time
import warnings
from argparse import ArgumentParser
from dataclasses import dataclass
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
VERBOSE = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


from mandelbands import EncodingError, Viewport, band_rows, encode, render_pixels
from mandelbands.codec import normalize_format


@dataclass
class OutputConfig:
    path: Path
    image_format: str


def build_parser():
    parser = ArgumentParser(description='Render a grayscale Mandelbrot image using a pool of band workers.')

    parser.add_argument('--width', type=int,
                        dest='width', help='image width in pixels',
                        metavar='WIDTH', default=1000)

    parser.add_argument('--height', type=int,
                        dest='height', help='image height in pixels',
                        metavar='HEIGHT', default=750)

    parser.add_argument('--left', type=float,
                        dest='left', help='real coordinate of the left image edge',
                        metavar='LEFT', default=-1.20)

    parser.add_argument('--top', type=float,
                        dest='top', help='imaginary coordinate of the top image edge',
                        metavar='TOP', default=0.35)

    parser.add_argument('--right', type=float,
                        dest='right', help='real coordinate of the right image edge',
                        metavar='RIGHT', default=-1.0)

    parser.add_argument('--bottom', type=float,
                        dest='bottom', help='imaginary coordinate of the bottom image edge',
                        metavar='BOTTOM', default=0.20)

    parser.add_argument('--threads', type=int,
                        dest='threads', help='number of worker threads (default: number of CPUs)',
                        metavar='THREADS', default=os.cpu_count() or 1)

    parser.add_argument('--format', type=str,
                        dest='format', help='image format. Any format Pillow can write for grayscale images. Default: "png".',
                        metavar='FORMAT', default='png')

    parser.add_argument('--output', dest='output', type=str,
                        help='Destination file. Defaults to mandel.<format> in the current directory.')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Print the viewport, band layout and timings.')

    return parser


def resolve_output_config(opt, parser: ArgumentParser) -> OutputConfig:
    image_format = normalize_format(getattr(opt, "format", "png"))
    expected_suffix = f".{image_format}"

    output_arg = getattr(opt, "output", None)
    if not output_arg:
        return OutputConfig(path=Path(f"mandel{expected_suffix}").resolve(), image_format=image_format)

    if str(output_arg).endswith(tuple(filter(None, {os.sep, os.altsep}))):
        parser.error("--output must be a file path.")
    output_path = Path(output_arg).expanduser()
    if output_path.exists() and output_path.is_dir():
        parser.error("--output must point to a file, not a directory.")

    suffix = output_path.suffix
    if suffix:
        if suffix.lower() != expected_suffix:
            parser.error(f"--output extension {suffix} does not match --format {image_format}.")
    else:
        output_path = output_path.with_suffix(expected_suffix)

    return OutputConfig(path=output_path.resolve(), image_format=image_format)


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    output_config = resolve_output_config(opt, parser)

    if opt.threads <= 0:
        parser.error(f"--threads must be positive, got {opt.threads}.")
    if opt.height > 0 and opt.threads > opt.height:
        warnings.warn(
            f"{opt.threads} threads requested for {opt.height} rows; some workers will stay idle.",
            RuntimeWarning,
            stacklevel=2,
        )

    viewport = Viewport.from_edges(opt.left, opt.top, opt.right, opt.bottom)
    log("Viewport: %s .. %s" % (viewport.upper_left, viewport.lower_right))

    start = time.perf_counter()
    try:
        pixels = render_pixels(opt.width, opt.height, viewport, opt.threads)
    except ValueError as exc:
        parser.error(str(exc))
    log("Rendered %dx%d with %d threads, %d rows per band, in %.3fs"
        % (opt.width, opt.height, opt.threads, band_rows(opt.height, opt.threads), time.perf_counter() - start))

    try:
        data = encode(pixels, opt.width, opt.height, output_config.image_format)
    except EncodingError as exc:
        parser.error(str(exc))
    log("Encoded %d bytes as %s" % (len(data), output_config.image_format))

    output_config.path.parent.mkdir(parents=True, exist_ok=True)
    output_config.path.write_bytes(data)
    print(output_config.path)


if __name__ == '__main__':
    main()
