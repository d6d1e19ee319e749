"""Entry point for console script exifdump."""
# Standard library imports ...
import argparse
import io
import logging
import pathlib
import warnings

# Local imports ...
from . import set_option
from .exif import decode, encode
from .jpeg import extract_exif

_JPEG_SOI = b'\xff\xd8'


def setup_logging(verbosity):
    """Attach a console handler to the package logger."""
    logger = logging.getLogger('exifio')
    logger.setLevel(verbosity)
    ch = logging.StreamHandler()
    ch.setLevel(verbosity)
    logger.addHandler(ch)
    return logger


def _read_document(path):
    """Decode the TIFF document held by a TIFF file or a JPEG file."""
    with path.open('rb') as f:
        if f.read(2) == _JPEG_SOI:
            f.seek(0)
            buffer = extract_exif(f)
            return decode(io.BytesIO(buffer))

        f.seek(0)
        return decode(f)


def main():
    """Entry point for console script exifdump."""

    kwargs = {'description': 'Print Exif/TIFF metadata.',
              'formatter_class': argparse.ArgumentDefaultsHelpFormatter}
    parser = argparse.ArgumentParser(**kwargs)

    parser.add_argument('-s', '--short',
                        help='only print the directory lines',
                        action='store_true')

    help = 'Write the re-encoded (little endian) document to this file.'
    parser.add_argument('-o', '--output', help=help, metavar='OUT')

    help = (
        'Logging level, one of "critical", "error", "warning", "info", '
        'or "debug".'
    )
    parser.add_argument(
        '-v', '--verbosity', help=help, default='critical',
        choices=['critical', 'error', 'warning', 'info', 'debug']
    )

    parser.add_argument('filename')

    args = parser.parse_args()
    if args.short:
        set_option('print.short', True)

    logging_level = getattr(logging, args.verbosity.upper())
    setup_logging(logging_level)

    path = pathlib.Path(args.filename)

    # Don't print any warnings until we are done with the metadata.
    with warnings.catch_warnings(record=True) as wctx:

        # Without this, repeated warnings would be suppressed.
        warnings.simplefilter('always')

        document = _read_document(path)
        print(f'File:  {path.name}')
        print(document)

        if args.output is not None:
            with open(args.output, 'wb') as f:
                encode(document, f)

        # Now re-emit any suppressed warnings.
        if len(wctx) > 0:
            print("\n")
        for warning in wctx:
            print(
                f"{warning.filename}:{warning.lineno}: "
                f"{warning.category.__name__}: {warning.message}"
            )
