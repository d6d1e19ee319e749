"""exifio - read, write, and interrogate TIFF-structured Exif metadata."""

__all__ = [
    'get_option', 'set_option', 'reset_option',
    'decode', 'encode', 'Exif', 'Directory', 'Entry',
    'extract_exif', 'extract_thumbnail',
    'Byte', 'Ascii', 'UShort', 'ULong', 'URational', 'SignedByte',
    'Undefined', 'SShort', 'SLong', 'SRational', 'Float32', 'Float64',
    'ExifError', 'DecodeError', 'EncodeError',
]

# Local imports
from exifio import version
from .options import get_option, set_option, reset_option
from .core import ExifError, DecodeError, EncodeError
from .exif import Exif, decode, encode
from .ifd import Directory, Entry
from .jpeg import extract_exif, extract_thumbnail
from .values import (
    Byte, Ascii, UShort, ULong, URational, SignedByte, Undefined, SShort,
    SLong, SRational, Float32, Float64
)

__version__ = version.version
