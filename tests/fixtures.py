"""
Test fixtures common to more than one test point.
"""

# Standard library imports
import pathlib
import shutil
import struct
import tempfile
import unittest

# Local imports
from exifio import (
    Directory, Entry, Exif, Ascii, UShort, ULong, URational, SRational,
    Undefined, Float64
)
from exifio import tags


def make_header(offset=8, endian='<', marker=42):
    """TIFF header pointing at the first directory."""
    magic = b'II' if endian == '<' else b'MM'
    return magic + struct.pack(endian + 'HI', marker, offset)


def make_entry(tag, datatype, count, field, endian='<'):
    """12-byte directory entry.  The field is either the 4 inline payload
    bytes or the offset to the payload.
    """
    if isinstance(field, int):
        field = struct.pack(endian + 'I', field)
    return struct.pack(endian + 'HHI', tag, datatype, count) + field


def make_ifd(entries, next_offset=0, endian='<'):
    """Directory made up of entries produced by make_entry."""
    return (
        struct.pack(endian + 'H', len(entries))
        + b''.join(entries)
        + struct.pack(endian + 'I', next_offset)
    )


def ifd_length(num_entries):
    return 2 + 12 * num_entries + 4


def sample_document():
    """Two top-level directories, the first one with Exif and GPS
    sub-directories, the Exif directory with an Interoperability directory.
    """
    interop = Directory(tags.INTEROPERABILITY_IFD_POINTER, [
        Entry(0x0001, Ascii('R98')),
        Entry(0x0002, Undefined(b'0100')),
    ])
    exif = Directory(tags.EXIF_IFD_POINTER, [
        Entry(33434, URational([(1, 250)])),
        Entry(36864, Undefined(b'0230')),
        Entry(37377, SRational([(-5, 3)])),
        Entry(37510, Undefined(b'ASCII\x00\x00\x00a user comment')),
    ], [interop])
    gps = Directory(tags.GPS_INFO_IFD_POINTER, [
        Entry(tags.gps.LATITUDE_REF, Ascii('N')),
        Entry(tags.gps.LATITUDE, URational([(42, 1), (21, 1), (1234, 100)])),
        Entry(tags.gps.ALTITUDE, URational([(100, 1)])),
    ])
    ifd0 = Directory(0, [
        Entry(tags.IMAGE_DESCRIPTION, Ascii('A sample image')),
        Entry(tags.ORIENTATION, UShort([1])),
        Entry(282, URational([(72, 1)])),
        Entry(tags.MODIFY_DATE, Ascii('2024:01:02 03:04:05')),
        Entry(50000, Float64([1.5, -2.25])),
    ], [exif, gps])
    ifd1 = Directory(1, [
        Entry(259, UShort([6])),
        Entry(tags.JPEG_THUMBNAIL_OFFSET, ULong([0])),
        Entry(tags.JPEG_THUMBNAIL_LENGTH, ULong([0])),
    ])
    return Exif([ifd0, ifd1])


THUMBNAIL = b'\xff\xd8' + b'not really a thumbnail' + b'\xff\xd9'


def segment(marker, payload):
    """JPEG marker segment."""
    length = struct.pack('>H', len(payload) + 2)
    return bytes([0xff, marker]) + length + payload


def tiff_with_thumbnail():
    """IFD0 with one entry, IFD1 with the thumbnail tags, then the
    thumbnail.
    """
    ifd1_offset = 8 + ifd_length(1)
    thumbnail_offset = ifd1_offset + ifd_length(2)
    return (
        make_header()
        + make_ifd(
            [make_entry(274, 3, 1, b'\x01\x00\x00\x00')],
            next_offset=ifd1_offset
        )
        + make_ifd([
            make_entry(tags.JPEG_THUMBNAIL_OFFSET, 4, 1, thumbnail_offset),
            make_entry(tags.JPEG_THUMBNAIL_LENGTH, 4, 1, len(THUMBNAIL)),
        ])
        + THUMBNAIL
    )


def make_jpeg(tiff):
    """JPEG with JFIF, XMP and Exif segments ahead of the image data."""
    return (
        b'\xff\xd8'
        + segment(0xe0, b'JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00')
        + segment(0xe1, b'http://ns.adobe.com/xap/1.0/\x00<x:xmpmeta/>')
        + segment(0xe1, b'Exif\x00\x00' + tiff)
        + segment(0xdb, bytes(65))
        + b'\xff\xda' + bytes(20) + b'\xff\xd9'
    )


class TestCommon(unittest.TestCase):
    """
    Common setup for many if not all tests.
    """

    def setUp(self):
        # Create a temporary directory to be cleaned up following each test, as
        # well as names for a TIFF and a JPEG file.
        self.test_dir = tempfile.mkdtemp()
        self.test_dir_path = pathlib.Path(self.test_dir)
        self.temp_tiff_filename = self.test_dir_path / "test.tif"
        self.temp_jpeg_filename = self.test_dir_path / "test.jpg"

    def tearDown(self):
        shutil.rmtree(self.test_dir)
