"""
Tests for decoding TIFF documents built byte by byte.
"""
# Standard library imports ...
import io
import struct
import unittest
import warnings

# Local imports ...
import exifio
from exifio import tags
from exifio.byteorder import BIG_ENDIAN, LITTLE_ENDIAN
from exifio.core import (
    ChainTooLongError, DirectoryLoopError, InvalidTypeCodeError,
    MalformedHeaderError, MissingTerminatorError, SeekOutOfRangeError,
    TruncatedError
)
from exifio.values import Ascii, ULong, URational, UShort
from . import fixtures
from .fixtures import make_entry, make_header, make_ifd

ORIENTATION_ENTRY = make_entry(tags.ORIENTATION, 3, 1, b'\x01\x00\x00\x00')


class TestHeader(unittest.TestCase):

    def test_bad_magic(self):
        f = io.BytesIO(b'XX' + struct.pack('<HI', 42, 8))
        with self.assertRaises(MalformedHeaderError):
            exifio.decode(f)

    def test_bigtiff(self):
        """
        SCENARIO:  the header marker is 43 (BigTIFF)

        EXPECTED RESULT:  MalformedHeaderError
        """
        f = io.BytesIO(make_header(marker=43))
        with self.assertRaises(MalformedHeaderError):
            exifio.decode(f)

    def test_no_directories(self):
        """
        SCENARIO:  the header does not point to any directory

        EXPECTED RESULT:  MalformedHeaderError, a document needs at least one
        """
        f = io.BytesIO(make_header(offset=0))
        with self.assertRaises(MalformedHeaderError):
            exifio.decode(f)

    def test_short_header(self):
        with self.assertRaises(TruncatedError):
            exifio.decode(io.BytesIO(b'II\x2a\x00'))

    def test_first_directory_out_of_range(self):
        with self.assertRaises(SeekOutOfRangeError):
            exifio.decode(io.BytesIO(make_header(offset=100)))


class TestSuite(unittest.TestCase):

    def setUp(self):
        exifio.reset_option('all')

    def tearDown(self):
        exifio.reset_option('all')

    def test_single_directory(self):
        """
        SCENARIO:  one little endian directory with an inline SHORT, an
        inline ASCII and an out-of-line RATIONAL

        EXPECTED RESULT:  the values are decoded in on-disk order
        """
        entries = [
            make_entry(tags.ORIENTATION, 3, 1, b'\x06\x00\x00\x00'),
            make_entry(tags.IMAGE_DESCRIPTION, 2, 4, b'AB\x00\xff'),
            make_entry(282, 5, 1, 8 + fixtures.ifd_length(3)),
        ]
        b = make_header() + make_ifd(entries) + struct.pack('<II', 72, 1)
        doc = exifio.decode(io.BytesIO(b))

        self.assertEqual(doc.byteorder, LITTLE_ENDIAN)
        self.assertEqual(len(doc), 1)

        ifd = doc[0]
        self.assertEqual(ifd.ident, 0)
        self.assertEqual(ifd.children, [])
        self.assertEqual([entry.tag for entry in ifd.entries],
                         [tags.ORIENTATION, tags.IMAGE_DESCRIPTION, 282])
        self.assertEqual(ifd.get(tags.ORIENTATION), UShort([6]))
        self.assertEqual(ifd.get(tags.IMAGE_DESCRIPTION), Ascii('AB'))
        self.assertEqual(ifd.get(282), URational([(72, 1)]))
        self.assertIsNone(ifd.get(283))

    def test_big_endian(self):
        """
        SCENARIO:  a big endian document with two chained directories

        EXPECTED RESULT:  both directories are decoded in chain order
        """
        ifd1_offset = 8 + fixtures.ifd_length(1)
        b = (
            make_header(endian='>')
            + make_ifd([make_entry(256, 4, 1, 640, endian='>')],
                       next_offset=ifd1_offset, endian='>')
            + make_ifd([make_entry(257, 3, 1, b'\x01\xe0\x00\x00', '>')],
                       endian='>')
        )
        doc = exifio.decode(io.BytesIO(b))

        self.assertEqual(doc.byteorder, BIG_ENDIAN)
        self.assertEqual([ifd.ident for ifd in doc], [0, 1])
        self.assertEqual(doc[0].get(256), ULong([640]))
        self.assertEqual(doc[1].get(257), UShort([480]))

    def test_sub_directory(self):
        """
        SCENARIO:  IFD0 holds an Exif pointer, the Exif directory holds an
        Interoperability pointer

        EXPECTED RESULT:  the pointers become sub-directories rather than
        entries
        """
        exif_offset = 8 + fixtures.ifd_length(2)
        interop_offset = exif_offset + fixtures.ifd_length(2)
        b = (
            make_header()
            + make_ifd([
                make_entry(tags.ORIENTATION, 3, 1, b'\x01\x00\x00\x00'),
                make_entry(tags.EXIF_IFD_POINTER, 4, 1, exif_offset),
            ])
            + make_ifd([
                make_entry(tags.INTEROPERABILITY_IFD_POINTER, 4, 1,
                           interop_offset),
                make_entry(36864, 7, 4, b'0230'),
            ])
            + make_ifd([make_entry(0x0001, 2, 4, b'R98\x00')])
        )
        doc = exifio.decode(io.BytesIO(b))

        ifd0 = doc[0]
        self.assertEqual(len(doc), 1)
        self.assertEqual([entry.tag for entry in ifd0.entries],
                         [tags.ORIENTATION])
        self.assertEqual(len(ifd0.children), 1)

        exif = ifd0.children[0]
        self.assertEqual(exif.ident, tags.EXIF_IFD_POINTER)
        self.assertEqual([entry.tag for entry in exif.entries], [36864])

        interop, = exif.children
        self.assertEqual(interop.ident, tags.INTEROPERABILITY_IFD_POINTER)
        self.assertEqual(interop.get(0x0001), Ascii('R98'))

    def test_pointer_not_inline(self):
        """
        SCENARIO:  the GPS pointer tag has two LONGs, so its payload is not
        stored inline

        EXPECTED RESULT:  a warning is issued and the tag is kept as an
        ordinary entry
        """
        data_offset = 8 + fixtures.ifd_length(1)
        b = (
            make_header()
            + make_ifd([
                make_entry(tags.GPS_INFO_IFD_POINTER, 4, 2, data_offset)
            ])
            + struct.pack('<II', 1, 2)
        )
        with self.assertWarns(UserWarning):
            doc = exifio.decode(io.BytesIO(b))

        self.assertEqual(doc[0].children, [])
        self.assertEqual(doc[0].get(tags.GPS_INFO_IFD_POINTER),
                         ULong([1, 2]))

    def test_invalid_type_code(self):
        """
        SCENARIO:  an entry has datatype 13

        EXPECTED RESULT:  InvalidTypeCodeError
        """
        b = make_header() + make_ifd([make_entry(270, 13, 1, b'\x00' * 4)])
        with self.assertRaises(InvalidTypeCodeError):
            exifio.decode(io.BytesIO(b))

    def test_invalid_type_code_large_count(self):
        """
        SCENARIO:  an entry has datatype 13 and a count of 0xffffffff

        EXPECTED RESULT:  InvalidTypeCodeError, the count plays no part
        """
        b = make_header() + make_ifd([
            make_entry(270, 13, 0xffffffff, b'\x00' * 4)
        ])
        with self.assertRaises(InvalidTypeCodeError):
            exifio.decode(io.BytesIO(b))

    def test_missing_terminator(self):
        b = make_header() + make_ifd([make_entry(270, 2, 4, b'ABCD')])
        with self.assertRaises(MissingTerminatorError):
            exifio.decode(io.BytesIO(b))

    def test_truncated_directory(self):
        """
        SCENARIO:  the directory claims two entries but the stream ends after
        the first one

        EXPECTED RESULT:  TruncatedError
        """
        b = (
            make_header()
            + struct.pack('<H', 2)
            + make_entry(274, 3, 1, b'\x01\x00\x00\x00')
        )
        with self.assertRaises(TruncatedError):
            exifio.decode(io.BytesIO(b))

    def test_missing_next_offset(self):
        b = make_header() + make_ifd([ORIENTATION_ENTRY])
        with self.assertRaises(TruncatedError):
            exifio.decode(io.BytesIO(b[:-2]))

    def test_payload_out_of_range(self):
        b = make_header() + make_ifd([make_entry(282, 5, 1, 1000)])
        with self.assertRaises(SeekOutOfRangeError):
            exifio.decode(io.BytesIO(b))

    def test_sub_directory_out_of_range(self):
        b = make_header() + make_ifd([
            make_entry(tags.EXIF_IFD_POINTER, 4, 1, 1000)
        ])
        with self.assertRaises(SeekOutOfRangeError):
            exifio.decode(io.BytesIO(b))

    def test_chain_loop(self):
        """
        SCENARIO:  the only directory names itself as the next directory

        EXPECTED RESULT:  DirectoryLoopError rather than an endless loop
        """
        b = make_header() + make_ifd(
            [make_entry(274, 3, 1, b'\x01\x00\x00\x00')], next_offset=8
        )
        with self.assertRaises(DirectoryLoopError):
            exifio.decode(io.BytesIO(b))

    def test_pointer_loop(self):
        """
        SCENARIO:  the Exif pointer points back to IFD0

        EXPECTED RESULT:  DirectoryLoopError rather than infinite recursion
        """
        b = make_header() + make_ifd([
            make_entry(tags.EXIF_IFD_POINTER, 4, 1, 8)
        ])
        with self.assertRaises(DirectoryLoopError):
            exifio.decode(io.BytesIO(b))

    def test_chain_too_long(self):
        """
        SCENARIO:  three chained directories but at most two are allowed

        EXPECTED RESULT:  ChainTooLongError
        """
        length = fixtures.ifd_length(1)
        entry = make_entry(274, 3, 1, b'\x01\x00\x00\x00')
        b = (
            make_header()
            + make_ifd([entry], next_offset=8 + length)
            + make_ifd([entry], next_offset=8 + 2 * length)
            + make_ifd([entry])
        )
        self.assertEqual(len(exifio.decode(io.BytesIO(b))), 3)

        exifio.set_option('parse.max_directories', 2)
        with self.assertRaises(ChainTooLongError):
            exifio.decode(io.BytesIO(b))

    def test_offset_within_stream(self):
        """
        SCENARIO:  the document starts 10 bytes into the stream

        EXPECTED RESULT:  offsets are taken relative to the document start
        """
        entries = [make_entry(282, 5, 1, 8 + fixtures.ifd_length(1))]
        b = make_header() + make_ifd(entries) + struct.pack('<II', 300, 1)
        f = io.BytesIO(b'\xff' * 10 + b)

        doc = exifio.decode(f, offset=10)
        self.assertEqual(doc[0].get(282), URational([(300, 1)]))

    def test_no_warnings_for_good_document(self):
        b = make_header() + make_ifd([ORIENTATION_ENTRY])
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            exifio.decode(io.BytesIO(b))

    def test_empty_directory(self):
        doc = exifio.decode(io.BytesIO(make_header() + make_ifd([])))
        self.assertEqual(doc[0].entries, [])
