"""Locate Exif metadata within JPEG files.

References
----------
.. [JFIF] http://vip.sugovica.hu/Sardi/kepnezo/JPEG%20File%20Layout%20and%20Format.htm
.. [EXIV2] http://dev.exiv2.org/projects/exiv2/wiki/The_Metadata_in_JPEG_files
"""  # noqa : E501
# standard library imports
import io
import logging
import struct

# local imports
from .core import DecodeError, NoExifSegmentError, TruncatedError
from .streams import OffsetReader, check_range
from .tags import JPEG_THUMBNAIL_LENGTH, JPEG_THUMBNAIL_OFFSET
from .values import ULong, UShort

logger = logging.getLogger(__name__)

_EXIF_HEADER = b'Exif\x00\x00'


def _read_segment(f, marker):
    """Read the payload of a marker segment, i.e. everything after the
    16-bit length.
    """
    data = f.read(2)
    if len(data) < 2:
        msg = f'Unable to read the length of the {marker} segment.'
        raise TruncatedError(msg)

    size, = struct.unpack('>H', data)
    if size < 2:
        msg = f'The {marker} segment has an invalid length ({size}).'
        raise DecodeError(msg)

    buffer = f.read(size - 2)
    if len(buffer) < size - 2:
        msg = (
            f'The {marker} segment should have {size - 2} bytes of payload, '
            f'but only {len(buffer)} were available.'
        )
        raise TruncatedError(msg)
    return buffer


def extract_exif(f):
    """Return the TIFF document carried by the Exif APP1 segment.

    Parameters
    ----------
    f : file
        Open file object positioned at the start of the JPEG.

    Returns
    -------
    bytes
        The APP1 payload following the 'Exif\\0\\0' header.
    """
    while True:

        offset = f.tell()
        marker = f.read(2)
        if len(marker) < 2:
            raise NoExifSegmentError('No Exif APP1 segment was found.')

        if marker[0] != 0xff:
            msg = (
                f'Expected a segment marker at byte offset {offset}, found '
                f'{marker}.'
            )
            raise NoExifSegmentError(msg)

        match marker[1]:

            case 0x00 | 0xd8:
                # marker-only, byte stuffing or SOI
                pass

            case 0xd9 | 0xda:
                # EOI or SOS, the metadata segments are all behind us
                msg = 'No Exif APP1 segment was found before the image data.'
                raise NoExifSegmentError(msg)

            case 0xe1:
                # APP1, may be Exif or XMP
                buffer = _read_segment(f, 'APP1')
                if buffer[:6] == _EXIF_HEADER:
                    logger.debug(f'Exif APP1 segment at byte offset {offset}')
                    return buffer[6:]

                msg = f'Skipping non-Exif APP1 segment at offset {offset}'
                logger.debug(msg)

            case _:
                # We don't care about anything else.
                data = f.read(2)
                if len(data) < 2:
                    msg = f'Unable to read the length of segment {marker}.'
                    raise TruncatedError(msg)
                size, = struct.unpack('>H', data)
                if size < 2:
                    msg = f'Segment {marker} has an invalid length ({size}).'
                    raise DecodeError(msg)
                msg = (
                    f'Skipping segment {marker} at byte offset {offset} '
                    f'({size} bytes)'
                )
                logger.debug(msg)
                f.seek(size - 2, io.SEEK_CUR)


def extract_thumbnail(directory, fptr, origin=0):
    """Return the JPEG thumbnail referenced by a directory, usually IFD1.

    Parameters
    ----------
    directory : Directory
        Directory possibly holding the JPEGInterchangeFormat and
        JPEGInterchangeFormatLength tags.
    fptr : file
        The stream the directory was decoded from.
    origin : int
        Position of the TIFF header within the stream.

    Returns
    -------
    bytes or None
        The thumbnail, or None if the directory does not reference one.
    """
    offset = directory.get(JPEG_THUMBNAIL_OFFSET)
    length = directory.get(JPEG_THUMBNAIL_LENGTH)
    if offset is None or length is None:
        return None

    # The tags are single LONG (or SHORT) values.
    for value in (offset, length):
        if not isinstance(value, (ULong, UShort)) or value.count != 1:
            msg = (
                f'The thumbnail offset ({offset}) and length ({length}) must '
                f'be single integers.'
            )
            raise DecodeError(msg)
    offset, = offset.data
    length, = length.data

    if offset == 0 or length == 0:
        return None

    reader = OffsetReader(fptr, origin=origin)
    check_range(reader, offset, length, 'JPEG thumbnail')

    orig_pos = reader.tell()
    reader.seek(offset)
    data = reader.read(length)
    reader.seek(orig_pos)
    return data
