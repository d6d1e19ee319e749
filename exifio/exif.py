"""Access to the TIFF-structured metadata of an Exif blob or TIFF file.

A document consists of an 8-byte header

    [byte order, 'II' or 'MM'][42, 2 bytes][offset to first directory, 4]

followed by a chain of directories, each possibly holding sub-directories.
"""
# standard library imports
import logging

# local imports
from . import core
from .byteorder import ByteOrder, LITTLE_ENDIAN
from .core import (
    ChainTooLongError, EncodeError, MalformedHeaderError, TruncatedError
)
from .ifd import Directory, seek_directory
from .options import get_option
from .streams import OffsetReader, PositionWriter

logger = logging.getLogger(__name__)


class Exif(object):
    """
    A decoded TIFF metadata document.

    Attributes
    ----------
    ifds : list
        Top-level directories in the order they are chained on disk.
    byteorder : ByteOrder or None
        Byte order of the source the document was decoded from.  Documents
        are always written little endian.
    """

    def __init__(self, ifds=None, byteorder=None):
        self.ifds = [] if ifds is None else list(ifds)
        self.byteorder = byteorder

    def __eq__(self, other):
        if not isinstance(other, Exif):
            return NotImplemented
        return self.ifds == other.ifds

    def __len__(self):
        return len(self.ifds)

    def __iter__(self):
        return iter(self.ifds)

    def __getitem__(self, idx):
        return self.ifds[idx]

    def __repr__(self):
        return f"exifio.Exif(ifds=<{len(self.ifds)} directories>)"

    def __str__(self):
        lst = []
        if self.byteorder is not None:
            lst.append(f"Byte order:  {self.byteorder}")
        lst.extend(str(ifd) for ifd in self.ifds)
        return '\n'.join(lst)

    @classmethod
    def parse(cls, fptr):
        """Parse a TIFF document.

        Parameters
        ----------
        fptr : file
            Open file object positioned at the TIFF header.  All offsets in
            the document are relative to this position.

        Returns
        -------
        Exif
            The decoded document.
        """
        fptr = OffsetReader(fptr)

        read_buffer = fptr.read(core.HEADER_LENGTH)
        if len(read_buffer) < core.HEADER_LENGTH:
            msg = (
                f"The TIFF header requires {core.HEADER_LENGTH} bytes, but "
                f"only {len(read_buffer)} were available."
            )
            raise TruncatedError(msg)

        # big endian or little endian?
        byteorder = ByteOrder.from_magic(read_buffer[:2])

        marker, offset = byteorder.unpack('HI', read_buffer[2:])
        if marker != core.TIFF:
            msg = (
                f"The TIFF header marker ({marker}) is invalid, it should be "
                f"{core.TIFF}."
            )
            raise MalformedHeaderError(msg)

        if offset == 0:
            msg = "The TIFF header does not point to any directory."
            raise MalformedHeaderError(msg)

        logger.debug(f"{byteorder}, first directory @ {offset}")

        max_directories = get_option('parse.max_directories')
        visited = set()
        ifds = []
        while offset != 0:
            if len(ifds) == max_directories:
                msg = (
                    f"The directory chain is too long, giving up after "
                    f"{max_directories} directories."
                )
                raise ChainTooLongError(msg)

            seek_directory(fptr, offset)
            ifd, offset = Directory.parse(fptr, byteorder, len(ifds), visited)
            ifds.append(ifd)

        return cls(ifds, byteorder)

    def write(self, fptr, origin=None):
        """Write the document, always little endian.

        Parameters
        ----------
        fptr : file
            Open file object, only write and seek are required.
        origin : int, optional
            Position of the document start within the file.  Defaults to the
            current position.
        """
        if len(self.ifds) == 0:
            raise EncodeError("A document must have at least one directory.")

        byteorder = LITTLE_ENDIAN

        writer = PositionWriter(fptr, origin=origin)
        writer.write(
            byteorder.magic
            + byteorder.pack('HI', core.TIFF, core.HEADER_LENGTH)
        )

        for idx, ifd in enumerate(self.ifds):
            ifd.write(writer, byteorder, last=(idx == len(self.ifds) - 1))

        logger.debug(f"wrote {writer.position} bytes")


def decode(fptr, offset=None):
    """Decode a TIFF document from a stream.

    Parameters
    ----------
    fptr : file
        Seekable binary stream.
    offset : int, optional
        Position of the TIFF header in the stream.  Defaults to the current
        position.

    Returns
    -------
    Exif
    """
    if offset is not None:
        fptr.seek(offset)
    return Exif.parse(fptr)


def encode(document, fptr, origin=None):
    """Encode a document to a stream.

    Parameters
    ----------
    document : Exif
    fptr : file
        Destination supporting write and seek.
    origin : int, optional
        Position of the document start in the stream.  Defaults to the
        current position.
    """
    document.write(fptr, origin=origin)
