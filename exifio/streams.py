"""Stream wrappers that present offsets relative to the start of a TIFF
document.

All offsets stored in a TIFF document are absolute from the start of the
document header, which need not be the start of the underlying file (an
Exif blob inside a JPEG APP1 segment, for example).
"""
# standard library imports
import io

# local imports
from .core import SeekOutOfRangeError


def stream_length(fptr):
    """Return the length of a seekable stream without moving it."""
    pos = fptr.tell()
    end = fptr.seek(0, io.SEEK_END)
    fptr.seek(pos)
    return end


def check_range(fptr, offset, num_bytes, what):
    """Make sure that num_bytes starting at offset lie within the stream."""
    length = stream_length(fptr)
    if offset + num_bytes > length:
        msg = (
            f"The {what} at offset {offset} ({num_bytes} bytes) extends past "
            f"the end of the stream ({length} bytes)."
        )
        raise SeekOutOfRangeError(msg)


class OffsetReader(object):
    """Read-only view of a stream where position 0 is the document origin.

    Attributes
    ----------
    fptr : file-like
        The wrapped stream.
    origin : int
        Position of the document start within the wrapped stream.
    """

    def __init__(self, fptr, origin=None):
        self.fptr = fptr
        self.origin = fptr.tell() if origin is None else origin

    def __getattr__(self, name):
        return getattr(self.fptr, name)

    def read(self, size=-1):
        return self.fptr.read(size)

    def tell(self):
        return self.fptr.tell() - self.origin

    def seek(self, offset, whence=io.SEEK_SET):
        if whence == io.SEEK_SET:
            offset += self.origin
        return self.fptr.seek(offset, whence) - self.origin


class PositionWriter(object):
    """Keeps a running absolute byte offset while writing.

    The position is incremented on every write and resynchronized on every
    seek, so the encoder never has to ask the destination where it is.

    Attributes
    ----------
    fptr : file-like
        The wrapped destination.
    origin : int
        Position of the document start within the destination.  Defaults
        to the current position, or 0 if the destination cannot report it.
    position : int
        Current offset relative to the document start.
    """

    def __init__(self, fptr, origin=None):
        self.fptr = fptr
        if origin is None:
            try:
                origin = fptr.tell()
            except (AttributeError, OSError):
                # no position query, so the document starts at 0
                origin = 0
        self.origin = origin
        self.position = 0

    def write(self, data):
        self.fptr.write(data)
        self.position += len(data)
        return len(data)

    def seek(self, position):
        self.fptr.seek(self.origin + position)
        self.position = position
        return self.position

    def tell(self):
        return self.position
