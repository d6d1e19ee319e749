"""Core definitions to be shared amongst the modules.
"""

# The TIFF header marker following the byte order indication.  BigTIFF (43)
# is not supported.
TIFF = 42

# Length of the document header and of a single directory entry.
HEADER_LENGTH = 8
ENTRY_LENGTH = 12

# Payloads of at most this many bytes are stored within the entry itself.
MAX_INLINE_LENGTH = 4

# Data types
BYTE = 1
ASCII = 2
SHORT = 3
LONG = 4
RATIONAL = 5
SBYTE = 6
UNDEFINED = 7
SSHORT = 8
SLONG = 9
SRATIONAL = 10
FLOAT = 11
DOUBLE = 12

# maps the TIFF enumerated datatype to the corresponding struct/numpy
# datatype code and the data width
DATATYPE2FMT = {
    BYTE: {"format": "B", "nbytes": 1, "nptype": "u1"},
    ASCII: {"format": "B", "nbytes": 1, "nptype": "u1"},
    SHORT: {"format": "H", "nbytes": 2, "nptype": "u2"},
    LONG: {"format": "I", "nbytes": 4, "nptype": "u4"},
    RATIONAL: {"format": "II", "nbytes": 8, "nptype": "u4"},
    SBYTE: {"format": "b", "nbytes": 1, "nptype": "i1"},
    UNDEFINED: {"format": "B", "nbytes": 1, "nptype": "u1"},
    SSHORT: {"format": "h", "nbytes": 2, "nptype": "i2"},
    SLONG: {"format": "i", "nbytes": 4, "nptype": "i4"},
    SRATIONAL: {"format": "ii", "nbytes": 8, "nptype": "i4"},
    FLOAT: {"format": "f", "nbytes": 4, "nptype": "f4"},
    DOUBLE: {"format": "d", "nbytes": 8, "nptype": "f8"},
}


class ExifError(RuntimeError):
    """Base class for all errors raised while decoding or encoding."""
    pass


class DecodeError(ExifError):
    pass


class MalformedHeaderError(DecodeError):
    """The byte order indication or the TIFF marker is not recognized."""
    pass


class TruncatedError(DecodeError):
    """A read could not obtain the required number of bytes."""
    pass


class InvalidTypeCodeError(DecodeError):
    """This exception exists soley to better communicate up the stack that
    the entry datatype is not one of the twelve TIFF datatypes.
    """
    pass


class MissingTerminatorError(DecodeError):
    """An ASCII payload has no null byte."""
    pass


class SeekOutOfRangeError(DecodeError):
    """An offset points past the end of the stream."""
    pass


class ChainTooLongError(DecodeError):
    pass


class DirectoryLoopError(DecodeError):
    """The same directory offset was reached twice."""
    pass


class NoExifSegmentError(DecodeError):
    pass


class EncodeError(ExifError):
    pass
