"""Byte order handling.

Every multi-byte quantity in a TIFF document is stored in the byte order
announced by the first two bytes of the header, either 'II' (little endian)
or 'MM' (big endian).
"""
# standard library imports
import struct

# 3rd party library imports
import numpy as np

# local imports
from .core import MalformedHeaderError, TruncatedError, EncodeError


class ByteOrder(object):
    """
    Reads and writes fixed-width quantities in a single byte order.

    Attributes
    ----------
    endian : str
        Either '<' for little-endian, or '>' for big-endian.
    """

    def __init__(self, endian):
        if endian not in ('<', '>'):
            msg = f"The endian indicator must be '<' or '>', not {endian!r}."
            raise ValueError(msg)
        self.endian = endian

    @classmethod
    def from_magic(cls, magic):
        """Determine the byte order from the first two bytes of a TIFF
        header.
        """
        if magic == b'II':
            return LITTLE_ENDIAN
        elif magic == b'MM':
            return BIG_ENDIAN

        msg = (
            f"The byte order indication in the TIFF header ({magic}) is "
            f"invalid.  It should be either {bytes([73, 73])} or "
            f"{bytes([77, 77])}."
        )
        raise MalformedHeaderError(msg)

    @property
    def magic(self):
        return b'II' if self.endian == '<' else b'MM'

    def __repr__(self):
        return f"exifio.byteorder.ByteOrder('{self.endian}')"

    def __str__(self):
        return 'little endian' if self.endian == '<' else 'big endian'

    def __eq__(self, other):
        return isinstance(other, ByteOrder) and self.endian == other.endian

    def __hash__(self):
        return hash(self.endian)

    def dtype(self, code):
        """Return a numpy dtype in this byte order.

        Parameters
        ----------
        code : str
            numpy type code without byte order, e.g. 'u2'
        """
        return np.dtype(self.endian + code)

    def unpack(self, fmt, buffer):
        return struct.unpack(self.endian + fmt, buffer)

    def pack(self, fmt, *values):
        try:
            return struct.pack(self.endian + fmt, *values)
        except struct.error as err:
            msg = f"Unable to pack {values} with format {fmt!r}:  {err}"
            raise EncodeError(msg)

    def read(self, fptr, fmt):
        """Read and unpack one struct format from the stream.

        Returns
        -------
        tuple
            The unpacked values.
        """
        num_bytes = struct.calcsize(self.endian + fmt)
        buffer = fptr.read(num_bytes)
        if len(buffer) < num_bytes:
            msg = (
                f"Expected to read {num_bytes} bytes but only "
                f"{len(buffer)} were available."
            )
            raise TruncatedError(msg)
        return self.unpack(fmt, buffer)

    def _read_one(self, fptr, fmt):
        value, = self.read(fptr, fmt)
        return value

    def read_uint16(self, fptr):
        return self._read_one(fptr, 'H')

    def read_uint32(self, fptr):
        return self._read_one(fptr, 'I')

    def read_uint64(self, fptr):
        return self._read_one(fptr, 'Q')

    def read_int16(self, fptr):
        return self._read_one(fptr, 'h')

    def read_int32(self, fptr):
        return self._read_one(fptr, 'i')

    def read_int64(self, fptr):
        return self._read_one(fptr, 'q')

    def read_float32(self, fptr):
        return self._read_one(fptr, 'f')

    def read_float64(self, fptr):
        return self._read_one(fptr, 'd')

    def pack_uint16(self, value):
        return self.pack('H', value)

    def pack_uint32(self, value):
        return self.pack('I', value)

    def pack_uint64(self, value):
        return self.pack('Q', value)

    def pack_int16(self, value):
        return self.pack('h', value)

    def pack_int32(self, value):
        return self.pack('i', value)

    def pack_int64(self, value):
        return self.pack('q', value)

    def pack_float32(self, value):
        return self.pack('f', value)

    def pack_float64(self, value):
        return self.pack('d', value)


LITTLE_ENDIAN = ByteOrder('<')
BIG_ENDIAN = ByteOrder('>')
