"""Typed values of directory entries.

Each of the twelve TIFF datatypes is represented by its own class.  A value
knows its format code, the width of a single element and the number of
elements, and can convert itself to and from its on-disk representation in
either byte order.
"""
# 3rd party library imports
import numpy as np

# local imports
from . import core
from .core import (
    EncodeError, InvalidTypeCodeError, MissingTerminatorError, TruncatedError
)

# Long sequences are abbreviated when printed.
_MAX_PRINTED_ITEMS = 16


class Value(object):
    """Superclass for entry values.

    Attributes
    ----------
    format_code : int
        TIFF datatype, 1 through 12.
    longname : str
        more verbose description of the datatype
    nbytes : int
        width of a single element in bytes
    data : object
        the interpreted payload
    """
    format_code = None
    longname = None
    nbytes = 0

    def __init__(self, data):
        self.data = data

    @property
    def count(self):
        """Number of elements, as recorded in the entry header."""
        return len(self.data)

    @property
    def total_size(self):
        return self.nbytes * self.count

    def __eq__(self, other):
        return type(self) is type(other) and self.data == other.data

    def __hash__(self):
        return hash((self.format_code, self.data))

    def __repr__(self):
        return f"exifio.values.{type(self).__name__}({self.data!r})"

    def __str__(self):
        return f"{self.longname} {self._format_items(self.data)}"

    def _format_items(self, items):
        text = ', '.join(str(item) for item in items[:_MAX_PRINTED_ITEMS])
        if len(items) > _MAX_PRINTED_ITEMS:
            text += f', ... ({len(items)} items)'
        return f'[{text}]'

    def encode(self, byteorder):
        """Must be implemented in a subclass.
        """
        msg = f"Not supported for {self.longname} values."
        raise NotImplementedError(msg)

    @classmethod
    def decode(cls, payload, count, byteorder):
        """Must be implemented in a subclass.
        """
        msg = f"Not supported for {cls.longname} values."
        raise NotImplementedError(msg)


class _NumericValue(Value):
    """Sequence of fixed-width numbers."""

    def __init__(self, data):
        self.data = tuple(data)

    def _dtype(self, byteorder):
        return byteorder.dtype(core.DATATYPE2FMT[self.format_code]["nptype"])

    def _validate(self, dtype):
        if dtype.kind not in ('u', 'i'):
            return

        info = np.iinfo(dtype)
        for item in self.data:
            if not isinstance(item, (int, np.integer)):
                msg = f"{self.longname} values must be integers, not {item!r}."
                raise EncodeError(msg)
            if item < info.min or item > info.max:
                msg = (
                    f"{item} is outside the range of a {self.longname} value "
                    f"({info.min} to {info.max})."
                )
                raise EncodeError(msg)

    def encode(self, byteorder):
        dtype = self._dtype(byteorder)
        self._validate(dtype)
        try:
            return np.asarray(self.data, dtype=dtype).tobytes()
        except (TypeError, ValueError) as err:
            msg = f"Unable to encode {self!r}:  {err}"
            raise EncodeError(msg)

    @classmethod
    def decode(cls, payload, count, byteorder):
        if count == 0:
            return cls(())
        dtype = byteorder.dtype(core.DATATYPE2FMT[cls.format_code]["nptype"])
        return cls(np.frombuffer(payload, dtype=dtype, count=count).tolist())


class _RationalValue(_NumericValue):
    """Sequence of numerator/denominator pairs."""

    def __init__(self, data):
        self.data = tuple(tuple(pair) for pair in data)

    def __str__(self):
        items = [f'{num}/{den}' for num, den in self.data]
        return f"{self.longname} {self._format_items(items)}"

    def _dtype(self, byteorder):
        return self._pair_dtype(byteorder)

    @classmethod
    def _pair_dtype(cls, byteorder):
        code = core.DATATYPE2FMT[cls.format_code]["nptype"]
        return np.dtype([
            ('numerator', byteorder.dtype(code)),
            ('denominator', byteorder.dtype(code)),
        ])

    def _validate(self, dtype):
        info = np.iinfo(dtype['numerator'])
        for pair in self.data:
            if len(pair) != 2:
                msg = (
                    f"{self.longname} values must be (numerator, "
                    f"denominator) pairs, not {pair!r}."
                )
                raise EncodeError(msg)
            for item in pair:
                if not isinstance(item, (int, np.integer)):
                    msg = (
                        f"{self.longname} terms must be integers, not "
                        f"{item!r}."
                    )
                    raise EncodeError(msg)
                if item < info.min or item > info.max:
                    msg = (
                        f"{item} is outside the range of a {self.longname} "
                        f"term ({info.min} to {info.max})."
                    )
                    raise EncodeError(msg)

    def encode(self, byteorder):
        dtype = self._dtype(byteorder)
        self._validate(dtype)
        return np.array(self.data, dtype=dtype).tobytes()

    @classmethod
    def decode(cls, payload, count, byteorder):
        if count == 0:
            return cls(())
        dtype = cls._pair_dtype(byteorder)
        return cls(np.frombuffer(payload, dtype=dtype, count=count).tolist())


class Byte(_NumericValue):
    format_code = core.BYTE
    longname = 'Byte'
    nbytes = 1


class Ascii(Value):
    """Null-terminated text.

    The terminator is not part of the text but is counted in the element
    count, as it is on disk.
    """
    format_code = core.ASCII
    longname = 'Ascii'
    nbytes = 1

    def __init__(self, data):
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).decode('utf-8', 'surrogateescape')
        elif not isinstance(data, str):
            msg = f"Ascii values must be text, not {type(data).__name__}."
            raise TypeError(msg)
        self.data = data

    def _encoded(self):
        if '\x00' in self.data:
            msg = f"Ascii value {self.data!r} contains a null character."
            raise EncodeError(msg)
        try:
            return self.data.encode('utf-8', 'surrogateescape')
        except UnicodeEncodeError as err:
            raise EncodeError(str(err))

    @property
    def count(self):
        return len(self._encoded()) + 1

    def __str__(self):
        # Undecodable bytes are carried as surrogates, which cannot be
        # printed.
        text = self.data.encode('utf-8', 'surrogateescape')
        return f"{self.longname} {text.decode('utf-8', 'replace')!r}"

    def encode(self, byteorder):
        return self._encoded() + b'\x00'

    @classmethod
    def decode(cls, payload, count, byteorder):
        null_term = payload.find(b'\x00')
        if null_term == -1:
            msg = f"Invalid ASCII data {payload!r}, no null terminator."
            raise MissingTerminatorError(msg)
        return cls(payload[:null_term])


class UShort(_NumericValue):
    format_code = core.SHORT
    longname = 'UShort'
    nbytes = 2


class ULong(_NumericValue):
    format_code = core.LONG
    longname = 'ULong'
    nbytes = 4


class URational(_RationalValue):
    format_code = core.RATIONAL
    longname = 'URational'
    nbytes = 8


class SignedByte(_NumericValue):
    format_code = core.SBYTE
    longname = 'SignedByte'
    nbytes = 1


class Undefined(Value):
    """Opaque bytes, often vendor specific."""
    format_code = core.UNDEFINED
    longname = 'Undefined'
    nbytes = 1

    def __init__(self, data):
        self.data = bytes(data)

    def __str__(self):
        if len(self.data) > _MAX_PRINTED_ITEMS:
            return f"{self.longname} <{len(self.data)} bytes>"
        return f"{self.longname} {self.data!r}"

    def encode(self, byteorder):
        return self.data

    @classmethod
    def decode(cls, payload, count, byteorder):
        return cls(payload)


class SShort(_NumericValue):
    format_code = core.SSHORT
    longname = 'SShort'
    nbytes = 2


class SLong(_NumericValue):
    format_code = core.SLONG
    longname = 'SLong'
    nbytes = 4


class SRational(_RationalValue):
    format_code = core.SRATIONAL
    longname = 'SRational'
    nbytes = 8


class _FloatValue(_NumericValue):
    """Sequence of IEEE-754 numbers.  NaN elements compare equal to each
    other so that a decoded copy equals its source.
    """

    def __eq__(self, other):
        if type(self) is not type(other) or len(self.data) != len(other.data):
            return False
        return all(
            a == b or (a != a and b != b)
            for a, b in zip(self.data, other.data)
        )

    def __hash__(self):
        # NaN hashes by identity
        return hash((self.format_code, len(self.data)))


class Float32(_FloatValue):
    format_code = core.FLOAT
    longname = 'Float32'
    nbytes = 4


class Float64(_FloatValue):
    format_code = core.DOUBLE
    longname = 'Float64'
    nbytes = 8


# Map each TIFF datatype to the corresponding class.
_VALUE_WITH_CODE = {
    core.BYTE: Byte,
    core.ASCII: Ascii,
    core.SHORT: UShort,
    core.LONG: ULong,
    core.RATIONAL: URational,
    core.SBYTE: SignedByte,
    core.UNDEFINED: Undefined,
    core.SSHORT: SShort,
    core.SLONG: SLong,
    core.SRATIONAL: SRational,
    core.FLOAT: Float32,
    core.DOUBLE: Float64,
}


def element_width(code):
    """Return the width in bytes of a single element of a TIFF datatype, or
    zero if the datatype is not recognized.
    """
    try:
        return _VALUE_WITH_CODE[code].nbytes
    except KeyError:
        return 0


def decode_value(code, payload, count, byteorder):
    """Interpret an entry payload.

    Parameters
    ----------
    code : int
        TIFF datatype from the entry header.
    payload : bytes
        Raw payload, at least count elements long.  Anything past the first
        count elements (such as inline padding) is ignored.
    count : int
        Number of elements from the entry header.
    byteorder : ByteOrder
        Byte order of the document.

    Returns
    -------
    Value
    """
    try:
        cls = _VALUE_WITH_CODE[code]
    except KeyError:
        msg = f"Invalid TIFF tag datatype ({code})."
        raise InvalidTypeCodeError(msg)

    num_bytes = cls.nbytes * count
    if len(payload) < num_bytes:
        msg = (
            f"A {cls.longname} payload of {count} elements requires "
            f"{num_bytes} bytes, but only {len(payload)} were available."
        )
        raise TruncatedError(msg)

    return cls.decode(payload[:num_bytes], count, byteorder)
