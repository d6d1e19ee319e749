"""Image file directories (IFDs) and their entries.

On disk a directory is laid out as

    [entry count, 2 bytes]
    [tag, 2][datatype, 2][count, 4][payload or offset, 4]  x entry count
    [offset to next directory, 4 bytes; 0 = none]

Payloads of at most 4 bytes are stored in the entry itself, anything longer
is stored elsewhere and the entry holds the absolute offset to it.
"""
# standard library imports
import logging
import textwrap
import warnings

# local imports
from . import core
from .byteorder import LITTLE_ENDIAN
from .core import (
    DirectoryLoopError, EncodeError, TruncatedError
)
from .options import get_option
from .streams import check_range
from .tags import (
    EXIF_IFD_POINTER, GPS_INFO_IFD_POINTER, INTEROPERABILITY_IFD_POINTER,
    SUBIFD_TAGS, tag_name
)
from .values import decode_value, element_width

logger = logging.getLogger(__name__)

_SUBIFD_DISPLAY = {
    EXIF_IFD_POINTER: 'Exif IFD',
    GPS_INFO_IFD_POINTER: 'GPS IFD',
    INTEROPERABILITY_IFD_POINTER: 'Interoperability IFD',
}


def seek_directory(fptr, offset):
    """Position the stream at the start of a directory."""
    check_range(fptr, offset, 2, 'directory')
    fptr.seek(offset)


class EntryHeader(object):
    """The fixed 12-byte portion of a directory entry.

    Attributes
    ----------
    tag : int
        16-bit tag identifier
    format_code : int
        TIFF datatype, not necessarily a valid one
    count : int
        number of elements
    inline : bytes or None
        the 4 payload bytes when the payload fits into the entry
    offset : int or None
        absolute offset to the payload when it does not
    """

    def __init__(self, tag, format_code, count, inline=None, offset=None):
        self.tag = tag
        self.format_code = format_code
        self.count = count
        self.inline = inline
        self.offset = offset

    def __repr__(self):
        msg = (
            f"exifio.ifd.EntryHeader(tag={self.tag}, "
            f"format_code={self.format_code}, count={self.count}, "
        )
        if self.is_inline:
            msg += f"inline={self.inline!r})"
        else:
            msg += f"offset={self.offset})"
        return msg

    @property
    def is_inline(self):
        return self.inline is not None

    @property
    def data_size(self):
        return element_width(self.format_code) * self.count

    @classmethod
    def parse(cls, fptr, byteorder):
        """Parse a single entry header.

        Parameters
        ----------
        fptr : file
            Open file object positioned at the entry.
        byteorder : ByteOrder
            Byte order of the document.

        Returns
        -------
        EntryHeader
        """
        read_buffer = fptr.read(core.ENTRY_LENGTH)
        if len(read_buffer) < core.ENTRY_LENGTH:
            msg = (
                f"Expected a {core.ENTRY_LENGTH}-byte directory entry but "
                f"only {len(read_buffer)} bytes were available."
            )
            raise TruncatedError(msg)

        tag, format_code, count = byteorder.unpack('HHI', read_buffer[:8])

        # An unrecognized datatype has zero width, so it always looks like an
        # inline payload.  Only the value decoding will object to it.
        payload_length = element_width(format_code) * count
        if payload_length <= core.MAX_INLINE_LENGTH:
            return cls(tag, format_code, count, inline=read_buffer[8:])

        offset, = byteorder.unpack('I', read_buffer[8:])
        return cls(tag, format_code, count, offset=offset)

    def payload(self, fptr):
        """Return the raw payload bytes.

        An out-of-line payload is read from its offset, after which the
        stream is put back where it was.
        """
        if self.is_inline:
            return self.inline

        num_bytes = self.data_size
        what = f'payload of tag {self.tag}'
        check_range(fptr, self.offset, num_bytes, what)

        orig_pos = fptr.tell()
        fptr.seek(self.offset)
        read_buffer = fptr.read(num_bytes)
        fptr.seek(orig_pos)

        if len(read_buffer) < num_bytes:
            msg = (
                f"The payload of tag {self.tag} requires {num_bytes} bytes "
                f"but only {len(read_buffer)} were available."
            )
            raise TruncatedError(msg)
        return read_buffer

    def value(self, fptr, byteorder):
        payload = self.payload(fptr)
        return decode_value(self.format_code, payload, self.count, byteorder)


def write_pointer(writer, tag, offset, byteorder=LITTLE_ENDIAN):
    """Write the entry for a sub-directory pointer.

    The pointer is always a single inline LONG holding the absolute offset of
    the sub-directory, no matter how large the sub-directory is.
    """
    writer.write(byteorder.pack('HHII', tag, core.LONG, 1, offset))


class Entry(object):
    """A tag and its value.

    Attributes
    ----------
    tag : int
        16-bit tag identifier
    value : exifio.values.Value
        the typed value
    """

    def __init__(self, tag, value):
        self.tag = tag
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, Entry):
            return NotImplemented
        return self.tag == other.tag and self.value == other.value

    def __repr__(self):
        return f"exifio.ifd.Entry({self.tag}, {self.value!r})"

    def __str__(self):
        return self.describe()

    def describe(self, ident=0):
        name = tag_name(self.tag, ident)
        if name == self.tag:
            return f"{self.tag}:  {self.value}"
        return f"{name} ({self.tag}):  {self.value}"

    def write_header(self, writer, data_offset, byteorder=LITTLE_ENDIAN):
        """Write the 12-byte entry header.

        Parameters
        ----------
        writer : PositionWriter
            destination
        data_offset : int
            absolute offset where the payload will be written if it does not
            fit into the entry
        byteorder : ByteOrder
            byte order of the output

        Returns
        -------
        bool
            True if the payload must still be written to the data segment,
            False if it was written inline.
        """
        value = self.value
        header = byteorder.pack(
            'HHI', self.tag, value.format_code, value.count
        )
        writer.write(header)

        if value.total_size > core.MAX_INLINE_LENGTH:
            writer.write(byteorder.pack('I', data_offset))
            return True

        # the payload DOES fit into the entry, pad it out to 4 bytes
        write_buffer = value.encode(byteorder)
        padding = bytes(core.MAX_INLINE_LENGTH - len(write_buffer))
        writer.write(write_buffer + padding)
        return False


class Directory(object):
    """Corresponds to a TIFF IFD data structure on file.

    Attributes
    ----------
    ident : int
        The tag of the pointer leading to this directory, or the position of a
        top-level directory in the chain of directories.
    entries : list
        Entries in on-disk order.
    children : list
        Sub-directories reached through the known pointer tags.
    """

    def __init__(self, ident=0, entries=None, children=None):
        self.ident = ident
        self.entries = [] if entries is None else list(entries)
        self.children = [] if children is None else list(children)

    def __eq__(self, other):
        if not isinstance(other, Directory):
            return NotImplemented
        return (
            self.ident == other.ident
            and self.entries == other.entries
            and self.children == other.children
        )

    def __repr__(self):
        msg = (
            f"exifio.ifd.Directory(ident={self.ident}, "
            f"entries=<{len(self.entries)} entries>, "
            f"children=<{len(self.children)} directories>)"
        )
        return msg

    def __str__(self):
        msg = self.title
        if not get_option('print.short'):
            for entry in self.entries:
                msg += '\n' + self._indent(entry.describe(self.ident))
        for child in self.children:
            # Indent the sub-directories to make the association clear.
            msg += '\n' + self._indent(str(child))
        return msg

    @property
    def title(self):
        try:
            name = _SUBIFD_DISPLAY[self.ident]
        except KeyError:
            name = f'IFD {self.ident}'
        return f"{name}:  {len(self.entries)} entries"

    def _indent(self, textstr, indent_level=4):
        return textwrap.indent(textstr, ' ' * indent_level)

    def get(self, tag):
        """Return the value of the first entry with this tag, or None."""
        for entry in self.entries:
            if entry.tag == tag:
                return entry.value
        return None

    @classmethod
    def parse(cls, fptr, byteorder, ident=0, visited=None):
        """Parse a directory and, recursively, its sub-directories.

        Parameters
        ----------
        fptr : file
            Open file object positioned at the start of the directory.
        byteorder : ByteOrder
            Byte order of the document.
        ident : int
            Identifier for this directory.
        visited : set, optional
            Offsets of the directories decoded so far in this document.

        Returns
        -------
        tuple
            The directory and the offset to the next directory (0 if none).
        """
        if visited is None:
            visited = set()

        start = fptr.tell()
        if start in visited:
            msg = f"The directory at offset {start} was already decoded."
            raise DirectoryLoopError(msg)
        visited.add(start)

        num_entries = byteorder.read_uint16(fptr)
        logger.debug(f"directory {ident} @ {start}:  {num_entries} entries")

        # the entry headers are contiguous, followed by the offset to the
        # next directory
        headers = [
            EntryHeader.parse(fptr, byteorder) for _ in range(num_entries)
        ]
        next_offset = byteorder.read_uint32(fptr)

        entries = []
        children = []

        for header in headers:

            logger.debug(f"tag #: {header.tag}, datatype {header.format_code}")

            if header.tag in SUBIFD_TAGS:

                if header.is_inline:
                    # found a sub-directory pointer, go get that directory
                    # and come on back
                    offset, = byteorder.unpack('I', header.inline)
                    orig_pos = fptr.tell()
                    seek_directory(fptr, offset)
                    child, _ = cls.parse(fptr, byteorder, header.tag, visited)
                    fptr.seek(orig_pos)
                    children.append(child)
                    continue

                msg = (
                    f"The sub-directory pointer tag {header.tag} has a "
                    f"{header.data_size}-byte payload that is not stored "
                    f"inline.  It is kept as an ordinary entry."
                )
                warnings.warn(msg, UserWarning)

            entries.append(Entry(header.tag, header.value(fptr, byteorder)))

        return cls(ident, entries, children), next_offset

    def encoded_size(self):
        """Number of bytes this directory occupies when written, including
        its out-of-line payloads and all of its sub-directories.
        """
        num_entries = len(self.entries) + len(self.children)
        size = 2 + num_entries * core.ENTRY_LENGTH + 4
        for entry in self.entries:
            if entry.value.total_size > core.MAX_INLINE_LENGTH:
                size += entry.value.total_size
        for child in self.children:
            size += child.encoded_size()
        return size

    def write(self, writer, byteorder=LITTLE_ENDIAN, last=True):
        """Write the directory, its data segment and its sub-directories.

        The entry headers are written first.  They are followed by the
        out-of-line payloads in entry order, and then by each sub-directory
        in full.  The offset to the next directory is written as a
        placeholder and patched once it is known.

        Parameters
        ----------
        writer : PositionWriter
            Destination, positioned where the directory is to start.
        byteorder : ByteOrder
            Byte order of the output.
        last : bool
            If True, this is the final directory in its chain and the offset
            to the next directory stays 0.
        """
        num_entries = len(self.entries) + len(self.children)
        if num_entries > 0xffff:
            msg = f"A directory cannot hold {num_entries} entries."
            raise EncodeError(msg)

        writer.write(byteorder.pack('H', num_entries))

        data_offset = (
            writer.position + num_entries * core.ENTRY_LENGTH + 4
        )
        logger.debug(
            f"directory {self.ident} @ {writer.position - 2}, "
            f"data segment @ {data_offset}"
        )

        deferred = []
        for entry in self.entries:
            if entry.write_header(writer, data_offset, byteorder):
                # keep track of the next position to write out-of-IFD data
                deferred.append(entry)
                data_offset += entry.value.total_size

        # The sub-directories follow all of the out-of-IFD data.
        for child in self.children:
            if child.ident not in SUBIFD_TAGS:
                msg = (
                    f"Sub-directory identifier {child.ident} is not one of "
                    f"the known pointer tags {SUBIFD_TAGS}."
                )
                raise EncodeError(msg)
            logger.debug(f"sub-directory {child.ident} @ {data_offset}")
            write_pointer(writer, child.ident, data_offset, byteorder)
            data_offset += child.encoded_size()

        next_offset_position = writer.position
        writer.write(byteorder.pack('I', 0))

        for entry in deferred:
            writer.write(entry.value.encode(byteorder))

        for child in self.children:
            child.write(writer, byteorder, last=True)

        if writer.position != data_offset:
            msg = (
                f"Directory {self.ident} was planned to end at {data_offset} "
                f"but ended at {writer.position}."
            )
            raise EncodeError(msg)

        if not last:
            end_position = writer.position
            writer.seek(next_offset_position)
            writer.write(byteorder.pack('I', end_position))
            writer.seek(end_position)
