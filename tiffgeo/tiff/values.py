"""Tag value resolution -- inline vs. offset storage and typed decoding."""

import logging
import struct
from typing import Optional, Tuple, Union

from tiffgeo.tiff.parser import (
    TIFF_TYPES,
    TYPE_ASCII,
    TYPE_DOUBLE,
    TYPE_SHORT,
    IFDEntry,
    TIFFHeader,
)
from tiffgeo.tiff.reader import ByteReader

logger = logging.getLogger(__name__)

KIND_SHORT = 'short'
KIND_DOUBLE = 'double'
KIND_ASCII = 'ascii'
KIND_NONE = 'none'

Value = Union[int, float, str]


class DecodedValue:
    """Decoded values of one entry, tagged by kind.

    ``values`` is a tuple of ints (short), floats (double), Latin-1 strings
    (ascii), or empty (any other type).
    """
    __slots__ = ('kind', 'values')

    def __init__(self, kind: str, values: Tuple[Value, ...] = ()):
        self.kind = kind
        self.values = tuple(values)

    def __eq__(self, other):
        if not isinstance(other, DecodedValue):
            return NotImplemented
        return self.kind == other.kind and self.values == other.values

    def __repr__(self):
        return f'DecodedValue({self.kind!r}, {self.values!r})'

    def __len__(self):
        return len(self.values)


def type_size(dtype: int) -> int:
    """Bytes per value for a TIFF type id; 0 for unknown types."""
    return TIFF_TYPES.get(dtype, (0, '', ''))[0]


def split_ascii(raw: bytes) -> Tuple[str, ...]:
    """Split an ASCII tag value on NUL bytes into Latin-1 strings.

    A trailing NUL closes the last string; when the buffer does not end in
    NUL the remaining bytes form one more string.
    """
    segments = raw.split(b'\x00')
    if raw.endswith(b'\x00'):
        segments.pop()
    return tuple(seg.decode('latin-1') for seg in segments)


def decode_shorts(raw: bytes, count: int, endian: str) -> Tuple[int, ...]:
    return struct.unpack(f'{endian}{count}H', raw[:2 * count])


def decode_doubles(raw: bytes, count: int, endian: str) -> Tuple[float, ...]:
    """Decode ``count`` IEEE-754 doubles.

    Big-endian runs are reversed as whole 8-byte units and then read
    little-endian.
    """
    values = []
    for i in range(count):
        chunk = raw[i * 8:(i + 1) * 8]
        if endian == '>':
            chunk = chunk[::-1]
        values.append(struct.unpack('<d', chunk)[0])
    return tuple(values)


def read_entry_bytes(reader: ByteReader, header: TIFFHeader,
                     entry: IFDEntry) -> bytes:
    """Return the raw value bytes of an entry, following its offset if needed."""
    total = type_size(entry.dtype) * entry.count
    if total > header.inline_capacity:
        fmt = 'Q' if header.is_bigtiff else 'I'
        value_offset = reader.unpack(fmt, entry.value_or_offset)[0]
        reader.seek(value_offset)
        return reader.read_bytes(total)
    return entry.value_or_offset[:total]


def resolve_entry(reader: ByteReader, header: TIFFHeader,
                  entry: IFDEntry) -> Optional[DecodedValue]:
    """Fetch and decode one entry's value.

    Returns None for entries of unknown type (or zero count); those are
    skipped without error.  The reader is left just past the entry's
    directory slot either way.
    """
    try:
        if type_size(entry.dtype) * entry.count == 0:
            logger.debug('Skipping %s: type %d, count %d',
                         entry.tag_name, entry.dtype, entry.count)
            return None

        raw = read_entry_bytes(reader, header, entry)
        if entry.dtype == TYPE_ASCII:
            return DecodedValue(KIND_ASCII, split_ascii(raw))
        if entry.dtype == TYPE_SHORT:
            return DecodedValue(KIND_SHORT, decode_shorts(raw, entry.count, header.endian))
        if entry.dtype == TYPE_DOUBLE:
            return DecodedValue(KIND_DOUBLE, decode_doubles(raw, entry.count, header.endian))
        return DecodedValue(KIND_NONE)
    finally:
        end = entry.entry_offset + entry.entry_size
        if end <= reader.size:
            reader.seek(end)
