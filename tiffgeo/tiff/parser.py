"""TIFF/BigTIFF header and IFD parsing.

Handles both standard TIFF (version 42) and BigTIFF (version 43), with
little-endian (II) and big-endian (MM) byte orders.  Only the first IFD
is ever read and only the georeferencing tags are retained by default.
"""

import logging
from typing import Dict, FrozenSet, List, Optional, Tuple

from tiffgeo.config import DecoderConfig
from tiffgeo.errors import InvalidFormatError, MalformedIFDError, UnsupportedVersionError
from tiffgeo.tiff.reader import ByteReader

logger = logging.getLogger(__name__)

# TIFF type definitions: {type_id: (element_size_bytes, struct_format_char, name)}
TIFF_TYPES: Dict[int, Tuple[int, str, str]] = {
    1: (1, 'B', 'BYTE'),
    2: (1, 's', 'ASCII'),
    3: (2, 'H', 'SHORT'),
    4: (4, 'I', 'LONG'),
    5: (8, 'II', 'RATIONAL'),
    6: (1, 'b', 'SBYTE'),
    7: (1, 's', 'UNDEFINED'),
    8: (2, 'h', 'SSHORT'),
    9: (4, 'i', 'SLONG'),
    10: (8, 'ii', 'SRATIONAL'),
    11: (4, 'f', 'FLOAT'),
    12: (8, 'd', 'DOUBLE'),
    13: (4, 'I', 'IFD'),
    16: (8, 'Q', 'LONG8'),
    17: (8, 'q', 'SLONG8'),
    18: (8, 'Q', 'IFD8'),
}

TYPE_ASCII = 2
TYPE_SHORT = 3
TYPE_DOUBLE = 12

TAG_IMAGE_WIDTH = 256
TAG_IMAGE_LENGTH = 257
TAG_IMAGE_DESCRIPTION = 270
TAG_MODEL_PIXEL_SCALE = 33550
TAG_MODEL_TIEPOINT = 33922

TAG_NAMES: Dict[int, str] = {
    TAG_IMAGE_WIDTH: 'ImageWidth',
    TAG_IMAGE_LENGTH: 'ImageLength',
    TAG_IMAGE_DESCRIPTION: 'ImageDescription',
    TAG_MODEL_PIXEL_SCALE: 'ModelPixelScale',
    TAG_MODEL_TIEPOINT: 'ModelTiepoint',
}

GEO_TAGS: FrozenSet[int] = frozenset({
    TAG_IMAGE_WIDTH,
    TAG_IMAGE_LENGTH,
    TAG_IMAGE_DESCRIPTION,
    TAG_MODEL_PIXEL_SCALE,
    TAG_MODEL_TIEPOINT,
})


class TIFFHeader:
    """Parsed TIFF file header."""
    __slots__ = ('endian', 'is_bigtiff', 'first_ifd_offset')

    def __init__(self, endian: str, is_bigtiff: bool, first_ifd_offset: int):
        object.__setattr__(self, 'endian', endian)
        object.__setattr__(self, 'is_bigtiff', is_bigtiff)
        object.__setattr__(self, 'first_ifd_offset', first_ifd_offset)

    def __setattr__(self, name, value):
        raise AttributeError('TIFFHeader is immutable')

    def __eq__(self, other):
        if not isinstance(other, TIFFHeader):
            return NotImplemented
        return (self.endian, self.is_bigtiff, self.first_ifd_offset) == \
            (other.endian, other.is_bigtiff, other.first_ifd_offset)

    def __hash__(self):
        return hash((self.endian, self.is_bigtiff, self.first_ifd_offset))

    def __repr__(self):
        return (f'TIFFHeader(endian={self.endian!r}, is_bigtiff={self.is_bigtiff}, '
                f'first_ifd_offset={self.first_ifd_offset})')

    @property
    def byte_order(self) -> str:
        return 'little' if self.endian == '<' else 'big'

    @property
    def entry_size(self) -> int:
        return 20 if self.is_bigtiff else 12

    @property
    def inline_capacity(self) -> int:
        return 8 if self.is_bigtiff else 4


class IFDEntry:
    """A single IFD (Image File Directory) entry, value not yet interpreted."""
    __slots__ = ('tag_id', 'dtype', 'count', 'value_or_offset', 'entry_offset')

    def __init__(self, tag_id: int, dtype: int, count: int,
                 value_or_offset: bytes, entry_offset: int):
        self.tag_id = tag_id
        self.dtype = dtype
        self.count = count
        self.value_or_offset = value_or_offset
        self.entry_offset = entry_offset

    @property
    def tag_name(self) -> str:
        return TAG_NAMES.get(self.tag_id, f'Tag_{self.tag_id}')

    @property
    def type_name(self) -> str:
        return TIFF_TYPES.get(self.dtype, (0, '', f'Type_{self.dtype}'))[2]

    @property
    def entry_size(self) -> int:
        # tag(2) + type(2) + count + value field
        return 4 + 2 * len(self.value_or_offset)

    def __repr__(self):
        return (f'IFDEntry(tag={self.tag_id}, type={self.dtype}, count={self.count}, '
                f'entry_offset={self.entry_offset})')


def read_header(reader: ByteReader,
                config: Optional[DecoderConfig] = None) -> TIFFHeader:
    """Read and validate the TIFF/BigTIFF header.

    Sets ``reader.endian`` for every read that follows.
    """
    config = config or DecoderConfig.default()
    reader.seek(0)
    bo = reader.f.read(2)
    if bo == b'II':
        endian = '<'
    elif bo == b'MM':
        endian = '>'
    else:
        raise InvalidFormatError(bo)
    reader.endian = endian

    version = reader.u16()

    if version == 42:
        ifd_offset = reader.u32()
        return TIFFHeader(endian, False, ifd_offset)
    elif version == 43:
        if not config.allow_bigtiff:
            raise UnsupportedVersionError(version)
        # Bytes 4-7 hold the offset byte size and a reserved word
        reader.read_bytes(4)
        ifd_offset = reader.u64()
        return TIFFHeader(endian, True, ifd_offset)
    else:
        raise UnsupportedVersionError(version)


def read_ifd(reader: ByteReader, header: TIFFHeader,
             ifd_offset: Optional[int] = None,
             config: Optional[DecoderConfig] = None,
             tags: Optional[FrozenSet[int]] = GEO_TAGS) -> Tuple[List[IFDEntry], int]:
    """Read entries from an IFD. Returns (entries, next_ifd_offset).

    Entries whose tag is not in ``tags`` are dropped as soon as they are
    read; pass ``tags=None`` to keep every entry.  The next IFD offset is
    returned but never followed.
    """
    config = config or DecoderConfig.default()
    if ifd_offset is None:
        ifd_offset = header.first_ifd_offset
    reader.seek(ifd_offset)

    if header.is_bigtiff:
        num_entries = reader.u64()
    else:
        num_entries = reader.u16()
    if num_entries > config.max_ifd_entries:
        raise MalformedIFDError(ifd_offset, num_entries)

    value_size = header.inline_capacity
    entries = []
    for _ in range(num_entries):
        entry_offset = reader.tell()
        tag_id = reader.u16()
        dtype = reader.u16()
        count = reader.u64() if header.is_bigtiff else reader.u32()
        value_or_offset = reader.read_bytes(value_size)

        if tags is not None and tag_id not in tags:
            continue
        entries.append(IFDEntry(tag_id, dtype, count, value_or_offset, entry_offset))

    next_offset = reader.i64() if header.is_bigtiff else reader.u32()
    logger.debug('IFD at %d: %d entries, %d retained, next IFD %d',
                 ifd_offset, num_entries, len(entries), next_offset)
    return entries, next_offset
