"""Low-level TIFF/BigTIFF binary layer.

Re-exports the public names so callers can ``from tiffgeo.tiff import X``.
"""

# --- reader.py: seekable byte source with explicit endianness ---
from tiffgeo.tiff.reader import ByteReader  # noqa: F401

# --- parser.py: types, constants, header and IFD reading ---
from tiffgeo.tiff.parser import (  # noqa: F401
    TIFF_TYPES,
    TAG_NAMES,
    GEO_TAGS,
    TYPE_ASCII,
    TYPE_SHORT,
    TYPE_DOUBLE,
    TAG_IMAGE_WIDTH,
    TAG_IMAGE_LENGTH,
    TAG_IMAGE_DESCRIPTION,
    TAG_MODEL_PIXEL_SCALE,
    TAG_MODEL_TIEPOINT,
    IFDEntry,
    TIFFHeader,
    read_header,
    read_ifd,
)

# --- values.py: inline/offset resolution and typed decoding ---
from tiffgeo.tiff.values import (  # noqa: F401
    KIND_ASCII,
    KIND_DOUBLE,
    KIND_NONE,
    KIND_SHORT,
    DecodedValue,
    type_size,
    split_ascii,
    decode_shorts,
    decode_doubles,
    read_entry_bytes,
    resolve_entry,
)
