"""GeoTIFF file facade -- open, decode, and report one file.

``decode`` runs the whole pipeline against an open binary file and raises
on failure.  ``read_geotiff`` wraps it for a path and turns failures into
a ``GeoTIFFResult`` with ``error`` set, so callers can tell an invalid
file apart from a valid file with an empty description.
"""

import logging
import time
from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional, Tuple

from tiffgeo.config import DecoderConfig
from tiffgeo.errors import GeoTIFFError, ErrorKind
from tiffgeo.geo import compute_bounding_box, interpret_fields
from tiffgeo.models import BoundingBox, GeoMetadata, GeoTIFFResult
from tiffgeo.tiff import (
    ByteReader, DecodedValue, IFDEntry, TIFFHeader, read_header, read_ifd, resolve_entry,
)

logger = logging.getLogger(__name__)

MIME_TYPES = ('image/tiff',)
TIFF_EXTENSIONS = {'.tif', '.tiff', '.gtif', '.gtiff'}


def iter_fields(reader: ByteReader, header: TIFFHeader,
                config: Optional[DecoderConfig] = None
                ) -> Iterator[Tuple[IFDEntry, Optional[DecodedValue]]]:
    """Resolve the retained entries of the first IFD one at a time.

    Entries skipped by ``resolve_entry`` are paired with None.  A failing
    entry raises after the earlier ones have been yielded.
    """
    entries, _ = read_ifd(reader, header, config=config)
    for entry in entries:
        yield entry, resolve_entry(reader, header, entry)


def read_metadata(f: BinaryIO,
                  config: Optional[DecoderConfig] = None) -> Tuple[TIFFHeader, GeoMetadata]:
    """Parse the header and first IFD into GeoMetadata without validating it."""
    reader = ByteReader(f)
    header = read_header(reader, config)
    fields = [(entry.tag_id, value)
              for entry, value in iter_fields(reader, header, config)
              if value is not None]
    return header, interpret_fields(fields)


def decode(f: BinaryIO,
           config: Optional[DecoderConfig] = None) -> Tuple[TIFFHeader, GeoMetadata, BoundingBox]:
    """Decode header, metadata and bounding box from an open binary file.

    Raises a GeoTIFFError subclass on any failure.
    """
    header, meta = read_metadata(f, config)
    return header, meta, compute_bounding_box(meta)


def read_geotiff(filepath, config: Optional[DecoderConfig] = None) -> GeoTIFFResult:
    """Decode a GeoTIFF file. Never raises for unreadable or invalid files."""
    filepath = Path(filepath)
    result = GeoTIFFResult(filepath=filepath)
    t0 = time.monotonic()

    try:
        with open(filepath, 'rb') as f:
            header, meta, bbox = decode(f, config)
    except GeoTIFFError as e:
        logger.warning('%s: %s', filepath.name, e)
        result.error = str(e)
        result.error_kind = e.kind
    except OSError as e:
        logger.warning('%s: %s', filepath.name, e)
        result.error = str(e)
        result.error_kind = ErrorKind.IO_ERROR
    else:
        result.bbox = bbox
        result.metadata = meta
        result.description = meta.description
        result.byte_order = header.byte_order
        result.is_bigtiff = header.is_bigtiff

    result.parse_time_ms = (time.monotonic() - t0) * 1000
    return result


def read_coordinates(filepath,
                     config: Optional[DecoderConfig] = None) -> Optional[BoundingBox]:
    """Corner coordinates of a georeferenced image, or None if unavailable."""
    return read_geotiff(filepath, config).bbox


def can_handle(filepath: Path) -> bool:
    """Check extension and TIFF magic bytes."""
    filepath = Path(filepath)
    if filepath.suffix.lower() not in TIFF_EXTENSIONS:
        return False
    try:
        with open(filepath, 'rb') as f:
            return f.read(2) in (b'II', b'MM')
    except OSError:
        return False


def collect_tiff_files(path: Path) -> List[Path]:
    """A single file, or all TIFF files under a directory, sorted."""
    path = Path(path)
    if path.is_file():
        return [path]
    return sorted(p for p in path.rglob('*') if p.is_file() and can_handle(p))
