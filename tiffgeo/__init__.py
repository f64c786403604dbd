"""tiffgeo -- GeoTIFF bounding-box and description reader."""

__version__ = "1.0.0"

from tiffgeo.config import DecoderConfig
from tiffgeo.errors import (
    ErrorKind,
    GeoTIFFError,
    InvalidFormatError,
    MalformedIFDError,
    MalformedTagError,
    MissingTagError,
    TiffIOError,
    UnsupportedVersionError,
)
from tiffgeo.models import BoundingBox, Coordinate, GeoMetadata, GeoTIFFResult
from tiffgeo.geo import compute_bounding_box, interpret_fields
from tiffgeo.geotiff import MIME_TYPES, decode, read_coordinates, read_geotiff

__all__ = [
    "__version__",
    "DecoderConfig",
    "ErrorKind",
    "GeoTIFFError",
    "InvalidFormatError",
    "UnsupportedVersionError",
    "TiffIOError",
    "MalformedTagError",
    "MalformedIFDError",
    "MissingTagError",
    "Coordinate",
    "BoundingBox",
    "GeoMetadata",
    "GeoTIFFResult",
    "interpret_fields",
    "compute_bounding_box",
    "MIME_TYPES",
    "decode",
    "read_geotiff",
    "read_coordinates",
]
