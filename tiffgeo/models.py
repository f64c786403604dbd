"""Data models for georeferencing metadata and decode results."""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from tiffgeo.errors import ErrorKind


@dataclass(frozen=True)
class Coordinate:
    """A geographic position in degrees."""
    longitude: float
    latitude: float


@dataclass(frozen=True)
class BoundingBox:
    """Top-left and bottom-right corners of a georeferenced image."""
    top_left: Coordinate
    bottom_right: Coordinate

    @property
    def width_degrees(self) -> float:
        return abs(self.bottom_right.longitude - self.top_left.longitude)

    @property
    def height_degrees(self) -> float:
        return abs(self.top_left.latitude - self.bottom_right.latitude)

    def as_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            'top_left': {'longitude': self.top_left.longitude,
                         'latitude': self.top_left.latitude},
            'bottom_right': {'longitude': self.bottom_right.longitude,
                             'latitude': self.bottom_right.latitude},
        }


@dataclass
class GeoMetadata:
    """The five georeferencing tag values. Absent tags stay None."""
    width: Optional[int] = None
    height: Optional[int] = None
    pixel_scale_x: Optional[float] = None
    pixel_scale_y: Optional[float] = None
    tie_point_longitude: Optional[float] = None
    tie_point_latitude: Optional[float] = None
    description: str = ''

    @property
    def has_tie_point(self) -> bool:
        return self.tie_point_longitude is not None and self.tie_point_latitude is not None

    @property
    def has_pixel_scale(self) -> bool:
        return self.pixel_scale_x is not None and self.pixel_scale_y is not None


@dataclass
class GeoTIFFResult:
    """Result of decoding a single file.

    ``bbox`` is None whenever ``error`` is set; a valid file with no
    ImageDescription has ``description == ''``.
    """
    filepath: Path
    bbox: Optional[BoundingBox] = None
    description: str = ''
    metadata: Optional[GeoMetadata] = None
    byte_order: Optional[str] = None
    is_bigtiff: Optional[bool] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    parse_time_ms: float = 0.0

    @property
    def is_valid(self) -> bool:
        return self.error is None and self.bbox is not None

    def to_dict(self) -> Dict:
        return {
            'file': str(self.filepath),
            'valid': self.is_valid,
            'bbox': self.bbox.as_dict() if self.bbox else None,
            'description': self.description if self.is_valid else None,
            'byte_order': self.byte_order,
            'bigtiff': self.is_bigtiff,
            'error': self.error,
            'error_kind': self.error_kind.value if self.error_kind else None,
            'parse_time_ms': round(self.parse_time_ms, 1),
        }
