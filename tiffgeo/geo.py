"""Georeferencing interpretation and bounding-box computation.

Maps decoded tag values onto ``GeoMetadata`` and derives the two opposite
corners of the image from the tie point, pixel scale and pixel size.
"""

from typing import Iterable, Tuple

from tiffgeo.errors import MalformedTagError, MissingTagError
from tiffgeo.models import BoundingBox, Coordinate, GeoMetadata
from tiffgeo.tiff.parser import (
    TAG_IMAGE_DESCRIPTION,
    TAG_IMAGE_LENGTH,
    TAG_IMAGE_WIDTH,
    TAG_MODEL_PIXEL_SCALE,
    TAG_MODEL_TIEPOINT,
)
from tiffgeo.tiff.values import KIND_ASCII, KIND_DOUBLE, KIND_SHORT, DecodedValue


def _values_of(tag: int, value: DecodedValue, kind: str, needed: int) -> tuple:
    got = len(value.values) if value.kind == kind else 0
    if got < needed:
        raise MalformedTagError(tag, needed, got)
    return value.values


def interpret_fields(fields: Iterable[Tuple[int, DecodedValue]]) -> GeoMetadata:
    """Build GeoMetadata from (tag, value) pairs in directory order.

    When a tag occurs more than once the last occurrence wins.  Tags that
    never occur leave their fields unset; completeness is checked by
    ``validate``.
    """
    meta = GeoMetadata()
    for tag, value in fields:
        if tag == TAG_IMAGE_WIDTH:
            meta.width = int(_values_of(tag, value, KIND_SHORT, 1)[-1])
        elif tag == TAG_IMAGE_LENGTH:
            meta.height = int(_values_of(tag, value, KIND_SHORT, 1)[-1])
        elif tag == TAG_IMAGE_DESCRIPTION:
            strings = value.values if value.kind == KIND_ASCII else ()
            meta.description = strings[-1] if strings else ''
        elif tag == TAG_MODEL_PIXEL_SCALE:
            scale = _values_of(tag, value, KIND_DOUBLE, 2)
            meta.pixel_scale_x = scale[0]
            meta.pixel_scale_y = scale[1]
        elif tag == TAG_MODEL_TIEPOINT:
            # (I, J, K, X, Y, Z): only the model-space X/Y are used
            tie = _values_of(tag, value, KIND_DOUBLE, 5)
            meta.tie_point_longitude = tie[3]
            meta.tie_point_latitude = tie[4]
    return meta


def validate(meta: GeoMetadata) -> None:
    """Raise MissingTagError for the first required tag that is absent."""
    if not meta.has_tie_point:
        raise MissingTagError(TAG_MODEL_TIEPOINT)
    if not meta.has_pixel_scale or meta.pixel_scale_x == 0 or meta.pixel_scale_y == 0:
        raise MissingTagError(TAG_MODEL_PIXEL_SCALE)
    if not meta.width:
        raise MissingTagError(TAG_IMAGE_WIDTH)
    if not meta.height:
        raise MissingTagError(TAG_IMAGE_LENGTH)


def compute_bounding_box(meta: GeoMetadata) -> BoundingBox:
    """Corners of the image after validating ``meta``.

    A positive Y scale means north-up (latitude decreases downward); a
    non-positive one is already signed and is added as is.
    """
    validate(meta)

    lon = meta.tie_point_longitude
    lat = meta.tie_point_latitude
    right = lon + (meta.width - 1) * meta.pixel_scale_x
    if meta.pixel_scale_y > 0:
        bottom = lat - (meta.height - 1) * meta.pixel_scale_y
    else:
        bottom = lat + (meta.height - 1) * meta.pixel_scale_y
    return BoundingBox(Coordinate(lon, lat), Coordinate(right, bottom))
