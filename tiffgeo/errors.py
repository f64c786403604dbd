"""Error taxonomy for GeoTIFF decoding.

Every failure carries an ``ErrorKind`` plus the structured context that
produced it (offset, tag id, version).  Presentation of these errors is
left to the CLI.
"""

import enum
from typing import Optional


class ErrorKind(enum.Enum):
    INVALID_FORMAT = 'invalid_format'
    UNSUPPORTED_VERSION = 'unsupported_version'
    IO_ERROR = 'io_error'
    MALFORMED_TAG = 'malformed_tag'
    MISSING_TAG = 'missing_tag'


class GeoTIFFError(Exception):
    """Base class for all decoding failures."""

    kind: ErrorKind = ErrorKind.INVALID_FORMAT


class InvalidFormatError(GeoTIFFError):
    """The first two bytes are neither ``II`` nor ``MM``."""

    kind = ErrorKind.INVALID_FORMAT

    def __init__(self, magic: bytes):
        self.magic = magic
        super().__init__(f'Invalid TIFF file: byte order mark {magic!r}')


class UnsupportedVersionError(GeoTIFFError):
    """Version field is not 42/43, or BigTIFF is disabled."""

    kind = ErrorKind.UNSUPPORTED_VERSION

    def __init__(self, version: int):
        self.version = version
        super().__init__(f'Unsupported TIFF version {version}')


class TiffIOError(GeoTIFFError):
    """A seek or read could not be satisfied by the byte source."""

    kind = ErrorKind.IO_ERROR

    def __init__(self, offset: int, length: Optional[int] = None):
        self.offset = offset
        self.length = length
        if length is None:
            msg = f'Cannot seek to offset {offset}'
        else:
            msg = f'Short read of {length} byte(s) at offset {offset}'
        super().__init__(msg)


class MalformedTagError(GeoTIFFError):
    """A retained tag decoded to fewer values than required."""

    kind = ErrorKind.MALFORMED_TAG

    def __init__(self, tag: int, needed: int, got: int):
        self.tag = tag
        self.needed = needed
        self.got = got
        super().__init__(f'Tag {tag} has {got} value(s), expected at least {needed}')


class MalformedIFDError(GeoTIFFError):
    """The IFD entry count is implausible -- the pointer landed in garbage."""

    kind = ErrorKind.MALFORMED_TAG

    def __init__(self, offset: int, count: int):
        self.offset = offset
        self.count = count
        super().__init__(f'IFD at offset {offset} claims {count} entries')


class MissingTagError(GeoTIFFError):
    """A tag required for the bounding box is absent (or zero)."""

    kind = ErrorKind.MISSING_TAG

    def __init__(self, tag: int):
        self.tag = tag
        super().__init__(f'Tag {tag} is not set')
