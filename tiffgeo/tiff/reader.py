"""Seekable byte source with explicit endianness -- stdlib only (struct module)."""

import io
import os
import struct
from typing import BinaryIO, Tuple

from tiffgeo.errors import TiffIOError


class ByteReader:
    """Typed reads over a binary file object.

    ``endian`` is a struct prefix: ``'<'`` little-endian, ``'>'`` big-endian.
    Short reads and seeks outside the stream raise ``TiffIOError``; nothing
    is ever zero-filled.
    """
    __slots__ = ('f', 'endian', '_size')

    def __init__(self, f: BinaryIO, endian: str = '<'):
        self.f = f
        self.endian = endian
        pos = f.tell()
        self._size = f.seek(0, io.SEEK_END)
        f.seek(pos)

    @property
    def size(self) -> int:
        return self._size

    def tell(self) -> int:
        return self.f.tell()

    def seek(self, offset: int) -> None:
        if offset < 0 or offset > self._size:
            raise TiffIOError(offset)
        self.f.seek(offset, os.SEEK_SET)

    def read_bytes(self, n: int) -> bytes:
        offset = self.f.tell()
        if n < 0 or offset + n > self._size:
            raise TiffIOError(offset, n)
        data = self.f.read(n)
        if len(data) < n:
            raise TiffIOError(offset, n)
        return data

    def unpack(self, fmt: str, data: bytes) -> Tuple:
        """Decode ``data`` with this reader's byte order."""
        return struct.unpack(self.endian + fmt, data)

    def _read(self, fmt: str):
        return self.unpack(fmt, self.read_bytes(struct.calcsize(self.endian + fmt)))[0]

    def u16(self) -> int:
        return self._read('H')

    def u32(self) -> int:
        return self._read('I')

    def u64(self) -> int:
        return self._read('Q')

    def i64(self) -> int:
        return self._read('q')
