"""Shared test fixtures -- synthetic TIFF/BigTIFF GeoTIFF file generators."""

import struct
import pytest


def shorts(values, endian='<'):
    """Encode SHORT values."""
    return struct.pack(f'{endian}{len(values)}H', *values)


def doubles(values, endian='<'):
    """Encode DOUBLE values."""
    return struct.pack(f'{endian}{len(values)}d', *values)


def nul_terminated(text):
    """Encode a NUL-terminated ASCII/Latin-1 value."""
    return text.encode('latin-1') + b'\x00'


def build_tiff(entries, endian='<', bigtiff=False, ifd_offset=None, next_ifd=0,
               extra_data=None):
    """Build a minimal single-IFD TIFF or BigTIFF file in memory.

    Args:
        entries: List of (tag_id, type_id, count, value) tuples.
            ``value`` as bytes: stored inline (left-aligned, zero padded) when
            it fits the value field (4 bytes classic, 8 BigTIFF), otherwise in
            a data area after the IFD with the field holding its offset.
            ``value`` as int: packed directly into the value field.
        endian: '<' for little-endian, '>' for big-endian.
        bigtiff: Write a 16-byte BigTIFF header and 20-byte entries.
        ifd_offset: Where the IFD starts (default: right after the header).
            Gaps are zero filled.
        next_ifd: Value written to the next-IFD field.
        extra_data: Optional bytes appended at the very end.

    Returns:
        bytes: Complete file content.
    """
    bo = b'II' if endian == '<' else b'MM'
    if bigtiff:
        header = bo + struct.pack(endian + 'HHH', 43, 8, 0)
        header_size = 16
        count_fmt, field_fmt, field_size, entry_size, next_size = 'Q', 'Q', 8, 20, 8
    else:
        header = bo + struct.pack(endian + 'H', 42)
        header_size = 8
        count_fmt, field_fmt, field_size, entry_size, next_size = 'H', 'I', 4, 12, 4

    if ifd_offset is None:
        ifd_offset = header_size
    header += struct.pack(endian + field_fmt, ifd_offset)
    gap = b'\x00' * (ifd_offset - header_size)

    num_entries = len(entries)
    data_offset = ifd_offset + struct.calcsize(endian + count_fmt) \
        + entry_size * num_entries + next_size

    ifd_bytes = struct.pack(endian + count_fmt, num_entries)
    data_bytes = b''

    for tag_id, type_id, count, value in entries:
        ifd_bytes += struct.pack(endian + 'HH', tag_id, type_id)
        ifd_bytes += struct.pack(endian + field_fmt, count)
        if isinstance(value, bytes):
            if len(value) <= field_size:
                ifd_bytes += value.ljust(field_size, b'\x00')
            else:
                ifd_bytes += struct.pack(endian + field_fmt, data_offset + len(data_bytes))
                data_bytes += value
        else:
            ifd_bytes += struct.pack(endian + field_fmt, value)

    ifd_bytes += struct.pack(endian + ('q' if bigtiff else 'I'), next_ifd)

    result = header + gap + ifd_bytes + data_bytes
    if extra_data:
        result += extra_data
    return result


def geo_entries(width=1024, height=768, scale=(0.1, 0.1, 0.0),
                tiepoint=(0.0, 0.0, 0.0, 6.11667, 50.8549, 0.0),
                description=None, endian='<'):
    """IFD entries for the five georeferencing tags.

    Pass None for any of width/height/scale/tiepoint to leave that tag out.
    """
    entries = []
    if width is not None:
        entries.append((256, 3, 1, shorts([width], endian)))
    if height is not None:
        entries.append((257, 3, 1, shorts([height], endian)))
    if description is not None:
        raw = nul_terminated(description)
        entries.append((270, 2, len(raw), raw))
    if scale is not None:
        entries.append((33550, 12, len(scale), doubles(scale, endian)))
    if tiepoint is not None:
        entries.append((33922, 12, len(tiepoint), doubles(tiepoint, endian)))
    return entries


def noise_entries(endian='<'):
    """Ordinary baseline tags a real GeoTIFF carries besides the geo tags."""
    software = nul_terminated('GDAL 3.8.4')
    return [
        (258, 3, 1, shorts([8], endian)),            # BitsPerSample
        (259, 3, 1, shorts([1], endian)),            # Compression
        (273, 4, 1, struct.pack(endian + 'I', 0)),   # StripOffsets
        (305, 2, len(software), software),           # Software
        (34735, 3, 4, shorts([1, 1, 0, 0], endian)),  # GeoKeyDirectory
    ]


def write_geotiff(tmp_path, name='edka.tif', endian='<', bigtiff=False,
                  noise=False, **geo):
    entries = geo_entries(endian=endian, **geo)
    if noise:
        entries = sorted(entries + noise_entries(endian), key=lambda e: e[0])
    filepath = tmp_path / name
    filepath.write_bytes(build_tiff(entries, endian=endian, bigtiff=bigtiff))
    return filepath


# ---------------------------------------------------------------------------
# GeoTIFF fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_geotiff(tmp_path):
    """Classic little-endian GeoTIFF with no ImageDescription."""
    return write_geotiff(tmp_path, noise=True)


@pytest.fixture
def tmp_geotiff_named(tmp_path):
    """Classic big-endian GeoTIFF with an ImageDescription."""
    return write_geotiff(tmp_path, name='named.tif', endian='>',
                         description='Aachen-Merzbrueck')


@pytest.fixture
def tmp_bigtiff(tmp_path):
    """Little-endian BigTIFF GeoTIFF."""
    return write_geotiff(tmp_path, name='big.tif', bigtiff=True, noise=True)


@pytest.fixture
def tmp_not_tiff(tmp_path):
    filepath = tmp_path / 'broken.tif'
    filepath.write_bytes(b'NOT A TIFF FILE')
    return filepath
