"""Decoder configuration -- BigTIFF support and IFD sanity limits."""

import json
from dataclasses import dataclass, fields


@dataclass
class DecoderConfig:
    """Options that change what the decoder accepts.

    ``allow_bigtiff`` turns BigTIFF (version 43) support on or off.
    ``max_ifd_entries`` bounds the entry count of an IFD; real GeoTIFFs
    carry a few dozen tags, so anything far beyond that means the IFD
    pointer landed in image data.
    """

    allow_bigtiff: bool = True
    max_ifd_entries: int = 1000

    @classmethod
    def default(cls) -> 'DecoderConfig':
        """Return the built-in defaults."""
        return cls()

    @classmethod
    def from_json(cls, path) -> 'DecoderConfig':
        """Load options from a JSON file and merge with defaults.

        JSON format::

            {
              "allow_bigtiff": false,
              "max_ifd_entries": 500
            }

        Both keys are optional; omitted keys keep their defaults.  Unknown
        keys raise ValueError.
        """
        with open(str(path), 'r') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f'{path}: expected a JSON object')

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f'{path}: unknown option(s): {", ".join(unknown)}')

        config = cls.default()
        if 'allow_bigtiff' in data:
            config.allow_bigtiff = bool(data['allow_bigtiff'])
        if 'max_ifd_entries' in data:
            config.max_ifd_entries = int(data['max_ifd_entries'])
            if config.max_ifd_entries < 0:
                raise ValueError(f'{path}: max_ifd_entries must be >= 0')
        return config
