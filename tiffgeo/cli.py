"""CLI interface for tiffgeo -- bbox and info subcommands."""

import json
import sys
from pathlib import Path

import click

import tiffgeo
from tiffgeo import log
from tiffgeo.config import DecoderConfig
from tiffgeo.errors import ErrorKind
from tiffgeo.geo import compute_bounding_box, interpret_fields
from tiffgeo.geotiff import collect_tiff_files, iter_fields, read_geotiff
from tiffgeo.models import BoundingBox
from tiffgeo.tiff import ByteReader, read_header


def _load_config(config_path, no_bigtiff=False) -> DecoderConfig:
    try:
        config = DecoderConfig.from_json(config_path) if config_path else DecoderConfig.default()
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='--config')
    if no_bigtiff:
        config.allow_bigtiff = False
    return config


def _format_corners(bbox: BoundingBox) -> str:
    tl, br = bbox.top_left, bbox.bottom_right
    return (f'({tl.longitude:.6f}, {tl.latitude:.6f}) -> '
            f'({br.longitude:.6f}, {br.latitude:.6f})')


@click.group()
@click.version_option(version=tiffgeo.__version__, prog_name='tiffgeo')
@click.option('--color/--no-color', default=None,
              help='Force colored output on or off (default: auto).')
def main(color):
    """tiffgeo -- read GeoTIFF bounding boxes.

    Extracts corner coordinates and the image description from the
    georeferencing tags of TIFF/BigTIFF files. Pixel data is never read.
    """
    if color is not None:
        log.set_color_enabled(color)


@main.command()
@click.argument('path', type=click.Path(exists=True))
@click.option('--verbose', '-v', is_flag=True, help='Show decoded tag values.')
@click.option('--json-out', type=click.Path(), help='Write results as JSON to file.')
@click.option('--log', 'log_path', type=click.Path(), help='Write log to file.')
@click.option('--config', 'config_path', type=click.Path(exists=True),
              help='Decoder options as JSON.')
@click.option('--no-bigtiff', is_flag=True, help='Reject BigTIFF files.')
def bbox(path, verbose, json_out, log_path, config_path, no_bigtiff):
    """Print the bounding box of each GeoTIFF file.

    PATH can be a single file or a directory to scan recursively.
    """
    config = _load_config(config_path, no_bigtiff)
    files = collect_tiff_files(Path(path))

    if not files:
        click.echo(f'No TIFF files found in {path}')
        return

    log_file = open(log_path, 'w') if log_path else None
    handler = log.attach_log_file(log_file) if log_file else None

    def log_msg(msg, line=log.log_info):
        click.echo(msg)
        if log_file:
            log_file.write(line(click.unstyle(msg)) + '\n')
            log_file.flush()

    try:
        log_msg(log.cli_header(f'tiffgeo v{tiffgeo.__version__} -- {len(files)} file(s)'))
        failed = 0
        results_json = []

        for i, filepath in enumerate(files, 1):
            result = read_geotiff(filepath, config)
            prefix = f'  [{i}/{len(files)}] {filepath.name}'
            if result.is_valid:
                name = result.description or '(no description)'
                log_msg(f'{prefix} {log.cli_success(_format_corners(result.bbox))} {name}')
                if verbose:
                    meta = result.metadata
                    log_msg(log.cli_dim(
                        f'    {meta.width}x{meta.height} px, '
                        f'scale ({meta.pixel_scale_x}, {meta.pixel_scale_y}), '
                        f'{result.byte_order}-endian'
                        f'{", BigTIFF" if result.is_bigtiff else ""}'))
            else:
                failed += 1
                # Readable TIFF without georeferencing, as opposed to a broken file
                if result.error_kind is ErrorKind.MISSING_TAG:
                    style, line = log.cli_warning, log.log_warn
                else:
                    style, line = log.cli_error, log.log_error
                log_msg(f'{prefix} {style(result.error_kind.value.upper())}: '
                        f'{result.error}', line=line)

            if json_out:
                results_json.append(result.to_dict())

        log_msg(f'\nSummary: {len(files)} file(s), {len(files) - failed} georeferenced, '
                f'{failed} failed')

        if json_out:
            with open(json_out, 'w') as f:
                json.dump(results_json, f, indent=2)
            log_msg(log.cli_info(f'Results written to {json_out}'))
    finally:
        if log_file:
            log.detach_log_file(handler)
            log_file.close()

    if failed > 0:
        sys.exit(1)


@main.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--config', 'config_path', type=click.Path(exists=True),
              help='Decoder options as JSON.')
def info(path, config_path):
    """Show header facts and georeferencing tags of one file."""
    config = _load_config(config_path)
    filepath = Path(path)

    click.echo(log.cli_header(f'File: {filepath.name}'))

    # Tags are printed as they are decoded, so the ones before a failure still show
    try:
        with open(filepath, 'rb') as f:
            reader = ByteReader(f)
            header = read_header(reader, config)
            fmt = 'BigTIFF' if header.is_bigtiff else 'classic TIFF'
            click.echo(f'{log.cli_bold("Byte order:")} {header.byte_order}-endian')
            click.echo(f'{log.cli_bold("Format:")} {fmt}')
            click.echo(f'{log.cli_bold("IFD0 offset:")} {header.first_ifd_offset}')

            fields = []
            for entry, value in iter_fields(reader, header, config):
                shown = list(value.values) if value is not None else 'skipped'
                click.echo(f'  {entry.tag_id} {entry.tag_name} '
                           f'[{entry.type_name} x{entry.count}]: {shown}')
                if value is not None:
                    fields.append((entry.tag_id, value))

        meta = interpret_fields(fields)
        bbox = compute_bounding_box(meta)
    except (tiffgeo.GeoTIFFError, OSError) as e:
        kind = e.kind if isinstance(e, tiffgeo.GeoTIFFError) else ErrorKind.IO_ERROR
        click.echo(log.cli_separator())
        click.echo(log.cli_error(f'{kind.value.upper()}: {e}'), err=True)
        sys.exit(1)

    click.echo(log.cli_separator())
    click.echo(f'{log.cli_bold("Top-left:")}     '
               f'({bbox.top_left.longitude}, {bbox.top_left.latitude})')
    click.echo(f'{log.cli_bold("Bottom-right:")} '
               f'({bbox.bottom_right.longitude}, {bbox.bottom_right.latitude})')
    click.echo(f'{log.cli_bold("Name:")} {meta.description}')


if __name__ == '__main__':
    main()
