"""Tests for tiffgeo/log.py -- CLI color, timestamps, log-file handler."""

import io
import logging
import re

import pytest

from tiffgeo import log


@pytest.fixture(autouse=True)
def _reset_log_state():
    """Restore log module state after each test."""
    log.set_color_enabled(False)
    yield
    log.set_color_enabled(False)


# ---------------------------------------------------------------------------
# CLI color tests
# ---------------------------------------------------------------------------

class TestCLIColorEnabled:
    """All CLI functions return ANSI escape codes when color is enabled."""

    @pytest.fixture(autouse=True)
    def _enable_color(self):
        log.set_color_enabled(True)
        yield

    @pytest.mark.parametrize('fn', [
        log.cli_header, log.cli_success, log.cli_warning, log.cli_error,
        log.cli_info, log.cli_dim, log.cli_bold,
    ])
    def test_wraps_in_ansi(self, fn):
        result = fn('Test')
        assert result.startswith('\033[')
        assert result.endswith('\033[0m')
        assert 'Test' in result

    def test_separator(self):
        assert '\033[' in log.cli_separator()


class TestCLIColorDisabled:
    @pytest.mark.parametrize('fn', [
        log.cli_header, log.cli_success, log.cli_warning, log.cli_error,
        log.cli_info, log.cli_dim, log.cli_bold,
    ])
    def test_plain_text(self, fn):
        assert fn('plain') == 'plain'

    def test_separator_plain(self):
        assert log.cli_separator() == '-' * 60


# ---------------------------------------------------------------------------
# Log file lines
# ---------------------------------------------------------------------------

_TS = r'\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\]'


class TestLogFileLines:
    def test_info(self):
        assert re.match(_TS + r' \[INFO\]  hello$', log.log_info('hello'))

    def test_warn(self):
        assert re.match(_TS + r' \[WARN\]  careful$', log.log_warn('careful'))

    def test_error(self):
        assert re.match(_TS + r' \[ERROR\] broken$', log.log_error('broken'))


class TestLogFileHandler:
    def test_warning_written(self):
        stream = io.StringIO()
        handler = log.attach_log_file(stream)
        try:
            logging.getLogger('tiffgeo.geotiff').warning('%s: %s', 'a.tif', 'bad')
        finally:
            log.detach_log_file(handler)
        line = stream.getvalue().strip()
        assert re.match(_TS + r' \[WARN\]  tiffgeo\.geotiff: a\.tif: bad$', line)

    def test_below_level_not_written(self):
        stream = io.StringIO()
        handler = log.attach_log_file(stream)
        try:
            logging.getLogger('tiffgeo.tiff.values').debug('skipped')
        finally:
            log.detach_log_file(handler)
        assert stream.getvalue() == ''

    def test_detach_removes_handler(self):
        stream = io.StringIO()
        handler = log.attach_log_file(stream)
        log.detach_log_file(handler)
        logging.getLogger('tiffgeo').warning('after')
        assert stream.getvalue() == ''

    def test_detach_none(self):
        log.detach_log_file(None)
