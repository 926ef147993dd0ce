"""
Tests for logging setup
"""

import io
import json
import logging

import pytest

from keepmounted.utils.logger import get_logger, setup_logging


def test_text_format():
    stream = io.StringIO()
    setup_logging('INFO', 'text', stream=stream)

    get_logger('keepmounted.test').info('mount point is not active')

    line = stream.getvalue().strip()
    assert ' - keepmounted.test - INFO - mount point is not active' in line


def test_json_format():
    stream = io.StringIO()
    setup_logging('DEBUG', 'json', stream=stream)

    get_logger('keepmounted.test').error('unable to mount path: /mnt/export')

    record = json.loads(stream.getvalue().strip())
    assert record['message'] == 'unable to mount path: /mnt/export'
    assert record['levelname'] == 'ERROR'
    assert record['name'] == 'keepmounted.test'


def test_level_filters():
    stream = io.StringIO()
    setup_logging('warning', 'text', stream=stream)

    get_logger('keepmounted.test').info('hidden')

    assert stream.getvalue() == ''
    assert logging.getLogger('keepmounted').level == logging.WARNING


def test_reconfigure_replaces_handler():
    setup_logging('INFO', 'text', stream=io.StringIO())
    logger = setup_logging('INFO', 'json', stream=io.StringIO())

    assert len(logger.handlers) == 1


def test_unknown_format():
    with pytest.raises(ValueError):
        setup_logging('INFO', 'xml')
