"""Unit tests for the JSON logging setup in logging.py."""

import sys
import json
import logging

import pytest

from shardshortener.utils.logging import JsonFormatter, ShardContextFilter, initialize_logging


@pytest.fixture
def record() -> logging.LogRecord:
    record = logging.LogRecord(
        name='shardshortener.services.shorten_url',
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg='SHORTEN => URL: %s => SHORTCODE: %s',
        args=('https://example.com', 'gY3Ab7'),
        exc_info=None,
    )
    record.created = 1_760_000_000.123
    return record


def test_json_formatter_standard_fields(record):
    log = json.loads(JsonFormatter().format(record))

    assert log['level'] == 'INFO'
    assert log['logger'] == 'shardshortener.services.shorten_url'
    assert log['message'] == 'SHORTEN => URL: https://example.com => SHORTCODE: gY3Ab7'
    assert log['timestamp'] == '2025-10-09T08:53:20.123Z'
    assert 'msg' not in log
    assert 'args' not in log


def test_json_formatter_includes_extras(record):
    record.shortcode = 'gY3Ab7'
    record.event = 'SHORT_URL_CREATED'

    log = json.loads(JsonFormatter().format(record))

    assert log['shortcode'] == 'gY3Ab7'
    assert log['event'] == 'SHORT_URL_CREATED'


def test_json_formatter_serializes_unknown_types(record, tmp_path):
    record.path = tmp_path

    log = json.loads(JsonFormatter().format(record))

    assert log['path'] == str(tmp_path)


def test_json_formatter_includes_exceptions(record):
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record.exc_info = sys.exc_info()

    log = json.loads(JsonFormatter().format(record))

    assert 'RuntimeError: boom' in log['exception']


@pytest.mark.parametrize('level, expected', [('debug', logging.DEBUG), ('WARNING', logging.WARNING)])
def test_initialize_logging_sets_root_level(level, expected):
    root = logging.getLogger()
    previous_level, previous_handlers = root.level, root.handlers[:]
    try:
        initialize_logging(level)
        assert root.level == expected
        assert any(isinstance(handler.formatter, JsonFormatter) for handler in root.handlers)
    finally:
        root.handlers = previous_handlers
        root.setLevel(previous_level)


def test_initialize_logging_reads_environment(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'error')
    root = logging.getLogger()
    previous_level, previous_handlers = root.level, root.handlers[:]
    try:
        initialize_logging()
        assert root.level == logging.ERROR
    finally:
        root.handlers = previous_handlers
        root.setLevel(previous_level)


def test_shard_context_filter_stamps_records(record):
    assert ShardContextFilter('links').filter(record) is True

    log = json.loads(JsonFormatter().format(record))

    assert log['shard'] == 'links'


def test_shard_context_filter_keeps_explicit_shard(record):
    record.shard = 'campaign'

    ShardContextFilter('links').filter(record)

    assert record.shard == 'campaign'


def test_shard_context_filter_without_shard_adds_nothing(record):
    ShardContextFilter().filter(record)

    assert 'shard' not in json.loads(JsonFormatter().format(record))


def test_initialize_logging_stamps_shard_on_handler_output(capsys):
    root = logging.getLogger()
    previous_level, previous_handlers = root.level, root.handlers[:]
    try:
        initialize_logging('INFO', shard='links')
        logging.getLogger('uvicorn.access').info('GET /gY3Ab7 308')
        root.handlers[-1].flush()
    finally:
        root.handlers = previous_handlers
        root.setLevel(previous_level)

    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.startswith('{')]
    assert any(line['message'] == 'GET /gY3Ab7 308' and line['shard'] == 'links' for line in lines)
