#!/usr/bin/env python3
"""
Tests for logging setup and resolver configuration
"""

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from gitignore_resolver.ignore.config import ResolverConfig
from gitignore_resolver.ignore.constants import IGNORE_FILENAME, MAX_IGNORE_FILE_SIZE
from gitignore_resolver.utils import TRACE_LEVEL, configure_logging, get_logger
from gitignore_resolver.utils.logging_setup import JsonFormatter, resolve_level


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestResolveLevel:

    def test_explicit_level(self, monkeypatch):
        monkeypatch.setenv('GITIGNORE_RESOLVER_LOG_LEVEL', 'ERROR')
        assert resolve_level('debug') == logging.DEBUG

    def test_environment_precedence(self, monkeypatch):
        monkeypatch.setenv('LOG_LEVEL', 'INFO')
        monkeypatch.setenv('GITIGNORE_RESOLVER_LOG_LEVEL', 'ERROR')
        assert resolve_level() == logging.ERROR
        monkeypatch.delenv('GITIGNORE_RESOLVER_LOG_LEVEL')
        assert resolve_level() == logging.INFO

    def test_default_and_unknown(self, monkeypatch):
        monkeypatch.delenv('GITIGNORE_RESOLVER_LOG_LEVEL', raising=False)
        monkeypatch.delenv('LOG_LEVEL', raising=False)
        assert resolve_level() == logging.WARNING
        assert resolve_level('chatty') == logging.WARNING

    def test_trace(self):
        assert resolve_level('trace') == TRACE_LEVEL


def test_configure_logging_sets_level_and_stderr_handler():
    configure_logging('DEBUG', json_output=False)
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)


def test_configure_logging_with_file(tmp_path):
    log_file = tmp_path / 'logs' / 'resolver.log'
    configure_logging('INFO', log_file=str(log_file), json_output=False)
    get_logger('gitignore_resolver.test').info('written to file')

    root = logging.getLogger()
    assert any(isinstance(h, RotatingFileHandler) for h in root.handlers)
    for handler in root.handlers:
        handler.flush()
    assert 'written to file' in log_file.read_text()


def test_json_formatter():
    record = logging.LogRecord('gitignore_resolver.x', logging.WARNING, __file__, 1,
                               'no ignore file', None, None)
    record.extra = {'path': '/repo/a.txt'}
    data = json.loads(JsonFormatter().format(record))
    assert data['level'] == 'WARNING'
    assert data['component'] == 'gitignore_resolver.x'
    assert data['message'] == 'no ignore file'
    assert data['path'] == '/repo/a.txt'


def test_trace_method(caplog):
    logger = get_logger('gitignore_resolver.trace_test')
    with caplog.at_level(TRACE_LEVEL, logger='gitignore_resolver.trace_test'):
        logger.trace('fine grained')
    assert 'fine grained' in caplog.text


class TestResolverConfig:

    def test_defaults(self):
        config = ResolverConfig()
        assert config.ignore_filename == IGNORE_FILENAME
        assert config.max_file_size == MAX_IGNORE_FILE_SIZE
        assert config.warn_when_missing

    @pytest.mark.parametrize('name', ['', 'a/b', 'a\\b'])
    def test_invalid_filename(self, name):
        with pytest.raises(ValueError):
            ResolverConfig(ignore_filename=name)

    def test_size_is_clamped(self):
        assert ResolverConfig(max_file_size=-5).max_file_size == 1

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv('GITIGNORE_RESOLVER_FILENAME', '.ignore')
        monkeypatch.setenv('GITIGNORE_RESOLVER_MAX_FILE_SIZE', '2048')
        monkeypatch.setenv('GITIGNORE_RESOLVER_WARN_MISSING', 'no')
        config = ResolverConfig.from_env()
        assert config.ignore_filename == '.ignore'
        assert config.max_file_size == 2048
        assert not config.warn_when_missing

    def test_encoding_from_env(self, monkeypatch):
        monkeypatch.setenv('GITIGNORE_RESOLVER_ENCODING', 'latin-1')
        assert ResolverConfig.from_env().encoding == 'latin-1'

    def test_unknown_encoding(self, monkeypatch):
        with pytest.raises(ValueError):
            ResolverConfig(encoding='no-such-codec')
        monkeypatch.setenv('GITIGNORE_RESOLVER_ENCODING', 'no-such-codec')
        with pytest.raises(ValueError):
            ResolverConfig.from_env()

    def test_from_env_bad_size(self, monkeypatch, caplog):
        monkeypatch.delenv('GITIGNORE_RESOLVER_FILENAME', raising=False)
        monkeypatch.delenv('GITIGNORE_RESOLVER_ENCODING', raising=False)
        monkeypatch.setenv('GITIGNORE_RESOLVER_MAX_FILE_SIZE', 'lots')
        with caplog.at_level(logging.WARNING):
            config = ResolverConfig.from_env()
        assert config.max_file_size == MAX_IGNORE_FILE_SIZE
        assert 'GITIGNORE_RESOLVER_MAX_FILE_SIZE' in caplog.text
