#!/usr/bin/env python3
"""
Tests for the gitignore-check command line interface
"""

import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from gitignore_check import GitignoreCLI
from gitignore_resolver import __version__
from gitignore_resolver.ignore import IgnoreCache, IgnoreResolver


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI reconfigures the root logger; put it back afterwards"""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def cli():
    return GitignoreCLI(resolver=IgnoreResolver(cache=IgnoreCache()))


@pytest.fixture
def tree(tmp_path):
    (tmp_path / '.gitignore').write_text('build/\n*.log\n!keep.log\n[bad\nfoo#bar\n')
    (tmp_path / 'build').mkdir()
    (tmp_path / 'src').mkdir()
    (tmp_path / 'src' / 'main.py').write_text('')
    (tmp_path / 'debug.log').write_text('')
    (tmp_path / 'keep.log').write_text('')
    return tmp_path


def test_check_prints_ignored_paths(cli, tree, capsys):
    code = cli.run(['check', str(tree / 'debug.log'), str(tree / 'src' / 'main.py')])
    out = capsys.readouterr().out
    assert code == 0
    assert out.splitlines() == [str(tree / 'debug.log')]


def test_check_nothing_ignored(cli, tree, capsys):
    assert cli.run(['check', str(tree / 'src' / 'main.py')]) == 1
    assert capsys.readouterr().out == ''


def test_check_verbose(cli, tree, capsys):
    cli.run(['check', '-v', str(tree / 'build'), str(tree / 'keep.log')])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith(f"{tree / 'build'}: ignored (")
    assert lines[0].endswith(':1: build/)')
    assert lines[1].startswith(f"{tree / 'keep.log'}: not ignored (")
    assert lines[1].endswith(':3: !keep.log)')


def test_check_explicit_kind(cli, tree, capsys):
    assert cli.run(['check', '--kind', 'directory', str(tree / 'missing' / 'build')]) == 0


def test_check_compare_git(cli, tree, capsys):
    cli.run(['check', '--compare-git', str(tree / 'debug.log')])
    out = capsys.readouterr().out
    assert 'git: ignored (agrees)' in out


def test_check_missing_path_is_an_error(cli, tree, capsys):
    assert cli.run(['check', str(tree / 'nope.txt')]) == 2
    assert 'Error:' in capsys.readouterr().err


def test_validate(cli, tree, capsys):
    code = cli.run(['validate', str(tree)])
    out = capsys.readouterr().out
    assert code == 1
    assert 'rules: 3' in out
    assert "error   line 4: '[bad'" in out
    assert "warning line 5: 'foo#bar'" in out


def test_validate_without_ignore_file(cli, tmp_path, capsys):
    assert cli.run(['validate', str(tmp_path)]) == 2
    assert 'No .gitignore' in capsys.readouterr().err


def test_walk(cli, tree, capsys):
    assert cli.run(['walk', str(tree)]) == 0
    listed = set(capsys.readouterr().out.splitlines())
    assert 'src' in listed
    assert str(Path('src') / 'main.py') in listed
    assert 'keep.log' in listed
    assert 'build' not in listed
    assert 'debug.log' not in listed


def test_no_command_prints_help(cli, capsys):
    assert cli.run([]) == 0
    assert 'usage:' in capsys.readouterr().out


def test_version(cli, capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.run(['--version'])
    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out
