#!/usr/bin/env python3
"""
Tests for comparing resolver verdicts with git's own semantics
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from gitignore_resolver.ignore import EntryKind, IgnoreCache, IgnoreResolver, compare_with_git
from gitignore_resolver.ignore.compat import git_would_ignore


class NoIgnoreFiles:
    """Filesystem without any ignore file"""

    def exists(self, path):
        return False

    def classify(self, path):
        return EntryKind.FILE


def test_git_would_ignore():
    assert git_would_ignore(['*.log'], '/a/debug.log')
    assert not git_would_ignore(['*.log'], '/a/debug.txt')
    assert git_would_ignore(['build/'], '/build/')


def test_agreement(tmp_path):
    (tmp_path / '.gitignore').write_text('*.log\n')
    resolver = IgnoreResolver(cache=IgnoreCache())

    report = compare_with_git(resolver, tmp_path / 'a' / 'debug.log', 'file')
    assert report.ignored
    assert report.git_ignored
    assert report.agrees


def test_mid_line_hash_differs_from_git(tmp_path):
    (tmp_path / '.gitignore').write_text('foo#bar\n')
    resolver = IgnoreResolver(cache=IgnoreCache())

    report = compare_with_git(resolver, tmp_path / 'foo#bar', 'file')
    assert not report.ignored
    assert report.git_ignored
    assert not report.agrees


def test_first_negation_wins_differs_from_git(tmp_path):
    (tmp_path / '.gitignore').write_text('*.txt\n!a.txt\na.txt\n')
    resolver = IgnoreResolver(cache=IgnoreCache())

    report = compare_with_git(resolver, tmp_path / 'a.txt', 'file')
    assert not report.ignored
    assert report.git_ignored
    assert report.result.negated_by.pattern == '!a.txt'


def test_no_ignore_file():
    resolver = IgnoreResolver(cache=IgnoreCache(), filesystem=NoIgnoreFiles())
    report = compare_with_git(resolver, '/repo/a.txt')
    assert report.git_ignored is None
    assert report.agrees
