#!/usr/bin/env python3
"""
Tests for the compiled ignore file cache
"""

import sys
import threading
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from gitignore_resolver.ignore.cache import IgnoreCache
from gitignore_resolver.ignore.file_loader import CompiledIgnoreFile


def entry(root='/repo/', modified_at=1):
    return CompiledIgnoreFile(root_path=root, modified_at=modified_at, rules=())


def test_miss_then_hit():
    cache = IgnoreCache()
    assert cache.get('/repo/', 1) is None

    stored = cache.put(entry())
    assert cache.get('/repo/', 1) is stored

    stats = cache.get_stats()
    assert stats['hits'] == 1
    assert stats['misses'] == 1
    assert stats['hit_rate'] == 50


def test_different_timestamp_is_a_miss():
    cache = IgnoreCache()
    cache.put(entry(modified_at=1))
    assert cache.get('/repo/', 2) is None


def test_newer_entry_evicts_old_one():
    cache = IgnoreCache()
    cache.put(entry(modified_at=1))
    newer = cache.put(entry(modified_at=2))

    assert len(cache) == 1
    assert cache.peek('/repo/') is newer
    assert cache.get('/repo/', 1) is None
    assert cache.get_stats()['evictions'] == 1


def test_same_key_keeps_first_entry():
    cache = IgnoreCache()
    first = cache.put(entry())
    second = cache.put(entry())

    assert second is first
    assert len(cache) == 1
    assert cache.get_stats()['evictions'] == 0


def test_roots_are_independent():
    cache = IgnoreCache()
    cache.put(entry('/a/'))
    cache.put(entry('/b/'))
    assert len(cache) == 2


def test_concurrent_puts_leave_one_entry_per_root():
    cache = IgnoreCache()
    results = []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        results.append(cache.put(entry()))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(cache) == 1
    assert all(result is results[0] for result in results)


def test_clear():
    cache = IgnoreCache()
    cache.put(entry())
    cache.get('/repo/', 1)
    cache.clear()

    assert len(cache) == 0
    assert cache.get_stats() == {
        'size': 0, 'hits': 0, 'misses': 0, 'evictions': 0, 'hit_rate': 0,
    }
