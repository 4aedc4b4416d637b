"""
Cache of compiled ignore files keyed by directory and modification time
"""

import threading
from typing import Dict, Optional, Union

from .file_loader import CompiledIgnoreFile
from gitignore_resolver.utils import get_logger

logger = get_logger(__name__)


class IgnoreCache:
    """
    Thread-safe store of compiled ignore files

    Holds at most one entry per root path. An entry is reused while the
    ignore file keeps the same modification time and replaced as soon as a
    different one is stored for that root. There is no size bound: the cache
    grows with the number of distinct directories holding an ignore file.
    """

    def __init__(self):
        self._entries: Dict[str, CompiledIgnoreFile] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, root_path: str, modified_at: int) -> Optional[CompiledIgnoreFile]:
        """
        Get the compiled file for a root if it was stored with this timestamp

        Args:
            root_path: Normalized root path (trailing '/')
            modified_at: Current modification time of the ignore file

        Returns:
            Cached entry or None
        """
        with self._lock:
            entry = self._entries.get(root_path)
            if entry is not None and entry.modified_at == modified_at:
                self._hits += 1
                logger.trace(f"Cache hit for {root_path}")
                return entry
            self._misses += 1
            return None

    def put(self, entry: CompiledIgnoreFile) -> CompiledIgnoreFile:
        """
        Store a compiled file, evicting any other entry for its root

        If an entry with the same root and timestamp is already present (a
        concurrent compilation got there first) that entry is kept and
        returned instead.

        Returns:
            The entry now cached for the root
        """
        with self._lock:
            current = self._entries.get(entry.root_path)
            if current is not None:
                if current.modified_at == entry.modified_at:
                    return current
                self._evictions += 1
                logger.debug(
                    f"Evicting ignore rules for {entry.root_path} "
                    f"(modified {current.modified_at} -> {entry.modified_at})"
                )
            self._entries[entry.root_path] = entry
            return entry

    def peek(self, root_path: str) -> Optional[CompiledIgnoreFile]:
        """Return the current entry for a root without touching statistics"""
        with self._lock:
            return self._entries.get(root_path)

    def clear(self):
        """Clear the cache and its statistics"""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_stats(self) -> Dict[str, Union[int, float]]:
        """Get cache statistics"""
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0
            return {
                'size': len(self._entries),
                'hits': self._hits,
                'misses': self._misses,
                'evictions': self._evictions,
                'hit_rate': hit_rate,
            }
