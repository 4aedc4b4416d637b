"""
Filesystem access used by the resolver

The resolver only needs a handful of read-only operations, so they are
expressed as a small protocol that tests can replace with an in-memory implementation.
"""

import os
import stat
from enum import Enum
from typing import Protocol


class EntryKind(str, Enum):
    """How a queried path should be treated"""
    FILE = 'file'
    DIRECTORY = 'directory'
    AUTO = 'auto'


class FileSystem(Protocol):
    """Read-only filesystem operations consumed by the resolver"""

    def exists(self, path: str) -> bool:
        ...

    def modified_time(self, path: str) -> int:
        """Modification time in nanoseconds; raises OSError if missing"""
        ...

    def read_bytes(self, path: str) -> bytes:
        """Raw file content; raises OSError on failure"""
        ...

    def size(self, path: str) -> int:
        """File size in bytes; raises OSError if missing"""
        ...

    def classify(self, path: str) -> EntryKind:
        """FILE or DIRECTORY; raises OSError if the path cannot be stat'ed"""
        ...


class LocalFileSystem:
    """FileSystem backed by the local disk"""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def modified_time(self, path: str) -> int:
        return os.lstat(path).st_mtime_ns

    def read_bytes(self, path: str) -> bytes:
        with open(path, 'rb') as f:
            return f.read()

    def size(self, path: str) -> int:
        return os.lstat(path).st_size

    def classify(self, path: str) -> EntryKind:
        mode = os.lstat(path).st_mode
        return EntryKind.DIRECTORY if stat.S_ISDIR(mode) else EntryKind.FILE
