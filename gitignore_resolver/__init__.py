"""gitignore-resolver - decide whether paths are excluded by .gitignore files"""

from .ignore import (
    EntryKind,
    EntryNotFoundError,
    IgnoreCache,
    IgnoreError,
    IgnoreFileUnreadableError,
    IgnoreResolver,
    ResolverConfig,
    is_ignored,
)

__version__ = "1.0.0"

__all__ = [
    'EntryKind',
    'EntryNotFoundError',
    'IgnoreCache',
    'IgnoreError',
    'IgnoreFileUnreadableError',
    'IgnoreResolver',
    'ResolverConfig',
    'is_ignored',
    '__version__',
]
