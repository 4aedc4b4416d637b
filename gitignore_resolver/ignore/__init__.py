"""
Ignore file processing for gitignore-resolver

This module provides:
- Compilation of .gitignore lines into matchable rules
- Lookup of the nearest .gitignore for any absolute path
- A modification-time keyed cache of compiled ignore files
"""

from .constants import IGNORE_FILENAME
from .config import ResolverConfig
from .errors import IgnoreError, EntryNotFoundError, IgnoreFileUnreadableError
from .filesystem import EntryKind, FileSystem, LocalFileSystem
from .pattern import Rule, LinePatternInvalid, compile_rule
from .file_loader import CompiledIgnoreFile, IgnoreFileLoader, ValidationWarning
from .cache import IgnoreCache
from .manager import IgnoreResolver, MatchResult, get_default_resolver, is_ignored
from .compat import CompatReport, compare_with_git

__all__ = [
    'IGNORE_FILENAME',
    'ResolverConfig',
    'IgnoreError',
    'EntryNotFoundError',
    'IgnoreFileUnreadableError',
    'EntryKind',
    'FileSystem',
    'LocalFileSystem',
    'Rule',
    'LinePatternInvalid',
    'compile_rule',
    'CompiledIgnoreFile',
    'IgnoreFileLoader',
    'ValidationWarning',
    'IgnoreCache',
    'IgnoreResolver',
    'MatchResult',
    'get_default_resolver',
    'is_ignored',
    'CompatReport',
    'compare_with_git',
]
