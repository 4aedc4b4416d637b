"""
Main resolver API: find the nearest ignore file for a path and evaluate it
"""

import os
import threading
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .cache import IgnoreCache
from .config import ResolverConfig
from .errors import EntryNotFoundError, IgnoreFileUnreadableError
from .file_loader import CompiledIgnoreFile, IgnoreFileLoader, normalize_root_path
from .filesystem import EntryKind, FileSystem, LocalFileSystem
from .pattern import Rule
from gitignore_resolver.utils import get_logger

logger = get_logger(__name__)

PathLike = Union[str, 'os.PathLike[str]']
KindLike = Union[EntryKind, str]


@dataclass(frozen=True)
class MatchResult:
    """Outcome of evaluating one path"""
    ignored: bool
    kind: EntryKind
    relative_path: Optional[str] = None
    ignore_directory: Optional[str] = None
    ignore_file: Optional[str] = None
    matched_rule: Optional[Rule] = None
    negated_by: Optional[Rule] = None

    @property
    def matched_pattern(self) -> Optional[str]:
        return self.matched_rule.pattern if self.matched_rule else None


def evaluate_rules(rules: Iterable[Rule], relative_path: str) -> Tuple[Optional[Rule], Optional[Rule]]:
    """
    Evaluate a rule set against a normalized path

    A path is ignored when any non-negated rule matches. Only then are the
    negated rules scanned in file order, and the first one that matches
    re-includes the path.

    Returns:
        Tuple of (first matching ignore rule, first matching negation rule)
    """
    rules = list(rules)
    matched = next(
        (rule for rule in rules if not rule.negated and rule.matches(relative_path)),
        None
    )
    if matched is None:
        return None, None
    negated_by = next(
        (rule for rule in rules if rule.negated and rule.matches(relative_path)),
        None
    )
    return matched, negated_by


def relative_query_path(query_path: str, root_path: str, kind: EntryKind) -> str:
    """
    Express an absolute query path relative to a normalized root

    The result always starts with '/', ends with '/' for directories and never
    ends with '/' for files.
    """
    path = query_path.replace('\\', '/')
    if kind is EntryKind.DIRECTORY and not path.endswith('/'):
        path += '/'
    if kind is EntryKind.FILE and path.endswith('/'):
        path = path[:-1]
    path = path[len(root_path):]
    if not path.startswith('/'):
        path = '/' + path
    return path


class IgnoreResolver:
    """
    Resolves ignore decisions for absolute paths

    Owns an IgnoreCache (a fresh one unless one is passed in) that lives as
    long as the resolver; there is no teardown.
    """

    def __init__(self,
                 cache: Optional[IgnoreCache] = None,
                 filesystem: Optional[FileSystem] = None,
                 config: Optional[ResolverConfig] = None):
        """
        Initialize the resolver

        Args:
            cache: Cache of compiled ignore files, shared if passed in
            filesystem: Filesystem collaborator (defaults to the local disk)
            config: Resolver configuration
        """
        self.config = config or ResolverConfig()
        self.filesystem = filesystem or LocalFileSystem()
        self.cache = cache if cache is not None else IgnoreCache()
        self._loader = IgnoreFileLoader(self.filesystem, self.config)

    @property
    def ignore_filename(self) -> str:
        return self.config.ignore_filename

    def is_ignored(self, path: PathLike, kind: KindLike = EntryKind.AUTO) -> bool:
        """
        Check if a path is ignored by its nearest ignore file

        Args:
            path: Absolute path (relative paths are resolved against the cwd)
            kind: 'file', 'directory' or 'auto' to stat the path

        Returns:
            True if the path is ignored

        Raises:
            EntryNotFoundError: kind is 'auto' and the path cannot be stat'ed
            IgnoreFileUnreadableError: the nearest ignore file cannot be read
        """
        return self.resolve(path, kind).ignored

    def resolve(self, path: PathLike, kind: KindLike = EntryKind.AUTO) -> MatchResult:
        """
        Resolve the ignore decision for a path with details on the deciding rules
        """
        query_path = os.path.abspath(os.fspath(path))
        kind = self._determine_kind(query_path, EntryKind(kind))

        directory = self.find_ignore_directory(query_path, kind)
        if directory is None:
            if self.config.warn_when_missing:
                logger.warning(
                    f"No {self.ignore_filename} found in any parent directory of {query_path}"
                )
            return MatchResult(ignored=False, kind=kind)

        compiled = self.load(directory)
        relative_path = relative_query_path(query_path, compiled.root_path, kind)
        matched, negated_by = evaluate_rules(compiled.rules, relative_path)

        result = MatchResult(
            ignored=matched is not None and negated_by is None,
            kind=kind,
            relative_path=relative_path,
            ignore_directory=directory,
            ignore_file=self._loader.ignore_file_path(directory),
            matched_rule=matched,
            negated_by=negated_by,
        )
        logger.debug(
            f"Ignore check for {query_path}: {result.ignored} "
            f"(matched: {result.matched_pattern}, negated by: "
            f"{negated_by.pattern if negated_by else None})"
        )
        return result

    def find_ignore_directory(self, query_path: str, kind: EntryKind) -> Optional[str]:
        """
        Find the closest directory holding an ignore file

        Walks upward from the path (from its parent for files) up to and
        including the filesystem root.

        Returns:
            The directory, or None if no ancestor has an ignore file
        """
        current = os.path.dirname(query_path) if kind is EntryKind.FILE else query_path
        while True:
            if self.filesystem.exists(self._loader.ignore_file_path(current)):
                return current
            parent = os.path.dirname(current)
            if parent == current:
                return None
            current = parent

    def load(self, directory: str) -> CompiledIgnoreFile:
        """
        Get the compiled ignore file for a directory, compiling it on a cache miss

        Raises:
            IgnoreFileUnreadableError: the ignore file cannot be stat'ed or read
        """
        file_path = self._loader.ignore_file_path(directory)
        try:
            modified_at = self.filesystem.modified_time(file_path)
        except OSError as e:
            raise IgnoreFileUnreadableError(
                f"Could not open ignore file {file_path}: {e}", file_path
            ) from e

        root_path = normalize_root_path(directory)
        cached = self.cache.get(root_path, modified_at)
        if cached is not None:
            return cached

        compiled = self._loader.load_file(directory, modified_at)
        return self.cache.put(compiled)

    def filter_paths(self, paths: Iterable[PathLike], kind: KindLike = EntryKind.AUTO) -> List[str]:
        """
        Filter a list of paths, removing ignored ones

        Args:
            paths: Absolute paths
            kind: Entry kind applied to every path

        Returns:
            Paths that are NOT ignored, in input order
        """
        return [os.fspath(p) for p in paths if not self.is_ignored(p, kind)]

    def walk(self, root: PathLike) -> Iterator[str]:
        """
        Yield every non-ignored file and directory below root

        Ignored directories are not descended into. The ignore file names
        themselves are yielded like any other file.
        """
        root = os.path.abspath(os.fspath(root))
        for dirpath, dirnames, filenames in os.walk(root):
            kept = []
            for name in sorted(dirnames):
                full_path = os.path.join(dirpath, name)
                if not self.is_ignored(full_path, EntryKind.DIRECTORY):
                    kept.append(name)
                    yield full_path
            dirnames[:] = kept

            for name in sorted(filenames):
                full_path = os.path.join(dirpath, name)
                if not self.is_ignored(full_path, EntryKind.FILE):
                    yield full_path

    def cache_stats(self) -> Dict[str, Union[int, float]]:
        return self.cache.get_stats()

    def clear_cache(self):
        self.cache.clear()

    def _determine_kind(self, query_path: str, kind: EntryKind) -> EntryKind:
        if kind is not EntryKind.AUTO:
            return kind
        try:
            return self.filesystem.classify(query_path)
        except OSError as e:
            raise EntryNotFoundError(
                f'File or directory "{query_path}" was not found, so it could not '
                f'be determined whether it is ignored.',
                query_path
            ) from e


_default_resolver: Optional[IgnoreResolver] = None
_default_lock = threading.Lock()


def get_default_resolver() -> IgnoreResolver:
    """Process-wide resolver, created on first use with ResolverConfig.from_env()"""
    global _default_resolver
    with _default_lock:
        if _default_resolver is None:
            _default_resolver = IgnoreResolver(config=ResolverConfig.from_env())
        return _default_resolver


def is_ignored(path: PathLike, kind: KindLike = EntryKind.AUTO) -> bool:
    """Check a path with the process-wide resolver"""
    return get_default_resolver().is_ignored(path, kind)
