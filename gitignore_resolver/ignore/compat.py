"""
Comparison against git's own gitignore semantics

The resolver deliberately keeps two behaviours that differ from git: a '#'
anywhere on a line makes it a comment, and the first matching negation wins
over any ignore rule. This module evaluates the same ignore file with
pathspec's GitIgnoreSpec so callers can see where the two disagree.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

import pathspec

from .filesystem import EntryKind
from .manager import IgnoreResolver, KindLike, MatchResult, PathLike
from gitignore_resolver.utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CompatReport:
    """Verdicts of the resolver and of git for one path"""
    path: str
    ignored: bool
    git_ignored: Optional[bool]
    result: MatchResult

    @property
    def agrees(self) -> bool:
        """True when git agrees, or when there was no ignore file to compare"""
        return self.git_ignored is None or self.git_ignored == self.ignored


def git_would_ignore(lines: Iterable[str], relative_path: str) -> bool:
    """
    Evaluate raw ignore-file lines the way git does

    Args:
        lines: Ignore-file lines as written
        relative_path: Normalized path ('/a/b' for files, '/a/b/' for directories)
    """
    spec = pathspec.GitIgnoreSpec.from_lines(list(lines))
    return spec.match_file(relative_path.lstrip('/'))


def compare_with_git(resolver: IgnoreResolver, path: PathLike,
                     kind: KindLike = EntryKind.AUTO) -> CompatReport:
    """
    Resolve a path and evaluate the same ignore file with git's rules

    Raises the same errors as IgnoreResolver.resolve().
    """
    result = resolver.resolve(path, kind)
    if result.ignore_directory is None or result.relative_path is None:
        return CompatReport(path=str(path), ignored=result.ignored,
                            git_ignored=None, result=result)

    compiled = resolver.load(result.ignore_directory)
    git_ignored = git_would_ignore(compiled.raw_lines, result.relative_path)
    if git_ignored != result.ignored:
        logger.info(
            f"{path}: resolver says {'ignored' if result.ignored else 'not ignored'}, "
            f"git says {'ignored' if git_ignored else 'not ignored'}"
        )
    return CompatReport(path=str(path), ignored=result.ignored,
                        git_ignored=git_ignored, result=result)
