"""
File loader for parsing and compiling ignore files
"""

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .config import ResolverConfig
from .constants import INVALID_LINE_CHARACTERS
from .errors import IgnoreFileUnreadableError
from .filesystem import FileSystem, LocalFileSystem
from .pattern import LinePatternInvalid, Rule, compile_rule
from gitignore_resolver.utils import get_logger, log_with_context

logger = get_logger(__name__)

LINE_TERMINATORS = re.compile(r'\r\n|\n|\r')

# Line categories produced by the pre-filter
EMPTY = 'empty'
COMMENT = 'comment'
INVALID = 'invalid'
PATTERN = 'pattern'


@dataclass(frozen=True)
class ValidationWarning:
    """Represents a non-fatal remark about a line of an ignore file"""
    line: int
    pattern: str
    message: str


@dataclass(frozen=True)
class CompiledIgnoreFile:
    """The compiled rule set of one ignore file at one modification time"""
    root_path: str
    modified_at: int
    rules: Tuple[Rule, ...]
    source_lines: Tuple[str, ...] = ()
    raw_lines: Tuple[str, ...] = ()
    errors: Tuple[LinePatternInvalid, ...] = ()
    warnings: Tuple[ValidationWarning, ...] = ()
    stats: Dict[str, int] = field(default_factory=dict, compare=False)

    @property
    def is_valid(self) -> bool:
        """Check if every pattern line compiled"""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


def normalize_root_path(directory: str) -> str:
    """Forward slashes only, exactly one trailing '/'"""
    root = directory.replace('\\', '/')
    return root.rstrip('/') + '/'


def split_lines(content: str) -> List[str]:
    return LINE_TERMINATORS.split(content)


def trim_line(line: str) -> str:
    """Strip surrounding whitespace but keep an escaped trailing space"""
    return line.replace('\\ ', '"\\ "').strip().replace('"\\ "', '\\ ')


def classify_line(line: str) -> Tuple[str, Optional[str]]:
    """
    Apply the line pre-filter

    Returns:
        Tuple of (category, detail). For PATTERN lines the detail is the
        trimmed pattern; for skipped lines it explains why, or is None.
    """
    if not line.strip():
        return EMPTY, None
    if line.startswith(' '):
        return INVALID, "starts with a space"
    # '#' anywhere makes the whole line a comment
    if '#' in line:
        return COMMENT, None
    for char in INVALID_LINE_CHARACTERS:
        if char in line:
            return INVALID, f"contains unsupported character {char!r}"
    return PATTERN, trim_line(line)


class IgnoreFileLoader:
    """
    Handles reading ignore files and compiling their lines into rules
    """

    def __init__(self, filesystem: Optional[FileSystem] = None,
                 config: Optional[ResolverConfig] = None):
        """
        Initialize loader

        Args:
            filesystem: Filesystem used to read ignore files
            config: Resolver configuration (ignore filename, size limit, encoding)
        """
        self.filesystem = filesystem or LocalFileSystem()
        self.config = config or ResolverConfig()

    def ignore_file_path(self, directory: str) -> str:
        return os.path.join(directory, self.config.ignore_filename)

    def load_file(self, directory: str, modified_at: int) -> CompiledIgnoreFile:
        """
        Read and compile the ignore file in a directory

        Args:
            directory: Directory containing the ignore file
            modified_at: Modification time the content is recorded under

        Returns:
            CompiledIgnoreFile for the directory

        Raises:
            IgnoreFileUnreadableError: if the file cannot be read
        """
        file_path = self.ignore_file_path(directory)

        try:
            file_size = self.filesystem.size(file_path)
            if file_size > self.config.max_file_size:
                raise IgnoreFileUnreadableError(
                    f"Could not open ignore file {file_path}: "
                    f"file too large: {file_size} bytes (max: {self.config.max_file_size})",
                    file_path
                )
            data = self.filesystem.read_bytes(file_path)
        except OSError as e:
            raise IgnoreFileUnreadableError(
                f"Could not open ignore file {file_path}: {e}", file_path
            ) from e

        content = data.decode(self.config.encoding, errors='replace')
        compiled = self.parse(content, normalize_root_path(directory), modified_at)

        for error in compiled.errors:
            log_with_context(
                logger, logging.ERROR,
                f"{file_path}:{error.line}: line {error.pattern!r} is invalid: {error.message}",
                ignore_file=file_path, line=error.line, pattern=error.pattern,
            )
        for warning in compiled.warnings:
            logger.debug(f"{file_path}:{warning.line}: {warning.message}")

        log_with_context(
            logger, logging.INFO,
            f"Compiled {len(compiled.rules)} rules from {file_path} "
            f"({len(compiled.errors)} invalid lines)",
            ignore_file=file_path, **compiled.stats,
        )
        return compiled

    def parse(self, content: str, root_path: str, modified_at: int = 0) -> CompiledIgnoreFile:
        """
        Compile ignore file content

        Args:
            content: Decoded file content
            root_path: Normalized directory path of the ignore file
            modified_at: Modification time to record

        Returns:
            CompiledIgnoreFile with rules in file order
        """
        rules: List[Rule] = []
        source_lines: List[str] = []
        errors: List[LinePatternInvalid] = []
        warnings: List[ValidationWarning] = []
        stats = {
            'total_lines': 0,
            'empty_lines': 0,
            'comment_lines': 0,
            'invalid_lines': 0,
            'pattern_lines': 0,
        }

        lines = split_lines(content)
        # A terminator at the end of the file does not start another line
        if lines and lines[-1] == '':
            lines.pop()
        stats['total_lines'] = len(lines)

        for line_num, line in enumerate(lines, 1):
            category, detail = classify_line(line)

            if category == EMPTY:
                stats['empty_lines'] += 1
                continue

            if category == COMMENT:
                stats['comment_lines'] += 1
                if not line.strip().startswith('#'):
                    warnings.append(ValidationWarning(
                        line=line_num,
                        pattern=line,
                        message="Line contains '#' and is treated as a comment; "
                                "git would read it as a pattern"
                    ))
                continue

            if category == INVALID:
                stats['invalid_lines'] += 1
                warnings.append(ValidationWarning(
                    line=line_num,
                    pattern=line,
                    message=f"Line skipped: {detail}"
                ))
                continue

            stats['pattern_lines'] += 1
            source_lines.append(detail)

            result = compile_rule(detail, root_path, line_num)
            if isinstance(result, LinePatternInvalid):
                errors.append(result)
                continue

            if result.ast.matches_everything:
                warnings.append(ValidationWarning(
                    line=line_num,
                    pattern=detail,
                    message="Pattern matches every path"
                ))
            rules.append(result)

        return CompiledIgnoreFile(
            root_path=root_path,
            modified_at=modified_at,
            rules=tuple(rules),
            source_lines=tuple(source_lines),
            raw_lines=tuple(lines),
            errors=tuple(errors),
            warnings=tuple(warnings),
            stats=stats,
        )
