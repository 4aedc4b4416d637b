"""
Pattern compilation and matching for single ignore-file lines

Each line becomes a small syntax tree: an anchor plus a sequence of segments
(literal, wildcard ``*``, depth wildcard ``**``). The tree is interpreted
against normalized paths of the form ``/seg/seg`` for files and ``/seg/seg/``
for directories, always relative to the directory holding the ignore file.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Tuple, Union

from .constants import (
    LITERAL_ESCAPES,
    NAME_EXCLUDED_CHARACTERS,
    QUESTION_TRANSLATION,
    STAR_TRANSLATION,
)
from gitignore_resolver.utils import get_logger

logger = get_logger(__name__)


class Anchor(Enum):
    """Where a pattern is allowed to start matching"""
    ROOT = 'root'              # only at the ignore file's directory
    ANY_DEPTH = 'any-depth'    # at any '/' boundary
    EVERYTHING = 'everything'  # no actionable segments, matches every path


@dataclass(frozen=True)
class LiteralSegment:
    """A segment matched by name, possibly containing '*', '?' or '[...]'"""
    text: str
    regex: 're.Pattern' = field(compare=False, repr=False)

    @classmethod
    def compile(cls, text: str) -> 'LiteralSegment':
        """Raises re.error when the segment is not a valid expression"""
        return cls(text, re.compile(translate_segment(text)))

    def match_name(self, name: str) -> bool:
        return self.regex.fullmatch(name) is not None


@dataclass(frozen=True)
class WildcardSegment:
    """A segment consisting of a single '*'"""


@dataclass(frozen=True)
class DepthWildcardSegment:
    """A segment consisting of '**'"""


Segment = Union[LiteralSegment, WildcardSegment, DepthWildcardSegment]


@dataclass(frozen=True)
class PatternAST:
    """
    Compiled form of one pattern

    ``open_end`` is set when the last segment was followed by a '/', in which
    case it is treated as a directory that may be followed by an optional
    subtree.
    """
    anchor: Anchor
    segments: Tuple[Segment, ...] = ()
    open_end: bool = False

    @property
    def matches_everything(self) -> bool:
        return self.anchor is Anchor.EVERYTHING


@dataclass(frozen=True)
class Rule:
    """A compiled ignore-file line"""
    pattern: str
    negated: bool
    ast: PatternAST
    line: int = 0

    def matches(self, path: str) -> bool:
        return match_path(self.ast, path)


@dataclass(frozen=True)
class LinePatternInvalid:
    """A line that could not be compiled; it is left out of the rule set"""
    line: int
    pattern: str
    message: str


def translate_segment(text: str) -> str:
    """Translate a literal segment into a regular expression"""
    parts = []
    for char in text:
        if char == '*':
            parts.append(STAR_TRANSLATION)
        elif char == '?':
            parts.append(QUESTION_TRANSLATION)
        elif char in LITERAL_ESCAPES:
            parts.append('\\' + char)
        else:
            parts.append(char)
    return ''.join(parts)


def parse_pattern(pattern: str) -> PatternAST:
    """
    Build the syntax tree for a pattern whose '!' prefix was already removed

    Raises:
        re.error: when a literal segment is malformed
    """
    if not pattern.replace('*', ''):
        return PatternAST(Anchor.EVERYTHING)

    if pattern.startswith('/'):
        rest = pattern[1:]
        if not rest:
            return PatternAST(Anchor.EVERYTHING)
        segments, open_end = _parse_segments(rest)
        return PatternAST(Anchor.ROOT, segments, open_end)

    # '*/' is a root-anchored wildcard directory level
    if pattern.startswith('*/'):
        rest = pattern[2:]
        if not rest:
            return PatternAST(Anchor.ROOT, (WildcardSegment(),), open_end=True)
        segments, open_end = _parse_segments(rest)
        return PatternAST(Anchor.ROOT, (WildcardSegment(),) + segments, open_end)

    if pattern.startswith('**/'):
        pattern = pattern[3:]
    segments, open_end = _parse_segments(pattern)
    return PatternAST(Anchor.ANY_DEPTH, segments, open_end)


def _parse_segments(text: str) -> Tuple[Tuple[Segment, ...], bool]:
    parts = text.split('/')
    segments = []
    for index, part in enumerate(parts):
        if part == '*':
            segments.append(WildcardSegment())
        elif part == '**':
            segments.append(DepthWildcardSegment())
        else:
            segments.append(LiteralSegment.compile(part))

        if index == len(parts) - 1:
            return tuple(segments), False
        # An empty next segment closes the pattern; anything after it is unused
        if parts[index + 1] == '':
            return tuple(segments), True
    return tuple(segments), False


def compile_rule(line: str, root_path: str = '', line_number: int = 0) -> Union[Rule, LinePatternInvalid]:
    """
    Compile one pre-filtered ignore-file line

    Args:
        line: Trimmed line text, including any '!' prefix
        root_path: Directory holding the ignore file, used in diagnostics
        line_number: 1-based line number, used in diagnostics

    Returns:
        A Rule, or LinePatternInvalid when the line cannot be compiled
    """
    negated = line.startswith('!')
    pattern = line[1:] if negated else line

    try:
        ast = parse_pattern(pattern)
    except re.error as e:
        return LinePatternInvalid(line=line_number, pattern=line, message=str(e))

    if ast.matches_everything and not pattern.replace('*', ''):
        logger.warning(
            f'Line {line_number} of the ignore file in "{root_path}" matches every path, '
            f'due to a line containing only * characters: {line!r}'
        )

    return Rule(pattern=line, negated=negated, ast=ast, line=line_number)


# Matching


def _is_name(text: str) -> bool:
    return bool(text) and not any(char in NAME_EXCLUDED_CHARACTERS for char in text)


def _is_subtree(text: str) -> bool:
    """One or more names joined by '/'"""
    return bool(text) and all(_is_name(part) for part in text.split('/'))


def _optional_subtree(rest: str) -> bool:
    return rest == '' or _is_subtree(rest)


def _open_tail(rest: str) -> bool:
    """Nothing, a lone '/', or a subtree with an optional trailing '/'"""
    if rest.endswith('/'):
        rest = rest[:-1]
    return _optional_subtree(rest)


def _wildcard_tail(rest: str) -> bool:
    """A name with optional trailing '/', or a name followed by a subtree"""
    if rest.endswith('/') and _is_name(rest[:-1]):
        return True
    return _is_subtree(rest)


def _depth_tail(rest: str) -> bool:
    if rest.endswith('/'):
        rest = rest[:-1]
    return _is_subtree(rest)


def _literal_tail(rest: str) -> bool:
    return rest == '' or (rest.startswith('/') and _open_tail(rest[1:]))


def _advance(segment: Segment, path: str, pos: int) -> Iterator[int]:
    """Yield every position reachable after a non-final segment and its '/'"""
    slash = path.find('/', pos)

    if isinstance(segment, DepthWildcardSegment):
        yield pos
        while slash != -1 and _is_name(path[pos:slash]):
            pos = slash + 1
            yield pos
            slash = path.find('/', pos)
        return

    if slash == -1:
        return
    name = path[pos:slash]
    if isinstance(segment, WildcardSegment):
        matched = _is_name(name)
    else:
        matched = segment.match_name(name)
    if matched:
        yield slash + 1


def _match_final(segment: Segment, rest: str) -> bool:
    if isinstance(segment, WildcardSegment):
        return _wildcard_tail(rest)
    if isinstance(segment, DepthWildcardSegment):
        return _depth_tail(rest)

    slash = rest.find('/')
    if slash == -1:
        name, tail = rest, ''
    else:
        name, tail = rest[:slash], rest[slash:]
    return segment.match_name(name) and _literal_tail(tail)


def _match_from(ast: PatternAST, path: str, pos: int, index: int) -> bool:
    segment = ast.segments[index]
    last = index == len(ast.segments) - 1

    if last and not ast.open_end:
        return _match_final(segment, path[pos:])

    for next_pos in _advance(segment, path, pos):
        if last:
            rest = path[next_pos:]
            if isinstance(segment, DepthWildcardSegment):
                if _optional_subtree(rest):
                    return True
            elif _open_tail(rest):
                return True
        elif _match_from(ast, path, next_pos, index + 1):
            return True
    return False


def match_path(ast: PatternAST, path: str) -> bool:
    """
    Test a normalized path ('/a/b' for files, '/a/b/' for directories)
    against a compiled pattern
    """
    if ast.matches_everything or not ast.segments:
        return True

    if ast.anchor is Anchor.ROOT:
        starts = [1] if path.startswith('/') else []
    else:
        starts = (i + 1 for i, char in enumerate(path) if char == '/')

    return any(_match_from(ast, path, start, 0) for start in starts)
