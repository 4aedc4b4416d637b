"""
Configuration for the ignore resolver
"""

import codecs
import os
from dataclasses import dataclass

from .constants import (
    IGNORE_FILENAME,
    MAX_IGNORE_FILE_SIZE,
    ENV_IGNORE_FILENAME,
    ENV_MAX_FILE_SIZE,
    ENV_WARN_MISSING,
    ENV_ENCODING,
)
from gitignore_resolver.utils import get_logger

logger = get_logger(__name__)


@dataclass
class ResolverConfig:
    """Settings shared by the loader and the resolver"""
    ignore_filename: str = IGNORE_FILENAME
    max_file_size: int = MAX_IGNORE_FILE_SIZE
    encoding: str = 'utf-8'
    warn_when_missing: bool = True

    def __post_init__(self):
        """Validate configuration values"""
        if not self.ignore_filename or '/' in self.ignore_filename or '\\' in self.ignore_filename:
            raise ValueError(f"Invalid ignore filename: {self.ignore_filename!r}")
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {self.encoding!r}") from e
        self.max_file_size = max(1, self.max_file_size)

    @classmethod
    def from_env(cls) -> 'ResolverConfig':
        """
        Build a configuration from environment variables

        GITIGNORE_RESOLVER_FILENAME, GITIGNORE_RESOLVER_MAX_FILE_SIZE,
        GITIGNORE_RESOLVER_ENCODING and GITIGNORE_RESOLVER_WARN_MISSING map to
        the matching fields. Unset variables keep their defaults; a malformed
        size is logged and ignored.
        """
        kwargs = {}

        filename = os.environ.get(ENV_IGNORE_FILENAME)
        if filename:
            kwargs['ignore_filename'] = filename

        max_size = os.environ.get(ENV_MAX_FILE_SIZE)
        if max_size:
            try:
                kwargs['max_file_size'] = int(max_size)
            except ValueError:
                logger.warning(f"Ignoring non-integer {ENV_MAX_FILE_SIZE}={max_size!r}")

        encoding = os.environ.get(ENV_ENCODING)
        if encoding:
            kwargs['encoding'] = encoding

        warn_missing = os.environ.get(ENV_WARN_MISSING)
        if warn_missing:
            kwargs['warn_when_missing'] = warn_missing.lower() in ('true', '1', 'yes')

        return cls(**kwargs)
