"""
Errors raised while resolving ignore decisions
"""

from typing import Optional


class IgnoreError(Exception):
    """Base class for failures that abort an ignore query"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class EntryNotFoundError(IgnoreError):
    """The queried path could not be classified as a file or directory"""


class IgnoreFileUnreadableError(IgnoreError):
    """An ignore file was found but could not be opened or read"""
