"""Exception types raised by code-reviewer."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional


class CodeReviewerError(Exception):
    """Base class for all code-reviewer errors."""


class ConfigError(CodeReviewerError):
    pass


class DiscoveryError(CodeReviewerError):
    """Base class for errors raised while discovering files."""


class NotADirectory(DiscoveryError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Root path '{path}' is not a directory")


class TraversalError(DiscoveryError):
    """A directory could not be listed or an entry could not be classified."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"Could not read '{path}': {reason}")


class DiscoveryCancelled(DiscoveryError):
    def __init__(self, partial: Optional[List[Path]] = None) -> None:
        self.partial = list(partial or [])
        super().__init__(f"Discovery cancelled after {len(self.partial)} files")


class ReadError(CodeReviewerError):
    """A discovered file could not be opened or decoded as text."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not read '{path}': {cause}")
