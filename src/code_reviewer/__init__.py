"""AI-assisted code review: discover source files and review them with an LLM."""

from .discover import (
    DEFAULT_EXCLUDED_FRAGMENTS,
    DEFAULT_EXTENSIONS,
    Discoverer,
    DiscoveryResult,
    ErrorPolicy,
    discover,
    file_extension,
    fragment_predicate,
)
from .errors import (
    CodeReviewerError,
    ConfigError,
    DiscoveryCancelled,
    DiscoveryError,
    NotADirectory,
    ReadError,
    TraversalError,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_EXCLUDED_FRAGMENTS",
    "DEFAULT_EXTENSIONS",
    "Discoverer",
    "DiscoveryResult",
    "ErrorPolicy",
    "discover",
    "file_extension",
    "fragment_predicate",
    "CodeReviewerError",
    "ConfigError",
    "DiscoveryCancelled",
    "DiscoveryError",
    "NotADirectory",
    "ReadError",
    "TraversalError",
]
