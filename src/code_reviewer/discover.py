"""
=============================================================================
MODULE NAME: discover.py
=============================================================================

INPUT FILES:
- Any directory tree (read-only: directory listings and file-type metadata).

OUTPUT FILES:
- None written directly. Returns a `DiscoveryResult` for the review stage.

NOTES:
- Pre-order depth-first walk driven by an explicit stack of `os.scandir`
  listings, so deep trees never hit the recursion limit.
- Directory exclusion is a SUBSTRING match on the base name: with the default
  fragments, `distribution/` and `my.git.bak/` are skipped too. Existing
  callers rely on this, so keep it.
- Symbolic links to directories are not entered unless `follow_symlinks` is
  set; when it is, directories are de-duplicated by (st_dev, st_ino).
=============================================================================
"""

from __future__ import annotations

import enum
import errno
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Set, Tuple, Union

from .errors import DiscoveryCancelled, NotADirectory, TraversalError

logger = logging.getLogger(__name__)

# a dangling or looping symlink is not a file, not a traversal failure
_BROKEN_LINK_ERRNOS = (errno.ENOENT, errno.ELOOP)

DEFAULT_EXCLUDED_FRAGMENTS = ("node_modules", ".git", "dist")
DEFAULT_EXTENSIONS = (".js", ".ts", ".py", ".go", ".sh")

ExcludeRule = Union[None, Iterable[str], Callable[[str], bool]]


class ErrorPolicy(str, enum.Enum):
    """What to do when a directory cannot be listed."""

    SKIP = "skip"
    RAISE = "raise"


def file_extension(name: str) -> str:
    """Return the suffix of `name` from its last dot, or "" if there is none.

    A leading dot marks a hidden file, not an extension: `.bashrc` has no
    extension while `.bashrc.bak` has `.bak`. `archive.` has extension `.`.
    """
    idx = name.rfind(".")
    if idx <= 0 or not name.strip("."):
        return ""
    return name[idx:]


def fragment_predicate(fragments: Iterable[str]) -> Callable[[str], bool]:
    if isinstance(fragments, str):
        raise TypeError("exclusion fragments must be a collection of strings, not a string")
    frags = tuple(f for f in fragments if f)

    def is_excluded(name: str) -> bool:
        return any(f in name for f in frags)

    return is_excluded


def _exclusion_rule(exclude: ExcludeRule) -> Callable[[str], bool]:
    if exclude is None:
        return fragment_predicate(DEFAULT_EXCLUDED_FRAGMENTS)
    if callable(exclude):
        return exclude
    return fragment_predicate(exclude)


@dataclass(slots=True)
class DiscoveryResult:
    """Files found under `root`, plus any traversal errors that were skipped."""

    root: Path
    paths: List[Path] = field(default_factory=list)
    errors: List[TraversalError] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.errors

    def names(self) -> List[str]:
        return [p.name for p in self.paths]

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[Path]:
        return iter(self.paths)

    def __getitem__(self, index):
        return self.paths[index]


class Discoverer:
    def __init__(
        self,
        extensions: Iterable[str],
        exclude: ExcludeRule = None,
        *,
        on_error: Union[ErrorPolicy, str] = ErrorPolicy.SKIP,
        follow_symlinks: bool = False,
        relative: bool = False,
    ) -> None:
        if isinstance(extensions, str):
            raise TypeError("extensions must be a collection of strings, not a string")
        self.extensions = frozenset(extensions)
        self.is_excluded = _exclusion_rule(exclude)
        self.on_error = ErrorPolicy(on_error)
        self.follow_symlinks = follow_symlinks
        self.relative = relative

    def discover(self, root: Union[str, Path], cancel=None) -> DiscoveryResult:
        """Walk `root` and collect every regular file with an allowed extension.

        Args:
            root: Directory to scan.
            cancel: Optional object with an `is_set()` method (e.g. a
                `threading.Event`), checked between directory entries.

        Returns:
            A fresh `DiscoveryResult`. Under `ErrorPolicy.SKIP` unreadable
            subtrees are listed in `result.errors` instead of aborting.

        Raises:
            NotADirectory: `root` does not exist or is not a directory.
            TraversalError: a listing failed and the policy is RAISE.
            DiscoveryCancelled: `cancel` was set during the walk.
        """
        root = Path(root)
        try:
            is_dir = root.is_dir()
        except OSError as exc:
            raise TraversalError(root, exc) from exc
        if not is_dir:
            raise NotADirectory(root)

        result = DiscoveryResult(root=root)
        if not self.extensions:
            return result
        self._walk(root, result, cancel)
        logger.debug(
            "Discovered %d files under %s (%d errors)", len(result.paths), root, len(result.errors)
        )
        return result

    def _walk(self, root: Path, result: DiscoveryResult, cancel) -> None:
        visited: Set[Tuple[int, int]] = set()
        if self.follow_symlinks:
            try:
                st = os.stat(root)
            except OSError as exc:
                raise TraversalError(root, exc) from exc
            visited.add((st.st_dev, st.st_ino))

        listing = self._open(root, result)
        if listing is None:
            return
        stack: List[Tuple[Path, Iterator[os.DirEntry]]] = [(root, listing)]
        try:
            while stack:
                if cancel is not None and cancel.is_set():
                    raise DiscoveryCancelled(result.paths)
                directory, entries = stack[-1]
                try:
                    entry = next(entries)
                except StopIteration:
                    stack.pop()
                    entries.close()
                    continue
                except OSError as exc:
                    stack.pop()
                    entries.close()
                    self._fail(directory, exc, result)
                    continue

                path = directory / entry.name
                try:
                    is_dir = entry.is_dir(follow_symlinks=self.follow_symlinks)
                except OSError as exc:
                    if exc.errno not in _BROKEN_LINK_ERRNOS:
                        self._fail(path, exc, result)
                        continue
                    is_dir = False

                if is_dir:
                    if self.is_excluded(entry.name):
                        logger.debug("Skipping excluded directory %s", path)
                        continue
                    if self.follow_symlinks:
                        try:
                            st = entry.stat()
                        except OSError as exc:
                            self._fail(path, exc, result)
                            continue
                        key = (st.st_dev, st.st_ino)
                        if key in visited:
                            logger.debug("Skipping already visited directory %s", path)
                            continue
                        visited.add(key)
                    sub = self._open(path, result)
                    if sub is not None:
                        stack.append((path, sub))
                    continue

                if file_extension(entry.name) not in self.extensions:
                    continue
                try:
                    # follows links: a symlink to a regular file counts, a dangling one does not
                    is_file = entry.is_file()
                except OSError as exc:
                    if exc.errno not in _BROKEN_LINK_ERRNOS:
                        self._fail(path, exc, result)
                        continue
                    logger.debug("Skipping broken symlink %s", path)
                    is_file = False
                if is_file:
                    result.paths.append(path.relative_to(root) if self.relative else path)
        finally:
            for _, entries in stack:
                entries.close()

    def _open(self, directory: Path, result: DiscoveryResult) -> Optional[Iterator[os.DirEntry]]:
        try:
            return os.scandir(directory)
        except OSError as exc:
            self._fail(directory, exc, result)
            return None

    def _fail(self, path: Path, exc: OSError, result: DiscoveryResult) -> None:
        error = TraversalError(path, exc)
        if self.on_error is ErrorPolicy.RAISE:
            raise error from exc
        logger.warning("%s", error)
        result.errors.append(error)


def discover(
    root: Union[str, Path],
    extensions: Iterable[str],
    exclude: ExcludeRule = None,
    *,
    on_error: Union[ErrorPolicy, str] = ErrorPolicy.SKIP,
    follow_symlinks: bool = False,
    relative: bool = False,
    cancel=None,
) -> DiscoveryResult:
    discoverer = Discoverer(
        extensions,
        exclude,
        on_error=on_error,
        follow_symlinks=follow_symlinks,
        relative=relative,
    )
    return discoverer.discover(root, cancel=cancel)
