"""
Review orchestration: discover files, read each one, hand it to the analyzer.

Per-file read failures are reported and the run continues.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Union

from .analyzer import CodeAnalyzer
from .discover import DEFAULT_EXTENSIONS, Discoverer, DiscoveryResult
from .errors import ReadError
from .reader import read_source

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int], None]

RULE = "-----------------------------------"


@dataclass(slots=True)
class FileReport:
    path: Path
    name: str
    report: str = ""
    error: Optional[ReadError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class ReviewRun:
    discovery: DiscoveryResult
    reports: List[FileReport] = field(default_factory=list)


def format_report(report: FileReport) -> str:
    if report.error is not None:
        return f"Error reading {report.path}: {report.error.cause}"
    return f"--- Report for {report.name} ---\n{report.report}\n{RULE}\n"


def review_files(
    paths: Iterable[Path],
    analyzer: CodeAnalyzer,
    progress_cb: Optional[ProgressCallback] = None,
) -> Iterator[FileReport]:
    """Yield one FileReport per path, in order."""
    paths = list(paths)
    total = len(paths)
    for idx, path in enumerate(paths):
        name = path.name
        if progress_cb:
            progress_cb(f"Analyzing {name}...", int(idx * 100 / total))
        try:
            code = read_source(path)
        except ReadError as exc:
            logger.info("%s", exc)
            yield FileReport(path=path, name=name, error=exc)
            continue
        yield FileReport(path=path, name=name, report=analyzer.analyze(code, name))


def review_directory(
    root: Union[str, Path],
    analyzer: CodeAnalyzer,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    discoverer: Optional[Discoverer] = None,
    progress_cb: Optional[ProgressCallback] = None,
) -> ReviewRun:
    discoverer = discoverer or Discoverer(extensions)
    discovery = discoverer.discover(root)
    run = ReviewRun(discovery=discovery)
    run.reports.extend(review_files(discovery.paths, analyzer, progress_cb=progress_cb))
    return run
