"""Content reader: load a discovered file as text."""

from pathlib import Path
from typing import Union

from .errors import ReadError


def read_source(path: Union[str, Path], encoding: str = "utf-8") -> str:
    """Return the full text of a discovered file, or raise ReadError."""
    path = Path(path)
    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadError(path, exc) from exc
