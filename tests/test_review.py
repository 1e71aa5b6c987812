"""Tests for review orchestration and report formatting."""

from pathlib import Path

from code_reviewer.discover import Discoverer
from code_reviewer.errors import ReadError
from code_reviewer.reader import read_source
from code_reviewer.review import FileReport, format_report, review_directory, review_files


class EchoAnalyzer:
    def __init__(self):
        self.seen = []

    def analyze(self, code, filename):
        self.seen.append((filename, code))
        return f"{filename}: {len(code)} chars"


def test_read_source_raises_read_error(tmp_path):
    bad = tmp_path / "latin1.py"
    bad.write_bytes(b"caf\xe9 = 1\n")
    try:
        read_source(bad)
    except ReadError as exc:
        assert exc.path == bad
        assert isinstance(exc.cause, UnicodeDecodeError)
    else:
        raise AssertionError("expected ReadError")


def test_review_files_continues_after_read_error(tmp_path):
    good = tmp_path / "good.py"
    good.write_text("print('hi')\n", encoding="utf-8")
    missing = tmp_path / "vanished.py"
    analyzer = EchoAnalyzer()
    progress = []

    reports = list(
        review_files([missing, good], analyzer, progress_cb=lambda m, p: progress.append((m, p)))
    )

    assert [r.ok for r in reports] == [False, True]
    assert reports[1].report == "good.py: 12 chars"
    assert analyzer.seen == [("good.py", "print('hi')\n")]
    assert progress == [("Analyzing vanished.py...", 0), ("Analyzing good.py...", 50)]


def test_review_directory_uses_discovery(tmp_path):
    (tmp_path / "a.ts").write_text("let a = 1;", encoding="utf-8")
    (tmp_path / "dist").mkdir()
    (tmp_path / "dist" / "bundle.js").write_text("minified", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("skip", encoding="utf-8")

    run = review_directory(tmp_path, EchoAnalyzer())

    assert run.discovery.names() == ["a.ts"]
    assert [r.name for r in run.reports] == ["a.ts"]


def test_review_directory_with_custom_discoverer(tmp_path):
    (tmp_path / "notes.txt").write_text("todo", encoding="utf-8")
    run = review_directory(tmp_path, EchoAnalyzer(), discoverer=Discoverer({".txt"}))
    assert run.reports[0].report == "notes.txt: 4 chars"


def test_format_report():
    report = FileReport(path=Path("src/app.py"), name="app.py", report="All good.")
    assert format_report(report) == (
        "--- Report for app.py ---\nAll good.\n-----------------------------------\n"
    )

    failed = FileReport(
        path=Path("src/app.py"),
        name="app.py",
        error=ReadError(Path("src/app.py"), PermissionError("denied")),
    )
    assert format_report(failed) == "Error reading src/app.py: denied"
