"""CLI interface for code-reviewer."""

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from .analyzer import CodeAnalyzer
from .config import PROVIDERS, load_settings
from .discover import DEFAULT_EXTENSIONS, Discoverer, ErrorPolicy
from .errors import CodeReviewerError
from .review import format_report, review_files


@click.command()
@click.argument("root", default=".", type=click.Path(path_type=Path))
@click.option(
    "--ext",
    "extensions",
    multiple=True,
    help="File extension to include, e.g. .py (repeatable). Default: "
    + " ".join(DEFAULT_EXTENSIONS),
)
@click.option(
    "--exclude",
    "excludes",
    multiple=True,
    help="Skip directories whose name contains this text (repeatable). "
    "Replaces the default node_modules/.git/dist rule.",
)
@click.option("--fail-fast", is_flag=True, help="Abort on the first unreadable directory")
@click.option("--follow-symlinks", is_flag=True, help="Descend into symlinked directories")
@click.option("--list", "list_only", is_flag=True, help="Only list discovered files")
@click.option("--provider", type=click.Choice(sorted(PROVIDERS)), default=None)
@click.option("--model", default=None, help="Model name override")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def main(root, extensions, excludes, fail_fast, follow_symlinks, list_only, provider, model, verbose):
    """Review the source files under ROOT (default: current directory) with an LLM."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    load_dotenv()

    click.echo(f"Starting AI code review in: {root}")
    discoverer = Discoverer(
        extensions or DEFAULT_EXTENSIONS,
        excludes or None,
        on_error=ErrorPolicy.RAISE if fail_fast else ErrorPolicy.SKIP,
        follow_symlinks=follow_symlinks,
    )
    try:
        discovery = discoverer.discover(root)
        settings = None if list_only else load_settings(provider=provider, model=model)
    except CodeReviewerError as exc:
        raise click.ClickException(str(exc))

    for error in discovery.errors:
        click.echo(f"Warning: {error}", err=True)
    summary = f"{len(discovery)} files found to analyze."
    if not discovery.complete:
        summary += f" Discovery incomplete: {len(discovery.errors)} path(s) could not be read."
    click.echo(summary)

    if list_only:
        for path in discovery:
            click.echo(str(path))
        return

    analyzer = CodeAnalyzer(settings)

    def announce(message: str, percent: int) -> None:
        click.echo(f"\n{message}")

    for report in review_files(discovery.paths, analyzer, progress_cb=announce):
        click.echo(format_report(report), err=not report.ok)


if __name__ == "__main__":  # pragma: no cover
    main()
