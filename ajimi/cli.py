"""
Command line entry point.

    ajimi fix --code <repo> FILES...     regenerate the code regions in place
    ajimi check --code <repo> FILES...   verify the book against the history

"""

from pathlib import Path
from typing import List, Optional

import typer
from git.exc import GitError  # type: ignore

from ajimi.book import FileSystemBook
from ajimi.commit_resolver import CommitResolver, GitCommitResolver
from ajimi.config import Settings
from ajimi.exceptions import AjimiError
from ajimi.logger import set_level
from ajimi.models import Finding
from ajimi.service import check_book, fix_book

PASS_BANNER = "PASS. It tastes good!"
FAIL_BANNER = "Found some issues. Please fix them and try again!"

app = typer.Typer(
    add_completion=False, help="markdown extension to include git commits"
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override the AJIMI_LOG_LEVEL setting."
    ),
):
    set_level(log_level or Settings().log_level)


def _open_resolver(code: Path) -> CommitResolver:
    try:
        return GitCommitResolver(code)
    except GitError as exc:
        typer.echo(f"Not a git repository: {code} ({exc})", err=True)
        raise typer.Exit(code=2) from exc


def _echo_findings(title: str, findings: list[Finding]):
    if not findings:
        typer.echo(f"{title}: ok")
        return
    typer.echo(f"{title}: {len(findings)} issue(s)")
    for finding in findings:
        typer.echo(str(finding))


@app.command()
def fix(
    code: Path = typer.Option(..., "--code", help="git repo for commits"),
    files: List[Path] = typer.Argument(..., help="markdown files to be fixed"),
):
    """Fixup the files given."""
    resolver = _open_resolver(code)
    try:
        fix_book(FileSystemBook(files), resolver)
    except (AjimiError, OSError) as exc:
        typer.echo(f"fix failed: {exc}", err=True)
        raise typer.Exit(code=2) from exc


@app.command()
def check(
    code: Path = typer.Option(..., "--code", help="git repo for commits"),
    files: List[Path] = typer.Argument(..., help="files to check"),
):
    """Check the files."""
    resolver = _open_resolver(code)
    try:
        report = check_book(FileSystemBook(files), resolver)
    except (AjimiError, OSError) as exc:
        typer.echo(f"check failed: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    _echo_findings("generated code", report.generated_code)
    _echo_findings("code block languages", report.block_languages)
    _echo_findings("image captions", report.image_captions)
    if not report.ok:
        typer.echo(FAIL_BANNER)
        raise typer.Exit(code=1)
    typer.echo(PASS_BANNER)
