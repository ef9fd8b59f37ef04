"""CLI command implementations"""

import logging
import time
from importlib.metadata import PackageNotFoundError, version
from typing import Annotated, Optional

import typer

from gitbook2wiki.config import Settings, load_config
from gitbook2wiki.core.parse import ConversionError
from gitbook2wiki.core.walk import convert_tree


DIST_NAME = "gitbook2wiki"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(format="%(levelname)s: %(message)s")
    logging.getLogger("gitbook2wiki").setLevel(logging.DEBUG if verbose else logging.WARNING)


def convert_cmd(
    src: Annotated[Optional[str], typer.Argument(help="GitBook source directory")] = None,
    dest: Annotated[Optional[str], typer.Argument(help="Wiki destination directory")] = None,
    remote: Annotated[Optional[str], typer.Argument(help="GitHub wiki page base, e.g. /me/my_repo/wiki")] = None,
    src_opt: Annotated[Optional[str], typer.Option("--src", help="GitBook source directory")] = None,
    dest_opt: Annotated[Optional[str], typer.Option("--dest", help="Wiki destination directory")] = None,
    remote_opt: Annotated[Optional[str], typer.Option("--remote", help="GitHub wiki page base")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose messages")] = False,
    keep_links: Annotated[bool, typer.Option("--keep-links", help="Keep the files and links as they are")] = False,
    ):
    """Convert every file under the source tree into the wiki tree."""
    settings = _settings(overrides={
        "src_dir": src or src_opt,
        "dest_dir": dest or dest_opt,
        "wiki_repo": remote or remote_opt,
        "verbose": verbose or None,
        "keep_links": keep_links or None,
    })
    _setup_logging(settings.verbose)

    start = time.perf_counter()
    try:
        counts = convert_tree(settings)
    except ConversionError as e:
        _fail("Conversion failed", e)
    except OSError as e:
        _fail(str(e))
    elapsed = time.perf_counter() - start

    typer.echo(f"Total files parsed: {counts.parsed}")
    typer.echo(f"Total files copied: {counts.copied}")
    typer.echo(f"Time taken to complete: {elapsed:.3f}s")


def version_cmd():
    """Print the installed gitbook2wiki version."""
    try:
        typer.echo(version(DIST_NAME))
    except PackageNotFoundError:
        _fail(f"{DIST_NAME} is not installed")
