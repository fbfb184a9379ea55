"""
Command-line interface for git-feed.

Uses Typer to expose a single command that reads the YAML config, walks
the repository and writes the RSS document to standard output. Logs and
errors go to standard error.
"""

from __future__ import annotations

import sys

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import LoggingConfig, load_config
from .errors import GitFeedError
from .output.renderer import render_rss
from .runner import run_pipeline
from .utils.logging import log_event, setup_logging, timestamp_precision_from_env

app = typer.Typer(add_completion=False)
console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"git-feed {__version__}")
        raise typer.Exit()


@app.command()
def main(
    paths: list[str] = typer.Argument(
        ..., metavar="PATH...", help="Pathspecs of the source files to include."
    ),
    conf: str = typer.Option(
        ..., "--conf", "-c", metavar="FILE", help="Config file, or '-' to read it from stdin."
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Print debug messages."),
    prefix: str | None = typer.Option(
        None,
        "--prefix",
        "-p",
        metavar="PREFIX",
        help="PREFIX gets removed from the beginning of file names.",
    ),
    pretty: bool = typer.Option(False, "--pretty", "-y", help="Pretty print output."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
):
    """Generate an RSS feed of added, removed and modified files from git history.

    Args:
        paths: Pathspecs restricting which files are diffed
        conf: Path to the YAML config file, or "-" for stdin
        debug: Lower the log level to DEBUG
        prefix: Override the config's strip-prefix
        pretty: Indent the XML output
        version: Print the version and exit
    """
    timestamp = timestamp_precision_from_env()
    logger = setup_logging(LoggingConfig(timestamp=timestamp), debug=debug)

    try:
        if conf == "-":
            log_event(logger, "Going to read config from stdin", event="config_read", source="-")
        else:
            log_event(logger, f"Going to read config file {conf}", event="config_read", source=conf)
        cfg = load_config(conf)

        # Reconfigure with the loaded logging section (level, optional file).
        cfg.logging.timestamp = timestamp
        logger = setup_logging(cfg.logging, debug=debug)

        channel = run_pipeline(cfg, paths, logger, strip_prefix=prefix)
        document = render_rss(channel, pretty=pretty)
    except GitFeedError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}", highlight=False)
        raise typer.Exit(code=1) from exc

    sys.stdout.write(document)
    sys.stdout.flush()


if __name__ == "__main__":
    app()
