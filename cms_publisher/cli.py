"""
Command-line interface for the CMS Publisher.

Uses Typer to provide a CLI with options for the file list, workspace and
major configuration settings. Supports loading .env files for the CMS
credentials (SERVICE_ID, API_KEY, ENDPOINT).
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
import typer
from rich.console import Console
from rich.markup import escape

from .config import load_config, resolve_credentials
from .errors import ConfigError
from .input.assembler import parse_file_list
from .runner import run_publish
from .utils.logging import mask_secrets, setup_logging

app = typer.Typer(add_completion=False)
console = Console()


@app.command()
def publish(
    files: str = typer.Option(
        ..., "--files", "-f", help="Comma-separated article paths relative to the workspace."
    ),
    workspace: Path = typer.Option(
        Path("."), "--workspace", "-w", file_okay=False, help="Workspace root directory."
    ),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Deadline in seconds for the whole publish batch."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log file format: jsonl or plain."
    ),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
    log_dir: Path | None = typer.Option(None, "--log-dir", help="Directory for the log file."),
    strict: bool = typer.Option(
        False, "--strict/--no-strict", help="Exit with status 1 if any article is skipped or fails."
    ),
):
    """Publish Markdown articles to the CMS.

    Reads each file, converts its Markdown body to HTML and creates or
    updates the matching CMS entry keyed by the front matter `id`.

    Args:
        files: Comma-separated article paths
        workspace: Directory the article paths are relative to
        config: Optional path to YAML config file
        timeout: Override the batch deadline
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Log file format (jsonl, plain)
        log_file: Enable/disable file logging
        log_dir: Directory for the log file
        strict: Whether skipped or failed articles make the exit status 1
    """
    load_dotenv()

    try:
        cfg = load_config(str(config) if config else None)
    except ConfigError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    # Override with CLI options
    if timeout is not None:
        cfg.cms.timeout_seconds = timeout
    if log_level:
        cfg.logging.level = log_level
    if log_format:
        cfg.logging.format = log_format
    if log_file is not None:
        cfg.logging.file = log_file
    if log_dir is not None:
        cfg.logging.dir = str(log_dir)

    logger = setup_logging(cfg.logging, Path(cfg.logging.dir) if cfg.logging.dir else None)

    try:
        credentials = resolve_credentials(cfg.cms)
    except ConfigError as exc:
        logger.error(str(exc), extra={"event": "config_error"})
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc
    mask_secrets(logger, credentials.api_key)

    result = run_publish(
        parse_file_list(files),
        workspace,
        cfg,
        credentials,
        console=console,
        logger=logger,
    )

    if strict and not result.ok:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
