"""
Article assembly from workspace files.

Reads each requested file from the workspace, extracts and validates the
front matter, renders the body and produces one Article per file. Files
that fail any stage are logged and skipped; the rest of the batch goes on.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable

from ..core.types import Article
from ..errors import ArticleError, FileReadError
from ..utils.logging import log_event
from .front_matter import extract_front_matter, validate_metadata


def parse_file_list(value: str) -> list[str]:
    """Split a comma-separated file list, dropping blank entries.

    Example:
        >>> parse_file_list("a.md, b.md,,")
        ['a.md', 'b.md']
    """
    return [item.strip() for item in value.split(",") if item.strip()]


def read_article_file(workspace: Path, relative_path: str) -> bytes:
    """Read one article file relative to the workspace root.

    Raises:
        FileReadError: If the file is missing or unreadable
    """
    path = workspace / relative_path
    try:
        return path.read_bytes()
    except OSError as exc:
        raise FileReadError(f"failed to read {path}: {exc.strerror or exc}") from exc


class ArticleAssembler:
    """Build Articles from Markdown files under a workspace root.

    Args:
        workspace: Base directory that relative paths are resolved against
        renderer: Callable converting a Markdown body to HTML
        logger: Logger for per-file progress and skip notices
        reader: Callable returning raw bytes for (workspace, relative_path)
    """

    def __init__(
        self,
        workspace: Path,
        renderer: Callable[[str], str],
        logger: logging.Logger | None = None,
        reader: Callable[[Path, str], bytes] = read_article_file,
    ):
        self.workspace = Path(workspace)
        self.renderer = renderer
        self.logger = logger
        self.reader = reader

    def assemble_one(self, relative_path: str) -> Article:
        """Assemble a single Article.

        Raises:
            ArticleError: Any read, format or metadata failure, with `path`
                set to relative_path
        """
        if self.logger is not None:
            self.logger.debug("Parse: %s", self.workspace / relative_path)
        try:
            raw = self.reader(self.workspace, relative_path)
            front_matter, body = extract_front_matter(raw)
            metadata = validate_metadata(front_matter)
        except ArticleError as exc:
            exc.path = relative_path
            raise

        # Renderer faults are not ArticleErrors and stop the run.
        html = self.renderer(body)
        return Article.from_metadata(metadata, html)

    def assemble_all(self, relative_paths: Iterable[str]) -> list[Article]:
        """Assemble every path in order, skipping the ones that fail."""
        articles: list[Article] = []
        for relative_path in relative_paths:
            try:
                article = self.assemble_one(relative_path)
            except ArticleError as exc:
                log_event(
                    self.logger,
                    f"Skipped {relative_path}: {exc.reason}",
                    level=logging.WARNING,
                    event="article_skipped",
                    path=relative_path,
                    reason=exc.reason,
                    error_type=type(exc).__name__,
                )
                continue
            log_event(
                self.logger,
                f"Parsed {relative_path}",
                event="article_parsed",
                path=relative_path,
                external_id=article.external_id,
            )
            articles.append(article)
        return articles
