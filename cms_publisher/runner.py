"""
Main pipeline orchestration for the CMS Publisher.

This module coordinates the entire workflow:
1. Read and parse the requested Markdown files
2. Render article bodies to HTML
3. Look up each article in the CMS by external id
4. Create or update the CMS entry
5. Report per-article outcomes and batch statistics

Everything runs sequentially under one deadline shared by the whole batch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path

import httpx
from rich.console import Console

from .cms.client import CMSClient
from .cms.deadline import Deadline
from .config import AppConfig, CMSCredentials
from .core.types import Article, PublishOutcome, PublishStats
from .input.assembler import ArticleAssembler
from .publisher import Publisher
from .renderer import MarkdownRenderer
from .utils.logging import log_event, mask_secrets, setup_logging


@dataclass
class PublishResult:
    """Outcomes and summary counters of one publish run."""

    outcomes: list[PublishOutcome] = field(default_factory=list)
    stats: PublishStats = field(default_factory=PublishStats)

    @property
    def ok(self) -> bool:
        return self.stats.failed == 0 and self.stats.skipped == 0


def run_publish(
    files: list[str],
    workspace: Path,
    cfg: AppConfig,
    credentials: CMSCredentials,
    console: Console | None = None,
    http_client: httpx.Client | None = None,
    logger: logging.Logger | None = None,
) -> PublishResult:
    """Run the complete publish pipeline for a list of workspace files.

    Args:
        files: Article paths relative to workspace
        workspace: Workspace root directory
        cfg: Application configuration
        credentials: Resolved CMS credentials
        console: Rich console for the summary line (creates default if None)
        http_client: Optional httpx client; one is created and closed if None
        logger: Optional logger; configured from cfg.logging if None

    Returns:
        PublishResult with per-article outcomes and stats
    """
    console = console or Console()
    if logger is None:
        log_dir = Path(cfg.logging.dir) if cfg.logging.dir else None
        logger = setup_logging(cfg.logging, log_dir)
        mask_secrets(logger, credentials.api_key)

    log_event(
        logger,
        "Pipeline start",
        event="pipeline_start",
        workspace=str(workspace),
        files=len(files),
        service_id=credentials.service_id,
        endpoint=credentials.endpoint,
    )

    renderer = MarkdownRenderer.from_config(cfg.markdown)
    assembler = ArticleAssembler(workspace, renderer, logger)
    articles = assembler.assemble_all(files)

    if not articles:
        log_event(logger, "No articles found.", event="no_articles")
        stats = PublishStats(total=len(files), skipped=len(files))
        _render_publish_stats(stats, console)
        return PublishResult(stats=stats)

    deadline = Deadline(cfg.cms.timeout_seconds)
    if http_client is None:
        with httpx.Client(trust_env=cfg.cms.trust_env) as owned_client:
            outcomes = _publish(articles, deadline, cfg, credentials, owned_client, logger)
    else:
        outcomes = _publish(articles, deadline, cfg, credentials, http_client, logger)

    stats = PublishStats.from_outcomes(outcomes, total=len(files))
    processed = [outcome.external_id for outcome in outcomes if outcome.ok]
    log_event(
        logger,
        "Successfully processed items: " + (", ".join(processed) or "(none)"),
        event="pipeline_done",
        processed=processed,
        created=stats.created,
        updated=stats.updated,
        failed=stats.failed,
        skipped=stats.skipped,
    )
    _render_publish_stats(stats, console)
    return PublishResult(outcomes=outcomes, stats=stats)


def _publish(
    articles: list[Article],
    deadline: Deadline,
    cfg: AppConfig,
    credentials: CMSCredentials,
    http_client: httpx.Client,
    logger: logging.Logger,
) -> list[PublishOutcome]:
    client = CMSClient(credentials, cfg.cms, http_client=http_client)
    return Publisher(client, logger).publish_all(articles, deadline)


def _render_publish_stats(stats: PublishStats, console: Console) -> None:
    """Display publish statistics to the console."""
    console.print(
        "[bold]Publish summary[/bold]: "
        f"total={stats.total}, created={stats.created}, updated={stats.updated}, "
        f"failed={stats.failed}, skipped={stats.skipped}"
    )
