"""
Core data types for the CMS Publisher.

This module defines the data structures passed between pipeline stages:
- ArticleMetadata: Decoded front matter of one article file
- Article: Publish-ready article with rendered HTML content
- RemoteContentRef: Result of a CMS existence lookup
- PublishOutcome: Per-article result of a publish attempt
- PublishStats: Batch summary counters
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass
class ArticleMetadata:
    """Decoded front matter of one article.

    Attributes:
        title: Article title (never empty)
        external_id: Identifier from the source content system, taken from
            the `id` front matter key (never empty)
        tags: Tags in declaration order, possibly empty
    """
    title: str
    external_id: str
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Article:
    """The unit of publishing.

    Attributes:
        title: Article title
        tags_joined: Comma-separated tags, declaration order preserved
        external_id: Upsert key shared with the CMS entry
        html_content: Article body rendered to HTML
    """
    title: str
    tags_joined: str
    external_id: str
    html_content: str

    @classmethod
    def from_metadata(cls, metadata: ArticleMetadata, html_content: str) -> Article:
        return cls(
            title=metadata.title,
            tags_joined=",".join(metadata.tags),
            external_id=metadata.external_id,
            html_content=html_content,
        )


@dataclass(frozen=True)
class RemoteContentRef:
    """Result of looking up an article in the CMS by external id."""
    exists: bool
    remote_id: str = ""


class PublishAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    FAILED = "failed"


@dataclass
class PublishOutcome:
    """Result of publishing one article.

    Attributes:
        external_id: The article's external id
        action: What happened to the article
        remote_id: CMS content id when the entry already existed
        error: Error message when action is FAILED
    """
    external_id: str
    action: PublishAction
    remote_id: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.action is not PublishAction.FAILED


@dataclass
class PublishStats:
    """Statistics collected over one publish run.

    Attributes:
        total: Number of input files
        created: Articles created in the CMS
        updated: Articles updated in the CMS
        failed: Articles whose lookup or write failed
        skipped: Input files that could not be assembled
    """
    total: int = 0
    created: int = 0
    updated: int = 0
    failed: int = 0
    skipped: int = 0

    @classmethod
    def from_outcomes(cls, outcomes: list[PublishOutcome], total: int) -> PublishStats:
        stats = cls(total=total, skipped=total - len(outcomes))
        for outcome in outcomes:
            if outcome.action is PublishAction.CREATED:
                stats.created += 1
            elif outcome.action is PublishAction.UPDATED:
                stats.updated += 1
            else:
                stats.failed += 1
        return stats
