"""
Core domain models.

This package contains data types shared by every pipeline stage.
"""

from .types import (
    Article,
    ArticleMetadata,
    PublishAction,
    PublishOutcome,
    PublishStats,
    RemoteContentRef,
)

__all__ = [
    "Article",
    "ArticleMetadata",
    "PublishAction",
    "PublishOutcome",
    "PublishStats",
    "RemoteContentRef",
]
