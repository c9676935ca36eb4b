"""
Sequential create-or-update publishing of assembled articles.

For every article the publisher looks up the external id in the CMS and
then either updates the existing entry or creates a new one. Each article
is independent: a failure is recorded as a FAILED outcome and the batch
moves on. Check and write are two separate calls with no locking between
them.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .cms.base import ContentGateway
from .cms.deadline import Deadline
from .core.types import Article, PublishAction, PublishOutcome
from .errors import GatewayError
from .utils.logging import log_event


class Publisher:
    """Drive a batch of articles through a ContentGateway."""

    def __init__(self, gateway: ContentGateway, logger: logging.Logger | None = None):
        self.gateway = gateway
        self.logger = logger

    def publish_all(self, articles: Iterable[Article], deadline: Deadline) -> list[PublishOutcome]:
        return [self.publish_one(article, deadline) for article in articles]

    def publish_one(self, article: Article, deadline: Deadline) -> PublishOutcome:
        external_id = article.external_id
        try:
            ref = self.gateway.exists(external_id, deadline)
        except GatewayError as exc:
            return self._failed(external_id, "Error checking existence", exc)

        if ref.exists:
            log_event(
                self.logger,
                f"Content with ID {ref.remote_id} already exists. Updating...",
                event="content_update",
                external_id=external_id,
                remote_id=ref.remote_id,
            )
            try:
                self.gateway.update(ref.remote_id, article, deadline)
            except GatewayError as exc:
                return self._failed(external_id, "Error updating content", exc, ref.remote_id)
            return PublishOutcome(external_id, PublishAction.UPDATED, remote_id=ref.remote_id)

        log_event(
            self.logger,
            "Creating new content...",
            event="content_create",
            external_id=external_id,
        )
        try:
            self.gateway.create(article, deadline)
        except GatewayError as exc:
            return self._failed(external_id, "Error creating content", exc)
        return PublishOutcome(external_id, PublishAction.CREATED)

    def _failed(
        self,
        external_id: str,
        message: str,
        exc: GatewayError,
        remote_id: str | None = None,
    ) -> PublishOutcome:
        log_event(
            self.logger,
            f"{message} [{external_id}]: {exc}",
            level=logging.WARNING,
            event="publish_failed",
            external_id=external_id,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return PublishOutcome(
            external_id,
            PublishAction.FAILED,
            remote_id=remote_id,
            error=str(exc),
        )
