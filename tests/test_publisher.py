"""Tests for the sequential create-or-update publisher."""

from __future__ import annotations

import logging

from cms_publisher.cms.base import ContentGateway
from cms_publisher.cms.deadline import Deadline
from cms_publisher.core.types import Article, PublishAction, PublishStats, RemoteContentRef
from cms_publisher.errors import RemoteError, TransportError
from cms_publisher.publisher import Publisher


class _FakeGateway(ContentGateway):
    """In-memory gateway recording every call."""

    def __init__(self, existing=None, fail_on=None):
        self.existing: dict[str, str] = dict(existing or {})
        self.fail_on: dict[tuple[str, str], Exception] = dict(fail_on or {})
        self.calls: list[tuple[str, str]] = []

    def _maybe_fail(self, op: str, external_id: str) -> None:
        self.calls.append((op, external_id))
        exc = self.fail_on.get((op, external_id))
        if exc is not None:
            raise exc

    def exists(self, external_id, deadline):
        self._maybe_fail("exists", external_id)
        if external_id in self.existing:
            return RemoteContentRef(exists=True, remote_id=self.existing[external_id])
        return RemoteContentRef(exists=False)

    def create(self, article, deadline):
        self._maybe_fail("create", article.external_id)
        self.existing[article.external_id] = f"remote-{article.external_id}"

    def update(self, remote_id, article, deadline):
        self._maybe_fail("update", article.external_id)


def _article(external_id: str) -> Article:
    return Article(title=f"Title {external_id}", tags_joined="", external_id=external_id, html_content="")


def _publisher(gateway: ContentGateway) -> Publisher:
    return Publisher(gateway, logging.getLogger("test_publisher"))


def test_publish_creates_missing_article():
    gateway = _FakeGateway()

    outcomes = _publisher(gateway).publish_all([_article("q1")], Deadline(10))

    assert gateway.calls == [("exists", "q1"), ("create", "q1")]
    assert outcomes[0].action is PublishAction.CREATED
    assert outcomes[0].ok


def test_publish_updates_existing_article():
    gateway = _FakeGateway(existing={"q1": "X"})

    outcomes = _publisher(gateway).publish_all([_article("q1")], Deadline(10))

    assert gateway.calls == [("exists", "q1"), ("update", "q1")]
    assert outcomes[0].action is PublishAction.UPDATED
    assert outcomes[0].remote_id == "X"


def test_republish_updates_instead_of_duplicating():
    gateway = _FakeGateway()
    publisher = _publisher(gateway)

    first = publisher.publish_all([_article("q1")], Deadline(10))
    second = publisher.publish_all([_article("q1")], Deadline(10))

    assert first[0].action is PublishAction.CREATED
    assert second[0].action is PublishAction.UPDATED
    assert [op for op, _ in gateway.calls].count("create") == 1


def test_existence_failure_does_not_abort_batch(caplog):
    gateway = _FakeGateway(fail_on={("exists", "a"): TransportError("connection refused")})
    caplog.set_level(logging.INFO, logger="test_publisher")

    outcomes = _publisher(gateway).publish_all([_article("a"), _article("b")], Deadline(10))

    assert [o.action for o in outcomes] == [PublishAction.FAILED, PublishAction.CREATED]
    assert outcomes[0].error == "connection refused"
    assert ("create", "a") not in gateway.calls
    failures = [r for r in caplog.records if getattr(r, "event", None) == "publish_failed"]
    assert len(failures) == 1


def test_publish_all_counts_failed_write_as_failed():
    """A failed create or update is a failure, not a processed item."""
    gateway = _FakeGateway(
        existing={"u": "remote-u"},
        fail_on={
            ("create", "c"): RemoteError(400, "bad request"),
            ("update", "u"): RemoteError(500, "boom"),
        },
    )

    outcomes = _publisher(gateway).publish_all([_article("c"), _article("u"), _article("ok")], Deadline(10))

    assert [o.action for o in outcomes] == [
        PublishAction.FAILED,
        PublishAction.FAILED,
        PublishAction.CREATED,
    ]
    assert outcomes[1].remote_id == "remote-u"
    assert "boom" in outcomes[1].error
    assert [o.external_id for o in outcomes if o.ok] == ["ok"]


def test_publish_preserves_article_order():
    gateway = _FakeGateway(existing={"b": "B"})

    outcomes = _publisher(gateway).publish_all([_article("a"), _article("b"), _article("c")], Deadline(10))

    assert [o.external_id for o in outcomes] == ["a", "b", "c"]
    assert [op for op, _ in gateway.calls] == ["exists", "create", "exists", "update", "exists", "create"]


def test_publish_stats_from_outcomes():
    gateway = _FakeGateway(existing={"b": "B"}, fail_on={("exists", "c"): TransportError("down")})
    outcomes = _publisher(gateway).publish_all([_article("a"), _article("b"), _article("c")], Deadline(10))

    stats = PublishStats.from_outcomes(outcomes, total=5)

    assert stats == PublishStats(total=5, created=1, updated=1, failed=1, skipped=2)
