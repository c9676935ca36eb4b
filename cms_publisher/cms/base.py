"""
Abstract base class for CMS gateways.

The publisher only depends on this interface, so alternative backends or
test doubles can be swapped in without touching the orchestration code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.types import Article, RemoteContentRef
from .deadline import Deadline


class ContentGateway(ABC):
    """Exists/Create/Update operations against a content store.

    Every method raises a GatewayError subclass on failure.
    """

    @abstractmethod
    def exists(self, external_id: str, deadline: Deadline) -> RemoteContentRef:
        """Look up the remote entry carrying external_id."""
        raise NotImplementedError

    @abstractmethod
    def create(self, article: Article, deadline: Deadline) -> None:
        """Create a new remote entry from article."""
        raise NotImplementedError

    @abstractmethod
    def update(self, remote_id: str, article: Article, deadline: Deadline) -> None:
        """Overwrite the remote entry remote_id with article."""
        raise NotImplementedError
