"""
Error taxonomy for the publish pipeline.

Errors fall into three families:
- ConfigError: missing or invalid runtime configuration (fatal)
- ArticleError: a single input file could not be turned into an Article
  (the file is skipped, the batch continues)
- GatewayError: a CMS call failed (the article is recorded as failed,
  the batch continues)
"""

from __future__ import annotations


class PublisherError(Exception):
    """Base class for all errors raised by cms_publisher."""


class ConfigError(PublisherError):
    """Required configuration is missing or invalid."""


class ArticleError(PublisherError):
    """A single article file could not be assembled.

    Attributes:
        reason: Human-readable failure reason
        path: Relative path of the originating file, once known
    """

    def __init__(self, reason: str, path: str | None = None):
        super().__init__(reason)
        self.reason = reason
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.reason}"
        return self.reason


class FileReadError(ArticleError):
    """The article file could not be read from the workspace."""


class InvalidFrontMatterFormat(ArticleError):
    """The file does not contain a `---` delimited front matter block."""


class InvalidMetadataFormat(ArticleError):
    """The front matter could not be decoded into article metadata."""


class MissingRequiredField(ArticleError):
    """The front matter decoded but `title` or `id` is empty."""

    def __init__(self, fields: list[str], path: str | None = None):
        super().__init__(f"title or id is empty (missing: {', '.join(fields)})", path)
        self.fields = fields


class GatewayError(PublisherError):
    """A call against the CMS API failed."""


class TransportError(GatewayError):
    """The request did not complete (network fault or timeout)."""

    def __init__(self, message: str, timeout: bool = False):
        super().__init__(message)
        self.timeout = timeout


class RemoteError(GatewayError):
    """The CMS answered with a non-2xx status."""

    def __init__(self, status: int, body: str):
        super().__init__(f"request failed with status code {status}: {body}")
        self.status = status
        self.body = body


class DecodeError(GatewayError):
    """The CMS answered 2xx but the body could not be decoded."""
