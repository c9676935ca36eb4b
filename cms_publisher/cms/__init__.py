"""
CMS gateway implementations.

This package contains the abstract gateway interface and the concrete
HTTP client for the microCMS-style REST API.
"""

from .base import ContentGateway
from .client import CMSClient
from .deadline import Deadline

__all__ = ["CMSClient", "ContentGateway", "Deadline"]
