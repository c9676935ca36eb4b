"""
Shared utility functions.

This package contains utility code used across multiple
pipeline stages.
"""

from .logging import JsonlFormatter, SecretMaskFilter, log_event, mask_secrets, setup_logging

__all__ = [
    "setup_logging",
    "mask_secrets",
    "log_event",
    "JsonlFormatter",
    "SecretMaskFilter",
]
