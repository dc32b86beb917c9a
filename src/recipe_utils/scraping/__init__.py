"""Web fetching utilities for recipe import."""

from .polite import DEFAULT_USER_AGENT, PoliteSession, site_root
from .retry import RETRYABLE_STATUS_CODES, retry_on_transient_error

__all__ = [
    "PoliteSession",
    "DEFAULT_USER_AGENT",
    "site_root",
    "retry_on_transient_error",
    "RETRYABLE_STATUS_CODES",
]
