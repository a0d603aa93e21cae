"""Logging setup for the auth service."""

from .filters import RedactionFilter
from .setup import setup_logging

__all__ = ["RedactionFilter", "setup_logging"]
