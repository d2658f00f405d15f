"""Utility modules."""

from loa.utils.logging import setup_logging

__all__ = ["setup_logging"]
