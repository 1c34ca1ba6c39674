"""Utility helpers for arc_table."""

from .logging_config import setup_logging

__all__ = ["setup_logging"]
