"""Utility modules for Discord Purger."""

from .pacing import Pacer
from .logging import setup_logging

__all__ = ["Pacer", "setup_logging"]
