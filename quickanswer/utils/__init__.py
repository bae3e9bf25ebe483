# QuickAnswer Utilities Package
"""
Shared utility functions and helpers for QuickAnswer.
"""

from .helpers import escape, labeled, load_settings, setup_logging

__all__ = ["escape", "labeled", "load_settings", "setup_logging"]
