# QuickAnswer Services Package
"""
Self-contained computation services used by the answer handlers.

Services are pure functions over immutable tables; they raise on failure
and leave rendering to the handlers.
"""

from .arithmetic import evaluate, format_number
from .units import convert, normalize_unit

__all__ = ["evaluate", "format_number", "convert", "normalize_unit"]
