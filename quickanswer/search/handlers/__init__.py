"""
Answer handlers - Pluggable query processors.

Each handler checks if it can handle a query and returns a typed Answer.
"""

from .calculator import CalculatorHandler
from .convert import ConvertHandler
from .definition import DefinitionHandler, DictionaryHandler
from .encoding import Base64Handler, HashHandler, URLHandler
from .escape import EscapeHandler
from .json_format import JSONHandler
from .slug import SlugHandler
from .text_case import CaseHandler

__all__ = [
    "CalculatorHandler",
    "ConvertHandler",
    "HashHandler",
    "Base64Handler",
    "URLHandler",
    "CaseHandler",
    "JSONHandler",
    "SlugHandler",
    "EscapeHandler",
    "DefinitionHandler",
    "DictionaryHandler",
]
