"""
QuickAnswer - Router composition

Builds the QueryRouter with every handler in its fixed dispatch order.
Specific shapes come first; the free-text "what is ..." patterns of the
definition handler come last so they never shadow a calculation or a
conversion.

Usage:
  from quickanswer.config import create_router
  router = create_router()
  answer = await router.resolve("100 km to miles")
"""

from typing import Any, Callable, Dict, Optional

from loguru import logger

from quickanswer.search.handlers import (
    Base64Handler,
    CalculatorHandler,
    CaseHandler,
    ConvertHandler,
    DefinitionHandler,
    DictionaryHandler,
    EscapeHandler,
    HashHandler,
    JSONHandler,
    SlugHandler,
    URLHandler,
)
from quickanswer.search.router import QueryRouter, SearchHandler
from quickanswer.utils.helpers import load_settings, setup_logging


def _definition_options(settings: Dict[str, Any]) -> Dict[str, Any]:
    section = settings["definition"]
    return {
        "api_url": section["api_url"],
        "timeout": float(section["timeout"]),
        "max_definitions": int(section["max_definitions"]),
        "user_agent": section["user_agent"],
    }


# Dispatch order. Changing it changes which handler wins a query.
DEFAULT_HANDLERS: tuple[tuple[str, Callable[[Dict[str, Any]], SearchHandler]], ...] = (
    ("math", lambda s: CalculatorHandler(max_length=int(s["calculator"]["max_length"]))),
    ("convert", lambda s: ConvertHandler()),
    ("hash", lambda s: HashHandler()),
    ("base64", lambda s: Base64Handler()),
    ("url", lambda s: URLHandler()),
    ("case", lambda s: CaseHandler()),
    ("json", lambda s: JSONHandler()),
    ("slug", lambda s: SlugHandler()),
    ("escape", lambda s: EscapeHandler()),
    ("definition", lambda s: DefinitionHandler(**_definition_options(s))),
    ("dictionary", lambda s: DictionaryHandler(**_definition_options(s))),
)


def create_router(settings: Optional[Dict[str, Any]] = None) -> QueryRouter:
    """
    Build a router with all enabled handlers registered in dispatch order.

    Args:
        settings: Merged settings dict; loaded from disk when omitted

    Returns:
        A QueryRouter ready to resolve queries
    """
    if settings is None:
        settings = load_settings()
        setup_logging(settings["logging"]["level"])

    disabled = set(settings["search"]["disabled"])
    router = QueryRouter()

    for name, factory in DEFAULT_HANDLERS:
        if name in disabled:
            logger.debug(f"Handler '{name}' disabled in settings")
            continue
        router.register(factory(settings))

    logger.debug(f"Router ready with {len(router.handlers)} handlers")
    return router
