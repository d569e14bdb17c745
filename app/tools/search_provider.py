from __future__ import annotations

from app.config import Settings
from app.services.logger import logger
from app.tools.base import SourceAdapter
from app.tools.brave_search import BraveSearchAdapter
from app.tools.duckduckgo_search import DuckDuckGoSearchAdapter
from app.tools.jina_search import JinaSearchAdapter
from app.tools.scholar_search import ScholarSearchAdapter
from app.tools.tavily_search import TavilySearchAdapter

KNOWN_SOURCES = ("brave", "duckduckgo", "scholar", "tavily", "jina")


def build_source_adapter(name: str, settings: Settings) -> SourceAdapter | None:
    """Instantiate one adapter, or None when its credentials are missing."""
    provider = name.lower().strip()
    common = {
        "max_results": settings.search_max_results_per_query,
        "user_agent": settings.http_user_agent,
    }

    if provider == "brave":
        if not settings.brave_api_key:
            return None
        return BraveSearchAdapter(
            settings.brave_api_key,
            timeout=settings.brave_timeout_seconds,
            **common,
        )

    if provider == "duckduckgo":
        return DuckDuckGoSearchAdapter(timeout=settings.duckduckgo_timeout_seconds, **common)

    if provider == "scholar":
        return ScholarSearchAdapter(
            settings.semantic_scholar_api_key,
            timeout=settings.scholar_timeout_seconds,
            **common,
        )

    if provider == "tavily":
        if not settings.tavily_api_key:
            return None
        return TavilySearchAdapter(
            settings.tavily_api_key,
            timeout=settings.tavily_timeout_seconds,
            **common,
        )

    if provider == "jina":
        if not settings.jina_api_key:
            return None
        return JinaSearchAdapter(
            settings.jina_api_key,
            timeout=settings.jina_timeout_seconds,
            **common,
        )

    raise ValueError(f"Unsupported search source: {name}")


def build_source_adapters(settings: Settings) -> list[SourceAdapter]:
    """Materialize the configured source list into adapter instances."""
    adapters: list[SourceAdapter] = []
    seen: set[str] = set()
    for name in settings.search_source_list:
        if name in seen:
            continue
        seen.add(name)
        adapter = build_source_adapter(name, settings)
        if adapter is None:
            logger.warning(f"Search source '{name}' skipped: API key not configured")
            continue
        adapters.append(adapter)
    return adapters
