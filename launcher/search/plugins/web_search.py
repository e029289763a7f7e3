"""
Web search category: ``<prefix><term>`` opens a search engine.

    g?python asyncio   → https://www.google.com/search?q=python+asyncio
"""

from typing import List, Optional, Sequence, Tuple
from urllib.parse import quote_plus

from ...models import SearchResultItem
from ...user_config import UserConfig, WebSearchEngine
from ..base import InputValidator, Searcher

CATEGORY = "web_search"


def _match_engine(engines: Sequence[WebSearchEngine], query: str) -> Optional[Tuple[WebSearchEngine, str]]:
    # Longest prefix first so "yt?" is not shadowed by a hypothetical "y?"
    for engine in sorted(engines, key=lambda e: len(e.prefix), reverse=True):
        if query.startswith(engine.prefix):
            term = query[len(engine.prefix):].strip()
            if term:
                return engine, term
    return None


class WebSearchInputValidator(InputValidator):

    def __init__(self, engines: Sequence[WebSearchEngine]):
        self.engines = list(engines)

    def is_valid_for(self, query: str) -> bool:
        return _match_engine(self.engines, query.lstrip()) is not None


class WebSearchSearcher(Searcher):

    def __init__(self, engines: Sequence[WebSearchEngine]):
        self.engines = list(engines)

    def search(self, query: str) -> List[SearchResultItem]:
        match = _match_engine(self.engines, query.lstrip())
        if match is None:
            return []
        engine, term = match
        return [
            SearchResultItem(
                name=f"Search {engine.name} for '{term}'",
                description=engine.url.replace("{{query}}", term),
                execution_argument=engine.url.replace("{{query}}", quote_plus(term)),
                icon="web-search",
                origin_category=CATEGORY,
            )
        ]


def create(config: UserConfig) -> Tuple[InputValidator, Searcher]:
    engines = config.web_search.engines
    if not engines:
        raise ValueError("web_search is enabled but no engines are configured")
    for engine in engines:
        if "{{query}}" not in engine.url:
            raise ValueError(f"Search URL for '{engine.name}' has no {{{{query}}}} placeholder")
    return WebSearchInputValidator(engines), WebSearchSearcher(engines)
