# launcher/search/orchestrator.py
"""
Search Orchestrator

Fans a query out to every category whose validator accepts it, joins all
searchers, and merges the results:

    1. usage count of the item's action identity, descending
    2. category priority, ascending
    3. the order the searcher returned them in

A failing category contributes nothing; the rest of the query goes on.
"""

import asyncio
import logging
from typing import Callable, List, Optional, Sequence, Tuple

from ..cache.frecency_store import FrecencyStore
from ..errors import SearchError
from ..models import SearchResultItem
from ..utils.async_utils import run_in_executor
from .base import InputValidatorSearcherCombination

logger = logging.getLogger(__name__)

IdentityResolver = Callable[[str], Optional[str]]


class SearchOrchestrator:

    def __init__(
        self,
        combinations: Sequence[InputValidatorSearcherCombination],
        frecency_store: FrecencyStore,
        identity_resolver: Optional[IdentityResolver] = None,
        rank_by_usage: bool = True,
    ):
        self.combinations = tuple(combinations)
        self.frecency_store = frecency_store
        self.identity_resolver = identity_resolver
        self.rank_by_usage = rank_by_usage

    def _accepts(self, combination: InputValidatorSearcherCombination, query: str) -> bool:
        try:
            return bool(combination.validator.is_valid_for(query))
        except Exception as e:
            logger.error(f"❌ {SearchError(combination.category, query, e)}")
            return False

    async def get_search_result(self, query: str) -> List[SearchResultItem]:
        matching = [c for c in self.combinations if self._accepts(c, query)]
        if not matching:
            return []

        logger.debug(f"🔍 '{query}' -> {[c.category for c in matching]}")

        results = await asyncio.gather(
            *(run_in_executor(c.searcher.search, query) for c in matching),
            return_exceptions=True,
        )

        entries: List[Tuple[SearchResultItem, int]] = []
        for combination, result in zip(matching, results):
            if isinstance(result, BaseException):
                logger.error(f"❌ {SearchError(combination.category, query, result)}")
                continue

            for item in result:
                if item.origin_category != combination.category:
                    item = item.model_copy(update={"origin_category": combination.category})
                entries.append((item, combination.priority))

        return self._rank(entries)

    def _rank(self, entries: List[Tuple[SearchResultItem, int]]) -> List[SearchResultItem]:
        keyed = []
        for index, (item, priority) in enumerate(entries):
            count = self._usage_count(item) if self.rank_by_usage else 0
            keyed.append((-count, priority, index, item))

        keyed.sort(key=lambda k: k[:3])
        return [k[3] for k in keyed]

    def _usage_count(self, item: SearchResultItem) -> int:
        if self.identity_resolver is None:
            return 0
        return self.frecency_store.get_count(self.identity_resolver(item.execution_argument))
