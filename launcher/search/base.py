# launcher/search/base.py
"""
Base classes for search categories.

A category is an InputValidator (does this query belong to me?) paired
with a Searcher (what are the candidates?). Validators must be cheap and
side-effect-free; searchers may hit the filesystem but must not mutate
shared state.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from ..models import SearchResultItem


class InputValidator(ABC):

    @abstractmethod
    def is_valid_for(self, query: str) -> bool:
        """Return True if the query belongs to this category."""


class Searcher(ABC):

    @abstractmethod
    def search(self, query: str) -> List[SearchResultItem]:
        """Return candidates for a query already accepted by the paired validator."""


@dataclass(frozen=True)
class InputValidatorSearcherCombination:
    category: str
    validator: InputValidator
    searcher: Searcher
    priority: int = 100
