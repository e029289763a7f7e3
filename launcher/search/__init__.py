from .base import InputValidator, InputValidatorSearcherCombination, Searcher
from .orchestrator import SearchOrchestrator
from .registry import InputValidatorSearcherRegistry

__all__ = [
    "InputValidator",
    "Searcher",
    "InputValidatorSearcherCombination",
    "InputValidatorSearcherRegistry",
    "SearchOrchestrator",
]
