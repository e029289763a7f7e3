# launcher/search/registry.py
"""
Input Validator / Searcher Registry

Built once per config snapshot. Walks the fixed category table in order
and constructs one combination per enabled category. A category that
fails to construct is dropped and recorded in ``diagnostics``.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from ..errors import ConstructionError
from ..user_config import UserConfig
from .base import InputValidator, InputValidatorSearcherCombination, Searcher
from .plugins import (
    calculator,
    command_line,
    custom_commands,
    file_path,
    launcher_commands,
    programs,
    web_search,
    web_url,
)

logger = logging.getLogger(__name__)

SearchCategoryFactory = Callable[[UserConfig], Tuple[InputValidator, Searcher]]

# Order reflects configuration precedence, not result order
SEARCH_CATEGORIES: List[Tuple[str, SearchCategoryFactory]] = [
    ("custom_commands", custom_commands.create),
    ("calculator", calculator.create),
    ("programs", programs.create),
    ("file_path", file_path.create),
    ("web_url", web_url.create),
    ("web_search", web_search.create),
    ("command_line", command_line.create),
    ("launcher_commands", launcher_commands.create),
]


class InputValidatorSearcherRegistry:

    def __init__(
        self,
        config: UserConfig,
        categories: Optional[Sequence[Tuple[str, SearchCategoryFactory]]] = None,
    ):
        self.config = config
        self.diagnostics: List[ConstructionError] = []
        self._combinations: List[InputValidatorSearcherCombination] = []

        for category, factory in (categories if categories is not None else SEARCH_CATEGORIES):
            self._build(category, factory)

        logger.info(
            f"✅ Search registry ready: {len(self._combinations)} categories "
            f"({', '.join(c.category for c in self._combinations)})"
        )

    def _build(self, category: str, factory: SearchCategoryFactory) -> None:
        try:
            options = self.config.category_options(category)
            if not options.enabled:
                logger.info(f"  ⏭️  {category} disabled")
                return

            validator, searcher = factory(self.config)
            self._combinations.append(
                InputValidatorSearcherCombination(
                    category=category,
                    validator=validator,
                    searcher=searcher,
                    priority=options.priority,
                )
            )
            logger.debug(f"  ✅ {category} (priority {options.priority})")
        except Exception as e:
            error = ConstructionError(category, e)
            self.diagnostics.append(error)
            logger.error(f"❌ {error}")

    def combinations(self) -> List[InputValidatorSearcherCombination]:
        return list(self._combinations)
