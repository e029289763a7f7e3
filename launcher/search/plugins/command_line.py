"""
Command line category: ``>`` followed by a shell command.

The execution argument is the query verbatim (prefix included) so the
execution side can recognize it again.
"""

from typing import List, Tuple

from ...models import SearchResultItem
from ...user_config import UserConfig
from ..base import InputValidator, Searcher

CATEGORY = "command_line"


def strip_prefix(prefix: str, text: str) -> str:
    return text.strip()[len(prefix):].strip()


class CommandLineInputValidator(InputValidator):

    def __init__(self, prefix: str):
        self.prefix = prefix

    def is_valid_for(self, query: str) -> bool:
        q = query.strip()
        return q.startswith(self.prefix) and bool(strip_prefix(self.prefix, q))


class CommandLineSearcher(Searcher):

    def __init__(self, prefix: str):
        self.prefix = prefix

    def search(self, query: str) -> List[SearchResultItem]:
        command = strip_prefix(self.prefix, query)
        return [
            SearchResultItem(
                name=f"Run '{command}'",
                description="Execute in shell",
                execution_argument=query.strip(),
                icon="terminal",
                origin_category=CATEGORY,
            )
        ]


def create(config: UserConfig) -> Tuple[InputValidator, Searcher]:
    prefix = config.command_line.prefix
    if not prefix:
        raise ValueError("command_line prefix must not be empty")
    return CommandLineInputValidator(prefix), CommandLineSearcher(prefix)
