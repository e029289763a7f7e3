"""
Custom commands: user-defined shortcuts from the config.

    {"name": "Work mail", "execution_argument": "https://mail.example.com"}

The execution argument can be anything an executor recognizes (a URL, a
path, a ``>`` command line, ...).
"""

from typing import List, Sequence, Tuple

from ...models import SearchResultItem
from ...user_config import CustomCommand, UserConfig
from ..base import InputValidator, Searcher

CATEGORY = "custom_commands"


def _matches(command: CustomCommand, query: str) -> bool:
    q = query.strip().lower()
    return bool(q) and q in command.name.lower()


class CustomCommandsInputValidator(InputValidator):

    def __init__(self, commands: Sequence[CustomCommand]):
        self.commands = list(commands)

    def is_valid_for(self, query: str) -> bool:
        return any(_matches(c, query) for c in self.commands)


class CustomCommandsSearcher(Searcher):

    def __init__(self, commands: Sequence[CustomCommand]):
        self.commands = list(commands)

    def search(self, query: str) -> List[SearchResultItem]:
        return [
            SearchResultItem(
                name=c.name,
                description=c.description or c.execution_argument,
                execution_argument=c.execution_argument,
                icon="custom",
                origin_category=CATEGORY,
            )
            for c in self.commands
            if _matches(c, query)
        ]


def create(config: UserConfig) -> Tuple[InputValidator, Searcher]:
    commands = config.custom_commands.commands
    return CustomCommandsInputValidator(commands), CustomCommandsSearcher(commands)
