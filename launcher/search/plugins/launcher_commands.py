"""
Launcher commands: control the launcher itself.
"""

from typing import Dict, List, Tuple

from ...models import SearchResultItem
from ...user_config import UserConfig
from ..base import InputValidator, Searcher

CATEGORY = "launcher_commands"

COMMAND_PREFIX = "launcher:"

# execution argument → (display name, description)
LAUNCHER_COMMANDS: Dict[str, Tuple[str, str]] = {
    f"{COMMAND_PREFIX}reload": ("Reload launcher", "Re-read the configuration and rebuild all plugins"),
    f"{COMMAND_PREFIX}exit": ("Exit launcher", "Quit the launcher"),
}


def _matches(argument: str, display_name: str, query: str) -> bool:
    q = query.strip().lower()
    if len(q) < 2:
        return False
    return argument.startswith(q) or any(w.startswith(q) for w in display_name.lower().split())


class LauncherCommandsInputValidator(InputValidator):

    def is_valid_for(self, query: str) -> bool:
        return any(_matches(arg, name, query) for arg, (name, _) in LAUNCHER_COMMANDS.items())


class LauncherCommandsSearcher(Searcher):

    def search(self, query: str) -> List[SearchResultItem]:
        return [
            SearchResultItem(
                name=name,
                description=description,
                execution_argument=arg,
                icon="launcher",
                origin_category=CATEGORY,
            )
            for arg, (name, description) in LAUNCHER_COMMANDS.items()
            if _matches(arg, name, query)
        ]


def create(config: UserConfig) -> Tuple[InputValidator, Searcher]:
    return LauncherCommandsInputValidator(), LauncherCommandsSearcher()
