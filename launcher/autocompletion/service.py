"""
Auto-completion lookup.

Runs on every keystroke, so completers only look at the argument and, for
paths, a single directory listing. The first completer that accepts the
argument and has a suggestion wins.

    /home/me/Docu        → /home/me/Documents/
    launcher:re          → launcher:reload
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..models import CompletionSuggestion
from ..search.plugins.launcher_commands import COMMAND_PREFIX, LAUNCHER_COMMANDS
from ..utils.platform_helpers import expand_path, is_absolute_path

logger = logging.getLogger(__name__)


class AutoCompleter(ABC):
    category: str = ""

    @abstractmethod
    def is_valid_for_auto_completion(self, argument: str) -> bool:
        """Return True if this completer understands the argument."""

    @abstractmethod
    def complete(self, argument: str) -> Optional[str]:
        """Return the completed argument, or None."""


class FilePathAutoCompleter(AutoCompleter):
    category = "file_path"

    def __init__(self, show_hidden_files: bool = False):
        self.show_hidden_files = show_hidden_files

    def is_valid_for_auto_completion(self, argument: str) -> bool:
        return is_absolute_path(argument)

    def complete(self, argument: str) -> Optional[str]:
        folder, partial = os.path.split(expand_path(argument))
        if not partial or not os.path.isdir(folder):
            return None

        try:
            names = sorted(os.listdir(folder), key=str.lower)
        except OSError as e:
            logger.debug("[FilePathAutoCompleter] cannot list %s: %s", folder, e)
            return None

        lowered = partial.lower()
        for name in names:
            if name.startswith(".") and not partial.startswith(".") and not self.show_hidden_files:
                continue
            if name.lower().startswith(lowered):
                full = os.path.join(folder, name)
                if os.path.isdir(full):
                    full += os.sep
                return full
        return None


class LauncherCommandAutoCompleter(AutoCompleter):
    category = "launcher_commands"

    def is_valid_for_auto_completion(self, argument: str) -> bool:
        return argument.startswith(COMMAND_PREFIX)

    def complete(self, argument: str) -> Optional[str]:
        for command in LAUNCHER_COMMANDS:
            if command.startswith(argument):
                return command
        return None


class AutoCompletionService:

    def __init__(self, completers: Sequence[AutoCompleter]):
        self.completers: List[AutoCompleter] = list(completers)

    def get_autocompletion_result(self, argument: str) -> Optional[CompletionSuggestion]:
        for completer in self.completers:
            try:
                if not completer.is_valid_for_auto_completion(argument):
                    continue
                completion = completer.complete(argument)
            except Exception as e:
                logger.error(f"❌ Completer '{completer.category}' failed for '{argument}': {e}")
                continue

            if completion and completion != argument:
                return CompletionSuggestion(completion=completion, category=completer.category)
        return None
