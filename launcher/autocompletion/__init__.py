from .service import (
    AutoCompleter,
    AutoCompletionService,
    FilePathAutoCompleter,
    LauncherCommandAutoCompleter,
)

__all__ = [
    "AutoCompleter",
    "AutoCompletionService",
    "FilePathAutoCompleter",
    "LauncherCommandAutoCompleter",
]
