"""
Launcher error taxonomy.

Failures are isolated at the smallest unit that caused them (one category,
one execution attempt). Only ConfigError is allowed to stop startup.
"""


class LauncherError(Exception):
    """Base class for all launcher errors."""


class ConstructionError(LauncherError):
    """A category's recognizer/searcher/executor failed to initialize."""

    def __init__(self, category: str, cause: BaseException):
        self.category = category
        self.cause = cause
        super().__init__(f"Category '{category}' failed to initialize: {cause}")


class SearchError(LauncherError):
    """A searcher failed while handling a query."""

    def __init__(self, category: str, query: str, cause: BaseException):
        self.category = category
        self.query = query
        self.cause = cause
        super().__init__(f"Searcher '{category}' failed for '{query}': {cause}")


class NoMatchingExecutor(LauncherError):
    """No argument recognizer accepted the execution argument."""

    def __init__(self, argument: str):
        self.argument = argument
        super().__init__(f"No executor accepts '{argument}'")


class ExecutionFailure(LauncherError):
    """The matched executor could not complete the action."""


class PersistenceError(LauncherError):
    """The usage count store could not be read or written."""


class ConfigError(LauncherError):
    """The user configuration could not be parsed into a valid config."""
