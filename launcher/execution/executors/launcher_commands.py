"""
Launcher command execution: ``launcher:reload`` / ``launcher:exit``.

The handlers are supplied by whoever owns the launcher lifecycle.
"""

from typing import Awaitable, Callable, Dict

from ...errors import ExecutionFailure
from ...models import ExecutionOutcome
from ...search.plugins.launcher_commands import LAUNCHER_COMMANDS
from ..base import ExecutionArgumentValidator, Executor

CommandHandler = Callable[[], Awaitable[None]]


class LauncherCommandExecutionArgumentValidator(ExecutionArgumentValidator):

    def is_valid_for_execution(self, argument: str) -> bool:
        return argument.strip() in LAUNCHER_COMMANDS


class LauncherCommandExecutor(Executor):

    def __init__(self, handlers: Dict[str, CommandHandler]):
        self.handlers = dict(handlers)

    async def execute(self, argument: str, privileged: bool = False) -> ExecutionOutcome:
        handler = self.handlers.get(argument.strip())
        if handler is None:
            raise ExecutionFailure(f"No handler for '{argument}'")
        await handler()
        return ExecutionOutcome.ok()
