"""
File path execution: open files, folders and programs by path.

Program results carry their launcher file as execution argument, so this
executor also starts applications (``.desktop`` entries via gtk-launch,
everything else through the OS shell).
"""

import logging
import os

from ...errors import ExecutionFailure
from ...models import ExecutionOutcome
from ...utils.async_utils import run_in_executor
from ...utils.platform_helpers import (
    expand_path,
    is_absolute_path,
    launch_desktop_entry,
    reveal_in_folder,
    run_elevated,
    shell_open,
)
from ..base import ExecutionArgumentValidator, Executor

logger = logging.getLogger(__name__)


class FilePathExecutionArgumentValidator(ExecutionArgumentValidator):

    def is_valid_for_execution(self, argument: str) -> bool:
        return is_absolute_path(argument)


def _existing_path(argument: str) -> str:
    path = expand_path(argument)
    if not os.path.exists(path):
        raise ExecutionFailure(f"File not found: {path}")
    return path


class FilePathExecutor(Executor):

    async def execute(self, argument: str, privileged: bool = False) -> ExecutionOutcome:
        path = _existing_path(argument)
        try:
            await run_in_executor(self._open, path, privileged)
        except OSError as e:
            raise ExecutionFailure(f"Could not open {path}: {e}") from e
        return ExecutionOutcome.ok()

    @staticmethod
    def _open(path: str, privileged: bool) -> None:
        if privileged:
            logger.info(f"Opening {path} elevated")
            run_elevated(path)
        elif path.endswith(".desktop"):
            launch_desktop_entry(path)
        else:
            shell_open(path)


class FilePathLocationExecutor(Executor):
    """Opens the folder containing a path instead of the path itself."""

    async def execute(self, argument: str, privileged: bool = False) -> ExecutionOutcome:
        path = _existing_path(argument)
        try:
            await run_in_executor(reveal_in_folder, path)
        except OSError as e:
            raise ExecutionFailure(f"Could not open location of {path}: {e}") from e
        return ExecutionOutcome.ok()
