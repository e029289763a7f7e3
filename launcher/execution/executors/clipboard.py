"""
Clipboard execution: copies calculator results.
"""

import re

import pyperclip

from ...errors import ExecutionFailure
from ...models import ExecutionOutcome
from ...utils.async_utils import run_in_executor
from ..base import ExecutionArgumentValidator, Executor

_NUMBER = re.compile(r"^-?\d+(\.\d+)?([eE][+-]?\d+)?$")


class ClipboardExecutionArgumentValidator(ExecutionArgumentValidator):

    def is_valid_for_execution(self, argument: str) -> bool:
        return bool(_NUMBER.match(argument.strip()))


class ClipboardExecutor(Executor):

    async def execute(self, argument: str, privileged: bool = False) -> ExecutionOutcome:
        try:
            await run_in_executor(pyperclip.copy, argument.strip())
        except pyperclip.PyperclipException as e:
            raise ExecutionFailure(f"Clipboard unavailable: {e}") from e
        return ExecutionOutcome.ok(output=f"Copied {argument.strip()} to clipboard")
