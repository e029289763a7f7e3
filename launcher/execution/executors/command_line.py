"""
Command line execution: runs ``>``-prefixed commands through the shell.

The command counts as executed once the process has started; the
executor does not wait for it to exit. A background task streams every
output line to the UI as a ``command-line-output`` event and reports a
non-zero exit code as a follow-up ``execution-failed`` event. The window
stays open so the output can be read.
"""

import asyncio
import logging
from typing import Optional, Set

from ...errors import ExecutionFailure
from ...models import ExecutionOutcome
from ...search.plugins.command_line import strip_prefix
from ..base import ExecutionArgumentValidator, Executor
from ..emitter import EventEmitter

logger = logging.getLogger(__name__)

CATEGORY = "command_line"


class CommandLineExecutionArgumentValidator(ExecutionArgumentValidator):

    def __init__(self, prefix: str):
        self.prefix = prefix

    def is_valid_for_execution(self, argument: str) -> bool:
        a = argument.strip()
        return a.startswith(self.prefix) and bool(strip_prefix(self.prefix, a))


class CommandLineExecutor(Executor):

    def __init__(self, prefix: str, emitter: EventEmitter, shell: Optional[str] = None):
        self.prefix = prefix
        self.emitter = emitter
        self.shell = shell
        # Running output watchers, kept referenced until they finish
        self._watchers: Set[asyncio.Task] = set()

    async def execute(self, argument: str, privileged: bool = False) -> ExecutionOutcome:
        command = strip_prefix(self.prefix, argument)
        logger.info(f"Running command: {command}")

        try:
            process = await asyncio.create_subprocess_shell(
                command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                executable=self.shell,
            )
        except OSError as e:
            raise ExecutionFailure(f"Could not start '{command}': {e}") from e

        watcher = asyncio.create_task(self._watch(argument.strip(), command, process))
        self._watchers.add(watcher)
        watcher.add_done_callback(self._watchers.discard)

        return ExecutionOutcome.ok(output=f"Started '{command}' (pid {process.pid})", hide_window=False)

    async def _watch(self, argument: str, command: str, process: asyncio.subprocess.Process) -> None:
        try:
            async for raw in process.stdout:
                line = raw.decode(errors="replace").rstrip("\r\n")
                await self.emitter.send("command-line-output", line=line)

            returncode = await process.wait()
        except asyncio.CancelledError:
            # Loop shutdown: do not leave the command running unattended
            if process.returncode is None:
                try:
                    process.kill()
                except ProcessLookupError:
                    pass
                await process.wait()
            raise

        if returncode != 0:
            logger.warning(f"⚠️  '{command}' exited with code {returncode}")
            await self.emitter.send(
                "execution-failed",
                argument=argument,
                category=CATEGORY,
                error=f"'{command}' exited with code {returncode}",
            )
        else:
            logger.info(f"✅ '{command}' finished")

    @property
    def running(self) -> int:
        return len(self._watchers)

    async def join(self) -> None:
        """Wait until every started command has exited and its output was delivered."""
        while self._watchers:
            await asyncio.gather(*list(self._watchers), return_exceptions=True)
