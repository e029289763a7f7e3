# launcher/execution/registry.py
"""
Execution Argument Validator / Executor Registry

Mirrors the search registry for the execution side. The category set is
different: there is no "programs" executor (programs are opened by path)
and "open location" is handled separately by the orchestrator.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..errors import ConstructionError
from ..user_config import UserConfig
from .base import (
    ExecutionArgumentValidator,
    ExecutionArgumentValidatorExecutorCombination,
    Executor,
)
from .emitter import EventEmitter
from .executors.clipboard import ClipboardExecutionArgumentValidator, ClipboardExecutor
from .executors.command_line import CommandLineExecutionArgumentValidator, CommandLineExecutor
from .executors.file_path import FilePathExecutionArgumentValidator, FilePathExecutor
from .executors.launcher_commands import (
    CommandHandler,
    LauncherCommandExecutionArgumentValidator,
    LauncherCommandExecutor,
)
from .executors.web_url import WebUrlExecutionArgumentValidator, WebUrlExecutor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionContext:
    """Everything an execution category may need at construction time"""
    config: UserConfig
    emitter: EventEmitter
    command_handlers: Dict[str, CommandHandler] = field(default_factory=dict)


# Returns None when the category is switched off by the config
ExecutionCategoryFactory = Callable[
    [ExecutionContext], Optional[Tuple[ExecutionArgumentValidator, Executor]]
]


def _launcher_command(ctx: ExecutionContext):
    return LauncherCommandExecutionArgumentValidator(), LauncherCommandExecutor(ctx.command_handlers)


def _command_line(ctx: ExecutionContext):
    options = ctx.config.command_line
    if not options.enabled:
        return None
    return (
        CommandLineExecutionArgumentValidator(options.prefix),
        CommandLineExecutor(options.prefix, ctx.emitter, options.shell),
    )


def _web_url(ctx: ExecutionContext):
    return WebUrlExecutionArgumentValidator(), WebUrlExecutor()


def _file_path(ctx: ExecutionContext):
    return FilePathExecutionArgumentValidator(), FilePathExecutor()


def _clipboard(ctx: ExecutionContext):
    if not ctx.config.calculator.enabled:
        return None
    return ClipboardExecutionArgumentValidator(), ClipboardExecutor()


# First match wins, so order matters here
EXECUTION_CATEGORIES: List[Tuple[str, ExecutionCategoryFactory]] = [
    ("launcher_command", _launcher_command),
    ("command_line", _command_line),
    ("web_url", _web_url),
    ("file_path", _file_path),
    ("clipboard", _clipboard),
]


class ExecutionArgumentValidatorExecutorRegistry:

    def __init__(
        self,
        context: ExecutionContext,
        categories: Optional[Sequence[Tuple[str, ExecutionCategoryFactory]]] = None,
    ):
        self.context = context
        self.diagnostics: List[ConstructionError] = []
        self._combinations: List[ExecutionArgumentValidatorExecutorCombination] = []

        for category, factory in (categories if categories is not None else EXECUTION_CATEGORIES):
            self._build(category, factory)

        logger.info(
            f"✅ Execution registry ready: {len(self._combinations)} categories "
            f"({', '.join(c.category for c in self._combinations)})"
        )

    def _build(self, category: str, factory: ExecutionCategoryFactory) -> None:
        try:
            pair = factory(self.context)
        except Exception as e:
            error = ConstructionError(category, e)
            self.diagnostics.append(error)
            logger.error(f"❌ {error}")
            return

        if pair is None:
            logger.info(f"  ⏭️  {category} disabled")
            return

        validator, executor = pair
        self._combinations.append(
            ExecutionArgumentValidatorExecutorCombination(
                category=category, validator=validator, executor=executor
            )
        )

    def combinations(self) -> List[ExecutionArgumentValidatorExecutorCombination]:
        return list(self._combinations)
