# launcher/execution/orchestrator.py
"""
Execution Orchestrator

Unlike search, execution is first-match: the first validator that accepts
the argument decides the one action that runs.

    execute(argument)
      → no validator accepts     : silent no-op
      → executor succeeds        : usage count +1, "execution-succeeded"
      → executor fails / raises  : "execution-failed", count unchanged

open_location(argument) reveals a path in the file manager. It has its
own validator and never touches usage counts.
"""

import logging
from typing import Optional, Sequence

from ..cache.frecency_store import FrecencyStore, action_identity
from ..errors import ExecutionFailure, NoMatchingExecutor
from ..models import ExecutionOutcome
from .base import ExecutionArgumentValidatorExecutorCombination, Executor
from .emitter import EventEmitter
from .executors.file_path import FilePathExecutionArgumentValidator, FilePathLocationExecutor

logger = logging.getLogger(__name__)

OPEN_LOCATION_CATEGORY = "open_location"


class ExecutionOrchestrator:

    def __init__(
        self,
        combinations: Sequence[ExecutionArgumentValidatorExecutorCombination],
        frecency_store: FrecencyStore,
        emitter: EventEmitter,
        location_combination: Optional[ExecutionArgumentValidatorExecutorCombination] = None,
    ):
        self.combinations = tuple(combinations)
        self.frecency_store = frecency_store
        self.emitter = emitter
        self.location_combination = location_combination or ExecutionArgumentValidatorExecutorCombination(
            category=OPEN_LOCATION_CATEGORY,
            validator=FilePathExecutionArgumentValidator(),
            executor=FilePathLocationExecutor(),
        )

    # ─────────────────────────────────────────────────────────────────────────
    #  Lookup
    # ─────────────────────────────────────────────────────────────────────────
    @staticmethod
    def _accepts(combination: ExecutionArgumentValidatorExecutorCombination, argument: str) -> bool:
        try:
            return bool(combination.validator.is_valid_for_execution(argument))
        except Exception as e:
            logger.error(f"❌ Validator '{combination.category}' failed for '{argument}': {e}")
            return False

    def find_combination(self, argument: str) -> Optional[ExecutionArgumentValidatorExecutorCombination]:
        for combination in self.combinations:
            if self._accepts(combination, argument):
                return combination
        return None

    def identity_for(self, argument: str) -> Optional[str]:
        """Action identity of argument, None if nothing can execute it."""
        combination = self.find_combination(argument)
        if combination is None:
            return None
        return action_identity(combination.category, argument)

    # ─────────────────────────────────────────────────────────────────────────
    #  Execution
    # ─────────────────────────────────────────────────────────────────────────
    async def execute(self, argument: str, privileged: bool = False) -> Optional[ExecutionOutcome]:
        combination = self.find_combination(argument)
        if combination is None:
            logger.debug(f"⏭️  {NoMatchingExecutor(argument)}")
            return None

        outcome = await self._run(combination, argument, privileged)
        if outcome.success:
            self.frecency_store.increment(action_identity(combination.category, argument))
        await self._report(combination.category, argument, outcome)
        return outcome

    async def open_location(self, argument: str) -> Optional[ExecutionOutcome]:
        combination = self.location_combination
        if not self._accepts(combination, argument):
            logger.debug(f"⏭️  Not a location: '{argument}'")
            return None

        outcome = await self._run(combination, argument, privileged=False)
        await self._report(combination.category, argument, outcome)
        return outcome

    async def _run(
        self,
        combination: ExecutionArgumentValidatorExecutorCombination,
        argument: str,
        privileged: bool,
    ) -> ExecutionOutcome:
        executor: Executor = combination.executor
        logger.info(f"▶️  {combination.category}: {argument}" + (" (privileged)" if privileged else ""))
        try:
            return await executor.execute(argument, privileged)
        except ExecutionFailure as e:
            return ExecutionOutcome.failed(str(e))
        except Exception as e:
            logger.exception(f"❌ Executor '{combination.category}' crashed")
            return ExecutionOutcome.failed(f"{type(e).__name__}: {e}")

    async def _report(self, category: str, argument: str, outcome: ExecutionOutcome) -> None:
        if outcome.success:
            logger.info(f"✅ {category} succeeded: {argument}")
            await self.emitter.send(
                "execution-succeeded",
                argument=argument,
                category=category,
                output=outcome.output,
                hide_window=outcome.hide_window,
            )
        else:
            logger.warning(f"⚠️  {category} failed: {outcome.error}")
            await self.emitter.send(
                "execution-failed",
                argument=argument,
                category=category,
                error=outcome.error,
            )
