# launcher/execution/base.py
"""
Base classes for execution categories.

An ExecutionArgumentValidator decides whether an argument belongs to its
category; the paired Executor performs the side effect. Arguments are
never trusted: they may have been typed or edited by the user.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..models import ExecutionOutcome


class ExecutionArgumentValidator(ABC):

    @abstractmethod
    def is_valid_for_execution(self, argument: str) -> bool:
        """Return True if this category can run the argument."""


class Executor(ABC):
    """
    Performs the action for an argument already accepted by its validator.

    Implementations return a failed ExecutionOutcome (or raise
    ExecutionFailure) when the action cannot be completed.
    """

    @abstractmethod
    async def execute(self, argument: str, privileged: bool = False) -> ExecutionOutcome:
        """Run the action."""


@dataclass(frozen=True)
class ExecutionArgumentValidatorExecutorCombination:
    category: str
    validator: ExecutionArgumentValidator
    executor: Executor
