from .base import (
    ExecutionArgumentValidator,
    ExecutionArgumentValidatorExecutorCombination,
    Executor,
)
from .emitter import EventEmitter, InMemoryEmitter
from .orchestrator import ExecutionOrchestrator
from .registry import ExecutionArgumentValidatorExecutorRegistry, ExecutionContext

__all__ = [
    "ExecutionArgumentValidator",
    "Executor",
    "ExecutionArgumentValidatorExecutorCombination",
    "ExecutionArgumentValidatorExecutorRegistry",
    "ExecutionContext",
    "ExecutionOrchestrator",
    "EventEmitter",
    "InMemoryEmitter",
]
