# launcher/models.py
"""
Models shared across the launcher core and its UI boundary.
"""

from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


EventChannel = Literal[
    "search-response",
    "auto-complete-response",
    "execution-succeeded",
    "execution-failed",
    "command-line-output",
    "exit-requested",
    "config-reloaded",
]

MessageType = Literal[
    "search-query",
    "execute",
    "open-location",
    "auto-complete",
    "config-updated",
]


class SearchResultItem(BaseModel):
    """
    One candidate action produced by a searcher.

    ``execution_argument`` is opaque: it is handed back to the execution
    side as-is and re-validated there.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name")
    description: str = ""
    execution_argument: str
    icon: str = ""
    supports_auto_completion: bool = False
    origin_category: str


class ExecutionOutcome(BaseModel):
    """Standardized executor output"""
    success: bool
    output: Optional[str] = None
    error: Optional[str] = None
    hide_window: bool = True

    @classmethod
    def ok(cls, output: Optional[str] = None, hide_window: bool = True) -> "ExecutionOutcome":
        return cls(success=True, output=output, hide_window=hide_window)

    @classmethod
    def failed(cls, error: str) -> "ExecutionOutcome":
        return cls(success=False, error=error, hide_window=False)


class CompletionSuggestion(BaseModel):
    """A completed version of a partially typed argument"""
    model_config = ConfigDict(frozen=True)

    completion: str
    category: str


class LauncherEvent(BaseModel):
    """Outbound event for the UI boundary"""
    channel: EventChannel
    payload: Dict[str, Any] = Field(default_factory=dict)


class InboundMessage(BaseModel):
    """
    Inbound message from the UI boundary.

    ``payload`` is the query / argument string, or the config document
    for ``config-updated``.
    """
    type: MessageType
    payload: Any = None
    privileged: bool = False
