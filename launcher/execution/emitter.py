# launcher/execution/emitter.py
"""
Event emitters for the UI boundary.

The core never talks to a transport directly; it hands LauncherEvents to
an emitter. Swap emitters to change the transport:

- InMemoryEmitter  → collects events (tests, headless use)
- SocketEmitter    → broadcasts to the UI (launcher.socket)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..models import EventChannel, LauncherEvent

logger = logging.getLogger(__name__)


class EventEmitter(ABC):

    @abstractmethod
    async def emit(self, event: LauncherEvent) -> None:
        """Deliver one event, at most once."""

    async def send(self, channel: EventChannel, **payload: Any) -> None:
        await self.emit(LauncherEvent(channel=channel, payload=payload))


class InMemoryEmitter(EventEmitter):

    def __init__(self):
        self.events: List[LauncherEvent] = []

    async def emit(self, event: LauncherEvent) -> None:
        self.events.append(event)

    def on(self, channel: EventChannel) -> List[Dict[str, Any]]:
        return [e.payload for e in self.events if e.channel == channel]

