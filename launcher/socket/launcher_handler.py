# launcher/socket/launcher_handler.py
"""
Socket binding for the launcher core.

Inbound events (UI → core):
    search-query    {query, seq}            → search-response {query, seq, results}
    execute         {argument, privileged}  → execution-succeeded / execution-failed
    open-location   {argument}              → execution-succeeded / execution-failed
    auto-complete   {argument}              → auto-complete-response {argument, completion}
    config-updated  {config}                → config-reloaded (ack carries errors)
    reload          -                       → config-reloaded

A bare string is accepted wherever a payload dict carries one argument.
"""

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

import socketio

from ..core import LauncherCore
from ..errors import ConfigError
from ..execution.emitter import EventEmitter
from ..models import LauncherEvent

logger = logging.getLogger(__name__)


class SocketEmitter(EventEmitter):
    """Broadcasts core events to the connected UI"""

    def __init__(self, sio: socketio.AsyncServer):
        self.sio = sio

    async def emit(self, event: LauncherEvent) -> None:
        try:
            await self.sio.emit(event.channel, event.payload)
        except Exception as e:
            logger.error(f"❌ Failed to emit '{event.channel}': {e}")


def _argument(data: Any, key: str = "argument") -> str:
    if isinstance(data, dict):
        return str(data.get(key) or "")
    return "" if data is None else str(data)


class SocketLauncherHandler:

    def __init__(self, sio: socketio.AsyncServer, core: LauncherCore):
        self.sio = sio
        self.core = core
        # sid → in-flight search task
        self._searches: Dict[str, asyncio.Task] = {}

    # ─────────────────────────────────────────────────────────────────────────
    #  Search
    # ─────────────────────────────────────────────────────────────────────────
    async def on_search_query(self, sid: str, data: Any) -> None:
        query = _argument(data, "query")
        seq = data.get("seq") if isinstance(data, dict) else None

        previous = self._searches.pop(sid, None)
        if previous is not None and not previous.done():
            previous.cancel()
            logger.debug(f"⏭️  Superseded search for {sid}")

        task = asyncio.create_task(self._run_search(sid, query, seq))
        self._searches[sid] = task
        task.add_done_callback(lambda t: self._forget(sid, t))

    def _forget(self, sid: str, task: asyncio.Task) -> None:
        if self._searches.get(sid) is task:
            del self._searches[sid]

    async def _run_search(self, sid: str, query: str, seq: Optional[Any]) -> None:
        try:
            results = await self.core.search(query)
            await self.sio.emit(
                "search-response",
                {
                    "query": query,
                    "seq": seq,
                    "results": [item.model_dump(mode="json") for item in results],
                },
                room=sid,
            )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"❌ Search failed for '{query}': {e}")

    # ─────────────────────────────────────────────────────────────────────────
    #  Execution
    # ─────────────────────────────────────────────────────────────────────────
    @staticmethod
    def _execution_request(data: Any) -> Tuple[str, bool]:
        privileged = bool(data.get("privileged", False)) if isinstance(data, dict) else False
        return _argument(data), privileged

    async def on_execute(self, sid: str, data: Any) -> None:
        argument, privileged = self._execution_request(data)
        await self.core.execute(argument, privileged)

    async def on_open_location(self, sid: str, data: Any) -> None:
        await self.core.open_location(_argument(data))

    async def on_auto_complete(self, sid: str, data: Any) -> None:
        argument = _argument(data)
        suggestion = self.core.auto_complete(argument)
        await self.sio.emit(
            "auto-complete-response",
            {
                "argument": argument,
                "completion": suggestion.model_dump(mode="json") if suggestion else None,
            },
            room=sid,
        )

    # ─────────────────────────────────────────────────────────────────────────
    #  Configuration
    # ─────────────────────────────────────────────────────────────────────────
    async def on_config_updated(self, sid: str, data: Any) -> Dict[str, Any]:
        document = data.get("config", data) if isinstance(data, dict) else data
        try:
            snapshot = await self.core.update_config(document)
        except ConfigError as e:
            logger.error(f"❌ Rejected config update from {sid}: {e}")
            return {"success": False, "error": str(e)}
        return {"success": True, "generation": snapshot.generation}

    async def on_reload(self, sid: str, data: Any = None) -> Dict[str, Any]:
        try:
            snapshot = await self.core.reload_and_announce()
        except ConfigError as e:
            logger.error(f"❌ Reload failed: {e}")
            return {"success": False, "error": str(e)}
        return {"success": True, "generation": snapshot.generation}


def register_launcher_events(sio: socketio.AsyncServer, core: LauncherCore) -> SocketLauncherHandler:
    """
    Bind the launcher's inbound events on ``sio``.
    Call once during startup, after the core is built.
    """
    handler = SocketLauncherHandler(sio, core)

    sio.on("search-query", handler.on_search_query)
    sio.on("execute", handler.on_execute)
    sio.on("open-location", handler.on_open_location)
    sio.on("auto-complete", handler.on_auto_complete)
    sio.on("config-updated", handler.on_config_updated)
    sio.on("reload", handler.on_reload)

    logger.info("✅ Launcher socket events registered")
    return handler
