"""
Socket Server - Core Socket.IO instance and connection lifecycle.

The launcher UI is a single local window, so there is no authentication;
every connected sid receives the launcher's events.
"""

import logging
from typing import Set

import socketio

logger = logging.getLogger(__name__)

# ==================== SOCKET.IO INSTANCE ====================

# Quieter loggers, search responses are chatty
_sio_logger = logging.getLogger("socketio")
_sio_logger.setLevel(logging.WARNING)
_eio_logger = logging.getLogger("engineio")
_eio_logger.setLevel(logging.WARNING)

sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins="*",
    logger=_sio_logger,
    engineio_logger=_eio_logger,
    namespaces=["/"],
    ping_timeout=60,
    ping_interval=25,
)

socket_app = socketio.ASGIApp(sio)

connected_clients: Set[str] = set()


# ==================== CONNECTION LIFECYCLE ====================

@sio.event
async def connect(sid, environ, auth=None):
    connected_clients.add(sid)
    logger.info(f"🟢 UI connected with sid {sid} (total connections: {len(connected_clients)})")
    return True


@sio.event
async def disconnect(sid):
    connected_clients.discard(sid)
    logger.info(f"🔌 UI disconnected sid {sid} ({len(connected_clients)} connections remaining)")
