"""
Socket Module - the UI boundary.

Usage in main.py:
    from launcher.socket import sio, socket_app, register_launcher_events
    register_launcher_events(sio, core)
    app.mount("/socket.io", socket_app)
"""

from .launcher_handler import SocketEmitter, SocketLauncherHandler, register_launcher_events
from .server import connected_clients, sio, socket_app

__all__ = [
    "sio",
    "socket_app",
    "connected_clients",
    "SocketEmitter",
    "SocketLauncherHandler",
    "register_launcher_events",
]
