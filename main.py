"""
Spark Launcher Entry Point
==========================
Starts the launcher core behind its Socket.IO boundary.

Settings (host, port, data paths) are handled by launcher.config.
"""
import sys
import os

# Set working directory for PyInstaller bundle
if getattr(sys, 'frozen', False):
    os.chdir(getattr(sys, '_MEIPASS', '.'))

import uvicorn

from launcher.config import settings


def serve():
    """Start the uvicorn server."""
    uvicorn.run(
        "launcher.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False  # Must be False for PyInstaller bundle
    )


if __name__ == "__main__":
    try:
        serve()
    except Exception as e:
        print(f"ERROR during server execution: {type(e).__name__}: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)
