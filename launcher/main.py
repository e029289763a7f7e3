# launcher/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from launcher import __version__
from launcher.cache import FrecencyStore, SqliteCountRepository
from launcher.config import settings
from launcher.core import LauncherCore
from launcher.errors import PersistenceError
from launcher.socket import SocketEmitter, connected_clients, register_launcher_events, sio, socket_app
from launcher.user_config import ConfigFileRepository, default_config
from launcher.utils.async_utils import cleanup_executor

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)


def _open_count_repository():
    try:
        return SqliteCountRepository(settings.get_count_db_file())
    except PersistenceError as e:
        logger.warning(f"⚠️  Usage counts will not be persisted: {e}")
        return None


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ========== STARTUP ==========
    logger.info("=" * 60)
    logger.info("🚀 Launcher starting up...")
    logger.info("=" * 60)

    repository = _open_count_repository()
    frecency_store = FrecencyStore(repository)
    config_repository = ConfigFileRepository(default_config(), settings.get_user_config_file())

    # A malformed user config stops startup here
    core = LauncherCore(config_repository, frecency_store, SocketEmitter(sio))
    register_launcher_events(sio, core)
    app.state.core = core

    logger.info("📡 Socket server available at /socket.io")
    logger.info(" Launcher startup complete")
    logger.info("=" * 60)

    yield

    # ========== SHUTDOWN ==========
    logger.info(" Launcher shutting down...")
    if repository is not None:
        repository.close()
    cleanup_executor()
    logger.info(" Launcher shutdown complete")


app = FastAPI(
    title="Spark Launcher",
    description="Launcher core with Socket.IO UI boundary",
    version=__version__,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def read_root():
    return {
        "message": "Launcher is ready!",
        "socket": "/socket.io",
        "docs": "/docs"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    core: LauncherCore = app.state.core
    return {
        "status": "healthy",
        "generation": core.snapshot.generation,
        "connected_clients": len(connected_clients),
    }


@app.get("/diagnostics")
def diagnostics():
    """Categories in the current snapshot and construction failures"""
    return app.state.core.status()


# Mount Socket.IO
app.mount("/socket.io", socket_app)
