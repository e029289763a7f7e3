# launcher/core.py
"""
Launcher Core

Owns the current LauncherSnapshot: one immutable generation of
(config, search registry, execution registry, orchestrators,
auto-completion). Every request reads the snapshot reference once and
runs against it to completion; reload builds a complete new snapshot and
swaps the reference, so an in-flight request never sees a half-built
configuration.

Usage:
    core = LauncherCore(config_repository, frecency_store, emitter)
    results = await core.search("notepad")
    await core.execute(results[0].execution_argument)
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .autocompletion import AutoCompletionService, FilePathAutoCompleter, LauncherCommandAutoCompleter
from .cache.frecency_store import FrecencyStore
from .errors import ConfigError, ConstructionError
from .execution.emitter import EventEmitter
from .execution.orchestrator import ExecutionOrchestrator
from .execution.registry import ExecutionArgumentValidatorExecutorRegistry, ExecutionContext
from .models import CompletionSuggestion, ExecutionOutcome, InboundMessage, SearchResultItem
from .search.orchestrator import SearchOrchestrator
from .search.plugins.launcher_commands import COMMAND_PREFIX
from .search.registry import InputValidatorSearcherRegistry
from .user_config import ConfigFileRepository, UserConfig, parse_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LauncherSnapshot:
    generation: int
    config: UserConfig
    search_registry: InputValidatorSearcherRegistry
    execution_registry: ExecutionArgumentValidatorExecutorRegistry
    search_orchestrator: SearchOrchestrator
    execution_orchestrator: ExecutionOrchestrator
    autocompletion_service: AutoCompletionService

    @property
    def diagnostics(self) -> List[ConstructionError]:
        return self.search_registry.diagnostics + self.execution_registry.diagnostics


class LauncherCore:

    def __init__(
        self,
        config_repository: ConfigFileRepository,
        frecency_store: FrecencyStore,
        emitter: EventEmitter,
        config: Optional[UserConfig] = None,
    ):
        self.config_repository = config_repository
        self.frecency_store = frecency_store
        self.emitter = emitter
        self._reload_lock = threading.Lock()
        self._generation = 0

        # A malformed config at startup is fatal (ConfigError propagates)
        initial = config if config is not None else config_repository.get_config()
        self._snapshot = self._build_snapshot(initial)
        logger.info("✅ LauncherCore initialized")

    @property
    def snapshot(self) -> LauncherSnapshot:
        return self._snapshot

    # ─────────────────────────────────────────────────────────────────────────
    #  Snapshot construction
    # ─────────────────────────────────────────────────────────────────────────
    def _build_snapshot(self, config: UserConfig) -> LauncherSnapshot:
        self._generation += 1

        execution_registry = ExecutionArgumentValidatorExecutorRegistry(
            ExecutionContext(
                config=config,
                emitter=self.emitter,
                command_handlers={
                    f"{COMMAND_PREFIX}reload": self._reload_command,
                    f"{COMMAND_PREFIX}exit": self._exit_command,
                },
            )
        )
        execution_orchestrator = ExecutionOrchestrator(
            execution_registry.combinations(), self.frecency_store, self.emitter
        )

        search_registry = InputValidatorSearcherRegistry(config)
        search_orchestrator = SearchOrchestrator(
            search_registry.combinations(),
            self.frecency_store,
            identity_resolver=execution_orchestrator.identity_for,
            rank_by_usage=config.frecency.enabled,
        )

        completers = [LauncherCommandAutoCompleter()]
        if config.file_path.enabled:
            completers.insert(0, FilePathAutoCompleter(config.file_path.show_hidden_files))

        snapshot = LauncherSnapshot(
            generation=self._generation,
            config=config,
            search_registry=search_registry,
            execution_registry=execution_registry,
            search_orchestrator=search_orchestrator,
            execution_orchestrator=execution_orchestrator,
            autocompletion_service=AutoCompletionService(completers),
        )

        for error in snapshot.diagnostics:
            logger.warning(f"⚠️  Generation {snapshot.generation}: {error}")
        return snapshot

    def reload(self, config: Optional[Any] = None) -> LauncherSnapshot:
        """
        Install a new snapshot.

        ``config`` may be a UserConfig or a raw document; when omitted the
        config repository is read again. A ConfigError leaves the current
        snapshot in place.
        """
        with self._reload_lock:
            new_config = self.config_repository.get_config() if config is None else parse_config(config)
            snapshot = self._build_snapshot(new_config)
            self._snapshot = snapshot

        logger.info(f"🔄 Reloaded launcher (generation {snapshot.generation})")
        return snapshot

    async def reload_and_announce(self, config: Optional[Any] = None) -> LauncherSnapshot:
        snapshot = self.reload(config)
        await self.emitter.send("config-reloaded", generation=snapshot.generation)
        return snapshot

    async def _reload_command(self) -> None:
        await self.reload_and_announce()

    async def _exit_command(self) -> None:
        await self.emitter.send("exit-requested")

    # ─────────────────────────────────────────────────────────────────────────
    #  Boundary operations
    # ─────────────────────────────────────────────────────────────────────────
    async def search(self, query: str) -> List[SearchResultItem]:
        return await self._snapshot.search_orchestrator.get_search_result(query)

    async def execute(self, argument: str, privileged: bool = False) -> Optional[ExecutionOutcome]:
        return await self._snapshot.execution_orchestrator.execute(argument, privileged)

    async def open_location(self, argument: str) -> Optional[ExecutionOutcome]:
        return await self._snapshot.execution_orchestrator.open_location(argument)

    def auto_complete(self, argument: str) -> Optional[CompletionSuggestion]:
        return self._snapshot.autocompletion_service.get_autocompletion_result(argument)

    async def update_config(self, document: Any) -> LauncherSnapshot:
        """Validate, install and persist a config pushed by the UI."""
        new_config = parse_config(document)
        snapshot = await self.reload_and_announce(new_config)
        self.config_repository.save_config(new_config)
        return snapshot

    async def handle_message(self, message: InboundMessage) -> Any:
        """
        Dispatch one inbound boundary message.

        Returns the ranked results for ``search-query``, the suggestion (or
        None) for ``auto-complete`` and None for everything else; outcomes
        of executions travel as events.
        """
        payload = message.payload if message.payload is not None else ""

        if message.type == "search-query":
            return await self.search(str(payload))

        if message.type == "execute":
            await self.execute(str(payload), message.privileged)
            return None

        if message.type == "open-location":
            await self.open_location(str(payload))
            return None

        if message.type == "auto-complete":
            return self.auto_complete(str(payload))

        if message.type == "config-updated":
            try:
                await self.update_config(payload)
            except ConfigError as e:
                logger.error(f"❌ Rejected config update: {e}")
                raise
            return None

        raise ValueError(f"Unknown message type: {message.type}")

    def status(self) -> Dict[str, Any]:
        snapshot = self._snapshot
        return {
            "generation": snapshot.generation,
            "search_categories": [c.category for c in snapshot.search_registry.combinations()],
            "execution_categories": [c.category for c in snapshot.execution_registry.combinations()],
            "diagnostics": [str(e) for e in snapshot.diagnostics],
            "frecency_persistent": self.frecency_store.is_persistent,
        }
