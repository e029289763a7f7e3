"""
User configuration document.

The document is a JSON file owned by the user (category enable flags,
hotkey, per-category parameters). It is parsed into an immutable
``UserConfig`` snapshot; a reload installs a new snapshot instead of
mutating the old one.

Usage:
    repo   = ConfigFileRepository(default_config(), settings.get_user_config_file())
    config = repo.get_config()
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════════
#  Platform defaults for application discovery
# ══════════════════════════════════════════════════════════════════════════════

def _default_application_folders() -> List[str]:
    home = Path.home()
    if sys.platform == "win32":
        return [
            os.path.join(os.environ.get("PROGRAMDATA", r"C:\ProgramData"),
                         "Microsoft", "Windows", "Start Menu", "Programs"),
            str(home / "AppData" / "Roaming" / "Microsoft" / "Windows" / "Start Menu" / "Programs"),
            str(home / "Desktop"),
        ]
    if sys.platform == "darwin":
        return ["/Applications", "/System/Applications", str(home / "Applications")]
    return [
        "/usr/share/applications",
        "/usr/local/share/applications",
        str(home / ".local/share/applications"),
        "/var/lib/flatpak/exports/share/applications",
        "/var/lib/snapd/desktop/applications",
    ]


def _default_application_extensions() -> List[str]:
    if sys.platform == "win32":
        return [".lnk", ".appref-ms", ".url", ".exe"]
    if sys.platform == "darwin":
        return [".app"]
    return [".desktop"]


# ══════════════════════════════════════════════════════════════════════════════
#  Models
# ══════════════════════════════════════════════════════════════════════════════

class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class CategoryOptions(_Frozen):
    """Options every search category understands"""
    enabled: bool = True
    priority: int = 100


class ProgramsOptions(CategoryOptions):
    priority: int = 10
    application_folders: List[str] = Field(default_factory=_default_application_folders)
    application_file_extensions: List[str] = Field(default_factory=_default_application_extensions)
    max_depth: int = 3
    cache_ttl_seconds: int = 300
    max_results: int = 20


class FilePathOptions(CategoryOptions):
    priority: int = 20
    show_hidden_files: bool = False
    max_results: int = 30


class CalculatorOptions(CategoryOptions):
    priority: int = 0
    precision: int = 10


class WebUrlOptions(CategoryOptions):
    priority: int = 30


class WebSearchEngine(_Frozen):
    name: str
    prefix: str
    url: str = Field(..., description="Search URL, '{{query}}' is replaced by the search term")


def _default_web_search_engines() -> List[WebSearchEngine]:
    return [
        WebSearchEngine(name="Google", prefix="g?", url="https://www.google.com/search?q={{query}}"),
        WebSearchEngine(name="DuckDuckGo", prefix="d?", url="https://duckduckgo.com/?q={{query}}"),
        WebSearchEngine(name="Wikipedia", prefix="w?", url="https://en.wikipedia.org/wiki/{{query}}"),
        WebSearchEngine(name="YouTube", prefix="yt?", url="https://www.youtube.com/results?search_query={{query}}"),
    ]


class WebSearchOptions(CategoryOptions):
    priority: int = 40
    engines: List[WebSearchEngine] = Field(default_factory=_default_web_search_engines)


class CommandLineOptions(CategoryOptions):
    priority: int = 50
    prefix: str = ">"
    shell: Optional[str] = None


class CustomCommand(_Frozen):
    name: str
    execution_argument: str
    description: str = ""


class CustomCommandsOptions(CategoryOptions):
    priority: int = 5
    commands: List[CustomCommand] = Field(default_factory=list)


class LauncherCommandsOptions(CategoryOptions):
    priority: int = 60


class FrecencyOptions(_Frozen):
    enabled: bool = True


class UserConfig(_Frozen):
    """
    Immutable user configuration snapshot.

    Unknown keys (window sizing, theming, ...) belong to the UI shell and
    are ignored here.
    """
    hot_key: str = "alt+space"
    max_search_result_count: int = 8

    programs: ProgramsOptions = Field(default_factory=ProgramsOptions)
    file_path: FilePathOptions = Field(default_factory=FilePathOptions)
    calculator: CalculatorOptions = Field(default_factory=CalculatorOptions)
    web_url: WebUrlOptions = Field(default_factory=WebUrlOptions)
    web_search: WebSearchOptions = Field(default_factory=WebSearchOptions)
    command_line: CommandLineOptions = Field(default_factory=CommandLineOptions)
    custom_commands: CustomCommandsOptions = Field(default_factory=CustomCommandsOptions)
    launcher_commands: LauncherCommandsOptions = Field(default_factory=LauncherCommandsOptions)

    frecency: FrecencyOptions = Field(default_factory=FrecencyOptions)

    def category_options(self, category: str) -> CategoryOptions:
        options = getattr(self, category, None)
        if not isinstance(options, CategoryOptions):
            raise KeyError(f"Unknown category: {category}")
        return options


def default_config() -> UserConfig:
    return UserConfig()


def parse_config(document: Any) -> UserConfig:
    """Parse a raw document into a UserConfig, raising ConfigError if impossible."""
    if isinstance(document, UserConfig):
        return document
    if not isinstance(document, dict):
        raise ConfigError(f"Config must be a JSON object, got {type(document).__name__}")
    try:
        return UserConfig.model_validate(document)
    except ValidationError as e:
        raise ConfigError(f"Invalid config: {e}") from e


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# ══════════════════════════════════════════════════════════════════════════════
#  Repository
# ══════════════════════════════════════════════════════════════════════════════

class ConfigFileRepository:
    """
    Loads and saves the user config JSON file.

    The file only needs to contain the keys the user changed; everything
    else falls back to the defaults.
    """

    def __init__(self, defaults: UserConfig, config_file: Path):
        self.defaults = defaults
        self.config_file = Path(config_file)

    def get_config(self) -> UserConfig:
        if not self.config_file.exists():
            logger.info(f"📝 No user config at {self.config_file}, writing defaults")
            self.save_config(self.defaults)
            return self.defaults

        try:
            raw = json.loads(self.config_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not read config file {self.config_file}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigError(f"Config file {self.config_file} must contain a JSON object")

        merged = _deep_merge(self.defaults.model_dump(mode="json"), raw)
        config = parse_config(merged)
        logger.info(f"✅ Loaded user config from {self.config_file}")
        return config

    def save_config(self, config: UserConfig) -> None:
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            self.config_file.write_text(config.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            # The running snapshot stays valid, only the file is stale
            logger.error(f"❌ Failed to save user config to {self.config_file}: {e}")
