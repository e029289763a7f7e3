"""
Programs: installed application discovery.

Scans the configured application folders for the configured launcher
file types (``.desktop`` entries, ``.app`` bundles, Start Menu ``.lnk``
shortcuts, ...) and fuzzy-matches the query against the cleaned names.

The scan result is cached for ``cache_ttl_seconds``; concurrent queries
share one refresh.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from typing import Dict, List, Tuple

from ...models import SearchResultItem
from ...user_config import ProgramsOptions, UserConfig
from ..base import InputValidator, Searcher

logger = logging.getLogger(__name__)

CATEGORY = "programs"

_MIN_SCORE = 50.0

_EXE_BLACKLIST = {
    "uninstall.exe", "unins000.exe", "setup.exe", "update.exe",
    "crashreporter.exe", "conhost.exe", "dllhost.exe",
}


class ProgramsInputValidator(InputValidator):

    def is_valid_for(self, query: str) -> bool:
        q = query.strip()
        return len(q) >= 2 and not q.startswith(("/", "\\", "~", ">"))


class ProgramsSearcher(Searcher):
    """
    Fuzzy search over the application cache.

    Tier  Score   Condition
    ────  ─────   ─────────────────────────────
      1   100     Exact name match
      2    90     Name starts with query
      3    75     Query is substring of name
      4    60     Any word in name starts with query

    Penalty: −(len/200), so shorter names rank above longer ones.
    """

    def __init__(self, options: ProgramsOptions):
        self._folders = list(options.application_folders)
        self._extensions = [e.lower() for e in options.application_file_extensions]
        self._max_depth = options.max_depth
        self._max_results = options.max_results
        self._ttl = options.cache_ttl_seconds

        self._cache: Dict[str, Dict[str, str]] = {}
        self._stamp = 0.0
        self._lock = threading.Lock()

    # ─────────────────────────────────────────────────────────────────────────
    #  Public
    # ─────────────────────────────────────────────────────────────────────────
    def search(self, query: str) -> List[SearchResultItem]:
        cache = self._ensure_cache()
        q = query.strip().lower()

        matches: List[Tuple[float, Dict[str, str]]] = []
        for key, info in cache.items():
            score = self._score(q, key)
            if score >= _MIN_SCORE:
                matches.append((score, info))

        matches.sort(key=lambda m: (-m[0], m[1]["name"].lower()))
        return [
            SearchResultItem(
                name=info["name"],
                description=info["path"],
                execution_argument=info["path"],
                icon=info["type"],
                origin_category=CATEGORY,
            )
            for _, info in matches[: self._max_results]
        ]

    # ─────────────────────────────────────────────────────────────────────────
    #  Cache management
    # ─────────────────────────────────────────────────────────────────────────
    def _ensure_cache(self) -> Dict[str, Dict[str, str]]:
        with self._lock:
            if self._stamp and time.time() - self._stamp < self._ttl:
                return self._cache

            logger.info("[ProgramsSearcher] refreshing cache …")
            cache: Dict[str, Dict[str, str]] = {}
            for folder in self._folders:
                self._scan_dir(cache, folder)
            self._cache = cache
            self._stamp = time.time()
            logger.info("[ProgramsSearcher] cache ready: %d apps", len(cache))
            return self._cache

    def _scan_dir(self, cache: Dict[str, Dict[str, str]], path: str) -> None:
        path = os.path.expanduser(path)
        if not os.path.isdir(path):
            return
        try:
            for root, dirs, files in os.walk(path, followlinks=False):
                depth = root[len(path):].count(os.sep)
                if depth >= self._max_depth:
                    dirs[:] = []
                    continue

                # .app bundles are directories
                for dname in list(dirs):
                    if self._wanted(dname):
                        self._add(cache, dname, os.path.join(root, dname))
                        dirs.remove(dname)

                for fname in files:
                    if self._wanted(fname):
                        self._add(cache, fname, os.path.join(root, fname))
        except PermissionError:
            pass
        except OSError as e:
            logger.debug("[ProgramsSearcher] scan_dir %s: %s", path, e)

    def _wanted(self, fname: str) -> bool:
        lower = fname.lower()
        if lower in _EXE_BLACKLIST:
            return False
        return any(lower.endswith(ext) for ext in self._extensions)

    @staticmethod
    def _add(cache: Dict[str, Dict[str, str]], fname: str, full_path: str) -> None:
        clean, ext = os.path.splitext(fname)
        key = clean.lower().strip()
        if key and key not in cache:
            cache[key] = {
                "name": clean,
                "path": full_path,
                "type": ext.lstrip(".").lower() or "app",
            }

    @staticmethod
    def _score(q: str, k: str) -> float:
        if not q:
            return 0.0

        if q == k:
            score = 100.0
        elif k.startswith(q):
            score = 90.0
        elif q in k:
            score = 75.0
        elif any(w.startswith(q) for w in k.split()):
            score = 60.0
        else:
            return 0.0

        # Length penalty
        score -= len(k) / 200.0
        return max(score, 0.0)


def create(config: UserConfig) -> Tuple[InputValidator, Searcher]:
    return ProgramsInputValidator(), ProgramsSearcher(config.programs)


__all__ = ["ProgramsInputValidator", "ProgramsSearcher", "create"]
