"""
File path category: absolute paths typed directly into the launcher.

    /home/me/Documents          → the folder itself + its children
    /home/me/Documents/rep      → siblings starting with "rep"
    ~/notes.txt                 → the file itself
"""

import logging
import os
from typing import List, Tuple

from ...models import SearchResultItem
from ...user_config import FilePathOptions, UserConfig
from ...utils.platform_helpers import expand_path, is_absolute_path
from ..base import InputValidator, Searcher

logger = logging.getLogger(__name__)

CATEGORY = "file_path"


class FilePathInputValidator(InputValidator):

    def is_valid_for(self, query: str) -> bool:
        return is_absolute_path(query)


class FilePathSearcher(Searcher):

    def __init__(self, options: FilePathOptions):
        self.show_hidden_files = options.show_hidden_files
        self.max_results = options.max_results

    def search(self, query: str) -> List[SearchResultItem]:
        path = expand_path(query)

        if os.path.isdir(path):
            items = [self._make_item(path)]
            items.extend(self._children(path, prefix=""))
            return items[: self.max_results]

        if os.path.exists(path):
            return [self._make_item(path)]

        parent, prefix = os.path.split(path)
        if not prefix or not os.path.isdir(parent):
            return []
        return self._children(parent, prefix)[: self.max_results]

    def _children(self, folder: str, prefix: str) -> List[SearchResultItem]:
        try:
            names = sorted(os.listdir(folder), key=str.lower)
        except OSError as e:
            logger.debug("[FilePathSearcher] cannot list %s: %s", folder, e)
            return []

        prefix = prefix.lower()
        return [
            self._make_item(os.path.join(folder, name))
            for name in names
            if name.lower().startswith(prefix)
            and (self.show_hidden_files or not name.startswith("."))
        ]

    @staticmethod
    def _make_item(path: str) -> SearchResultItem:
        is_dir = os.path.isdir(path)
        name = os.path.basename(path.rstrip("\\/")) or path
        return SearchResultItem(
            name=name,
            description=path,
            execution_argument=path,
            icon="folder" if is_dir else "file",
            supports_auto_completion=True,
            origin_category=CATEGORY,
        )


def create(config: UserConfig) -> Tuple[InputValidator, Searcher]:
    return FilePathInputValidator(), FilePathSearcher(config.file_path)
