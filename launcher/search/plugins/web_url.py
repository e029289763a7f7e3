"""
Web URL category: full URLs and bare domains.
"""

from typing import List, Optional, Tuple
from urllib.parse import urlparse

from ...models import SearchResultItem
from ...user_config import UserConfig
from ..base import InputValidator, Searcher

CATEGORY = "web_url"

_TLDS = (".com", ".org", ".net", ".io", ".ai", ".dev", ".app",
         ".co", ".tv", ".me", ".so", ".gg", ".xyz", ".uk", ".us", ".de", ".edu", ".gov")


def is_url(text: str) -> bool:
    try:
        r = urlparse(text)
    except ValueError:
        return False
    if r.scheme == "mailto":
        return "@" in r.path
    return r.scheme in ("http", "https") and bool(r.netloc)


def is_domain(text: str) -> bool:
    if not text or " " in text or "." not in text or text.startswith("."):
        return False
    if "/" in text.split(".", 1)[0] or "\\" in text:
        return False
    host = text.split("/", 1)[0].lower()
    return any(host.endswith(t) for t in _TLDS) or host.startswith("www.")


def normalize_url(text: str) -> Optional[str]:
    """Full URL for a URL or bare domain, None if text is neither."""
    text = text.strip()
    if is_url(text):
        return text
    if is_domain(text):
        return f"https://{text}"
    return None


class WebUrlInputValidator(InputValidator):

    def is_valid_for(self, query: str) -> bool:
        return normalize_url(query) is not None


class WebUrlSearcher(Searcher):

    def search(self, query: str) -> List[SearchResultItem]:
        url = normalize_url(query)
        if url is None:
            return []
        return [
            SearchResultItem(
                name=f"Open {url}",
                description="Open in default browser",
                execution_argument=url,
                icon="web",
                origin_category=CATEGORY,
            )
        ]


def create(config: UserConfig) -> Tuple[InputValidator, Searcher]:
    return WebUrlInputValidator(), WebUrlSearcher()
