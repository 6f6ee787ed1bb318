"""
Wikipedia client.

Two-step lookup against the MediaWiki action API:
1. Full-text search for "<name> footballer" to find the article title
2. Fetch that article's plain-text intro and its lead image
"""

import logging
from typing import Optional

import requests

from player_chat.config import SourceConfig
from player_chat.errors import FormatError
from player_chat.sources.http import build_session, get_json

logger = logging.getLogger(__name__)


def query_section(data, key: str):
    """Return data["query"][key], checking each level is an object."""
    if not isinstance(data, dict):
        raise FormatError(f"Unexpected Wikipedia payload: {type(data).__name__}")
    query = data.get("query") or {}
    if not isinstance(query, dict):
        raise FormatError(f"Wikipedia \"query\" is not an object: {type(query).__name__}")
    return query.get(key)


class WikipediaClient:
    """Fetch a footballer's article summary from Wikipedia."""

    # Narrows the search to football players rather than namesakes
    SEARCH_QUALIFIER = "footballer"

    def __init__(
        self,
        config: Optional[SourceConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config or SourceConfig.from_env()
        self.session = session or build_session(self.config)

    @property
    def _timeout(self) -> tuple[float, float]:
        return (self.config.connect_timeout, self.config.timeout)

    def find_title(self, player_name: str) -> Optional[str]:
        """Return the title of the best matching article, or None."""
        data = get_json(
            self.session,
            self.config.wikipedia_url,
            params={
                "action": "query",
                "list": "search",
                "srsearch": f"{player_name} {self.SEARCH_QUALIFIER}",
                "srlimit": 1,
                "format": "json",
            },
            timeout=self._timeout,
        )

        hits = query_section(data, "search") or []
        if not isinstance(hits, list):
            raise FormatError(f"Wikipedia search results are not a list: {type(hits).__name__}")
        if not hits:
            return None

        hit = hits[0]
        if not isinstance(hit, dict) or not isinstance(hit.get("title"), str):
            raise FormatError(f"Malformed Wikipedia search hit: {hit!r}")
        return hit["title"]

    def fetch_summary(self, title: str) -> Optional[dict]:
        """Return {title, extract, image} for an article title, or None."""
        data = get_json(
            self.session,
            self.config.wikipedia_url,
            params={
                "action": "query",
                "prop": "extracts|pageimages",
                "exintro": "true",
                "explaintext": "true",
                "piprop": "original",
                "titles": title,
                "format": "json",
            },
            timeout=self._timeout,
        )

        pages = query_section(data, "pages") or {}
        # formatversion=2 returns a list of pages instead of a map keyed by page id
        if isinstance(pages, dict):
            pages = list(pages.values())
        if not isinstance(pages, list):
            raise FormatError(f"Wikipedia pages are not a map or list: {type(pages).__name__}")
        if not pages:
            return None

        # Only one title was requested, so take the single page
        page = pages[0]
        if not isinstance(page, dict):
            raise FormatError(f"Wikipedia page is not an object: {type(page).__name__}")
        if "missing" in page:
            return None

        original = page.get("original") or {}
        if not isinstance(original, dict):
            raise FormatError("Wikipedia page image is not an object")

        return {
            "title": page.get("title"),
            "extract": page.get("extract"),
            "image": original.get("source"),
        }

    def search_player(self, player_name: str) -> Optional[dict]:
        """
        Look up a player's article summary.

        Raises:
            TransportError: Wikipedia could not be reached
            FormatError: Wikipedia answered with an unexpected body
        """
        title = self.find_title(player_name)
        if not title:
            logger.info(f"Wikipedia: no article found for {player_name!r}")
            return None

        logger.debug(f"Wikipedia: {player_name!r} -> {title!r}")
        return self.fetch_summary(title)
