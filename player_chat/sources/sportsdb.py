"""
TheSportsDB client.

Searches players by name using the public v1 JSON API:
    GET {base}/{api_key}/searchplayers.php?p=<name>
"""

import logging
from typing import Optional

import requests

from player_chat.config import SourceConfig
from player_chat.errors import FormatError
from player_chat.sources.http import build_session, get_json

logger = logging.getLogger(__name__)


class TheSportsDBClient:
    """Look up football players in TheSportsDB."""

    def __init__(
        self,
        config: Optional[SourceConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config or SourceConfig.from_env()
        self.session = session or build_session(self.config)

    @property
    def search_url(self) -> str:
        return f"{self.config.sportsdb_url.rstrip('/')}/{self.config.sportsdb_key}/searchplayers.php"

    def search_player(self, player_name: str) -> Optional[dict]:
        """
        Return the first player record matching the name, or None.

        Raises:
            TransportError: the API could not be reached
            FormatError: the API answered with an unexpected body
        """
        data = get_json(
            self.session,
            self.search_url,
            params={"p": player_name},
            timeout=(self.config.connect_timeout, self.config.timeout),
        )

        if not isinstance(data, dict):
            raise FormatError(f"Unexpected TheSportsDB payload: {type(data).__name__}")

        # The API answers {"player": null} when nothing matches
        players = data.get("player") or []
        if not isinstance(players, list):
            raise FormatError(f"TheSportsDB \"player\" is not a list: {type(players).__name__}")
        if not players:
            logger.info(f"TheSportsDB: no match for {player_name!r}")
            return None

        player = players[0]
        if not isinstance(player, dict):
            raise FormatError(f"TheSportsDB player record is not an object: {type(player).__name__}")
        logger.debug(f"TheSportsDB: matched {player.get('strPlayer')!r} for {player_name!r}")
        return player
