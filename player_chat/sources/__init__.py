"""
External player data sources.

- TheSportsDB: structured player profile (team, nationality, position, ...)
- Wikipedia: introductory extract and lead image for the player's article

Each source returns plain dicts, or None when nothing matched.
"""

from player_chat.sources.sportsdb import TheSportsDBClient
from player_chat.sources.wikipedia import WikipediaClient

__all__ = ["TheSportsDBClient", "WikipediaClient"]
