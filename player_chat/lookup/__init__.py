"""
Direct player lookup without a language model.

Guesses the player's name from the message, queries both data sources
and answers with a fixed template.
"""

from player_chat.lookup.extraction import extract_subject
from player_chat.lookup.pipeline import PlayerLookup

__all__ = ["extract_subject", "PlayerLookup"]
