"""
Tests for the direct lookup: name extraction and the template answer.
"""

import pytest

from player_chat.agent.tools import ToolExecutor
from player_chat.errors import TransportError
from player_chat.lookup import PlayerLookup, extract_subject
from helpers import MESSI_SPORTS, MESSI_WIKI, StubSource


class TestExtractSubject:
    """Tests for guessing the player's name."""

    @pytest.mark.parametrize("message, expected", [
        ("Tell me about Lionel Messi", "Lionel Messi"),
        ("tell me about Lionel Messi?", "Lionel Messi"),
        ("Who is Erling Haaland?", "Erling Haaland"),
        ("who is kylian mbappe", "kylian mbappe"),
        ("Can I get info about Luka Modric?", "Luka Modric"),
        ("What do you know about Mohamed Salah stats", "Mohamed Salah"),
        ("Cristiano Ronaldo stats", "Cristiano Ronaldo"),
        ("Harry Kane info please", "Harry Kane"),
        ("Tell me about Lionel Messi.", "Lionel Messi"),
        ("Who is Mesut Özil?", "Mesut Özil"),
    ])
    def test_patterns(self, message, expected):
        assert extract_subject(message) == expected

    def test_fallback_first_three_long_words(self):
        assert extract_subject("asdkjalksd random text") == "asdkjalksd random text"
        assert extract_subject("Zinedine Zidane France 1998 final") == "Zinedine Zidane France"

    def test_fallback_skips_short_words(self):
        assert extract_subject("is it Pelé or not") == "Pelé not"

    def test_only_short_words(self):
        assert extract_subject("  hi  ") == "hi"


class TestPlayerLookup:
    """Tests for the fixed-template lookup."""

    def test_found_player(self, messi_sources):
        sportsdb, wikipedia = messi_sources
        outcome = PlayerLookup(ToolExecutor(sportsdb, wikipedia)).run("Tell me about Lionel Messi")

        assert outcome.success is True
        assert outcome.data == {"sports": MESSI_SPORTS, "wiki": MESSI_WIKI}
        assert "Lionel Messi" in outcome.message
        assert sportsdb.calls == ["Lionel Messi"]
        assert wikipedia.calls == ["Lionel Messi"]

    def test_nothing_found(self, empty_sources):
        outcome = PlayerLookup(ToolExecutor(*empty_sources)).run("asdkjalksd random text")

        assert outcome.success is False
        assert outcome.data is None
        assert "asdkjalksd random text" in outcome.message
        assert "couldn't find" in outcome.message

    def test_display_name_from_sportsdb(self):
        executor = ToolExecutor(StubSource({"strPlayer": "Neymar"}), StubSource(None))
        outcome = PlayerLookup(executor).run("who is neymar jr")
        assert outcome.message == "Here is the information about Neymar:"
        assert outcome.data == {"sports": {"strPlayer": "Neymar"}, "wiki": None}

    def test_display_name_falls_back_to_wiki_title(self):
        executor = ToolExecutor(StubSource(None), StubSource(MESSI_WIKI))
        outcome = PlayerLookup(executor).run("messi stats")
        assert outcome.message == "Here is the information about Lionel Messi:"

    def test_source_failure_keeps_other_source(self):
        executor = ToolExecutor(StubSource(error=TransportError("down")), StubSource(MESSI_WIKI))
        outcome = PlayerLookup(executor).run("Tell me about Lionel Messi")

        assert outcome.success is True
        assert outcome.data == {"sports": None, "wiki": MESSI_WIKI}
        assert [tc["status"] for tc in outcome.tool_calls] == ["error", "ok"]
