"""
Pytest configuration and fixtures for Player Chat tests.

Data sources and the model are replaced by in-memory stubs; no test
touches the network.
"""

import pytest
from pathlib import Path
import sys

# Add project root and this directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from player_chat.agent.tools import ToolExecutor
from helpers import MESSI_SPORTS, MESSI_WIKI, StubSource


@pytest.fixture
def messi_sources():
    """Both sources know Lionel Messi."""
    return StubSource(MESSI_SPORTS), StubSource(MESSI_WIKI)


@pytest.fixture
def empty_sources():
    """Neither source has a match."""
    return StubSource(None), StubSource(None)


@pytest.fixture
def make_executor():
    """Factory for executors over stub sources."""
    def _make(sportsdb=None, wikipedia=None):
        return ToolExecutor(sportsdb or StubSource(), wikipedia or StubSource())
    return _make
