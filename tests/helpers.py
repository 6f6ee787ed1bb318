"""Stub data sources, a scripted model client and sample records for tests."""

from player_chat.conversation import ToolInvocation
from player_chat.llm.client import ModelToolCalls


MESSI_SPORTS = {
    "idPlayer": "34146370",
    "strPlayer": "Lionel Messi",
    "strTeam": "Inter Miami",
    "strNationality": "Argentina",
    "strPosition": "Right Winger",
}

MESSI_WIKI = {
    "title": "Lionel Messi",
    "extract": "Lionel Andrés \"Leo\" Messi is an Argentine professional footballer...",
    "image": "https://upload.wikimedia.org/wikipedia/commons/messi.jpg",
}


class StubSource:
    """Data source returning a fixed record (or raising) for every name."""

    def __init__(self, record=None, error=None):
        self.record = record
        self.error = error
        self.calls = []

    def search_player(self, player_name):
        self.calls.append(player_name)
        if self.error:
            raise self.error
        return self.record


class ScriptedModel:
    """Model client replaying a list of responses; the last one repeats."""

    model = "stub-model"

    def __init__(self, responses, available=True):
        self.responses = list(responses)
        self.available = available
        self.conversations = []
        self.tools_seen = []

    def complete(self, conversation, tools=None):
        self.conversations.append(conversation)
        self.tools_seen.append(tools)
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]

    def is_available(self):
        return self.available

    def model_exists(self):
        return self.available


def tool_call(name, player_name="Lionel Messi"):
    return ToolInvocation(name, {"player_name": player_name})


def calls(*invocations, text=""):
    return ModelToolCalls(tuple(invocations), text)
