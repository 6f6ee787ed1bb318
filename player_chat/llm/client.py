"""
Ollama chat client with tool calling.

Sends the conversation and the tool registry to Ollama's /api/chat
endpoint and turns the reply into one of:

- ModelReply: the model answered in plain text
- ModelToolCalls: the model wants one or more tools run
- ModelFailure: transport error, non-success status, unreadable body,
  or an empty reply

complete() never raises; the agent decides what each failure means.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

import requests

from player_chat.config import ModelConfig
from player_chat.conversation import Conversation, ToolInvocation
from player_chat.errors import FormatError, TransportError

logger = logging.getLogger(__name__)


class FailureKind(str, Enum):
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    FORMAT = "format"
    EMPTY = "empty"


@dataclass(frozen=True)
class ModelReply:
    """Final plain-text answer."""
    text: str


@dataclass(frozen=True)
class ModelToolCalls:
    """Request to run tools, in the order the model emitted them."""
    calls: tuple[ToolInvocation, ...]
    text: str = ""


@dataclass(frozen=True)
class ModelFailure:
    """The model could not be used for this turn."""
    kind: FailureKind
    detail: str
    status_code: Optional[int] = None


ModelResponse = Union[ModelReply, ModelToolCalls, ModelFailure]


@dataclass
class ChatResult:
    """Raw decoded /api/chat reply."""
    content: str
    tool_calls: list = field(default_factory=list)
    model: str = ""
    total_duration_ms: Optional[float] = None


class OllamaChatClient:
    """
    Client for a locally hosted Ollama server.

    Install: https://ollama.ai

    Example:
        client = OllamaChatClient(ModelConfig.from_env())
        response = client.complete(conversation, get_tool_schemas())
    """

    def __init__(self, config: Optional[ModelConfig] = None, session: Optional[requests.Session] = None):
        """
        Initialize the Ollama client.

        Args:
            config: Endpoint, model and timeout settings (default: from environment)
            session: Optional requests session (useful for tests)
        """
        self.config = config or ModelConfig.from_env()
        self.host = self.config.endpoint_url.rstrip("/")
        self.model = self.config.model_name
        self.session = session or requests.Session()

        if self.config.credential:
            self.session.headers["Authorization"] = f"Bearer {self.config.credential}"

        logger.debug(f"Ollama client initialized: host={self.host}, model={self.model}")

    def _api_url(self, endpoint: str) -> str:
        """Build API URL."""
        return f"{self.host}/api/{endpoint}"

    @property
    def _timeout(self) -> tuple[float, float]:
        return (self.config.connect_timeout, self.config.timeout)

    def is_available(self) -> bool:
        """Check if the Ollama server is available."""
        try:
            response = self.session.get(self._api_url("tags"), timeout=5)
            return response.status_code == 200
        except requests.RequestException:
            return False

    def list_models(self) -> list[str]:
        """List available models."""
        try:
            response = self.session.get(self._api_url("tags"), timeout=10)
            response.raise_for_status()
            data = response.json()
            return [m["name"] for m in data.get("models", [])]
        except (requests.RequestException, ValueError, KeyError) as e:
            logger.warning(f"Error listing models: {e}")
            return []

    def model_exists(self, model_name: Optional[str] = None) -> bool:
        """Check if a specific model is available."""
        model = model_name or self.model
        # Exact match or base name match ("llama3.1" matches "llama3.1:latest")
        return any(m == model or m.startswith(f"{model}:") for m in self.list_models())

    def chat(self, messages: list[dict], tools: Optional[list[dict]] = None) -> ChatResult:
        """
        Chat completion with message history.

        Raises:
            TransportError: connection failure, timeout or non-2xx status
            FormatError: the body is not a JSON object with a message
        """
        options = {
            "temperature": self.config.temperature,
            "top_p": self.config.top_p,
        }
        if self.config.max_tokens:
            options["num_predict"] = self.config.max_tokens

        payload = {
            "model": self.model,
            "messages": messages,
            "stream": False,
            "options": options,
        }
        if tools:
            payload["tools"] = tools

        try:
            response = self.session.post(
                self._api_url("chat"),
                json=payload,
                timeout=self._timeout,
            )
        except requests.Timeout as e:
            raise TransportError(f"Ollama request timed out: {e}") from e
        except requests.RequestException as e:
            raise TransportError(f"Ollama connection failed: {e}") from e

        if not response.ok:
            raise TransportError(
                f"Ollama returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise FormatError(f"Ollama returned invalid JSON: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("message"), dict):
            raise FormatError("Ollama response has no message object")

        message = data["message"]
        tool_calls = message.get("tool_calls") or []
        if not isinstance(tool_calls, list):
            raise FormatError("Ollama tool_calls is not a list")

        content = message.get("content") or ""
        if not isinstance(content, str):
            raise FormatError(f"Ollama message content is not a string: {type(content).__name__}")

        model = data.get("model")
        duration = data.get("total_duration")
        result = ChatResult(
            content=content,
            tool_calls=tool_calls,
            model=model if isinstance(model, str) else self.model,
            total_duration_ms=duration / 1_000_000 if isinstance(duration, (int, float)) else None,  # ns to ms
        )
        logger.debug(f"Ollama replied: {len(content)} chars, {len(tool_calls)} tool calls, model={result.model}, {result.total_duration_ms}ms")
        return result

    def complete(self, conversation: Conversation, tools: Optional[list[dict]] = None) -> ModelResponse:
        """
        Run one model turn.

        Args:
            conversation: History starting with the system turn
            tools: Function-calling schemas offered to the model

        Returns:
            ModelReply, ModelToolCalls or ModelFailure
        """
        try:
            result = self.chat(conversation.to_messages(), tools)
        except TransportError as e:
            kind = FailureKind.HTTP_STATUS if e.status_code else FailureKind.TRANSPORT
            logger.warning(f"Model call failed ({kind.value}): {e}")
            return ModelFailure(kind, str(e), status_code=e.status_code)
        except FormatError as e:
            logger.warning(f"Model call failed (format): {e}")
            return ModelFailure(FailureKind.FORMAT, str(e))

        try:
            calls = parse_native_tool_calls(result.tool_calls)
        except FormatError as e:
            logger.warning(f"Unreadable tool calls from model: {e}")
            return ModelFailure(FailureKind.FORMAT, str(e))

        text = result.content.strip()
        if calls:
            return ModelToolCalls(tuple(calls), text)

        # Models without native tool calling answer with a JSON block instead
        text_call = parse_text_tool_call(text)
        if text_call:
            return ModelToolCalls((text_call,), text)

        if not text:
            return ModelFailure(FailureKind.EMPTY, "Model returned no content")

        return ModelReply(text)


def parse_native_tool_calls(raw_calls: list) -> list[ToolInvocation]:
    """
    Convert Ollama's message.tool_calls into ToolInvocations.

    Arguments may arrive as a mapping or as a JSON-encoded string.
    """
    calls = []
    for raw in raw_calls:
        function = raw.get("function") if isinstance(raw, dict) else None
        if not isinstance(function, dict) or not function.get("name"):
            raise FormatError(f"Malformed tool call: {raw!r}")

        arguments = function.get("arguments") or {}
        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments)
            except json.JSONDecodeError as e:
                raise FormatError(f"Tool call arguments are not JSON: {e}") from e
        if not isinstance(arguments, dict):
            raise FormatError(f"Tool call arguments must be an object, got {type(arguments).__name__}")

        calls.append(ToolInvocation(function["name"], arguments))
    return calls


def parse_text_tool_call(response: str) -> Optional[ToolInvocation]:
    """
    Extract a tool call written as JSON in the model's text.

    Tries multiple parsing strategies:
    1. Look for ```json ... ``` code blocks
    2. Find the first raw JSON object with a "tool" key

    Accepts both {"tool": ..., "arguments": {...}} and {"tool": ..., "parameters": {...}}.
    """
    candidates = []

    # Strategy 1: fenced JSON code block
    json_match = re.search(r"```(?:json)?\s*(.*?)\s*```", response, re.DOTALL)
    if json_match:
        candidates.append(json_match.group(1))

    # Strategy 2: raw JSON object, found by tracking brace depth
    start = response.find("{")
    if start != -1:
        depth = 0
        for i, char in enumerate(response[start:], start):
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    candidates.append(response[start:i + 1])
                    break

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if not isinstance(parsed, dict) or not isinstance(parsed.get("tool"), str):
            continue

        arguments = parsed.get("arguments", parsed.get("parameters")) or {}
        if not isinstance(arguments, dict):
            continue
        logger.debug(f"Parsed tool call from text: {parsed['tool']}")
        return ToolInvocation(parsed["tool"], arguments)

    return None


# CLI for testing
if __name__ == "__main__":
    import argparse

    from player_chat.config import LOG_LEVEL

    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    parser = argparse.ArgumentParser(description="Test the Ollama chat client")
    parser.add_argument("--check", action="store_true", help="Check Ollama availability")
    parser.add_argument("--list", action="store_true", help="List available models")
    parser.add_argument("--model", type=str, help="Model to use")

    args = parser.parse_args()

    client = OllamaChatClient(ModelConfig.from_env(model=args.model))

    if args.check:
        print("Checking Ollama availability...")
        if client.is_available():
            print(f"✓ Ollama is running at {client.host}")
            if client.model_exists():
                print(f"✓ Model '{client.model}' is available")
            else:
                print(f"✗ Model '{client.model}' not found")
                print(f"  Run: ollama pull {client.model}")
        else:
            print(f"✗ Ollama is not available at {client.host}")
            print("  Make sure Ollama is running: ollama serve")

    elif args.list:
        print("Available models:")
        models = client.list_models()
        if models:
            for m in models:
                print(f"  - {m}")
        else:
            print("  No models found (is Ollama running?)")

    else:
        parser.print_help()
