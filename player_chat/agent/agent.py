"""
Football Player Chat Agent - Orchestrates tools to answer questions.

The agent runs a bounded tool-calling loop:
1. Send the conversation and the tool schemas to the model
2. If the model asks for tools, run them in the order requested and
   append each result to the conversation
3. Repeat until the model answers in plain text, the model call fails,
   or the iteration budget is used up

States: AWAITING_MODEL -> EXECUTING_TOOLS -> AWAITING_MODEL ... -> DONE | FAILED | EXHAUSTED
"""

import json
import logging
import time
from enum import Enum
from typing import Optional

from player_chat.config import MAX_ITERATIONS, ModelConfig, SourceConfig
from player_chat.conversation import Conversation
from player_chat.errors import BudgetExhausted
from player_chat.llm.client import (
    FailureKind,
    ModelFailure,
    ModelReply,
    ModelToolCalls,
    OllamaChatClient,
)
from player_chat.agent.tools import (
    ToolExecutor,
    ToolResult,
    get_tool_schemas,
    get_tools_description,
)
from player_chat.agent.outcome import OrchestrationOutcome, build_payload

# Configure logging for this module
logger = logging.getLogger(__name__)


AGENT_SYSTEM_PROMPT = """You are a helpful football assistant. When a user asks about a football player, use the available tools to fetch information. First use search_thesportsdb, then search_wikipedia to get comprehensive information.

You have access to the following tools:

{tools_description}

## Important Notes

- Always use tools to get data - NEVER make up facts about a player
- Use the player's full name, e.g. "Lionel Messi", not just "Messi"
- If a tool returns no data, say so instead of guessing

## Response Format

After receiving tool results, provide a friendly natural language answer about the player.
Do not include any JSON in your final answer.
"""

# User-facing messages for each terminal failure
MESSAGES = {
    FailureKind.TRANSPORT: "Could not connect to the language model (connection error or timeout): {detail}",
    FailureKind.HTTP_STATUS: "The language model service returned an error (HTTP {status_code}).",
    FailureKind.FORMAT: "The language model returned a response that could not be read.",
    FailureKind.EMPTY: "Sorry, I could not get an answer. Please try again.",
}
EXHAUSTED_MESSAGE = "Sorry, answering took too many steps. Please try asking in a simpler way."


class AgentState(str, Enum):
    AWAITING_MODEL = "awaiting_model"
    EXECUTING_TOOLS = "executing_tools"
    DONE = "done"
    FAILED = "failed"
    EXHAUSTED = "exhausted"


class PlayerChatAgent:
    """
    Agent that uses tools to answer questions about football players.

    Each call to run() handles exactly one user message. The conversation
    and the result accumulator live only for that call.

    Example:
        agent = PlayerChatAgent()
        outcome = agent.run("Tell me about Lionel Messi")
        print(outcome.message)
    """

    def __init__(
        self,
        model_client=None,
        executor: Optional[ToolExecutor] = None,
        max_iterations: int = MAX_ITERATIONS,
        system_prompt: Optional[str] = None,
    ):
        """
        Initialize the agent.

        Args:
            model_client: Object with complete(conversation, tools) -> ModelResponse
                (default: OllamaChatClient from environment settings)
            executor: Tool executor (default: live TheSportsDB and Wikipedia clients)
            max_iterations: Maximum number of model calls per message
            system_prompt: Override the default system prompt
        """
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")

        self.llm = model_client or OllamaChatClient(ModelConfig.from_env())
        self.executor = executor or default_executor()
        self.max_iterations = max_iterations
        self.system_prompt = system_prompt or AGENT_SYSTEM_PROMPT.format(
            tools_description=get_tools_description(),
        )
        self.tool_schemas = get_tool_schemas()

        logger.info(f"PlayerChatAgent initialized with max_iterations={self.max_iterations}, tools={self.executor.tool_names}")

    def run(self, message: str) -> OrchestrationOutcome:
        """
        Answer one user message.

        Args:
            message: The user's chat message

        Returns:
            OrchestrationOutcome with the answer and any player data found
        """
        logger.info(f"Agent processing message: {message[:100]}")
        start_time = time.time()

        conversation = Conversation.start(self.system_prompt, message)
        results: dict[str, ToolResult] = {}  # latest result per tool name
        trace = []
        state = AgentState.AWAITING_MODEL
        iterations = 0

        def finish(state: AgentState, text: str, success: bool) -> OrchestrationOutcome:
            elapsed_ms = (time.time() - start_time) * 1000
            logger.info(f"Agent finished: state={state.value}, iterations={iterations}, tools={len(trace)}, {elapsed_ms:.0f}ms")
            return OrchestrationOutcome(
                success=success,
                message=text,
                data=build_payload(results.values()),
                state=state.value,
                iterations=iterations,
                tool_calls=trace,
                total_time_ms=elapsed_ms,
            )

        while state == AgentState.AWAITING_MODEL:
            if iterations >= self.max_iterations:
                exhausted = BudgetExhausted(f"Agent hit max iterations ({self.max_iterations}) without final answer")
                logger.warning(str(exhausted))
                return finish(AgentState.EXHAUSTED, EXHAUSTED_MESSAGE, False)

            iterations += 1
            logger.debug(f"Starting iteration {iterations}/{self.max_iterations}")

            response = self.llm.complete(conversation, self.tool_schemas)

            if isinstance(response, ModelFailure):
                text = MESSAGES[response.kind].format(
                    detail=response.detail,
                    status_code=response.status_code,
                )
                return finish(AgentState.FAILED, text, False)

            if isinstance(response, ModelReply):
                payload = build_payload(results.values())
                return finish(AgentState.DONE, response.text, payload is not None)

            if not isinstance(response, ModelToolCalls) or not response.calls:
                logger.warning(f"Unexpected model response: {response!r}")
                return finish(AgentState.FAILED, MESSAGES[FailureKind.EMPTY], False)

            conversation = conversation.with_assistant(response.text, response.calls)
            state = AgentState.EXECUTING_TOOLS

            # Calls run one at a time in emission order so the history stays causal
            for call in response.calls:
                result = self.executor.execute(call.tool_name, call.arguments)
                conversation = conversation.with_tool_result(call.tool_name, result.to_string())
                # Same tool twice in one pass: the later result wins
                results[call.tool_name] = result
                trace.append({
                    "tool": call.tool_name,
                    "arguments": call.arguments,
                    "status": result.status.value,
                })

            state = AgentState.AWAITING_MODEL

        # Unreachable: every branch above returns or loops
        raise RuntimeError(f"Agent left the loop in state {state}")

    def is_available(self) -> bool:
        """Check if the agent's model endpoint is up and the model exists."""
        available = self.llm.is_available() and self.llm.model_exists()
        logger.debug(f"Agent availability check: {available}")
        return available


def default_executor(config: Optional[SourceConfig] = None) -> ToolExecutor:
    """Tool executor wired to the live data sources."""
    from player_chat.sources import TheSportsDBClient, WikipediaClient

    config = config or SourceConfig.from_env()
    return ToolExecutor(TheSportsDBClient(config), WikipediaClient(config))


# =============================================================================
# CLI for testing the agent directly
# =============================================================================

if __name__ == "__main__":
    import argparse

    from player_chat.config import LOG_LEVEL
    from player_chat.lookup import PlayerLookup

    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    parser = argparse.ArgumentParser(description="Football player chat agent")
    parser.add_argument("message", help="Message to send, e.g. 'Tell me about Lionel Messi'")
    parser.add_argument("--lookup", "-l", action="store_true", help="Use the direct lookup instead of the model")
    parser.add_argument("--model", "-m", type=str, help="Ollama model to use")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.lookup:
        outcome = PlayerLookup().run(args.message)
    else:
        agent = PlayerChatAgent(model_client=OllamaChatClient(ModelConfig.from_env(model=args.model)))
        outcome = agent.run(args.message)

    print("\n" + "=" * 60)
    print(outcome.message)
    print("=" * 60)
    print(json.dumps(outcome.data, indent=2, ensure_ascii=False))
    print(f"\nTools used: {[tc['tool'] for tc in outcome.tool_calls]}")
    print(f"State: {outcome.state}, iterations: {outcome.iterations}, time: {outcome.total_time_ms:.0f}ms")
