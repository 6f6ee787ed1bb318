"""
Direct lookup pipeline.

Runs both tools for the extracted name unconditionally and builds a
fixed-template answer from whatever came back.
"""

import logging
import time
from typing import Optional

from player_chat.agent.tools import SPORTSDB_TOOL, WIKIPEDIA_TOOL, ToolExecutor
from player_chat.agent.outcome import OrchestrationOutcome, build_payload
from player_chat.lookup.extraction import extract_subject

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = (
    'Sorry, I couldn\'t find any information about "{name}". '
    "Check the spelling of the name or try another footballer."
)
FOUND_MESSAGE = "Here is the information about {name}:"


class PlayerLookup:
    """
    Answers a message by querying TheSportsDB and Wikipedia directly.

    Usage:
        lookup = PlayerLookup()
        outcome = lookup.run("Who is Erling Haaland?")
    """

    def __init__(self, executor: Optional[ToolExecutor] = None):
        if executor is None:
            from player_chat.agent.agent import default_executor
            executor = default_executor()
        self.executor = executor

    def run(self, message: str) -> OrchestrationOutcome:
        start_time = time.time()
        player_name = extract_subject(message)
        logger.info(f"Direct lookup for {player_name!r}")

        arguments = {"player_name": player_name}
        results = [
            self.executor.execute(tool.name, arguments)
            for tool in (SPORTSDB_TOOL, WIKIPEDIA_TOOL)
        ]
        data = build_payload(results)
        trace = [
            {"tool": r.tool_name, "arguments": arguments, "status": r.status.value}
            for r in results
        ]
        elapsed_ms = (time.time() - start_time) * 1000

        if data is None:
            return OrchestrationOutcome(
                success=False,
                message=NOT_FOUND_MESSAGE.format(name=player_name),
                data=None,
                tool_calls=trace,
                total_time_ms=elapsed_ms,
            )

        # Prefer the canonical names the sources report
        display_name = (
            (data["sports"] or {}).get("strPlayer")
            or (data["wiki"] or {}).get("title")
            or player_name
        )
        return OrchestrationOutcome(
            success=True,
            message=FOUND_MESSAGE.format(name=display_name),
            data=data,
            tool_calls=trace,
            total_time_ms=elapsed_ms,
        )
