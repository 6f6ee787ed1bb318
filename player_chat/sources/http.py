"""Shared HTTP helpers for the data source clients."""

import logging
from typing import Any, Optional

import requests

from player_chat.config import SourceConfig
from player_chat.errors import FormatError, TransportError

logger = logging.getLogger(__name__)


def build_session(config: SourceConfig) -> requests.Session:
    """Create a session carrying the service User-Agent."""
    session = requests.Session()
    session.headers.update({
        "User-Agent": config.user_agent,
        "Accept": "application/json",
    })
    return session


def get_json(
    session: requests.Session,
    url: str,
    params: Optional[dict] = None,
    timeout: tuple[float, float] = (5.0, 15.0),
) -> Any:
    """
    GET a URL and decode the JSON body.

    Raises:
        TransportError: connection failure, timeout or non-2xx status
        FormatError: the body is not valid JSON
    """
    try:
        response = session.get(url, params=params, timeout=timeout)
    except requests.Timeout as e:
        raise TransportError(f"Request to {url} timed out: {e}") from e
    except requests.RequestException as e:
        raise TransportError(f"Request to {url} failed: {e}") from e

    if not response.ok:
        raise TransportError(
            f"{url} returned HTTP {response.status_code}",
            status_code=response.status_code,
        )

    try:
        return response.json()
    except ValueError as e:
        logger.warning(f"Invalid JSON from {url}: {e}")
        raise FormatError(f"Invalid JSON from {url}: {e}") from e
