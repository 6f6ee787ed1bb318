"""
Configuration settings for the football player chat service.

Loads settings from environment variables with sensible defaults.
The module-level constants are only defaults: the model client and the
data sources receive an explicit ModelConfig / SourceConfig at construction.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Debug mode
DEBUG = os.getenv("DEBUG", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()

# Ollama settings
OLLAMA_HOST = os.getenv("OLLAMA_HOST", "http://localhost:11434")
OLLAMA_API_KEY = os.getenv("OLLAMA_API_KEY", "")

# Agent model (for tool-use)
# Recommended: qwen2.5:14b (better at function calling) - run: ollama pull qwen2.5:14b
AGENT_MODEL = os.getenv("AGENT_MODEL", "llama3.1")

LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "120"))
LLM_CONNECT_TIMEOUT = float(os.getenv("LLM_CONNECT_TIMEOUT", "10"))
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))
LLM_TOP_P = float(os.getenv("LLM_TOP_P", "0.95"))
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "500"))

# Maximum number of model calls per request
MAX_ITERATIONS = int(os.getenv("MAX_ITERATIONS", "5"))

# External data sources
SPORTSDB_URL = os.getenv("SPORTSDB_URL", "https://www.thesportsdb.com/api/v1/json")
SPORTSDB_API_KEY = os.getenv("SPORTSDB_API_KEY", "3")  # public test key
WIKIPEDIA_API_URL = os.getenv("WIKIPEDIA_API_URL", "https://en.wikipedia.org/w/api.php")
SOURCE_TIMEOUT = float(os.getenv("SOURCE_TIMEOUT", "15"))
SOURCE_CONNECT_TIMEOUT = float(os.getenv("SOURCE_CONNECT_TIMEOUT", "5"))
USER_AGENT = os.getenv("USER_AGENT", "PlayerChat/1.0 (football player assistant)")

# API settings
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]


@dataclass(frozen=True)
class ModelConfig:
    """Connection settings for the language model endpoint."""
    endpoint_url: str
    model_name: str
    credential: Optional[str] = None
    timeout: float = 120.0
    connect_timeout: float = 10.0
    temperature: float = 0.7
    top_p: float = 0.95
    max_tokens: Optional[int] = 500

    @classmethod
    def from_env(cls, model: Optional[str] = None) -> "ModelConfig":
        return cls(
            endpoint_url=OLLAMA_HOST,
            model_name=model or AGENT_MODEL,
            credential=OLLAMA_API_KEY or None,
            timeout=LLM_TIMEOUT,
            connect_timeout=LLM_CONNECT_TIMEOUT,
            temperature=LLM_TEMPERATURE,
            top_p=LLM_TOP_P,
            max_tokens=LLM_MAX_TOKENS,
        )


@dataclass(frozen=True)
class SourceConfig:
    """Settings shared by the TheSportsDB and Wikipedia clients."""
    sportsdb_url: str = "https://www.thesportsdb.com/api/v1/json"
    sportsdb_key: str = "3"
    wikipedia_url: str = "https://en.wikipedia.org/w/api.php"
    timeout: float = 15.0
    connect_timeout: float = 5.0
    user_agent: str = "PlayerChat/1.0 (football player assistant)"

    @classmethod
    def from_env(cls) -> "SourceConfig":
        return cls(
            sportsdb_url=SPORTSDB_URL,
            sportsdb_key=SPORTSDB_API_KEY,
            wikipedia_url=WIKIPEDIA_API_URL,
            timeout=SOURCE_TIMEOUT,
            connect_timeout=SOURCE_CONNECT_TIMEOUT,
            user_agent=USER_AGENT,
        )


def validate_config() -> bool:
    """Validate the configuration settings."""
    errors = []

    if not OLLAMA_HOST.startswith(("http://", "https://")):
        errors.append(f"OLLAMA_HOST must include a scheme: {OLLAMA_HOST}")

    for name, value in (
        ("LLM_TIMEOUT", LLM_TIMEOUT),
        ("LLM_CONNECT_TIMEOUT", LLM_CONNECT_TIMEOUT),
        ("SOURCE_TIMEOUT", SOURCE_TIMEOUT),
        ("SOURCE_CONNECT_TIMEOUT", SOURCE_CONNECT_TIMEOUT),
    ):
        if value <= 0:
            errors.append(f"{name} must be positive, got {value}")

    if MAX_ITERATIONS < 1:
        errors.append(f"MAX_ITERATIONS must be at least 1, got {MAX_ITERATIONS}")

    if errors:
        for error in errors:
            print(f"Config Error: {error}")
        return False

    return True


if __name__ == "__main__":
    print("Configuration Settings")
    print("=" * 50)
    print(f"DEBUG: {DEBUG}")
    print(f"LOG_LEVEL: {LOG_LEVEL}")
    print(f"OLLAMA_HOST: {OLLAMA_HOST}")
    print(f"AGENT_MODEL: {AGENT_MODEL}")
    print(f"LLM_TIMEOUT: {LLM_TIMEOUT}")
    print(f"MAX_ITERATIONS: {MAX_ITERATIONS}")
    print(f"SPORTSDB_URL: {SPORTSDB_URL}")
    print(f"WIKIPEDIA_API_URL: {WIKIPEDIA_API_URL}")
    print(f"API_HOST: {API_HOST}")
    print(f"API_PORT: {API_PORT}")
    print("=" * 50)
    print(f"Config valid: {validate_config()}")
