"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
LOGS_DIR = PROJECT_ROOT / "logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_GRAPH_API_VERSION = "v19.0"
DEFAULT_COMPLETION_BASE_URL = "https://api.deepseek.com/v1"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from the environment."""

    verify_token: str | None = None
    page_access_token: str | None = None
    graph_api_version: str = DEFAULT_GRAPH_API_VERSION
    expected_object: str = "page"

    completion_api_key: str | None = None
    completion_provider: str = "anthropic"  # "anthropic" or "openai"
    completion_model: str | None = None
    completion_base_url: str = DEFAULT_COMPLETION_BASE_URL
    completion_timeout: float = 8.0
    transcript_window: int = 20

    api_host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    log_file: str = str(DEFAULT_LOG_PATH)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            verify_token=os.getenv("VERIFY_TOKEN") or None,
            page_access_token=os.getenv("PAGE_ACCESS_TOKEN") or None,
            graph_api_version=os.getenv("GRAPH_API_VERSION", DEFAULT_GRAPH_API_VERSION),
            completion_api_key=os.getenv("COMPLETION_API_KEY") or None,
            completion_provider=os.getenv("COMPLETION_PROVIDER", "anthropic").lower(),
            completion_model=os.getenv("COMPLETION_MODEL") or None,
            completion_base_url=os.getenv(
                "COMPLETION_BASE_URL", DEFAULT_COMPLETION_BASE_URL
            ),
            completion_timeout=_env_float("COMPLETION_TIMEOUT", 8.0),
            transcript_window=_env_int("TRANSCRIPT_WINDOW", 20),
            api_host=os.getenv("API_HOST", "0.0.0.0"),
            port=_env_int("PORT", 3000),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", str(DEFAULT_LOG_PATH)),
        )

    @property
    def delegate_enabled(self) -> bool:
        """Whether free text should be sent to a language model."""
        return bool(self.completion_api_key)
