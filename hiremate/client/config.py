"""Chat client configuration with environment variable loading.

Pydantic-based configuration for the streaming chat client: where the
backend lives, which alternate base URL to retry against, and the
timeouts and history windows applied to each request.
"""

import os
from pathlib import Path
from urllib.parse import urlsplit

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "http://localhost:5001"
DEFAULT_TOKEN_FILE = Path.home() / ".hiremate" / "session.json"

LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "0.0.0.0", "::1"})
# Development servers commonly come up on either of these ports
LOCAL_PORT_SWAP = {5000: 5001, 5001: 5000}


def _split_urls(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def _normalize_url(url: str) -> str:
    url = url.strip().rstrip("/")
    if not url.startswith(("http://", "https://")):
        raise ValueError(f"Base URL must start with http:// or https://: {url!r}")
    return url


def local_alternate_url(base_url: str) -> str | None:
    """Return the same URL on the other well-known development port.

    Only local-development hosts on port 5000 or 5001 have an alternate;
    every other URL returns None.
    """
    parts = urlsplit(base_url)
    if parts.hostname not in LOCAL_HOSTS:
        return None
    port = LOCAL_PORT_SWAP.get(parts.port)
    if port is None:
        return None
    host = f"[{parts.hostname}]" if ":" in parts.hostname else parts.hostname
    return parts._replace(netloc=f"{host}:{port}").geturl()


class ClientConfig(BaseModel):
    """Configuration for the streaming chat client.

    Attributes:
        base_url: Backend base URL, without the ``/api`` suffix.
        fallback_base_urls: Explicit alternates; only the first is tried.
        stream_timeout: Seconds allowed for a stream to reach a terminal event.
        request_timeout: Seconds allowed for the single-shot request.
        stream_history_turns: Prior turns serialized with a streaming request.
        ask_history_turns: Prior turns serialized with a single-shot request.
        max_parse_failures: Consecutive malformed payloads tolerated before a
            stream is abandoned (0 disables the limit).
        token_file: JSON file holding the persisted bearer token.
    """

    base_url: str = Field(
        default_factory=lambda: os.getenv("HIREMATE_API_BASE_URL", DEFAULT_BASE_URL),
        description="Backend base URL",
    )
    fallback_base_urls: list[str] = Field(
        default_factory=lambda: _split_urls(os.getenv("HIREMATE_FALLBACK_BASE_URLS")),
        description="Alternate base URLs to retry against",
    )
    stream_timeout: float = Field(default=30.0, gt=0.0)
    request_timeout: float = Field(default=30.0, gt=0.0)
    stream_history_turns: int = Field(default=5, ge=0)
    ask_history_turns: int = Field(default=10, ge=0)
    max_parse_failures: int = Field(default=20, ge=0)
    token_file: Path = Field(
        default_factory=lambda: Path(
            os.getenv("HIREMATE_TOKEN_FILE", str(DEFAULT_TOKEN_FILE))
        ).expanduser(),
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        return _normalize_url(v)

    @field_validator("fallback_base_urls")
    @classmethod
    def validate_fallback_base_urls(cls, v: list[str]) -> list[str]:
        return [_normalize_url(url) for url in v]

    def candidate_base_urls(self) -> list[str]:
        """Base URLs to try in order: the primary and at most one alternate."""
        if self.fallback_base_urls:
            alternate = self.fallback_base_urls[0]
        else:
            alternate = local_alternate_url(self.base_url)

        if alternate is None or alternate == self.base_url:
            return [self.base_url]
        return [self.base_url, alternate]


def get_client_config() -> ClientConfig:
    """Create client configuration from environment."""
    return ClientConfig()
