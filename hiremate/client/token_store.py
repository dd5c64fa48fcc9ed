"""Bearer token persisted between runs in a small JSON file."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

TOKEN_KEY = "hiremate_token"


class TokenStore:
    """Reads and writes the bearer token used for quota tracking."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> str | None:
        """Return the stored token, or None when absent or unreadable."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable token file {self.path}: {e}")
            return None

        token = data.get(TOKEN_KEY) if isinstance(data, dict) else None
        if isinstance(token, str) and token.strip():
            return token.strip()
        return None

    def save(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({TOKEN_KEY: token}), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
