# vsm/client/token_store.py
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_FILE = os.environ.get(
    "VSM_TOKEN_FILE",
    str(Path.home() / ".vsm" / "credentials.json"),
)


class TokenStore:
    """Bearer token persisted in a small JSON file on the client machine."""

    def __init__(self, path: str | os.PathLike = DEFAULT_TOKEN_FILE):
        self.path = Path(path)

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Could not read token file %s: %s", self.path, e)
            return None
        token = data.get("access_token") if isinstance(data, dict) else None
        return token or None

    def save(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"access_token": token}), encoding="utf-8")
        os.chmod(self.path, 0o600)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


class StaticTokenStore(TokenStore):
    """In-memory token, for scripts and tests."""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def load(self) -> Optional[str]:
        return self._token

    def save(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None
