"""Persistence of the session token."""
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"


class TokenStore(ABC):
    """Abstract base class for token stores."""

    @abstractmethod
    def get(self) -> Optional[str]:
        """Return the stored token, if any."""
        pass

    @abstractmethod
    def set(self, token: str) -> None:
        """Store a token, replacing any previous one."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored token."""
        pass


class InMemoryTokenStore(TokenStore):
    """Token store that lives for the process only."""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStore(TokenStore):
    """Token store backed by a small JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(
                f"[SESSION] Ignoring unreadable token file {self.path} - "
                f"Error: {type(e).__name__}: {str(e)}"
            )
            return {}
        return data if isinstance(data, dict) else {}

    def get(self) -> Optional[str]:
        return self._read().get(TOKEN_KEY) or None

    def set(self, token: str) -> None:
        data = self._read()
        data[TOKEN_KEY] = token
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(data, f)

    def clear(self) -> None:
        data = self._read()
        if TOKEN_KEY not in data:
            return
        del data[TOKEN_KEY]
        with open(self.path, "w") as f:
            json.dump(data, f)
