"""
Credential stores — durable email → Account mappings.

Every operation loads the whole mapping and mutating operations write the
whole mapping back; nothing is cached between requests.  ``CredentialStore``
is the interface the ``AuthService`` depends on, so the backing medium can
be swapped without touching business logic.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

from auth.models import Account

logger = logging.getLogger(__name__)


class CredentialStore(ABC):
    """Abstract base for account storage backends."""

    @abstractmethod
    async def load(self) -> Dict[str, Account]:
        """
        Return every account keyed by email.

        Implementations return an empty mapping when nothing has been
        stored yet (or the stored state cannot be read).
        """
        ...

    @abstractmethod
    async def save(self, accounts: Dict[str, Account]) -> None:
        """Overwrite the stored state with ``accounts``."""
        ...


class JsonFileCredentialStore(CredentialStore):
    """Single JSON document on disk, rewritten wholesale on every save."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    async def load(self) -> Dict[str, Account]:
        return await asyncio.to_thread(self._read)

    async def save(self, accounts: Dict[str, Account]) -> None:
        await asyncio.to_thread(self._write, accounts)

    def _read(self) -> Dict[str, Account]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return {email: Account(**record) for email, record in data.items()}
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            # First-run availability: an unreadable file is treated as empty.
            logger.warning("Could not read %s, starting empty: %s", self.path, exc)
            return {}

    def _write(self, accounts: Dict[str, Account]) -> None:
        data: Dict[str, Any] = {email: acc.to_record() for email, acc in accounts.items()}
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        logger.debug("Saved %d accounts to %s", len(data), self.path)


class InMemoryCredentialStore(CredentialStore):
    def __init__(self, accounts: Optional[Dict[str, Account]] = None):
        self._accounts: Dict[str, Account] = dict(accounts or {})

    async def load(self) -> Dict[str, Account]:
        return {email: acc.model_copy(deep=True) for email, acc in self._accounts.items()}

    async def save(self, accounts: Dict[str, Account]) -> None:
        self._accounts = {email: acc.model_copy(deep=True) for email, acc in accounts.items()}


# ── Lookups (linear scans; fine for small account sets) ─────────────────


def find_by_identifier(accounts: Dict[str, Account], identifier: Optional[str]) -> Optional[Account]:
    """Return the account whose email or username equals ``identifier``."""
    if identifier is None:
        return None
    for account in accounts.values():
        if account.email == identifier or account.username == identifier:
            return account
    return None


def username_taken(accounts: Dict[str, Account], username: str) -> bool:
    return any(account.username == username for account in accounts.values())
