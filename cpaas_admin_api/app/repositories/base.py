"""Repository contract and the in-memory implementation."""

from __future__ import annotations

import copy
import secrets
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Protocol

from ..core.errors import NotFoundError


def generate_id(prefix: str) -> str:
    """Return an opaque identifier such as ``user_1718000000000_3fa9c1``."""
    return f"{prefix}_{int(time.time() * 1000)}_{secrets.token_hex(3)}"


class Repository(Protocol):
    """Minimal CRUD contract every collection store satisfies."""

    def list(self) -> List[Dict[str, Any]]:
        """Return a snapshot of all records in collection order."""
        ...

    def get(self, record_id: str) -> Dict[str, Any]:
        ...

    def create(self, record: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def update(self, record_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def delete(self, record_id: str) -> None:
        ...


class InMemoryRepository:
    """Insertion-ordered dictionary of records keyed by ``id``.

    Records handed out are deep copies, so callers can never modify the
    stored data except through :meth:`create`, :meth:`update` and
    :meth:`delete`.  Nothing survives a restart.
    """

    def __init__(self, name: str, id_prefix: str, records: Optional[Iterable[Dict[str, Any]]] = None) -> None:
        self.name = name
        self.id_prefix = id_prefix
        self._records: Dict[str, Dict[str, Any]] = {}
        for record in records or ():
            self.create(record)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def list(self) -> List[Dict[str, Any]]:
        return [copy.deepcopy(record) for record in self._records.values()]

    def get(self, record_id: str) -> Dict[str, Any]:
        try:
            return copy.deepcopy(self._records[record_id])
        except KeyError:
            raise NotFoundError(f"{self.name.capitalize()} not found") from None

    def create(self, record: Dict[str, Any]) -> Dict[str, Any]:
        stored = copy.deepcopy(record)
        if not stored.get("id"):
            stored["id"] = generate_id(self.id_prefix)
        self._records[stored["id"]] = stored
        return copy.deepcopy(stored)

    def update(self, record_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        if record_id not in self._records:
            raise NotFoundError(f"{self.name.capitalize()} not found")
        merged = {**self._records[record_id], **copy.deepcopy(changes), "id": record_id}
        self._records[record_id] = merged
        return copy.deepcopy(merged)

    def delete(self, record_id: str) -> None:
        if self._records.pop(record_id, None) is None:
            raise NotFoundError(f"{self.name.capitalize()} not found")


@dataclass
class Repositories:
    """One repository per resource, shared by all requests of an app."""

    users: Repository = field(default_factory=lambda: InMemoryRepository("user", "user"))
    projects: Repository = field(default_factory=lambda: InMemoryRepository("project", "proj"))
    transactions: Repository = field(default_factory=lambda: InMemoryRepository("transaction", "txn"))
    logs: Repository = field(default_factory=lambda: InMemoryRepository("log", "log"))
    message_logs: Repository = field(default_factory=lambda: InMemoryRepository("message log", "msglog"))
    campaigns: Repository = field(default_factory=lambda: InMemoryRepository("campaign", "camp"))
    webhooks: Repository = field(default_factory=lambda: InMemoryRepository("webhook", "wh"))
    integrations: Repository = field(default_factory=lambda: InMemoryRepository("integration", "int"))
