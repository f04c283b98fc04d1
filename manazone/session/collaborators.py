"""
Collaborators - What the match manager needs from the outside world.

The engine never talks to a socket or a database directly:
- DeckStore looks up the decks a user may play
- MatchTransport delivers messages to an opaque connection

In-memory implementations are provided for tests, the CLI demo and
single-process servers.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Protocol

from ..engine_core.snapshot import MatchSnapshot
from ..engine_core.state import DeckInfo


class DeckStore(Protocol):
    """Persistence lookup for decks."""

    def load_decks_for_user(self, user_id: str) -> list[DeckInfo]:
        ...


class MatchTransport(Protocol):
    """
    Fire-and-forget delivery to a player's connection.

    Implementations must not call back into the match manager.
    """

    def send_snapshot(self, connection: Any, snapshot: MatchSnapshot) -> None:
        ...

    def send_error(self, connection: Any, message: str) -> None:
        ...

    def send_choose_deck(self, connection: Any, decks: list[DeckInfo]) -> None:
        ...


class InMemoryDeckStore:
    """
    Decks held in a dict keyed by user id.

    Every user also gets the standard decks unless include_standard
    is False.
    """

    def __init__(self, standard_decks: list[DeckInfo] | None = None, include_standard: bool = True):
        self._decks: dict[str, list[DeckInfo]] = {}
        self._standard = list(standard_decks or []) if include_standard else []

    def add_deck(self, user_id: str, deck: DeckInfo) -> None:
        self._decks.setdefault(user_id, []).append(deck)

    def load_decks_for_user(self, user_id: str) -> list[DeckInfo]:
        return self._decks.get(user_id, []) + self._standard


@dataclass
class SentMessage:
    connection: Any
    kind: str  # "snapshot", "error", "choose_deck"
    payload: Any


@dataclass
class OutboxTransport:
    """Records every message instead of sending it."""
    sent: list[SentMessage] = field(default_factory=list)

    def send_snapshot(self, connection: Any, snapshot: MatchSnapshot) -> None:
        self.sent.append(SentMessage(connection, "snapshot", snapshot))

    def send_error(self, connection: Any, message: str) -> None:
        self.sent.append(SentMessage(connection, "error", message))

    def send_choose_deck(self, connection: Any, decks: list[DeckInfo]) -> None:
        self.sent.append(SentMessage(connection, "choose_deck", list(decks)))

    def messages_for(self, connection: Any, kind: str | None = None) -> list[SentMessage]:
        return [
            m for m in self.sent
            if m.connection == connection and (kind is None or m.kind == kind)
        ]

    def last_snapshot(self, connection: Any) -> MatchSnapshot | None:
        snapshots = self.messages_for(connection, "snapshot")
        return snapshots[-1].payload if snapshots else None

    def clear(self) -> None:
        self.sent.clear()
