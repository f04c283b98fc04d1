"""
WebSocket Transport - MatchTransport over FastAPI WebSockets.

The match manager is synchronous, so sending is split in two:
- send_* (called by the engine) queue a JSON message on the connection
- flush() (awaited by the endpoint, under the match lock) delivers it

Messages from server:
- snapshot: {"type": "snapshot", "payload": MatchSnapshot}
- error: {"type": "error", "payload": {"message": str}}
- choose_deck: {"type": "choose_deck", "payload": {"decks": [...]}}
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import logging

from fastapi import WebSocket, WebSocketDisconnect

from .schemas import DeckSummary
from ..engine_core.snapshot import MatchSnapshot
from ..engine_core.state import DeckInfo


logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ClientConnection:
    """One WebSocket plus the messages waiting to go out on it."""
    websocket: WebSocket
    user_id: str
    outbox: list[dict[str, Any]] = field(default_factory=list)
    closed: bool = False

    async def flush(self) -> int:
        """Send every queued message. Returns how many were sent."""
        sent = 0
        while self.outbox and not self.closed:
            message = self.outbox.pop(0)
            try:
                await self.websocket.send_json(message)
            except (WebSocketDisconnect, RuntimeError) as e:
                logger.info("Dropping connection for %s: %s", self.user_id, e)
                self.closed = True
                self.outbox.clear()
                break
            sent += 1
        return sent


class WebSocketTransport:
    """Queues engine messages on ClientConnections."""

    def send_snapshot(self, connection: ClientConnection, snapshot: MatchSnapshot) -> None:
        self._queue(connection, "snapshot", snapshot.to_dict())

    def send_error(self, connection: ClientConnection, message: str) -> None:
        self._queue(connection, "error", {"message": message})

    def send_choose_deck(self, connection: ClientConnection, decks: list[DeckInfo]) -> None:
        self._queue(connection, "choose_deck", {
            "decks": [
                DeckSummary(
                    deck_id=deck.deck_id,
                    name=deck.name,
                    card_count=len(deck.card_ids),
                    standard=deck.standard,
                ).model_dump()
                for deck in decks
            ],
        })

    def _queue(self, connection: ClientConnection | None, message_type: str, payload: dict[str, Any]) -> None:
        if connection is None or connection.closed:
            return
        connection.outbox.append({"type": message_type, "payload": payload})
