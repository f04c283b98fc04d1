"""
Match Loop - Handles the messages one connected player sends.

The loop:
1. Client sends a JSON message ({"type": ..., ...})
2. The loop decodes it into a deck choice, an action or a ping
3. The match manager applies it
4. Snapshots and errors go out through the transport

The transport adapter serialises calls per match, so handle() never
runs concurrently for the same match.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TYPE_CHECKING
import logging

from ..engine_core.action import Action

if TYPE_CHECKING:
    from .manager import MatchManager
    from ..engine_core.state import MatchState, PlayerState


logger = logging.getLogger(__name__)


class MessageType(Enum):
    """Client message types."""
    CHOOSE_DECK = "choose_deck"
    ACTION = "action"
    PING = "ping"


@dataclass
class MessageResult:
    """
    Result of handling one client message.

    `reply` is sent back to the sender only (e.g. a pong).
    """
    success: bool
    message_type: MessageType | None = None
    error: str | None = None
    state_changes: list[str] = field(default_factory=list)
    reply: dict[str, Any] | None = None


class MatchLoop:
    """
    Per-player message handler.

    Usage:
        loop = MatchLoop(manager, match, player)
        result = loop.handle({"type": "action", "action": "pass"})
    """

    def __init__(self, manager: MatchManager, match: MatchState, player: PlayerState):
        self.manager = manager
        self.match = match
        self.player = player

    def handle(self, message: dict[str, Any]) -> MessageResult:
        try:
            message_type = MessageType(message.get("type"))
        except ValueError:
            return self._reject(f"Unknown message type: {message.get('type')}")

        if message_type == MessageType.PING:
            return MessageResult(success=True, message_type=message_type, reply={"type": "pong"})

        if self.manager.get_match(self.match.match_id) is not self.match:
            # The player's connection was released with the match
            return MessageResult(
                success=False,
                message_type=message_type,
                error="Match has ended",
                reply={"type": "error", "payload": {"message": "Match has ended"}},
            )

        if message_type == MessageType.CHOOSE_DECK:
            deck_id = message.get("deck_id")
            if not deck_id:
                return self._reject("choose_deck requires a deck_id", message_type)
            ok = self.manager.player_choose_deck(self.player, deck_id)
            return MessageResult(success=ok, message_type=message_type)

        try:
            action = Action.from_message(self.player.player_id, message)
        except ValueError:
            return self._reject(f"Unknown action: {message.get('action')}", message_type)

        result = self.manager.handle_action(self.match, action)
        return MessageResult(
            success=result.success,
            message_type=message_type,
            error=result.error,
            state_changes=result.state_changes,
        )

    def _reject(self, error: str, message_type: MessageType | None = None) -> MessageResult:
        logger.debug("%s: rejected message from %s: %s", self.match.match_id, self.player.name, error)
        self.manager.transport.send_error(self.player.connection, error)
        return MessageResult(success=False, message_type=message_type, error=error)
