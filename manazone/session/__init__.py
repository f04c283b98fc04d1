"""
Session Module - Manages live matches.

A match lives in memory from creation until it is ended:
- Created by a host, joined by two players with the invite id
- Holds the canonical MatchState
- Receives player messages through a MatchLoop
- Removed by end_match or stale cleanup

Matches are EPHEMERAL:
- No persistence to database
- Decks come from a DeckStore collaborator
- Messages leave through a MatchTransport collaborator
"""

from .manager import MatchManager
from .game_loop import MatchLoop, MessageResult, MessageType
from .collaborators import DeckStore, MatchTransport, InMemoryDeckStore, OutboxTransport, SentMessage

__all__ = [
    "MatchManager",
    "MatchLoop",
    "MessageResult",
    "MessageType",
    "DeckStore",
    "MatchTransport",
    "InMemoryDeckStore",
    "OutboxTransport",
    "SentMessage",
]
