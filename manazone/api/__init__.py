"""
API Module - Network interface for match clients.

Exposes the match manager via REST and WebSocket.
A client:
1. Creates a match (host) or receives an invite
2. Connects to the match WebSocket
3. Chooses a deck
4. Sends actions and receives snapshots

Identity is taken from the connecting client; there are no user accounts.
"""

from .schemas import (
    # Requests
    CreateMatchRequest,
    # Responses
    CreateMatchResponse,
    MatchResponse,
    MatchListResponse,
    EndMatchResponse,
    CardListResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    PlayerInfo,
    CardInfo,
    DeckSummary,
    # Enums
    ErrorCode,
    MatchStatus,
)
from .service import APIService
from .transport import WebSocketTransport, ClientConnection
from .app import create_app

__all__ = [
    # Requests
    "CreateMatchRequest",
    # Responses
    "CreateMatchResponse",
    "MatchResponse",
    "MatchListResponse",
    "EndMatchResponse",
    "CardListResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "PlayerInfo",
    "CardInfo",
    "DeckSummary",
    # Enums
    "ErrorCode",
    "MatchStatus",
    # Service
    "APIService",
    "WebSocketTransport",
    "ClientConnection",
    "create_app",
]
