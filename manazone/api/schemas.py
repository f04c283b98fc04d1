"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between clients and the match server.

Error Codes:
- MATCH_NOT_FOUND: Match does not exist or has been ended
- VALIDATION_ERROR: Request body or message is invalid
- JOIN_REJECTED: A WebSocket connection could not join the match
- INTERNAL_ERROR: Unexpected server error
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class MatchStatus(str, Enum):
    """Lobby-level status of a match."""
    WAITING_PLAYERS = "waiting_players"
    CHOOSING_DECKS = "choosing_decks"
    IN_PROGRESS = "in_progress"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    MATCH_NOT_FOUND = "MATCH_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    JOIN_REJECTED = "JOIN_REJECTED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """A catalog entry."""
    card_id: str
    name: str
    civilizations: list[str] = Field(default_factory=list)
    multicolor: bool = False
    family: Optional[str] = None
    power: int = 0
    mana_cost: int = 0
    mana_requirement: list[str] = Field(default_factory=list)
    effects: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class PlayerInfo(BaseModel):
    """A connected player, as shown in the lobby."""
    player_id: str
    username: str
    deck_chosen: bool = False
    is_current_turn: bool = False


class DeckSummary(BaseModel):
    """A deck a player may choose."""
    deck_id: str
    name: str
    card_count: int
    standard: bool = False


# =============================================================================
# Request Models
# =============================================================================

class CreateMatchRequest(BaseModel):
    """Request to create a match."""
    host_id: str = Field(..., min_length=1, description="User id of the host")
    name: str = Field("", max_length=100)
    description: str = Field("", max_length=500)
    random_seed: Optional[int] = Field(None, description="Fix the match rng (replays, tests)")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class MatchResponse(BaseModel):
    """Lobby information about a match."""
    match_id: str
    name: str = ""
    description: str = ""
    host_id: Optional[str] = None
    status: MatchStatus
    phase: str
    turn_number: int = 0
    players: list[PlayerInfo] = Field(default_factory=list)
    current_turn_player_id: Optional[str] = None
    winner_id: Optional[str] = None
    game_over_reason: Optional[str] = None
    created_at: float = 0.0
    api_version: str = "v1"


class CreateMatchResponse(MatchResponse):
    """Returned to the host only: includes the invite id to share."""
    invite_id: str


class MatchListResponse(BaseModel):
    """Response listing matches."""
    matches: list[MatchResponse]
    count: int


class EndMatchResponse(BaseModel):
    """Response after ending a match."""
    success: bool
    match_id: str


class CardListResponse(BaseModel):
    """The card catalog."""
    cards: list[CardInfo]
    count: int


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
