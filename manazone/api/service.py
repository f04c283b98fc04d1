"""
API Service - Business logic layer between API and engine.

The service:
1. Owns the card catalog, deck store and match manager
2. Translates REST requests to manager calls
3. Formats matches and cards as pydantic responses
4. Hands out one asyncio.Lock per match for the WebSocket endpoint

This layer knows nothing about HTTP status codes.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import asyncio
import logging

from .schemas import (
    CardInfo,
    CreateMatchRequest,
    CreateMatchResponse,
    ErrorCode,
    ErrorResponse,
    MatchResponse,
    MatchStatus,
    PlayerInfo,
)
from .transport import WebSocketTransport
from ..config import EngineConfig
from ..engine_core.registry import CardRegistry, CardTemplate
from ..engine_core.state import MatchState, Phase
from ..games.duel_masters import STANDARD_DECKS, create_registry
from ..session import InMemoryDeckStore, MatchManager


logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Create a match and share the invite id
        response = service.create_match(CreateMatchRequest(host_id="u1"))

        # Look it up
        match = service.get_match(response.match_id)
    """
    config: EngineConfig = field(default_factory=EngineConfig.from_env)
    transport: WebSocketTransport = field(default_factory=WebSocketTransport)
    registry: CardRegistry | None = None
    manager: MatchManager | None = None

    _locks: dict[str, asyncio.Lock] = field(default_factory=dict)

    def __post_init__(self):
        if self.registry is None:
            self.registry = create_registry()
            self.registry.validate()
        if self.manager is None:
            self.manager = MatchManager(
                registry=self.registry,
                deck_store=InMemoryDeckStore(STANDARD_DECKS),
                transport=self.transport,
                shields=self.config.shields,
                hand_size=self.config.hand_size,
                random_seed=self.config.random_seed,
            )

    def create_match(self, request: CreateMatchRequest) -> CreateMatchResponse:
        """Create a match. Stale matches are collected first."""
        self.cleanup_stale_matches()
        match = self.manager.create_match(
            host_id=request.host_id,
            name=request.name,
            description=request.description,
            random_seed=request.random_seed,
        )
        return CreateMatchResponse(invite_id=match.invite_id, **self._match_fields(match))

    def get_match(self, match_id: str) -> MatchResponse | ErrorResponse:
        match = self.manager.get_match(match_id)
        if not match:
            return ErrorResponse(
                error="Match not found",
                error_code=ErrorCode.MATCH_NOT_FOUND,
            )
        return self._match_to_response(match)

    def list_matches(self) -> list[MatchResponse]:
        return [self._match_to_response(m) for m in self.manager.list_matches()]

    def end_match(self, match_id: str, reason: str = "user_ended") -> bool:
        ended = self.manager.end_match(match_id, reason)
        self._locks.pop(match_id, None)
        return ended

    def cleanup_stale_matches(self) -> int:
        removed = self.manager.cleanup_stale_matches(self.config.match_ttl)
        for match_id in removed:
            self._locks.pop(match_id, None)
        if removed:
            logger.info("Collected %d stale matches", len(removed))
        return len(removed)

    def list_cards(self) -> list[CardInfo]:
        return [
            self._card_to_info(self.registry.template(card_id))
            for card_id in self.registry.card_ids()
        ]

    def lock_for(self, match_id: str) -> asyncio.Lock:
        """The lock serialising every engine call for one match."""
        lock = self._locks.get(match_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[match_id] = lock
        return lock

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def _match_to_response(self, match: MatchState) -> MatchResponse:
        return MatchResponse(**self._match_fields(match))

    def _match_fields(self, match: MatchState) -> dict:
        return {
            "match_id": match.match_id,
            "name": match.name,
            "description": match.description,
            "host_id": match.host_id,
            "status": self._match_status(match),
            "phase": match.phase.value,
            "turn_number": match.turn_number,
            "players": [
                PlayerInfo(
                    player_id=p.player_id,
                    username=p.name,
                    deck_chosen=p.chosen_deck is not None,
                    is_current_turn=match.player_turn is p,
                )
                for p in match.players
            ],
            "current_turn_player_id": match.player_turn.player_id if match.player_turn else None,
            "winner_id": match.winner_id,
            "game_over_reason": match.game_over_reason,
            "created_at": match.created_at,
        }

    def _match_status(self, match: MatchState) -> MatchStatus:
        if match.is_over:
            return MatchStatus.GAME_OVER
        if match.is_started:
            return MatchStatus.IN_PROGRESS
        if match.phase == Phase.CHOOSE_DECK:
            return MatchStatus.CHOOSING_DECKS
        return MatchStatus.WAITING_PLAYERS

    def _card_to_info(self, template: CardTemplate) -> CardInfo:
        return CardInfo(
            card_id=template.card_id,
            name=template.name,
            civilizations=[civ.value for civ in template.civilizations],
            multicolor=template.is_multicolor,
            family=template.family,
            power=template.power,
            mana_cost=template.mana_cost,
            mana_requirement=[civ.value for civ in template.mana_requirement],
            effects=list(template.effects),
        )
