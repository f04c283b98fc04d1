"""
FastAPI Application - REST + WebSocket API for match clients.

Endpoints:
    POST   /api/v1/matches              Create a match (returns the invite id)
    GET    /api/v1/matches              List matches
    GET    /api/v1/matches/{id}         Get match status
    DELETE /api/v1/matches/{id}         End a match
    GET    /api/v1/cards                Card catalog
    WS     /api/v1/matches/{id}/ws      Play (?user_id=&username=&invite_id=)

WebSocket messages from client:
- {"type": "choose_deck", "deck_id": "..."}
- {"type": "action", "action": "charge_mana", "card_id": "c12"}
- {"type": "action", "action": "summon_creature", "card_id": "c3", "mana_ids": ["c7"]}
- {"type": "ping"}

Every message is handled under the match's asyncio.Lock, so one match
never runs two engine calls at once.

All REST responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union
import json
import logging

from fastapi import FastAPI, Query, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import EngineConfig
from ..engine_core.state import MatchState, UserInfo
from ..session import MatchLoop
from .schemas import (
    CardListResponse,
    CreateMatchRequest,
    CreateMatchResponse,
    EndMatchResponse,
    ErrorCode,
    ErrorResponse,
    HealthResponse,
    MatchListResponse,
    MatchResponse,
)
from .service import APIService
from .transport import ClientConnection


logger = logging.getLogger(__name__)

# Close code sent when a connection is refused entry to a match
JOIN_REJECTED_CLOSE_CODE = 4000


def create_app(service: Optional[APIService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    api_service = service or APIService()
    config = api_service.config

    app = FastAPI(
        title="Manazone Match API",
        description="""
Two-player card game match server.

## Flow

1. `POST /api/v1/matches` as the host, share `match_id` and `invite_id`
2. Both players open the WebSocket with the invite id
3. Each player sends `choose_deck`
4. Players send `action` messages on their turn; every change is
   pushed to both players as a `snapshot`

## Error Codes

| Code | Description |
|------|-------------|
| `MATCH_NOT_FOUND` | Match does not exist or has been ended |
| `VALIDATION_ERROR` | Request is invalid |
| `JOIN_REJECTED` | Connection could not join the match |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.service = api_service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    async def flush_match(match: Optional[MatchState], *extra: ClientConnection):
        """Deliver queued messages to every connection of the match."""
        connections: list[ClientConnection] = list(extra)
        if match is not None:
            for player in match.players:
                if player.connection is not None and player.connection not in connections:
                    connections.append(player.connection)
        for connection in connections:
            await connection.flush()

    # =========================================================================
    # Match Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/matches",
        response_model=CreateMatchResponse,
        tags=["Matches"],
        summary="Create a new match",
    )
    async def create_match(request: CreateMatchRequest) -> CreateMatchResponse:
        """
        Create a match waiting for two players.

        The response carries the `invite_id` both players must present.
        """
        return api_service.create_match(request)

    @app.get(
        "/api/v1/matches",
        response_model=MatchListResponse,
        tags=["Matches"],
        summary="List matches",
    )
    async def list_matches() -> MatchListResponse:
        matches = api_service.list_matches()
        return MatchListResponse(matches=matches, count=len(matches))

    @app.get(
        "/api/v1/matches/{match_id}",
        response_model=MatchResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Matches"],
        summary="Get match status",
    )
    async def get_match(match_id: str) -> Union[MatchResponse, JSONResponse]:
        """Get the lobby status of a match."""
        response = api_service.get_match(match_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(
                ErrorCode.MATCH_NOT_FOUND,
                response.error,
                status_code=404,
            )
        return response

    @app.delete(
        "/api/v1/matches/{match_id}",
        response_model=EndMatchResponse,
        tags=["Matches"],
        summary="End a match",
    )
    async def end_match(
        match_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndMatchResponse:
        """End a match and release it. Connected players are rejected from then on."""
        async with api_service.lock_for(match_id):
            success = api_service.end_match(match_id, reason)
        return EndMatchResponse(success=success, match_id=match_id)

    @app.get(
        "/api/v1/cards",
        response_model=CardListResponse,
        tags=["Cards"],
        summary="List the card catalog",
    )
    async def list_cards() -> CardListResponse:
        cards = api_service.list_cards()
        return CardListResponse(cards=cards, count=len(cards))

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/matches/{match_id}/ws")
    async def match_socket(
        websocket: WebSocket,
        match_id: str,
        user_id: str,
        invite_id: str,
        username: Optional[str] = None,
    ):
        """
        Join a match and play it.

        Messages from server:
        - choose_deck: both players connected, pick a deck
        - snapshot: match state as this player may see it
        - error: the last request was rejected
        - pong: reply to ping
        """
        await websocket.accept()
        manager = api_service.manager
        if manager.get_match(match_id) is None:
            await websocket.send_json({
                "type": "error",
                "payload": {"message": "Match is no longer available"},
            })
            await websocket.close(code=JOIN_REJECTED_CLOSE_CODE)
            return

        lock = api_service.lock_for(match_id)
        connection = ClientConnection(websocket=websocket, user_id=user_id)

        async with lock:
            player = manager.add_player(
                connection, UserInfo(uid=user_id, username=username or user_id), match_id, invite_id
            )
            match = manager.get_match(match_id)
            await flush_match(match if player else None, connection)

        if player is None:
            await websocket.close(code=JOIN_REJECTED_CLOSE_CODE)
            return

        loop = MatchLoop(manager, match, player)
        try:
            while True:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Invalid JSON"},
                    })
                    continue
                if not isinstance(message, dict):
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Messages must be JSON objects"},
                    })
                    continue

                async with lock:
                    result = loop.handle(message)
                    await flush_match(match, connection)
                if result.reply:
                    await websocket.send_json(result.reply)

        except WebSocketDisconnect:
            logger.info("%s disconnected from match %s", player.name, match_id)
        finally:
            async with lock:
                if player.connection is connection:
                    manager.player_disconnected(player)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="manazone",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Manazone Match API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


def create_app_from_env() -> FastAPI:
    """App factory for uvicorn: uvicorn manazone.api.app:create_app_from_env --factory"""
    return create_app(APIService(config=EngineConfig.from_env()))
