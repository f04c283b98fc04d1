"""
Tests for API Pydantic schemas.

Validates that:
- Request/response models serialize correctly
- Error codes are properly structured
- Create requests are validated
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_match_response_schema(self):
        """MatchResponse serializes status and players."""
        from manazone.api.schemas import MatchResponse, MatchStatus, PlayerInfo

        response = MatchResponse(
            match_id="m1",
            host_id="alice",
            status=MatchStatus.IN_PROGRESS,
            phase="charge_step",
            turn_number=1,
            players=[
                PlayerInfo(player_id="alice", username="Alice", deck_chosen=True, is_current_turn=True),
                PlayerInfo(player_id="bob", username="Bob", deck_chosen=True),
            ],
            current_turn_player_id="alice",
        )

        data = response.model_dump(mode="json")
        assert data["status"] == "in_progress"
        assert data["players"][0]["is_current_turn"] is True
        assert data["players"][1]["is_current_turn"] is False
        assert data["api_version"] == "v1"
        assert data["winner_id"] is None

    def test_create_response_carries_invite(self):
        from manazone.api.schemas import CreateMatchResponse, MatchStatus

        response = CreateMatchResponse(
            match_id="m1",
            status=MatchStatus.WAITING_PLAYERS,
            phase="idle",
            invite_id="secret",
        )

        assert response.model_dump()["invite_id"] == "secret"

    def test_card_info_schema(self):
        """CardInfo has all catalog fields."""
        from manazone.api.schemas import CardInfo

        card = CardInfo(
            card_id="dm01-bone-spider",
            name="Bone Spider",
            civilizations=["darkness"],
            family="Living Dead",
            power=5000,
            mana_cost=3,
            mana_requirement=["darkness"],
            effects=["Creature", "Suicide"],
        )

        data = card.model_dump()
        assert data["power"] == 5000
        assert data["effects"] == ["Creature", "Suicide"]

    def test_deck_summary_defaults(self):
        from manazone.api.schemas import DeckSummary

        deck = DeckSummary(deck_id="d1", name="Mine", card_count=40)

        assert deck.standard is False


class TestErrorCodes:
    """Tests for error code structure."""

    def test_error_codes_are_strings(self):
        """All error codes are string values."""
        from manazone.api.schemas import ErrorCode

        for code in ErrorCode:
            assert isinstance(code.value, str)
            assert code.value == code.value.upper()

    def test_error_response_schema(self):
        """ErrorResponse has the correct structure."""
        from manazone.api.schemas import ErrorResponse, ErrorCode

        error = ErrorResponse(
            error="Match not found",
            error_code=ErrorCode.MATCH_NOT_FOUND,
            details={"match_id": "m1"},
        )

        data = error.model_dump(mode="json")
        assert data["error"] == "Match not found"
        assert data["error_code"] == "MATCH_NOT_FOUND"
        assert data["details"]["match_id"] == "m1"
        assert data["api_version"] == "v1"


class TestCreateMatchRequest:
    """Tests for CreateMatchRequest validation."""

    def test_defaults(self):
        from manazone.api.schemas import CreateMatchRequest

        request = CreateMatchRequest(host_id="alice")

        assert request.name == ""
        assert request.description == ""
        assert request.random_seed is None

    def test_empty_host_rejected(self):
        from manazone.api.schemas import CreateMatchRequest

        with pytest.raises(ValidationError):
            CreateMatchRequest(host_id="")

    def test_name_length_limited(self):
        from manazone.api.schemas import CreateMatchRequest

        with pytest.raises(ValidationError):
            CreateMatchRequest(host_id="alice", name="x" * 101)


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    @pytest.fixture
    def app(self):
        from manazone.api.app import create_app
        from manazone.api.service import APIService
        from manazone.config import EngineConfig

        return create_app(APIService(config=EngineConfig()))

    def test_openapi_schema_generates(self, app):
        """OpenAPI schema generates without errors."""
        from fastapi.openapi.utils import get_openapi

        schema = get_openapi(
            title=app.title,
            version=app.version,
            routes=app.routes,
        )

        assert "paths" in schema
        assert "components" in schema
        assert "schemas" in schema["components"]

    def test_response_models_in_schema(self, app):
        """Response models appear in OpenAPI schema."""
        from fastapi.openapi.utils import get_openapi

        schema = get_openapi(
            title=app.title,
            version=app.version,
            routes=app.routes,
        )

        schemas = schema["components"]["schemas"]

        required_schemas = [
            "CreateMatchResponse",
            "MatchResponse",
            "MatchListResponse",
            "CardListResponse",
            "ErrorResponse",
        ]

        for name in required_schemas:
            assert name in schemas, f"Missing schema: {name}"

    def test_match_endpoints(self, app):
        from fastapi.openapi.utils import get_openapi

        paths = get_openapi(title=app.title, version=app.version, routes=app.routes)["paths"]

        assert "post" in paths["/api/v1/matches"]
        assert "get" in paths["/api/v1/matches"]
        assert "404" in paths["/api/v1/matches/{match_id}"]["get"]["responses"]
        assert "delete" in paths["/api/v1/matches/{match_id}"]
