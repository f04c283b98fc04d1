"""
Pytest fixtures for Manazone tests.
"""

import pytest
from typing import Callable

from ..engine_core.effects import EffectDispatcher
from ..engine_core.reducer import Reducer
from ..engine_core.registry import CardRegistry
from ..engine_core.state import CardInstance, MatchState, Phase, PlayerState, UserInfo, ZoneType
from ..engine_core.turn import TurnEngine
from ..engine_core.zones import put_into_zone
from ..games.duel_masters import STANDARD_DECKS, create_registry, next_instance_id
from ..session import InMemoryDeckStore, MatchManager, OutboxTransport


@pytest.fixture
def registry() -> CardRegistry:
    """The full DM-01 catalog."""
    return create_registry()


@pytest.fixture
def transport() -> OutboxTransport:
    return OutboxTransport()


@pytest.fixture
def deck_store() -> InMemoryDeckStore:
    return InMemoryDeckStore(STANDARD_DECKS)


@pytest.fixture
def manager(registry, deck_store, transport) -> MatchManager:
    """A match manager with a fixed seed."""
    return MatchManager(
        registry=registry,
        deck_store=deck_store,
        transport=transport,
        random_seed=42,
    )


@pytest.fixture
def lobby_match(manager: MatchManager) -> MatchState:
    """A match with both players connected, waiting for deck choices."""
    match = manager.create_match("alice", name="Test match")
    manager.add_player("alice-conn", UserInfo("alice", "Alice"), match.match_id, match.invite_id)
    manager.add_player("bob-conn", UserInfo("bob", "Bob"), match.match_id, match.invite_id)
    return match


@pytest.fixture
def started_match(manager: MatchManager, lobby_match: MatchState) -> MatchState:
    """A started match, parked at the first player's charge step."""
    manager.player_choose_deck(lobby_match.player1, STANDARD_DECKS[0].deck_id)
    manager.player_choose_deck(lobby_match.player2, STANDARD_DECKS[1].deck_id)
    return lobby_match


@pytest.fixture
def broadcasts() -> list:
    """Matches passed to the engine's broadcast callback, in order."""
    return []


@pytest.fixture
def engine(broadcasts) -> TurnEngine:
    return TurnEngine(EffectDispatcher(), broadcast=broadcasts.append)


@pytest.fixture
def reducer(engine) -> Reducer:
    return Reducer(engine=engine)


@pytest.fixture
def table() -> MatchState:
    """
    A started match with empty zones: player 1 is active in the main step.

    Use the `place` fixture to put cards where a test needs them.
    """
    match = MatchState(match_id="table", invite_id="invite", random_seed=7)
    match.player1 = PlayerState(user=UserInfo("p1", "Player 1"), connection="p1-conn")
    match.player2 = PlayerState(user=UserInfo("p2", "Player 2"), connection="p2-conn")
    match.player_turn = match.player1
    match.phase = Phase.MAIN_STEP
    match.turn_number = 1
    return match


@pytest.fixture
def place(registry) -> Callable[..., CardInstance]:
    """place(player, card_id, zone) -> a new CardInstance in that zone."""
    def _place(player: PlayerState, card_id: str, zone: ZoneType = ZoneType.HAND) -> CardInstance:
        return put_into_zone(player, registry.template(card_id), next_instance_id(), zone)
    return _place
