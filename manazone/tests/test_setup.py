"""
Tests for standard decks and opening setup.
"""

import pytest

from ..engine_core.errors import UnknownCard
from ..engine_core.state import MatchState, PlayerState, UserInfo, ZoneType
from ..engine_core.zones import check_zone_invariants
from ..games.duel_masters import DECK_SIZE, STANDARD_DECKS, create_deck, setup_player, validate_deck


@pytest.fixture
def player() -> PlayerState:
    return PlayerState(user=UserInfo("p1", "Player 1"))


@pytest.fixture
def solo(player) -> MatchState:
    match = MatchState(match_id="solo", invite_id="invite", random_seed=11)
    match.player1 = player
    return match


class TestDecks:
    """Tests for deck legality."""

    @pytest.mark.parametrize("deck", STANDARD_DECKS, ids=lambda d: d.deck_id)
    def test_standard_decks_are_legal(self, deck, registry):
        assert validate_deck(deck.card_ids) == []
        assert all(card_id in registry for card_id in deck.card_ids)
        assert deck.standard

    def test_wrong_size(self):
        errors = validate_deck(STANDARD_DECKS[0].card_ids[:39])
        assert errors == [f"Deck must have {DECK_SIZE} cards, has 39"]

    def test_too_many_copies(self):
        errors = validate_deck(["dm01-bone-spider"] * 40)
        assert errors == ["At most 4 copies of dm01-bone-spider, has 40"]


class TestSetup:
    """Tests for create_deck and setup_player."""

    def test_create_deck(self, registry, player):
        cards = create_deck(registry, player, STANDARD_DECKS[0].card_ids)

        assert player.deck.count == DECK_SIZE
        assert [c.card_id for c in cards] == STANDARD_DECKS[0].card_ids
        assert all(c.owner_id == "p1" and c.zone == ZoneType.DECK for c in cards)

    def test_unknown_card_adds_nothing(self, registry, player):
        with pytest.raises(UnknownCard):
            create_deck(registry, player, ["dm01-bone-spider", "dm99-missing"])

        assert player.deck.is_empty

    def test_setup_deals_shields_and_hand(self, registry, solo, player):
        create_deck(registry, player, STANDARD_DECKS[0].card_ids)

        setup_player(solo, player)

        assert player.shield_zone.count == 5
        assert player.hand.count == 5
        assert player.deck.count == 30
        assert check_zone_invariants(solo) == []

    def test_setup_sizes_are_configurable(self, registry, solo, player):
        create_deck(registry, player, STANDARD_DECKS[0].card_ids)

        setup_player(solo, player, shields=3, hand_size=7)

        assert (player.shield_zone.count, player.hand.count) == (3, 7)

    def test_shuffle_uses_match_rng(self, registry):
        orders = []
        for _ in range(2):
            match = MatchState(match_id="m", invite_id="i", random_seed=5)
            match.player1 = PlayerState(user=UserInfo("p1", "Player 1"))
            create_deck(registry, match.player1, STANDARD_DECKS[1].card_ids)
            setup_player(match, match.player1)
            orders.append([c.card_id for c in match.player1.deck])

        assert orders[0] == orders[1]
