"""
Tests for the zone model.

Tests:
- move_card keeps the zone field and the containers in agreement
- Rejected moves change nothing
- Ordered insertion, draw, discard
- Invariant checker
"""

import pytest

from ..engine_core.effects import EffectDispatcher
from ..engine_core.errors import ValidationError
from ..engine_core.state import ZoneType
from ..engine_core.zones import (
    check_zone_invariants,
    discard_from_game,
    draw_cards,
    move_card,
)


class TestMoveCard:
    """Tests for move_card."""

    def test_move_updates_zone_and_containers(self, table, place):
        p1 = table.player1
        card = place(p1, "dm01-bone-spider", ZoneType.HAND)

        move_card(EffectDispatcher(), table, card, ZoneType.HAND, ZoneType.MANA_ZONE)

        assert card.zone == ZoneType.MANA_ZONE
        assert not p1.hand.contains(card)
        assert p1.mana_zone.contains(card)
        assert check_zone_invariants(table) == []

    def test_second_identical_move_fails_without_mutation(self, table, place):
        """Moving a card out of a zone it already left is rejected."""
        p1 = table.player1
        card = place(p1, "dm01-bone-spider", ZoneType.HAND)
        other = place(p1, "dm01-burning-mane", ZoneType.HAND)

        move_card(None, table, card, ZoneType.HAND, ZoneType.MANA_ZONE)
        with pytest.raises(ValidationError):
            move_card(None, table, card, ZoneType.HAND, ZoneType.MANA_ZONE)

        assert card.zone == ZoneType.MANA_ZONE
        assert p1.mana_zone.instance_ids() == [card.instance_id]
        assert p1.hand.instance_ids() == [other.instance_id]
        assert check_zone_invariants(table) == []

    def test_move_to_same_zone_fails(self, table, place):
        card = place(table.player1, "dm01-bone-spider", ZoneType.HAND)
        with pytest.raises(ValidationError):
            move_card(None, table, card, ZoneType.HAND, ZoneType.HAND)

    def test_card_of_unknown_owner_fails(self, table, place):
        card = place(table.player1, "dm01-bone-spider", ZoneType.HAND)
        card.owner_id = "stranger"
        with pytest.raises(ValidationError):
            move_card(None, table, card, ZoneType.HAND, ZoneType.MANA_ZONE)

    def test_insert_at_position_in_ordered_zone(self, table, place):
        p1 = table.player1
        bottom = place(p1, "dm01-burning-mane", ZoneType.DECK)
        card = place(p1, "dm01-bone-spider", ZoneType.HAND)

        move_card(None, table, card, ZoneType.HAND, ZoneType.DECK, position=0)

        assert p1.deck.instance_ids() == [card.instance_id, bottom.instance_id]
        assert p1.deck.top_card is card

    def test_position_ignored_for_unordered_zone(self, table, place):
        p1 = table.player1
        first = place(p1, "dm01-burning-mane", ZoneType.MANA_ZONE)
        card = place(p1, "dm01-bone-spider", ZoneType.HAND)

        move_card(None, table, card, ZoneType.HAND, ZoneType.MANA_ZONE, position=0)

        assert p1.mana_zone.instance_ids() == [first.instance_id, card.instance_id]

    def test_move_clears_tapped_and_flags(self, table, place):
        card = place(table.player1, "dm01-bone-spider", ZoneType.BATTLE_ZONE)
        card.tapped = True
        card.summoning_sickness = True
        card.flags["blocker"] = True

        move_card(None, table, card, ZoneType.BATTLE_ZONE, ZoneType.GRAVEYARD)

        assert not card.tapped
        assert not card.summoning_sickness
        assert card.flags == {}


class TestZoneHelpers:
    """Tests for draw, discard and the invariant checker."""

    def test_draw_takes_from_top(self, table, place):
        p1 = table.player1
        top = place(p1, "dm01-bone-spider", ZoneType.DECK)
        place(p1, "dm01-burning-mane", ZoneType.DECK)

        drawn = draw_cards(None, table, p1, 1)

        assert drawn == [top]
        assert top.zone == ZoneType.HAND
        assert p1.deck.count == 1

    def test_draw_stops_at_empty_deck(self, table, place):
        p1 = table.player1
        place(p1, "dm01-bone-spider", ZoneType.DECK)

        drawn = draw_cards(None, table, p1, 3)

        assert len(drawn) == 1
        assert p1.deck.is_empty
        assert p1.hand.count == 1

    def test_discard_from_game(self, table, place):
        p1 = table.player1
        card = place(p1, "dm01-bone-spider", ZoneType.GRAVEYARD)

        assert discard_from_game(table, card)
        assert table.find_card(card.instance_id) is None
        assert not discard_from_game(table, card)

    def test_invariant_checker_reports_mismatch(self, table, place):
        card = place(table.player1, "dm01-bone-spider", ZoneType.HAND)
        card.zone = ZoneType.GRAVEYARD

        violations = check_zone_invariants(table)

        assert len(violations) == 1
        assert card.instance_id in violations[0]

    def test_invariant_checker_reports_duplicate(self, table, place):
        p1 = table.player1
        card = place(p1, "dm01-bone-spider", ZoneType.HAND)
        p1.mana_zone.add(card)

        assert any("both" in v for v in check_zone_invariants(table))
