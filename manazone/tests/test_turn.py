"""
Tests for the turn phase state machine.

Tests:
- Forced steps chain to the charge step
- Untap, draw and summoning sickness
- Deck exhaustion ends the match
- Start of turn hooks
- Handing the turn over
"""

import pytest

from ..engine_core.effects import EffectDispatcher, EffectRegistry, LifecycleEvent
from ..engine_core.registry import CardBuilder, CardRegistry
from ..engine_core.state import Phase, ZoneType
from ..engine_core.turn import DECK_EXHAUSTED, TurnEngine
from ..engine_core.zones import move_card, put_into_zone
from ..games.duel_masters import next_instance_id


class TestForcedSteps:
    """Tests for the steps the engine runs without player input."""

    def test_begin_turn_parks_at_charge_step(self, table, place, engine, broadcasts):
        place(table.player1, "dm01-bone-spider", ZoneType.DECK)

        engine.begin_turn(table)

        assert table.phase == Phase.CHARGE_STEP
        assert table.player1.hand.count == 1
        # Untap step and charge step both broadcast
        assert len(broadcasts) == 2

    def test_untap_clears_taps(self, table, place, engine):
        p1 = table.player1
        mana = place(p1, "dm01-bone-spider", ZoneType.MANA_ZONE)
        creature = place(p1, "dm01-burning-mane", ZoneType.BATTLE_ZONE)
        mana.tapped = True
        creature.tapped = True
        place(p1, "dm01-fear-fang", ZoneType.DECK)

        engine.untap_step(table)

        assert not mana.tapped
        assert not creature.tapped

    def test_untap_leaves_opponent_alone(self, table, place, engine):
        theirs = place(table.player2, "dm01-bone-spider", ZoneType.MANA_ZONE)
        theirs.tapped = True
        place(table.player1, "dm01-fear-fang", ZoneType.DECK)

        engine.untap_step(table)

        assert theirs.tapped

    def test_begin_turn_clears_summoning_sickness(self, table, place, engine):
        creature = place(table.player1, "dm01-bone-spider", ZoneType.BATTLE_ZONE)
        creature.summoning_sickness = True
        place(table.player1, "dm01-fear-fang", ZoneType.DECK)

        engine.begin_turn(table)

        assert not creature.summoning_sickness

    def test_begin_turn_restores_charge(self, table, place, engine):
        table.player1.can_charge = False
        place(table.player1, "dm01-fear-fang", ZoneType.DECK)

        engine.begin_turn(table)

        assert table.player1.can_charge

    def test_draw_moves_one_card(self, table, place, engine):
        p1 = table.player1
        top = place(p1, "dm01-bone-spider", ZoneType.DECK)
        place(p1, "dm01-fear-fang", ZoneType.DECK)

        engine.draw_step(table)

        assert p1.hand.instance_ids() == [top.instance_id]
        assert p1.deck.count == 1
        assert table.phase == Phase.CHARGE_STEP


class TestDeckExhaustion:
    """A player who must draw from an empty deck loses."""

    def test_empty_deck_loses(self, table, place, engine, broadcasts):
        p1 = table.player1
        in_hand = place(p1, "dm01-bone-spider", ZoneType.HAND)

        engine.draw_step(table)

        assert table.is_over
        assert table.loser_id == "p1"
        assert table.winner_id == "p2"
        assert table.game_over_reason == DECK_EXHAUSTED
        # No further transitions, hand untouched
        assert table.phase == Phase.DRAW_STEP
        assert p1.hand.instance_ids() == [in_hand.instance_id]
        assert broadcasts[-1] is table

    def test_exhaustion_during_begin_turn(self, table, engine):
        engine.begin_turn(table)

        assert table.is_over
        assert table.phase == Phase.DRAW_STEP


class TestStartOfTurnHooks:
    """onStartOfTurn fires for the active player's battle zone."""

    def test_start_of_turn_fires_for_active_player(self, table, place):
        calls = []
        effects = EffectRegistry()

        @effects.on("Ticker", LifecycleEvent.ON_START_OF_TURN)
        def _tick(card, match, hook):
            calls.append(card.owner_id)

        registry = CardRegistry(effects)

        def ticker(c: CardBuilder):
            c.use("Ticker")

        registry.register("ticker", ticker)
        template = registry.template("ticker")
        put_into_zone(table.player1, template, next_instance_id(), ZoneType.BATTLE_ZONE)
        put_into_zone(table.player2, template, next_instance_id(), ZoneType.BATTLE_ZONE)
        place(table.player1, "dm01-fear-fang", ZoneType.DECK)

        TurnEngine(EffectDispatcher()).start_turn_step(table)

        assert calls == ["p1"]

    def test_start_of_turn_follows_battle_zone_order(self, table, place):
        calls = []
        effects = EffectRegistry()

        @effects.on("First", LifecycleEvent.ON_START_OF_TURN)
        def _first(card, match, hook):
            calls.append(("first", card.instance_id))

        @effects.on("Second", LifecycleEvent.ON_START_OF_TURN)
        def _second(card, match, hook):
            calls.append(("second", card.instance_id))

        registry = CardRegistry(effects)
        registry.register("first", lambda c: c.use("First"))
        registry.register("second", lambda c: c.use("Second"))
        first = put_into_zone(table.player1, registry.template("first"), next_instance_id(), ZoneType.BATTLE_ZONE)
        second = put_into_zone(table.player1, registry.template("second"), next_instance_id(), ZoneType.BATTLE_ZONE)
        place(table.player1, "dm01-fear-fang", ZoneType.DECK)

        TurnEngine(EffectDispatcher()).start_turn_step(table)

        assert calls == [("first", first.instance_id), ("second", second.instance_id)]


class TestEndTurn:
    """Handing the turn to the opponent."""

    def test_end_turn_switches_player(self, table, place, engine):
        place(table.player2, "dm01-fear-fang", ZoneType.DECK)

        engine.end_turn(table)

        assert table.player_turn is table.player2
        assert table.turn_number == 2
        assert table.phase == Phase.CHARGE_STEP
        assert table.player2.hand.count == 1

    def test_summoned_creature_ready_next_turn(self, table, place, engine):
        """Sickness lasts until its controller's next turn begins."""
        creature = place(table.player1, "dm01-bone-spider", ZoneType.HAND)
        move_card(engine.effects, table, creature, ZoneType.HAND, ZoneType.BATTLE_ZONE)
        assert creature.summoning_sickness

        place(table.player1, "dm01-fear-fang", ZoneType.DECK)
        place(table.player2, "dm01-fear-fang", ZoneType.DECK)

        engine.end_turn(table)
        assert creature.summoning_sickness

        engine.end_turn(table)
        assert not creature.summoning_sickness
        assert table.turn_number == 3


class TestCombatHooks:
    """before_attack / after_combat entry points."""

    def test_before_attack_fires_for_attacker(self, table, place, engine):
        card = place(table.player1, "dm01-bone-spider", ZoneType.BATTLE_ZONE)
        # No built-in tag binds onBeforeAttack
        assert engine.before_attack(table, card) == 0

    @pytest.mark.parametrize("card_id", ["dm01-bone-spider", "dm01-skeleton-soldier-the-defiled"])
    def test_suicide_creatures(self, table, place, engine, card_id):
        card = place(table.player1, card_id, ZoneType.BATTLE_ZONE)

        assert engine.after_combat(table, card) == 1
        assert card.zone == ZoneType.GRAVEYARD
