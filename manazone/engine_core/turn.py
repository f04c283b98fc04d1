"""
Turn Engine - The phase state machine of a turn.

A turn runs through these steps:

    1. Begin turn   resolve summoning sickness          forced
    2. Untap        untap battle zone + mana zone       forced, broadcasts
    3. Start turn   fire onStartOfTurn hooks            forced
    4. Draw         draw one card (empty deck: loss)    forced
    5. Charge       may put one card into mana          SUSPENDS
    6. Main         summon creatures, etc.              SUSPENDS
    7. Attack       held for the combat collaborator    SUSPENDS

Forced steps call the next step directly. At a suspension point the
engine records the phase on the match and returns; the reducer resumes
the machine when the player acts. No thread or coroutine is parked
per match.
"""

from __future__ import annotations
from typing import Callable
import logging

from .state import CardInstance, MatchState, Phase, PlayerState, ZoneType
from .effects import EffectDispatcher, LifecycleEvent
from .zones import draw_cards, untap_card


logger = logging.getLogger(__name__)

# Called with the match whenever both players should receive a fresh snapshot
Broadcast = Callable[[MatchState], None]

SUSPENSION_PHASES = {Phase.CHARGE_STEP, Phase.MAIN_STEP, Phase.ATTACK_STEP}

DECK_EXHAUSTED = "deck_exhausted"


class TurnEngine:
    """
    Runs the forced part of each turn and parks at suspension points.

    Stateless - all state is in MatchState. One engine can drive any
    number of matches.
    """

    def __init__(self, effects: EffectDispatcher | None = None, broadcast: Broadcast | None = None):
        self.effects = effects or EffectDispatcher()
        self._broadcast = broadcast

    def broadcast(self, match: MatchState) -> None:
        if self._broadcast is not None:
            self._broadcast(match)

    def set_phase(self, match: MatchState, phase: Phase) -> None:
        match.phase = phase
        logger.debug("%s: turn %d -> %s", match.match_id, match.turn_number, phase.value)

    # =========================================================================
    # Forced steps
    # =========================================================================

    def begin_turn(self, match: MatchState) -> None:
        """Step 1: creatures that survived a full turn cycle may attack again."""
        self.set_phase(match, Phase.BEGIN_TURN_STEP)
        player = match.player_turn
        player.can_charge = True

        for creature in player.battle_zone:
            creature.summoning_sickness = False

        self.untap_step(match)

    def untap_step(self, match: MatchState) -> None:
        """Step 2: untap the battle zone and mana zone. Both players see a consistent view."""
        self.set_phase(match, Phase.UNTAP_STEP)
        player = match.player_turn

        for card in player.battle_zone:
            untap_card(card)
        for card in player.mana_zone:
            untap_card(card)

        self.broadcast(match)
        self.start_turn_step(match)

    def start_turn_step(self, match: MatchState) -> None:
        """Step 3: abilities that trigger at the start of the turn."""
        self.set_phase(match, Phase.START_TURN_STEP)
        player = match.player_turn

        self.effects.fire(
            match,
            LifecycleEvent.ON_START_OF_TURN,
            player.battle_zone.cards,
            zone=ZoneType.BATTLE_ZONE,
        )

        self.draw_step(match)

    def draw_step(self, match: MatchState) -> None:
        """Step 4: draw a card. A player who cannot draw loses."""
        self.set_phase(match, Phase.DRAW_STEP)
        player = match.player_turn

        if player.deck.is_empty:
            self.declare_loss(match, player, DECK_EXHAUSTED)
            return

        draw_cards(self.effects, match, player, 1)
        self.charge_step(match)

    # =========================================================================
    # Suspension points
    # =========================================================================

    def charge_step(self, match: MatchState) -> None:
        """
        Step 5: the player may put a card into the mana zone.

        Suspends. Left by charging mana, passing, or taking a main step action.
        """
        self.set_phase(match, Phase.CHARGE_STEP)
        self.broadcast(match)

    def main_step(self, match: MatchState) -> None:
        """
        Step 6: summon creatures as long as mana allows, in any order.

        Suspends until the player declares an attack or ends the turn.
        """
        self.set_phase(match, Phase.MAIN_STEP)

    def attack_step(self, match: MatchState) -> None:
        """Step 7: held for combat, which is resolved outside this engine."""
        self.set_phase(match, Phase.ATTACK_STEP)

    def end_turn(self, match: MatchState) -> None:
        """Hand the turn to the opponent and run their forced steps."""
        opponent = match.opponent_of(match.player_turn)
        match.player_turn = opponent
        match.turn_number += 1
        logger.info("%s: turn %d, %s to play", match.match_id, match.turn_number, opponent.name)
        self.begin_turn(match)

    # =========================================================================
    # Terminal condition and combat hooks
    # =========================================================================

    def declare_loss(self, match: MatchState, loser: PlayerState, reason: str) -> None:
        """End the match. The phase stays where the loss happened."""
        winner = match.opponent_of(loser)
        match.loser_id = loser.player_id
        match.winner_id = winner.player_id if winner else None
        match.game_over_reason = reason
        logger.info("%s: %s loses (%s)", match.match_id, loser.name, reason)
        self.broadcast(match)

    def before_attack(self, match: MatchState, attacker: CardInstance, **data) -> int:
        """Fire onBeforeAttack for an attacking creature."""
        return self.effects.fire(
            match, LifecycleEvent.ON_BEFORE_ATTACK, [attacker], zone=ZoneType.BATTLE_ZONE, **data
        )

    def after_combat(self, match: MatchState, card: CardInstance, opponent: CardInstance | None = None, **data) -> int:
        """
        Fire onAfterCombat for a creature that took part in combat.

        `opponent` is the creature it battled, if any.
        """
        return self.effects.fire(
            match, LifecycleEvent.ON_AFTER_COMBAT, [card], zone=ZoneType.BATTLE_ZONE, opponent=opponent, **data
        )
