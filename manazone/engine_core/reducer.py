"""
Reducer - Applies player actions to a match.

The reducer is the single entry point for player-driven mutation.
All player actions must go through apply().

Design principles:
- Validates before applying: a rejected action changes nothing
- Returns ActionResult with success/failure
- Resumes the turn engine at suspension points
- Delegates zone changes to zones.move_card
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable
import logging
import time

from .state import CardInstance, Civilization, MatchState, Phase, PlayerState, ZoneType
from .action import Action, ActionType, ActionResult, MAIN_STEP_ACTIONS
from .errors import MatchError, ValidationError
from .turn import TurnEngine, SUSPENSION_PHASES
from .zones import move_card, tap_card


logger = logging.getLogger(__name__)


# Performs a checked action; returned by the check stage of each handler
Commit = Callable[[], ActionResult]

# Actions accepted at each suspension point
PHASE_ACTIONS = {
    Phase.CHARGE_STEP: {ActionType.CHARGE_MANA, ActionType.PASS} | MAIN_STEP_ACTIONS,
    Phase.MAIN_STEP: MAIN_STEP_ACTIONS,
    Phase.ATTACK_STEP: {ActionType.END_TURN},
}


@dataclass
class Reducer:
    """
    Reducer applies actions to a match.

    Stateless - all state is in MatchState.
    The engine provides the phase transitions.
    """
    engine: TurnEngine

    def apply(self, match: MatchState, action: Action) -> ActionResult:
        """
        Apply an action to the match.

        Handlers run in two stages. The check stage raises MatchError
        to reject the action and must not mutate the match; it returns a
        commit function that performs the change. A MatchError raised
        while committing (e.g. by a card effect) is not a rejection and
        propagates to the caller.

        Returns ActionResult with the changes or the error.
        """
        # Validate action is legal
        validation_error = self._validate_action(match, action)
        if validation_error:
            return ActionResult.failure(validation_error, error_code=ValidationError.error_code)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        try:
            commit = handler(match, action)
        except MatchError as e:
            logger.info("%s: rejected %s: %s", match.match_id, action.action_type.value, e.message)
            return ActionResult.failure(e.message, error_code=e.error_code)

        # A main step action taken in the charge step ends charging first
        if match.phase == Phase.CHARGE_STEP and action.action_type in MAIN_STEP_ACTIONS:
            self.engine.main_step(match)

        result = commit()

        if action.timestamp is None:
            action.timestamp = time.time()
        match.action_history.append(action)
        self.engine.broadcast(match)
        return result

    def _validate_action(self, match: MatchState, action: Action) -> str | None:
        """
        Validate that an action is legal in the current state.

        Returns error message if invalid, None if valid.
        """
        if match.is_over:
            return "Match is over - no actions allowed"

        if not match.is_started or match.phase not in SUSPENSION_PHASES:
            return "Match has not started"

        if action.payload.player_id != match.player_turn.player_id:
            return "It is not your turn"

        if action.action_type not in PHASE_ACTIONS[match.phase]:
            return f"Cannot {action.action_type.value} during the {match.phase.value.replace('_', ' ')}"

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.CHARGE_MANA: self._handle_charge_mana,
            ActionType.PASS: self._handle_pass,
            ActionType.SUMMON_CREATURE: self._handle_summon,
            ActionType.DECLARE_ATTACK: self._handle_declare_attack,
            ActionType.END_TURN: self._handle_end_turn,
        }
        return handlers.get(action_type)

    def _handle_charge_mana(self, match: MatchState, action: Action) -> Commit:
        """Put one card from hand into the mana zone, then move to the main step."""
        player = match.player_turn
        if not player.can_charge:
            raise ValidationError("You have already charged mana this turn")
        card = self._card_in_hand(player, action.payload.card_id)

        def commit() -> ActionResult:
            move_card(self.engine.effects, match, card, ZoneType.HAND, ZoneType.MANA_ZONE)
            player.can_charge = False
            self.engine.main_step(match)
            return ActionResult.ok([f"{player.name} charged {card.name} as mana"])
        return commit

    def _handle_pass(self, match: MatchState, action: Action) -> Commit:
        """Skip charging."""
        def commit() -> ActionResult:
            self.engine.main_step(match)
            return ActionResult.ok([f"{match.player_turn.name} did not charge mana"])
        return commit

    def _handle_summon(self, match: MatchState, action: Action) -> Commit:
        """Pay for a creature and put it into the battle zone."""
        player = match.player_turn
        card = self._card_in_hand(player, action.payload.card_id)
        if not card.template.is_creature:
            raise ValidationError(f"{card.name} is not a creature")
        mana = self._select_mana(player, card, action.payload.mana_ids)

        def commit() -> ActionResult:
            for mana_card in mana:
                tap_card(mana_card)
            move_card(self.engine.effects, match, card, ZoneType.HAND, ZoneType.BATTLE_ZONE)
            return ActionResult.ok([f"{player.name} summoned {card.name}"])
        return commit

    def _handle_declare_attack(self, match: MatchState, action: Action) -> Commit:
        def commit() -> ActionResult:
            self.engine.attack_step(match)
            return ActionResult.ok([f"{match.player_turn.name} moved to the attack step"])
        return commit

    def _handle_end_turn(self, match: MatchState, action: Action) -> Commit:
        player = match.player_turn

        def commit() -> ActionResult:
            self.engine.end_turn(match)
            return ActionResult.ok([f"{player.name} ended the turn"])
        return commit

    # =========================================================================
    # Helpers
    # =========================================================================

    def _card_in_hand(self, player: PlayerState, instance_id: str | None) -> CardInstance:
        card = player.hand.get(instance_id) if instance_id else None
        if card is None:
            raise ValidationError(f"Card {instance_id} is not in your hand")
        return card

    def _select_mana(self, player: PlayerState, card: CardInstance, mana_ids: list[str]) -> list[CardInstance]:
        """
        Choose the mana cards that pay for `card`.

        Exactly mana_cost untapped cards are tapped, and together they
        must provide every civilization in the mana requirement.
        """
        cost = card.template.mana_cost
        requirement = list(card.template.mana_requirement)
        untapped = [c for c in player.mana_zone if not c.tapped]

        if mana_ids:
            if len(set(mana_ids)) != len(mana_ids):
                raise ValidationError("The same mana card was chosen twice")
            chosen = []
            for instance_id in mana_ids:
                mana_card = player.mana_zone.get(instance_id)
                if mana_card is None:
                    raise ValidationError(f"Card {instance_id} is not in your mana zone")
                if mana_card.tapped:
                    raise ValidationError(f"{mana_card.name} is already tapped")
                chosen.append(mana_card)
            if len(chosen) != cost:
                raise ValidationError(f"{card.name} costs {cost} mana, {len(chosen)} chosen")
        else:
            if len(untapped) < cost:
                raise ValidationError(f"Not enough mana to summon {card.name}")
            chosen = _auto_select(untapped, requirement, cost)

        if not _covers_requirement(chosen, requirement):
            needed = ", ".join(civ.value for civ in requirement)
            raise ValidationError(f"{card.name} requires {needed} mana")

        return chosen


def _auto_select(untapped: list[CardInstance], requirement: list[Civilization], cost: int) -> list[CardInstance]:
    """Give each required civilization its own card, then fill in zone order."""
    assigned = _assign_requirement(untapped, requirement) or {}
    chosen = [untapped[i] for i in sorted(assigned)]
    for i, mana_card in enumerate(untapped):
        if len(chosen) >= cost:
            break
        if i not in assigned:
            chosen.append(mana_card)
    return chosen[:cost]


def _assign_requirement(cards: list[CardInstance], requirement: list[Civilization]) -> dict[int, int] | None:
    """
    Pay each required civilization with a distinct card (bipartite match).

    Returns card index -> requirement index, or None if no such
    assignment exists.
    """
    if len(requirement) > len(cards):
        return None
    assigned: dict[int, int] = {}

    def place(req_index: int, visited: set[int]) -> bool:
        for i, mana_card in enumerate(cards):
            if i in visited or requirement[req_index] not in mana_card.template.civilizations:
                continue
            visited.add(i)
            if i not in assigned or place(assigned[i], visited):
                assigned[i] = req_index
                return True
        return False

    if all(place(r, set()) for r in range(len(requirement))):
        return assigned
    return None


def _covers_requirement(cards: list[CardInstance], requirement: list[Civilization]) -> bool:
    return _assign_requirement(cards, requirement) is not None


def apply_action(engine: TurnEngine, match: MatchState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    return Reducer(engine=engine).apply(match, action)
