"""
Duel Masters Effects - The reusable effect tags cards declare.

Each tag is a name in the `effects` dispatch table plus the handlers
bound to it. A card picks up a behaviour by listing the tag:

    c.use(fx.CREATURE, fx.SUICIDE)

Tags:
- Creature: enters the battle zone with summoning sickness
- SpeedAttacker: may attack the turn it is summoned
- Blocker: flagged as a blocker while in the battle zone
- Suicide: destroys itself after it battles
- Slayer: destroys the creature it battled
- Spell: marks a non-creature card (no hooks)

Handlers must move cards through zones.move_card, passing hook.effects
so the nested move fires its own hooks.
"""

from __future__ import annotations

from ...engine_core.effects import EffectRegistry, HookContext, LifecycleEvent
from ...engine_core.registry import CREATURE_EFFECT
from ...engine_core.state import CardInstance, MatchState, ZoneType
from ...engine_core.zones import move_card


effects = EffectRegistry()

CREATURE = effects.effect(CREATURE_EFFECT)
SPEED_ATTACKER = effects.effect("SpeedAttacker")
BLOCKER = effects.effect("Blocker")
SUICIDE = effects.effect("Suicide")
SLAYER = effects.effect("Slayer")
SPELL = effects.effect("Spell")

BLOCKER_FLAG = "blocker"


def destroy(hook: HookContext, match: MatchState, card: CardInstance) -> bool:
    """Put a creature from the battle zone into its owner's graveyard."""
    if card.zone != ZoneType.BATTLE_ZONE:
        return False
    move_card(hook.effects, match, card, ZoneType.BATTLE_ZONE, ZoneType.GRAVEYARD)
    return True


@effects.on(CREATURE, LifecycleEvent.ON_ENTER_BATTLE_ZONE)
def _summoning_sickness(card: CardInstance, match: MatchState, hook: HookContext) -> None:
    card.summoning_sickness = True


@effects.on(SPEED_ATTACKER, LifecycleEvent.ON_ENTER_BATTLE_ZONE)
def _speed_attacker(card: CardInstance, match: MatchState, hook: HookContext) -> None:
    # Bound after Creature on the card, so this wins
    card.summoning_sickness = False


@effects.on(BLOCKER, LifecycleEvent.ON_ENTER_BATTLE_ZONE)
def _blocker(card: CardInstance, match: MatchState, hook: HookContext) -> None:
    card.flags[BLOCKER_FLAG] = True


@effects.on(SUICIDE, LifecycleEvent.ON_AFTER_COMBAT)
def _suicide(card: CardInstance, match: MatchState, hook: HookContext) -> None:
    destroy(hook, match, card)


@effects.on(SLAYER, LifecycleEvent.ON_AFTER_COMBAT)
def _slayer(card: CardInstance, match: MatchState, hook: HookContext) -> None:
    opponent = hook.get("opponent")
    if opponent is not None:
        destroy(hook, match, opponent)


def is_blocker(card: CardInstance) -> bool:
    return bool(card.flags.get(BLOCKER_FLAG))
