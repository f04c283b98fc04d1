"""
Engine Core - Match state, zones, effect hooks and the turn state machine.

The engine is the runtime that:
1. Builds card templates from a registry of factories
2. Manages MatchState (players, zones, phase)
3. Moves cards between zones, firing lifecycle hooks
4. Runs the forced steps of each turn
5. Applies player actions via the reducer
"""

from .state import (
    MatchState,
    PlayerState,
    CardInstance,
    Zone,
    ZoneType,
    Phase,
    Civilization,
    UserInfo,
    DeckInfo,
)
from .errors import (
    MatchError,
    ValidationError,
    UnknownCard,
    UnknownEffect,
    JoinError,
    MatchUnavailable,
    InviteMismatch,
    MatchFull,
)
from .effects import EffectRegistry, EffectDispatcher, HookBus, HookContext, LifecycleEvent
from .registry import CardRegistry, CardTemplate, CardBuilder
from .zones import move_card, draw_cards, tap_card, untap_card, check_zone_invariants
from .action import Action, ActionType, ActionPayload, ActionResult
from .turn import TurnEngine
from .reducer import Reducer, apply_action
from .snapshot import MatchSnapshot, snapshot_for

__all__ = [
    "MatchState",
    "PlayerState",
    "CardInstance",
    "Zone",
    "ZoneType",
    "Phase",
    "Civilization",
    "UserInfo",
    "DeckInfo",
    "MatchError",
    "ValidationError",
    "UnknownCard",
    "UnknownEffect",
    "JoinError",
    "MatchUnavailable",
    "InviteMismatch",
    "MatchFull",
    "EffectRegistry",
    "EffectDispatcher",
    "HookBus",
    "HookContext",
    "LifecycleEvent",
    "CardRegistry",
    "CardTemplate",
    "CardBuilder",
    "move_card",
    "draw_cards",
    "tap_card",
    "untap_card",
    "check_zone_invariants",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "TurnEngine",
    "Reducer",
    "apply_action",
    "MatchSnapshot",
    "snapshot_for",
]
