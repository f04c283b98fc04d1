"""
Action System - Actions, payloads, and results.

Actions represent player decisions at the two suspension points
(Charge step, Main step) and beyond. Forced steps never take actions;
the turn engine runs them on its own.

All player-driven state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of player actions."""
    # Charge step
    CHARGE_MANA = "charge_mana"
    PASS = "pass"  # Skip charging

    # Main step
    SUMMON_CREATURE = "summon_creature"
    DECLARE_ATTACK = "declare_attack"  # Move on to the attack step

    # Any suspension point of the active player
    END_TURN = "end_turn"


# Actions legal in the main step; taking one in the charge step ends charging
MAIN_STEP_ACTIONS = {ActionType.SUMMON_CREATURE, ActionType.DECLARE_ATTACK, ActionType.END_TURN}


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Validation happens in the reducer.
    """
    player_id: str | None = None
    card_id: str | None = None  # Instance id of the card acted on

    # Mana cards to tap when paying (instance ids); chosen automatically if empty
    mana_ids: list[str] = field(default_factory=list)

    params: dict[str, Any] = field(default_factory=dict)


@dataclass
class Action:
    """
    A complete action to be applied to a match.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied by the reducer
    """
    action_type: ActionType
    payload: ActionPayload
    timestamp: float | None = None
    action_id: str | None = None

    @classmethod
    def charge_mana(cls, player_id: str, card_id: str) -> Action:
        return cls(
            action_type=ActionType.CHARGE_MANA,
            payload=ActionPayload(player_id=player_id, card_id=card_id),
        )

    @classmethod
    def pass_charge(cls, player_id: str) -> Action:
        return cls(action_type=ActionType.PASS, payload=ActionPayload(player_id=player_id))

    @classmethod
    def summon(cls, player_id: str, card_id: str, mana_ids: list[str] | None = None) -> Action:
        return cls(
            action_type=ActionType.SUMMON_CREATURE,
            payload=ActionPayload(player_id=player_id, card_id=card_id, mana_ids=mana_ids or []),
        )

    @classmethod
    def declare_attack(cls, player_id: str) -> Action:
        return cls(action_type=ActionType.DECLARE_ATTACK, payload=ActionPayload(player_id=player_id))

    @classmethod
    def end_turn(cls, player_id: str) -> Action:
        return cls(action_type=ActionType.END_TURN, payload=ActionPayload(player_id=player_id))

    @classmethod
    def from_message(cls, player_id: str, message: dict[str, Any]) -> Action:
        """
        Build an action from a client message.

        Raises ValueError for an unknown action name.
        """
        action_type = ActionType(message.get("action"))
        return cls(
            action_type=action_type,
            payload=ActionPayload(
                player_id=player_id,
                card_id=message.get("card_id"),
                mana_ids=list(message.get("mana_ids") or []),
                params=dict(message.get("params") or {}),
            ),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - Error message and code (if failed)
    - Human-readable changes (for logs and clients)
    """
    success: bool
    error: str | None = None
    error_code: str | None = None

    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def ok(cls, changes: list[str] | None = None) -> ActionResult:
        """Create a success result."""
        return cls(success=True, state_changes=changes or [])
