"""
Errors - Exception taxonomy for the match engine.

Two families:
- Construction-time errors (UnknownCard, UnknownEffect): a bad catalog.
  These surface at process start when the catalog is validated.
- Match-time errors (ValidationError, join errors): a single rejected
  action or connection. The match is left untouched and the message is
  sent to the offending client only.

Running out of deck is NOT an exception: it ends the match as a loss
(see TurnEngine.draw_step).
"""

from __future__ import annotations


class MatchError(Exception):
    """Base class for all engine errors."""

    error_code = "MATCH_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(MatchError):
    """An action is illegal for the current phase or zone."""

    error_code = "VALIDATION_ERROR"


class UnknownCard(MatchError):
    """Card id is not in the catalog."""

    error_code = "UNKNOWN_CARD"

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(f"Unknown card: {card_id}")


class UnknownEffect(MatchError):
    """A card declares an effect tag that has no registered handlers."""

    error_code = "UNKNOWN_EFFECT"

    def __init__(self, effect: str, card_id: str | None = None):
        self.effect = effect
        self.card_id = card_id
        where = f" (card {card_id})" if card_id else ""
        super().__init__(f"Unknown effect: {effect}{where}")


class JoinError(MatchError):
    """A connection could not join a match."""

    error_code = "JOIN_ERROR"


class MatchUnavailable(JoinError):
    error_code = "MATCH_UNAVAILABLE"


class InviteMismatch(JoinError):
    error_code = "INVITE_MISMATCH"


class MatchFull(JoinError):
    error_code = "MATCH_FULL"
