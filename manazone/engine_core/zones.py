"""
Zone Model - The only way a card changes location.

move_card() is used by the turn engine, the reducer and effect handlers
alike, so the zone/field invariant holds even when a hook moves a card
while another move is still firing hooks:

    a card is in exactly one zone, and card.zone names that zone

Entering or leaving the battle zone fires the matching lifecycle hook.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import logging

from .state import CardInstance, MatchState, PlayerState, ZoneType
from .effects import EffectDispatcher, LifecycleEvent
from .errors import ValidationError

if TYPE_CHECKING:
    from .registry import CardTemplate


logger = logging.getLogger(__name__)


def move_card(
    effects: EffectDispatcher | None,
    match: MatchState,
    card: CardInstance,
    from_zone: ZoneType,
    to_zone: ZoneType,
    position: int | None = None,
) -> CardInstance:
    """
    Move a card between two of its owner's zones.

    Raises ValidationError (and changes nothing) if the card is not
    currently in from_zone, or the move is not a move.
    Pass effects=None to move without firing hooks (setup only).
    """
    owner = match.owner_of(card)
    if owner is None:
        raise ValidationError(f"{card.name} does not belong to a player in this match")

    if from_zone == to_zone:
        raise ValidationError(f"{card.name} is already in {to_zone.value}")

    source = owner.zone(from_zone)
    if card.zone != from_zone or not source.contains(card):
        raise ValidationError(f"{card.name} is not in {from_zone.value}")

    source.remove(card)
    owner.zone(to_zone).add(card, position)
    card.zone = to_zone

    # Transient flags and tap state do not survive a zone change
    card.tapped = False
    card.flags.clear()
    if to_zone != ZoneType.BATTLE_ZONE:
        card.summoning_sickness = False

    logger.debug(
        "%s: %s %s -> %s", match.match_id, card.name, from_zone.value, to_zone.value
    )

    if effects is not None:
        if from_zone == ZoneType.BATTLE_ZONE:
            effects.fire(match, LifecycleEvent.ON_LEAVE_BATTLE_ZONE, [card], from_zone=from_zone.value)
        if to_zone == ZoneType.BATTLE_ZONE:
            effects.fire(match, LifecycleEvent.ON_ENTER_BATTLE_ZONE, [card], zone=ZoneType.BATTLE_ZONE)

    return card


def draw_cards(
    effects: EffectDispatcher | None,
    match: MatchState,
    player: PlayerState,
    count: int = 1,
) -> list[CardInstance]:
    """Move up to `count` cards from the top of the deck to the hand."""
    drawn = []
    for _ in range(count):
        card = player.deck.top_card
        if card is None:
            break
        drawn.append(move_card(effects, match, card, ZoneType.DECK, ZoneType.HAND))
    return drawn


def tap_card(card: CardInstance) -> None:
    card.tapped = True


def untap_card(card: CardInstance) -> None:
    card.tapped = False


def put_into_zone(player: PlayerState, template: CardTemplate, instance_id: str, zone: ZoneType) -> CardInstance:
    """Create a card instance directly in a zone (deck building)."""
    card = CardInstance(
        template=template,
        owner_id=player.player_id,
        instance_id=instance_id,
        zone=zone,
    )
    player.zone(zone).add(card)
    return card


def discard_from_game(match: MatchState, card: CardInstance) -> bool:
    """
    Remove a card from the match entirely.

    Rare: destroyed cards normally stay in the graveyard.
    """
    owner = match.owner_of(card)
    if owner is None:
        return False
    return owner.zone(card.zone).remove(card)


def check_zone_invariants(match: MatchState) -> list[str]:
    """
    Return every violation of the zone invariant (empty if consistent).

    Checks that each card appears exactly once across all zones and
    that its zone field names the container holding it.
    """
    violations = []
    seen: dict[str, ZoneType] = {}
    for player in match.players:
        for zone_type, zone in player.zones.items():
            for card in zone.cards:
                if card.instance_id in seen:
                    violations.append(
                        f"{card.instance_id} in both {seen[card.instance_id].value} and {zone_type.value}"
                    )
                seen[card.instance_id] = zone_type
                if card.zone != zone_type:
                    violations.append(
                        f"{card.instance_id} is in {zone_type.value} but says {card.zone.value}"
                    )
                if card.owner_id != player.player_id:
                    violations.append(f"{card.instance_id} is in another player's {zone_type.value}")
    return violations
