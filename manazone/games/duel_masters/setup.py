"""
Duel Masters Setup - Turns chosen decks into cards in play.

This module handles:
- Instantiating a deck (card ids -> CardInstances in the deck zone)
- Shuffling with the match rng for determinism
- Dealing shields and the opening hand

Setup moves cards without firing hooks: nothing is in the battle zone yet.
"""

from __future__ import annotations
import itertools

from ...engine_core.registry import CardRegistry
from ...engine_core.state import CardInstance, MatchState, PlayerState, ZoneType
from ...engine_core.zones import draw_cards, move_card, put_into_zone


SHIELD_COUNT = 5
OPENING_HAND = 5

_instance_counter = itertools.count(1)


def next_instance_id() -> str:
    """Process-unique card instance id."""
    return f"c{next(_instance_counter)}"


def create_deck(registry: CardRegistry, player: PlayerState, card_ids: list[str]) -> list[CardInstance]:
    """
    Put one fresh instance of each listed card into the player's deck.

    Templates are looked up first, so an unknown card id raises
    UnknownCard before anything is added.
    """
    templates = registry.templates(card_ids)
    return [
        put_into_zone(player, template, next_instance_id(), ZoneType.DECK)
        for template in templates
    ]


def setup_player(
    match: MatchState,
    player: PlayerState,
    shields: int = SHIELD_COUNT,
    hand_size: int = OPENING_HAND,
) -> None:
    """Shuffle the deck, then deal shields and the opening hand from the top."""
    match.rng.shuffle(player.deck.cards)

    for _ in range(shields):
        card = player.deck.top_card
        if card is None:
            break
        move_card(None, match, card, ZoneType.DECK, ZoneType.SHIELD_ZONE)

    draw_cards(None, match, player, hand_size)
