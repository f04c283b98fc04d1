"""
Duel Masters Decks - Standard decks every user may play.

A deck is exactly 40 cards, at most 4 copies of any card.
"""

from __future__ import annotations

from ...engine_core.state import DeckInfo


DECK_SIZE = 40
MAX_COPIES = 4


def _expand(counts: dict[str, int]) -> list[str]:
    card_ids = []
    for card_id, copies in counts.items():
        card_ids.extend([card_id] * copies)
    return card_ids


def validate_deck(card_ids: list[str]) -> list[str]:
    """Return the reasons a card list is not a legal deck (empty if legal)."""
    errors = []
    if len(card_ids) != DECK_SIZE:
        errors.append(f"Deck must have {DECK_SIZE} cards, has {len(card_ids)}")
    for card_id in sorted(set(card_ids)):
        copies = card_ids.count(card_id)
        if copies > MAX_COPIES:
            errors.append(f"At most {MAX_COPIES} copies of {card_id}, has {copies}")
    return errors


STANDARD_DECKS = [
    DeckInfo(
        deck_id="standard-darkness-fire",
        name="Darkness / Fire",
        standard=True,
        card_ids=_expand({
            "dm01-bone-assassin-the-ripper": 4,
            "dm01-bone-spider": 4,
            "dm01-skeleton-soldier-the-defiled": 4,
            "dm01-dark-raven-shadow-of-grief": 4,
            "dm01-ghost-touch": 4,
            "dm01-deadly-fighter-braid-claw": 4,
            "dm01-immortal-baron-vorg": 4,
            "dm01-explosive-fighter-ucarn": 4,
            "dm01-pyrofighter-magnus": 4,
            "dm01-crimson-hammer": 4,
        }),
    ),
    DeckInfo(
        deck_id="standard-light-water-nature",
        name="Light / Water / Nature",
        standard=True,
        card_ids=_expand({
            "dm01-dia-nork-moonlight-guardian": 4,
            "dm01-gran-gure-space-guardian": 4,
            "dm01-chilias-the-oracle": 4,
            "dm01-holy-awe": 4,
            "dm01-aqua-hulcus": 4,
            "dm01-saucer-head-shark": 4,
            "dm01-bronze-arm-tribe": 4,
            "dm01-burning-mane": 4,
            "dm01-fear-fang": 4,
            "dm01-natural-snare": 4,
        }),
    ),
]
