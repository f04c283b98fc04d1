"""
Duel Masters - The bundled game.

Two players race to break each other's five shields. Key mechanics:
- Five civilizations; cards are paid for by tapping mana of the right civilization
- One card may be charged into the mana zone each turn
- Creatures have summoning sickness the turn they enter the battle zone
- A player who must draw from an empty deck loses

This module contains:
- Effect tags (fx)
- Card definitions (subset of DM-01)
- Races and standard decks
- Deck instantiation and opening setup
"""

from . import fx
from .cards import DM01_CARDS, create_registry
from .decks import STANDARD_DECKS, DECK_SIZE, validate_deck
from .races import Race
from .setup import create_deck, setup_player, next_instance_id

__all__ = [
    "fx",
    "DM01_CARDS",
    "create_registry",
    "STANDARD_DECKS",
    "DECK_SIZE",
    "validate_deck",
    "Race",
    "create_deck",
    "setup_player",
    "next_instance_id",
]
