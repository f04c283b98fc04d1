"""
Match State - The canonical state of one match.

Design principles:
- Single source of truth: one MatchState per match, mutated in place
- Mutations only through the turn engine, the reducer and effect handlers
- Zone membership and CardInstance.zone always agree (see zones.move_card)
- Deterministic: each match owns a seeded random.Random
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TYPE_CHECKING
import random
import time

if TYPE_CHECKING:
    from .registry import CardTemplate


class Phase(Enum):
    """The nine phases a match can be in."""
    IDLE = "idle"  # Waiting for players to connect
    CHOOSE_DECK = "choose_deck"
    BEGIN_TURN_STEP = "begin_turn_step"
    UNTAP_STEP = "untap_step"
    START_TURN_STEP = "start_turn_step"
    DRAW_STEP = "draw_step"
    CHARGE_STEP = "charge_step"
    MAIN_STEP = "main_step"
    ATTACK_STEP = "attack_step"


class ZoneType(Enum):
    """Per-player card locations."""
    DECK = "deck"
    HAND = "hand"
    SHIELD_ZONE = "shieldzone"
    MANA_ZONE = "manazone"
    GRAVEYARD = "graveyard"
    BATTLE_ZONE = "battlezone"
    HIDDEN_ZONE = "hiddenzone"


# Zones where position carries meaning
ORDERED_ZONES = {ZoneType.DECK, ZoneType.GRAVEYARD, ZoneType.SHIELD_ZONE, ZoneType.BATTLE_ZONE}

# Zones whose contents both players can see
PUBLIC_ZONES = {ZoneType.MANA_ZONE, ZoneType.GRAVEYARD, ZoneType.BATTLE_ZONE}


class Civilization(Enum):
    """Card civilizations (Duel Masters-specific, but generic enough)."""
    LIGHT = "light"
    WATER = "water"
    DARKNESS = "darkness"
    FIRE = "fire"
    NATURE = "nature"


@dataclass
class CardInstance:
    """
    One physical copy of a card in a match.

    Note: This is a runtime instance, not the definition.
    The definition is the shared CardTemplate.
    """
    template: CardTemplate
    owner_id: str
    instance_id: str
    zone: ZoneType = ZoneType.DECK
    tapped: bool = False
    summoning_sickness: bool = False
    flags: dict[str, Any] = field(default_factory=dict)

    @property
    def card_id(self) -> str:
        return self.template.card_id

    @property
    def name(self) -> str:
        return self.template.name

    def __hash__(self):
        return hash(self.instance_id)

    def __eq__(self, other):
        if not isinstance(other, CardInstance):
            return False
        return self.instance_id == other.instance_id

    def __repr__(self):
        return f"CardInstance({self.card_id!r}, {self.instance_id!r}, {self.zone.value})"


@dataclass
class Zone:
    """
    A container of card instances owned by one player.

    Mutable: the match owns its zones and moves cards between them.
    Iteration order is insertion order, which is also hook firing order.
    """
    zone_type: ZoneType
    cards: list[CardInstance] = field(default_factory=list)

    @property
    def ordered(self) -> bool:
        return self.zone_type in ORDERED_ZONES

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    @property
    def top_card(self) -> CardInstance | None:
        """The card that would be drawn next (decks draw from the top)."""
        return self.cards[0] if self.cards else None

    def add(self, card: CardInstance, position: int | None = None) -> None:
        """Append the card, or insert it at position for ordered zones."""
        if position is not None and self.ordered:
            self.cards.insert(position, card)
        else:
            self.cards.append(card)

    def remove(self, card: CardInstance) -> bool:
        """Remove the card. Returns False if it was not here."""
        for i, c in enumerate(self.cards):
            if c.instance_id == card.instance_id:
                del self.cards[i]
                return True
        return False

    def contains(self, card: CardInstance) -> bool:
        return any(c.instance_id == card.instance_id for c in self.cards)

    def get(self, instance_id: str) -> CardInstance | None:
        for c in self.cards:
            if c.instance_id == instance_id:
                return c
        return None

    def instance_ids(self) -> list[str]:
        return [c.instance_id for c in self.cards]

    def __iter__(self):
        return iter(self.cards)

    def __len__(self):
        return len(self.cards)


def _empty_zones() -> dict[ZoneType, Zone]:
    return {zone_type: Zone(zone_type) for zone_type in ZoneType}


@dataclass
class UserInfo:
    """The identity of a connected user (authentication is external)."""
    uid: str
    username: str


@dataclass
class DeckInfo:
    """A deck a user may play: card ids in list order."""
    deck_id: str
    name: str
    card_ids: list[str] = field(default_factory=list)
    standard: bool = False


@dataclass
class PlayerState:
    """
    State for a single player in a match.

    The connection is opaque to the engine; it is only handed back
    to the transport collaborator.
    """
    user: UserInfo
    connection: Any = None

    # Decks this player may choose from, and the confirmed choice
    decks: list[DeckInfo] = field(default_factory=list)
    chosen_deck: DeckInfo | None = None

    zones: dict[ZoneType, Zone] = field(default_factory=_empty_zones)

    # Turn-action permissions, reset at the start of every turn
    can_charge: bool = True

    @property
    def player_id(self) -> str:
        return self.user.uid

    @property
    def name(self) -> str:
        return self.user.username

    def zone(self, zone_type: ZoneType) -> Zone:
        return self.zones[zone_type]

    @property
    def deck(self) -> Zone:
        return self.zones[ZoneType.DECK]

    @property
    def hand(self) -> Zone:
        return self.zones[ZoneType.HAND]

    @property
    def shield_zone(self) -> Zone:
        return self.zones[ZoneType.SHIELD_ZONE]

    @property
    def mana_zone(self) -> Zone:
        return self.zones[ZoneType.MANA_ZONE]

    @property
    def graveyard(self) -> Zone:
        return self.zones[ZoneType.GRAVEYARD]

    @property
    def battle_zone(self) -> Zone:
        return self.zones[ZoneType.BATTLE_ZONE]

    @property
    def hidden_zone(self) -> Zone:
        return self.zones[ZoneType.HIDDEN_ZONE]

    def find_card(self, instance_id: str) -> CardInstance | None:
        """Find one of this player's cards in any zone."""
        for zone in self.zones.values():
            card = zone.get(instance_id)
            if card is not None:
                return card
        return None

    def all_cards(self) -> list[CardInstance]:
        return [card for zone in self.zones.values() for card in zone.cards]

    def find_deck(self, deck_id: str) -> DeckInfo | None:
        for deck in self.decks:
            if deck.deck_id == deck_id:
                return deck
        return None


@dataclass
class MatchState:
    """
    Complete state of one match.

    This is the canonical state that the engine operates on.
    Exactly one player is active (player_turn) once the match has started.
    """
    match_id: str
    invite_id: str
    name: str = ""
    description: str = ""
    host_id: str | None = None

    phase: Phase = Phase.IDLE
    turn_number: int = 0

    player1: PlayerState | None = None
    player2: PlayerState | None = None
    player_turn: PlayerState | None = None

    # Outcome
    winner_id: str | None = None
    loser_id: str | None = None
    game_over_reason: str | None = None

    # Random seed for determinism
    random_seed: int | None = None
    rng: random.Random = field(init=False, repr=False)

    # History (for replay, logging)
    action_history: list[Any] = field(default_factory=list)

    created_at: float = field(default_factory=time.time)
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.rng = random.Random(self.random_seed)

    @property
    def players(self) -> list[PlayerState]:
        """Connected players, in join order."""
        return [p for p in (self.player1, self.player2) if p is not None]

    @property
    def is_full(self) -> bool:
        return self.player1 is not None and self.player2 is not None

    @property
    def is_started(self) -> bool:
        return self.player_turn is not None

    @property
    def is_over(self) -> bool:
        return self.game_over_reason is not None

    def get_player(self, player_id: str) -> PlayerState | None:
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def opponent_of(self, player: PlayerState) -> PlayerState | None:
        if self.player1 is player:
            return self.player2
        if self.player2 is player:
            return self.player1
        return None

    def find_card(self, instance_id: str) -> CardInstance | None:
        """Find a card instance anywhere in the match."""
        for p in self.players:
            card = p.find_card(instance_id)
            if card is not None:
                return card
        return None

    def owner_of(self, card: CardInstance) -> PlayerState | None:
        return self.get_player(card.owner_id)
