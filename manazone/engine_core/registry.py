"""
Card Registry - Maps card ids to immutable card templates.

Card authors write one factory per card. The factory receives a blank
CardBuilder and fills it in declaratively:

    def bone_spider(c: CardBuilder):
        c.name = "Bone Spider"
        c.power = 5000
        c.civ = Civilization.DARKNESS
        c.family = Race.LIVING_DEAD
        c.mana_cost = 3
        c.mana_requirement = [Civilization.DARKNESS]
        c.use(fx.CREATURE, fx.SUICIDE)

The registry freezes the builder into a CardTemplate and resolves its
effect tags against the EffectRegistry. The registry itself knows
nothing about what cards do.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Iterable
import logging

from .state import Civilization
from .effects import EffectBinding, EffectRegistry
from .errors import UnknownCard


logger = logging.getLogger(__name__)

# Tag that makes a template a creature (summonable, has power)
CREATURE_EFFECT = "Creature"


@dataclass
class CardBuilder:
    """Blank, mutable card handed to a card factory."""
    card_id: str
    name: str = ""
    power: int = 0
    civ: Civilization | list[Civilization] | None = None
    family: str | None = None
    mana_cost: int = 0
    mana_requirement: list[Civilization] = field(default_factory=list)
    effects: list[str] = field(default_factory=list)

    def use(self, *effects: str) -> None:
        """Attach effect tags, in order."""
        self.effects.extend(effects)


@dataclass(frozen=True)
class CardTemplate:
    """
    Immutable card definition, shared by every copy of the card.

    `bindings` are the effect tags resolved into (event, handler) pairs.
    """
    card_id: str
    name: str
    power: int
    civilizations: tuple[Civilization, ...]
    family: str | None
    mana_cost: int
    mana_requirement: tuple[Civilization, ...]
    effects: tuple[str, ...] = ()
    bindings: tuple[EffectBinding, ...] = field(default=(), repr=False, compare=False)

    @property
    def is_multicolor(self) -> bool:
        return len(self.civilizations) > 1

    @property
    def is_creature(self) -> bool:
        return CREATURE_EFFECT in self.effects

    def has_effect(self, name: str) -> bool:
        return name in self.effects


CardFactory = Callable[[CardBuilder], None]


class CardRegistry:
    """
    Catalog of card factories keyed by card id.

    Usage:
        registry = CardRegistry(effects)
        registry.register("dm01-bone-spider", bone_spider)
        registry.validate()            # at process start
        template = registry.template("dm01-bone-spider")
    """

    def __init__(self, effects: EffectRegistry):
        self.effects = effects
        self._factories: dict[str, CardFactory] = {}
        self._templates: dict[str, CardTemplate] = {}

    def register(self, card_id: str, factory: CardFactory) -> None:
        if card_id in self._factories:
            raise ValueError(f"Card already registered: {card_id}")
        self._factories[card_id] = factory

    def register_all(self, factories: dict[str, CardFactory]) -> None:
        for card_id, factory in factories.items():
            self.register(card_id, factory)

    def __contains__(self, card_id: str) -> bool:
        return card_id in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def card_ids(self) -> list[str]:
        return list(self._factories)

    def get(self, card_id: str) -> CardTemplate:
        """
        Build a fresh template by invoking the card's factory.

        Raises UnknownCard if the id is not registered, UnknownEffect if
        the factory declares an effect tag with no registration.
        """
        factory = self._factories.get(card_id)
        if factory is None:
            raise UnknownCard(card_id)
        builder = CardBuilder(card_id=card_id)
        factory(builder)
        return self._freeze(builder)

    def template(self, card_id: str) -> CardTemplate:
        """The shared template for a card id (built once, then reused)."""
        template = self._templates.get(card_id)
        if template is None:
            template = self.get(card_id)
            self._templates[card_id] = template
        return template

    def templates(self, card_ids: Iterable[str]) -> list[CardTemplate]:
        return [self.template(card_id) for card_id in card_ids]

    def validate(self) -> int:
        """Build every registered card once. Returns the catalog size."""
        for card_id in self._factories:
            self.template(card_id)
        logger.info("Card catalog validated: %d cards", len(self._factories))
        return len(self._factories)

    def _freeze(self, builder: CardBuilder) -> CardTemplate:
        if builder.power < 0:
            raise ValueError(f"{builder.card_id}: power must be >= 0")
        if builder.mana_cost < 0:
            raise ValueError(f"{builder.card_id}: mana cost must be >= 0")

        if builder.civ is None:
            civs: tuple[Civilization, ...] = ()
        elif isinstance(builder.civ, Civilization):
            civs = (builder.civ,)
        else:
            civs = tuple(builder.civ)

        bindings = self.effects.resolve(builder.effects, card_id=builder.card_id)

        return CardTemplate(
            card_id=builder.card_id,
            name=builder.name or builder.card_id,
            power=builder.power,
            civilizations=civs,
            family=builder.family,
            mana_cost=builder.mana_cost,
            mana_requirement=tuple(builder.mana_requirement),
            effects=tuple(builder.effects),
            bindings=bindings,
        )
