"""
Tests for the card template registry.

Tests:
- Template construction from factories
- Memoised shared templates
- Unknown cards and unknown effect tags
- The bundled DM-01 catalog
"""

import pytest

from ..engine_core.effects import EffectRegistry
from ..engine_core.errors import UnknownCard, UnknownEffect
from ..engine_core.registry import CardBuilder, CardRegistry
from ..engine_core.state import Civilization
from ..games.duel_masters import DM01_CARDS, fx
from ..games.duel_masters.races import Race


class TestCardRegistry:
    """Tests for CardRegistry."""

    def test_get_builds_template(self, registry):
        """The factory fills in every field of the template."""
        spider = registry.get("dm01-bone-spider")

        assert spider.name == "Bone Spider"
        assert spider.power == 5000
        assert spider.civilizations == (Civilization.DARKNESS,)
        assert spider.family == Race.LIVING_DEAD
        assert spider.mana_cost == 3
        assert spider.mana_requirement == (Civilization.DARKNESS,)
        assert spider.effects == (fx.CREATURE, fx.SUICIDE)
        assert spider.is_creature

    def test_get_returns_fresh_template(self, registry):
        """get() invokes the factory every time."""
        first = registry.get("dm01-bone-spider")
        second = registry.get("dm01-bone-spider")

        assert first == second
        assert first is not second

    def test_template_is_shared(self, registry):
        """template() hands every caller the same object."""
        assert registry.template("dm01-bone-spider") is registry.template("dm01-bone-spider")

    def test_unknown_card(self, registry):
        with pytest.raises(UnknownCard) as exc:
            registry.get("dm01-no-such-card")
        assert exc.value.card_id == "dm01-no-such-card"

    def test_duplicate_registration_fails(self, registry):
        with pytest.raises(ValueError):
            registry.register("dm01-bone-spider", DM01_CARDS["dm01-bone-spider"])

    def test_unknown_effect_fails_at_construction(self):
        """A misspelled tag fails when the template is built, not mid-match."""
        effects = EffectRegistry()
        effects.effect("Creature")
        registry = CardRegistry(effects)

        def typo(c: CardBuilder):
            c.name = "Typo"
            c.use("Creature", "Sucide")

        registry.register("typo", typo)
        with pytest.raises(UnknownEffect) as exc:
            registry.get("typo")
        assert exc.value.effect == "Sucide"
        assert exc.value.card_id == "typo"

    def test_negative_power_rejected(self):
        registry = CardRegistry(EffectRegistry())

        def broken(c: CardBuilder):
            c.power = -1000

        registry.register("broken", broken)
        with pytest.raises(ValueError):
            registry.get("broken")

    def test_multicolor_card(self):
        registry = CardRegistry(EffectRegistry())

        def rainbow(c: CardBuilder):
            c.civ = [Civilization.FIRE, Civilization.NATURE]
            c.mana_requirement = [Civilization.FIRE, Civilization.NATURE]

        registry.register("rainbow", rainbow)
        template = registry.get("rainbow")

        assert template.is_multicolor
        assert template.civilizations == (Civilization.FIRE, Civilization.NATURE)
        assert template.name == "rainbow"  # Defaults to the id

    def test_bindings_follow_tag_order(self, registry):
        spider = registry.template("dm01-bone-spider")
        assert [b.effect for b in spider.bindings] == [fx.CREATURE, fx.SUICIDE]


class TestCatalog:
    """Tests for the bundled DM-01 catalog."""

    def test_catalog_validates(self, registry):
        assert registry.validate() == len(DM01_CARDS)

    def test_living_dead_cards(self, registry):
        assassin = registry.template("dm01-bone-assassin-the-ripper")
        soldier = registry.template("dm01-skeleton-soldier-the-defiled")

        assert (assassin.power, assassin.mana_cost) == (2000, 4)
        assert assassin.has_effect(fx.SLAYER)
        assert (soldier.power, soldier.mana_cost) == (3000, 4)
        assert soldier.has_effect(fx.SUICIDE)

    def test_spells_are_not_creatures(self, registry):
        hammer = registry.template("dm01-crimson-hammer")
        assert not hammer.is_creature
        assert hammer.power == 0
        assert hammer.bindings == ()
