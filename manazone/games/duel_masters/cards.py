"""
Duel Masters Cards - Card factories for a subset of DM-01.

One factory per card. The factory only describes the card; what an
effect tag does lives in fx.py.

Card ids are "dm01-<name>". Spells are listed so decks can charge
them as mana; casting is not implemented.
"""

from __future__ import annotations

from ...engine_core.effects import EffectRegistry
from ...engine_core.registry import CardBuilder, CardFactory, CardRegistry
from ...engine_core.state import Civilization
from . import fx
from .races import Race


# =============================================================================
# Light
# =============================================================================

def dia_nork_moonlight_guardian(c: CardBuilder):
    c.name = "Dia Nork, Moonlight Guardian"
    c.power = 5000
    c.civ = Civilization.LIGHT
    c.family = Race.GUARDIAN
    c.mana_cost = 4
    c.mana_requirement = [Civilization.LIGHT]
    c.use(fx.CREATURE, fx.BLOCKER)


def gran_gure_space_guardian(c: CardBuilder):
    c.name = "Gran Gure, Space Guardian"
    c.power = 9000
    c.civ = Civilization.LIGHT
    c.family = Race.GUARDIAN
    c.mana_cost = 6
    c.mana_requirement = [Civilization.LIGHT]
    c.use(fx.CREATURE, fx.BLOCKER)


def chilias_the_oracle(c: CardBuilder):
    c.name = "Chilias, the Oracle"
    c.power = 2500
    c.civ = Civilization.LIGHT
    c.family = Race.LIGHT_BRINGER
    c.mana_cost = 4
    c.mana_requirement = [Civilization.LIGHT]
    c.use(fx.CREATURE)


def holy_awe(c: CardBuilder):
    c.name = "Holy Awe"
    c.civ = Civilization.LIGHT
    c.mana_cost = 6
    c.mana_requirement = [Civilization.LIGHT]
    c.use(fx.SPELL)


# =============================================================================
# Water
# =============================================================================

def aqua_hulcus(c: CardBuilder):
    c.name = "Aqua Hulcus"
    c.power = 2000
    c.civ = Civilization.WATER
    c.family = Race.LIQUID_PEOPLE
    c.mana_cost = 3
    c.mana_requirement = [Civilization.WATER]
    c.use(fx.CREATURE)


def saucer_head_shark(c: CardBuilder):
    c.name = "Saucer-Head Shark"
    c.power = 3000
    c.civ = Civilization.WATER
    c.family = Race.GEL_FISH
    c.mana_cost = 5
    c.mana_requirement = [Civilization.WATER]
    c.use(fx.CREATURE)


def spiral_gate(c: CardBuilder):
    c.name = "Spiral Gate"
    c.civ = Civilization.WATER
    c.mana_cost = 2
    c.mana_requirement = [Civilization.WATER]
    c.use(fx.SPELL)


# =============================================================================
# Darkness
# =============================================================================

def bone_assassin_the_ripper(c: CardBuilder):
    c.name = "Bone Assassin, the Ripper"
    c.power = 2000
    c.civ = Civilization.DARKNESS
    c.family = Race.LIVING_DEAD
    c.mana_cost = 4
    c.mana_requirement = [Civilization.DARKNESS]
    c.use(fx.CREATURE, fx.SLAYER)


def bone_spider(c: CardBuilder):
    c.name = "Bone Spider"
    c.power = 5000
    c.civ = Civilization.DARKNESS
    c.family = Race.LIVING_DEAD
    c.mana_cost = 3
    c.mana_requirement = [Civilization.DARKNESS]
    c.use(fx.CREATURE, fx.SUICIDE)


def skeleton_soldier_the_defiled(c: CardBuilder):
    c.name = "Skeleton Soldier, the Defiled"
    c.power = 3000
    c.civ = Civilization.DARKNESS
    c.family = Race.LIVING_DEAD
    c.mana_cost = 4
    c.mana_requirement = [Civilization.DARKNESS]
    c.use(fx.CREATURE, fx.SUICIDE)


def dark_raven_shadow_of_grief(c: CardBuilder):
    c.name = "Dark Raven, Shadow of Grief"
    c.power = 1000
    c.civ = Civilization.DARKNESS
    c.family = Race.GHOST
    c.mana_cost = 4
    c.mana_requirement = [Civilization.DARKNESS]
    c.use(fx.CREATURE, fx.BLOCKER)


def ghost_touch(c: CardBuilder):
    c.name = "Ghost Touch"
    c.civ = Civilization.DARKNESS
    c.mana_cost = 2
    c.mana_requirement = [Civilization.DARKNESS]
    c.use(fx.SPELL)


# =============================================================================
# Fire
# =============================================================================

def deadly_fighter_braid_claw(c: CardBuilder):
    c.name = "Deadly Fighter Braid Claw"
    c.power = 1000
    c.civ = Civilization.FIRE
    c.family = Race.DUNE_GECKO
    c.mana_cost = 1
    c.mana_requirement = [Civilization.FIRE]
    c.use(fx.CREATURE)


def immortal_baron_vorg(c: CardBuilder):
    c.name = "Immortal Baron, Vorg"
    c.power = 2000
    c.civ = Civilization.FIRE
    c.family = Race.HUMAN
    c.mana_cost = 2
    c.mana_requirement = [Civilization.FIRE]
    c.use(fx.CREATURE)


def explosive_fighter_ucarn(c: CardBuilder):
    c.name = "Explosive Fighter Ucarn"
    c.power = 9000
    c.civ = Civilization.FIRE
    c.family = Race.DRAGONOID
    c.mana_cost = 5
    c.mana_requirement = [Civilization.FIRE]
    c.use(fx.CREATURE)


def pyrofighter_magnus(c: CardBuilder):
    c.name = "Pyrofighter Magnus"
    c.power = 3000
    c.civ = Civilization.FIRE
    c.family = Race.DRAGONOID
    c.mana_cost = 3
    c.mana_requirement = [Civilization.FIRE]
    c.use(fx.CREATURE, fx.SPEED_ATTACKER)


def crimson_hammer(c: CardBuilder):
    c.name = "Crimson Hammer"
    c.civ = Civilization.FIRE
    c.mana_cost = 2
    c.mana_requirement = [Civilization.FIRE]
    c.use(fx.SPELL)


# =============================================================================
# Nature
# =============================================================================

def bronze_arm_tribe(c: CardBuilder):
    c.name = "Bronze-Arm Tribe"
    c.power = 1000
    c.civ = Civilization.NATURE
    c.family = Race.BEAST_FOLK
    c.mana_cost = 3
    c.mana_requirement = [Civilization.NATURE]
    c.use(fx.CREATURE)


def burning_mane(c: CardBuilder):
    c.name = "Burning Mane"
    c.power = 2000
    c.civ = Civilization.NATURE
    c.family = Race.BEAST_FOLK
    c.mana_cost = 2
    c.mana_requirement = [Civilization.NATURE]
    c.use(fx.CREATURE)


def fear_fang(c: CardBuilder):
    c.name = "Fear Fang"
    c.power = 3000
    c.civ = Civilization.NATURE
    c.family = Race.BEAST_FOLK
    c.mana_cost = 3
    c.mana_requirement = [Civilization.NATURE]
    c.use(fx.CREATURE)


def natural_snare(c: CardBuilder):
    c.name = "Natural Snare"
    c.civ = Civilization.NATURE
    c.mana_cost = 6
    c.mana_requirement = [Civilization.NATURE]
    c.use(fx.SPELL)


# =============================================================================
# Catalog
# =============================================================================

DM01_CARDS: dict[str, CardFactory] = {
    "dm01-dia-nork-moonlight-guardian": dia_nork_moonlight_guardian,
    "dm01-gran-gure-space-guardian": gran_gure_space_guardian,
    "dm01-chilias-the-oracle": chilias_the_oracle,
    "dm01-holy-awe": holy_awe,
    "dm01-aqua-hulcus": aqua_hulcus,
    "dm01-saucer-head-shark": saucer_head_shark,
    "dm01-spiral-gate": spiral_gate,
    "dm01-bone-assassin-the-ripper": bone_assassin_the_ripper,
    "dm01-bone-spider": bone_spider,
    "dm01-skeleton-soldier-the-defiled": skeleton_soldier_the_defiled,
    "dm01-dark-raven-shadow-of-grief": dark_raven_shadow_of_grief,
    "dm01-ghost-touch": ghost_touch,
    "dm01-deadly-fighter-braid-claw": deadly_fighter_braid_claw,
    "dm01-immortal-baron-vorg": immortal_baron_vorg,
    "dm01-explosive-fighter-ucarn": explosive_fighter_ucarn,
    "dm01-pyrofighter-magnus": pyrofighter_magnus,
    "dm01-crimson-hammer": crimson_hammer,
    "dm01-bronze-arm-tribe": bronze_arm_tribe,
    "dm01-burning-mane": burning_mane,
    "dm01-fear-fang": fear_fang,
    "dm01-natural-snare": natural_snare,
}


def create_registry(effects: EffectRegistry | None = None) -> CardRegistry:
    """
    Create a registry holding the full catalog.

    Pass `effects` to resolve tags against a different dispatch table
    (tests register extra tags this way).
    """
    registry = CardRegistry(effects or fx.effects)
    registry.register_all(DM01_CARDS)
    return registry
