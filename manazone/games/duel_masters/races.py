"""
Duel Masters Races - Creature families.

A creature's race (family) is a plain string tag on its template.
Races matter to evolution creatures and to effects that count
"your Living Dead" and the like.
"""


class Race:
    """Race names as printed on the cards."""
    # Light
    GUARDIAN = "Guardian"
    LIGHT_BRINGER = "Light Bringer"
    INITIATE = "Initiate"

    # Water
    LIQUID_PEOPLE = "Liquid People"
    GEL_FISH = "Gel Fish"

    # Darkness
    LIVING_DEAD = "Living Dead"
    GHOST = "Ghost"

    # Fire
    HUMAN = "Human"
    DUNE_GECKO = "Dune Gecko"
    DRAGONOID = "Dragonoid"

    # Nature
    BEAST_FOLK = "Beast Folk"
