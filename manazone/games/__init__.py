"""
Games module - Game-specific content for the engine.

Each game has its own subpackage with:
- Effect tags and their handlers
- Card definitions registered on a CardRegistry
- Standard decks
- Opening setup (deck instantiation, shields, hand)
"""
