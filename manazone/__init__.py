"""
Manazone - Two-player card game match engine

A deterministic engine for Duel Masters-style matches between two
connected players. The engine provides:
- Match lobby (create, join with invite, choose deck, start)
- Zone model where every card move fires lifecycle hooks
- Turn phase state machine with explicit suspension points
- Effect tags that give cards reusable behaviours
"""

__version__ = "0.1.0"
