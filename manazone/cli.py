"""
Manazone CLI - Command-line interface for the match engine.

Usage:
    manazone serve [--host H] [--port P]   Run the match server
    manazone cards                         List the card catalog
    manazone demo [--seed N] [--turns N]   Play a scripted match in-process
"""

import argparse
import logging
import sys

from .config import EngineConfig


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Manazone - Two-player card game match engine",
        prog="manazone",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the match server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    # Cards command
    subparsers.add_parser("cards", help="List the card catalog")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Play a scripted match in-process")
    demo_parser.add_argument("--seed", type=int, default=None, help="Match rng seed")
    demo_parser.add_argument("--turns", type=int, default=6, help="Turns to play")

    args = parser.parse_args(argv)

    config = EngineConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        cmd_serve(args, config)
    elif args.command == "cards":
        cmd_cards(args)
    elif args.command == "demo":
        cmd_demo(args, config)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args, config: EngineConfig):
    """Run the match server with uvicorn."""
    import uvicorn

    print(f"Serving on http://{args.host}:{args.port} ({config.env})")
    uvicorn.run(
        "manazone.api.app:create_app_from_env",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=config.log_level.lower(),
    )


def cmd_cards(args):
    """List the card catalog."""
    from .games.duel_masters import create_registry

    registry = create_registry()
    registry.validate()
    for card_id in registry.card_ids():
        t = registry.template(card_id)
        civs = "/".join(civ.value for civ in t.civilizations)
        kind = f"{t.power:>5}" if t.is_creature else "spell"
        print(f"{card_id:<40} {t.name:<32} {civs:<10} cost {t.mana_cost}  {kind}  {', '.join(t.effects)}")
    print(f"\n{len(registry)} cards")


def cmd_demo(args, config: EngineConfig):
    """
    Play a scripted match: each turn the active player charges the
    first card in hand, summons the first creature it can pay for,
    then ends the turn.
    """
    from .engine_core.action import Action
    from .engine_core.state import UserInfo
    from .games.duel_masters import STANDARD_DECKS, create_registry
    from .session import InMemoryDeckStore, MatchLoop, MatchManager, OutboxTransport

    registry = create_registry()
    registry.validate()
    transport = OutboxTransport()
    manager = MatchManager(
        registry=registry,
        deck_store=InMemoryDeckStore(STANDARD_DECKS),
        transport=transport,
        shields=config.shields,
        hand_size=config.hand_size,
    )

    seed = args.seed if args.seed is not None else config.random_seed
    match = manager.create_match("demo", name="Demo match", random_seed=seed)
    alice = manager.add_player("alice-conn", UserInfo("alice", "Alice"), match.match_id, match.invite_id)
    bob = manager.add_player("bob-conn", UserInfo("bob", "Bob"), match.match_id, match.invite_id)

    loops = {
        alice.player_id: MatchLoop(manager, match, alice),
        bob.player_id: MatchLoop(manager, match, bob),
    }
    loops["alice"].handle({"type": "choose_deck", "deck_id": STANDARD_DECKS[0].deck_id})
    loops["bob"].handle({"type": "choose_deck", "deck_id": STANDARD_DECKS[1].deck_id})
    print(f"Match {match.match_id}: {match.player_turn.name} goes first\n")

    for _ in range(args.turns):
        if match.is_over:
            break
        player = match.player_turn
        loop = loops[player.player_id]

        if player.hand.cards:
            result = loop.handle({"type": "action", "action": "charge_mana", "card_id": player.hand.cards[0].instance_id})
        else:
            result = loop.handle({"type": "action", "action": "pass"})
        for change in result.state_changes:
            print(f"  turn {match.turn_number}: {change}")

        for card in list(player.hand.cards):
            if not card.template.is_creature:
                continue
            outcome = manager.handle_action(match, Action.summon(player.player_id, card.instance_id))
            if outcome.success:
                for change in outcome.state_changes:
                    print(f"  turn {match.turn_number}: {change}")
                break

        loop.handle({"type": "action", "action": "end_turn"})

    print()
    for player in match.players:
        print(
            f"{player.name}: hand {player.hand.count}, mana {player.mana_zone.count}, "
            f"battle zone {player.battle_zone.count}, deck {player.deck.count}"
        )
    if match.is_over:
        print(f"Winner: {match.winner_id} ({match.game_over_reason})")
    print(f"{len(transport.sent)} messages sent")


if __name__ == "__main__":
    main()
