"""
Match Manager - Creates matches and takes them from lobby to first turn.

LIFECYCLE:
1. Host creates a match -> match id + invite id, phase IDLE
2. Two players connect with the invite id
   - Each player's decks are loaded from the deck store
   - When both are present the match enters CHOOSE_DECK and both
     players are sent their deck lists
3. Each player confirms a deck
4. Once both decks are confirmed the match starts:
   - Decks are instantiated, shuffled, shields and hands dealt
   - The starting player is picked with the match rng
   - The turn engine runs the first player's forced steps
5. Play continues through the reducer until a player loses
6. The match is ended explicitly, or collected as stale

Matches are in-memory only. No persistence.

Rejections (bad invite, full match, unknown deck) are sent to the
offending connection only; the match is not touched.
"""

from __future__ import annotations
from typing import Any
import logging
import time
import uuid

from ..engine_core.action import Action, ActionResult
from ..engine_core.effects import EffectDispatcher
from ..engine_core.errors import InviteMismatch, JoinError, MatchFull, MatchUnavailable
from ..engine_core.reducer import Reducer
from ..engine_core.registry import CardRegistry
from ..engine_core.snapshot import snapshot_for
from ..engine_core.state import MatchState, Phase, PlayerState, UserInfo
from ..engine_core.turn import TurnEngine
from ..games.duel_masters.decks import validate_deck
from ..games.duel_masters.setup import OPENING_HAND, SHIELD_COUNT, create_deck, setup_player
from .collaborators import DeckStore, MatchTransport


logger = logging.getLogger(__name__)


class MatchManager:
    """
    Process-wide registry of matches.

    Responsibilities:
    - Create matches and admit players
    - Deck choice and match start
    - Route player actions to the reducer
    - Broadcast per-player snapshots
    - End and clean up matches

    All methods are synchronous; callers serialise access per match.
    """

    def __init__(
        self,
        registry: CardRegistry,
        deck_store: DeckStore,
        transport: MatchTransport,
        effects: EffectDispatcher | None = None,
        shields: int = SHIELD_COUNT,
        hand_size: int = OPENING_HAND,
        random_seed: int | None = None,
    ):
        self.registry = registry
        self.deck_store = deck_store
        self.transport = transport
        self.shields = shields
        self.hand_size = hand_size
        self.random_seed = random_seed

        self.engine = TurnEngine(effects, broadcast=self.broadcast)
        self.reducer = Reducer(engine=self.engine)

        self._matches: dict[str, MatchState] = {}

    # =========================================================================
    # Lobby
    # =========================================================================

    def create_match(
        self,
        host_id: str,
        name: str = "",
        description: str = "",
        random_seed: int | None = None,
    ) -> MatchState:
        """
        Create a new match waiting for players.

        Args:
            host_id: User id of the creator
            name: Display name
            description: Free text
            random_seed: Seed for the match rng (defaults to the manager's)

        Returns:
            New MatchState in IDLE
        """
        match = MatchState(
            match_id=str(uuid.uuid4()),
            invite_id=uuid.uuid4().hex,
            name=name,
            description=description,
            host_id=host_id,
            random_seed=random_seed if random_seed is not None else self.random_seed,
        )
        self._matches[match.match_id] = match
        logger.info("Created match %s (%s) for %s", match.match_id, name or "unnamed", host_id)
        return match

    def get_match(self, match_id: str) -> MatchState | None:
        """Get a match by ID."""
        return self._matches.get(match_id)

    def list_matches(self) -> list[MatchState]:
        return list(self._matches.values())

    def add_player(
        self,
        connection: Any,
        user: UserInfo,
        match_id: str,
        invite_id: str,
    ) -> PlayerState | None:
        """
        Admit a connecting user to a match.

        Returns the new PlayerState, or None if the user was rejected
        (the reason is sent to the connection).
        """
        try:
            match = self._check_joinable(match_id, invite_id, user)
        except JoinError as e:
            logger.info("Rejected %s joining %s: %s", user.uid, match_id, e.message)
            self.transport.send_error(connection, e.message)
            return None

        player = PlayerState(
            user=user,
            connection=connection,
            decks=self.deck_store.load_decks_for_user(user.uid),
        )
        if match.player1 is None:
            match.player1 = player
        else:
            match.player2 = player
        logger.info("%s joined match %s", user.username, match.match_id)

        if match.is_full:
            match.phase = Phase.CHOOSE_DECK
            for p in match.players:
                self.transport.send_choose_deck(p.connection, p.decks)

        return player

    def _check_joinable(self, match_id: str, invite_id: str, user: UserInfo) -> MatchState:
        match = self._matches.get(match_id)
        if match is None or match.is_over:
            raise MatchUnavailable("Match is no longer available")
        if match.is_started:
            raise MatchUnavailable("Match is currently in progress")
        if invite_id != match.invite_id:
            raise InviteMismatch("Invite id does not match")
        if match.is_full:
            raise MatchFull("Both players have already connected")
        if match.get_player(user.uid) is not None:
            raise JoinError("You are already connected to this match")
        return match

    def player_disconnected(self, player: PlayerState) -> None:
        """Forget a player's connection; the match itself is kept."""
        player.connection = None

    # =========================================================================
    # Deck choice and start
    # =========================================================================

    def player_choose_deck(self, player: PlayerState, deck_id: str) -> bool:
        """
        Confirm the player's deck, then start the match if both are ready.

        Returns False (and sends the reason to the player) if the deck
        cannot be chosen.
        """
        match = self.match_of(player)
        if match is None or match.phase != Phase.CHOOSE_DECK:
            self.transport.send_error(player.connection, "You cannot choose a deck right now")
            return False

        deck = player.find_deck(deck_id)
        if deck is None:
            logger.warning("%s tried to use deck %s without rights", player.name, deck_id)
            self.transport.send_error(player.connection, "You do not have the rights to use that deck")
            return False

        unknown = [card_id for card_id in deck.card_ids if card_id not in self.registry]
        if unknown:
            self.transport.send_error(
                player.connection, f"Deck {deck.name} contains unknown card {unknown[0]}"
            )
            return False

        problems = validate_deck(deck.card_ids)
        if problems:
            self.transport.send_error(player.connection, f"Deck {deck.name} is not legal: {problems[0]}")
            return False

        player.chosen_deck = deck
        logger.info("%s chose deck %s in match %s", player.name, deck.name, match.match_id)

        self.try_start_match(match)
        return True

    def try_start_match(self, match: MatchState) -> bool:
        """
        Start the match if both players have confirmed a deck.

        Returns False, changing nothing, if the match is not ready.
        """
        if match.phase != Phase.CHOOSE_DECK or not match.is_full:
            return False
        if any(p.chosen_deck is None for p in match.players):
            return False

        for player in match.players:
            create_deck(self.registry, player, player.chosen_deck.card_ids)
            setup_player(match, player, shields=self.shields, hand_size=self.hand_size)

        match.player_turn = match.player1 if match.rng.random() > 0.5 else match.player2
        match.turn_number = 1
        logger.info("Match %s started, %s goes first", match.match_id, match.player_turn.name)

        self.broadcast(match)
        self.engine.begin_turn(match)
        return True

    # =========================================================================
    # Play
    # =========================================================================

    def handle_action(self, match: MatchState, action: Action) -> ActionResult:
        """Apply a player action. A rejection is sent to the acting player only."""
        result = self.reducer.apply(match, action)
        if not result.success:
            player = match.get_player(action.payload.player_id or "")
            if player is not None:
                self.transport.send_error(player.connection, result.error or "Action rejected")
        return result

    def broadcast(self, match: MatchState) -> None:
        """Send each connected player the snapshot they may see."""
        for player in match.players:
            if player.connection is not None:
                self.transport.send_snapshot(player.connection, snapshot_for(match, player))

    def match_of(self, player: PlayerState) -> MatchState | None:
        for match in self._matches.values():
            if match.player1 is player or match.player2 is player:
                return match
        return None

    # =========================================================================
    # Cleanup
    # =========================================================================

    def end_match(self, match_id: str, reason: str = "completed") -> bool:
        """
        End a match and remove it from memory.

        Returns False if there was no such match.
        """
        match = self._matches.pop(match_id, None)
        if match is None:
            return False
        logger.info("Ended match %s (%s)", match_id, reason)
        for player in match.players:
            player.connection = None
        return True

    def cleanup_stale_matches(self, max_age_seconds: int = 3600) -> list[str]:
        """
        Remove matches older than max_age that are finished or never started.

        Returns the ids of the removed matches.
        """
        current_time = time.time()
        to_remove = [
            match_id for match_id, match in self._matches.items()
            if current_time - match.created_at > max_age_seconds
            and (match.is_over or not match.is_started)
        ]

        for match_id in to_remove:
            self.end_match(match_id, reason="stale")
        return to_remove
