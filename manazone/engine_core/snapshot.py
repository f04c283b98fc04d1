"""
Snapshots - The logical state view sent to players.

A snapshot lists the active player, the phase and every player's
zones by instance id. Card identities are revealed only where the
viewer may see them: public zones and the viewer's own hand.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any

from .state import CardInstance, MatchState, PlayerState, ZoneType, PUBLIC_ZONES


@dataclass
class CardView:
    instance_id: str
    card_id: str | None = None  # None when hidden from the viewer
    name: str | None = None
    tapped: bool = False
    summoning_sickness: bool = False


@dataclass
class ZoneView:
    zone: str
    count: int
    cards: list[CardView] = field(default_factory=list)


@dataclass
class PlayerView:
    player_id: str
    username: str
    is_active: bool
    deck_chosen: bool
    zones: dict[str, ZoneView] = field(default_factory=dict)


@dataclass
class MatchSnapshot:
    """State of a match as seen by one player."""
    match_id: str
    viewer_id: str | None
    phase: str
    turn_number: int
    active_player_id: str | None
    players: list[PlayerView] = field(default_factory=list)
    winner_id: str | None = None
    loser_id: str | None = None
    game_over_reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _card_view(card: CardInstance, visible: bool) -> CardView:
    if not visible:
        return CardView(instance_id=card.instance_id)
    return CardView(
        instance_id=card.instance_id,
        card_id=card.card_id,
        name=card.name,
        tapped=card.tapped,
        summoning_sickness=card.summoning_sickness,
    )


def _player_view(match: MatchState, player: PlayerState, viewer_id: str | None) -> PlayerView:
    zones = {}
    for zone_type, zone in player.zones.items():
        visible = zone_type in PUBLIC_ZONES or (
            zone_type == ZoneType.HAND and player.player_id == viewer_id
        )
        zones[zone_type.value] = ZoneView(
            zone=zone_type.value,
            count=zone.count,
            cards=[_card_view(card, visible) for card in zone.cards],
        )
    return PlayerView(
        player_id=player.player_id,
        username=player.name,
        is_active=match.player_turn is player,
        deck_chosen=player.chosen_deck is not None,
        zones=zones,
    )


def snapshot_for(match: MatchState, viewer: PlayerState | None = None) -> MatchSnapshot:
    """Build the snapshot a given player (or a spectator, if None) may see."""
    viewer_id = viewer.player_id if viewer else None
    return MatchSnapshot(
        match_id=match.match_id,
        viewer_id=viewer_id,
        phase=match.phase.value,
        turn_number=match.turn_number,
        active_player_id=match.player_turn.player_id if match.player_turn else None,
        players=[_player_view(match, p, viewer_id) for p in match.players],
        winner_id=match.winner_id,
        loser_id=match.loser_id,
        game_over_reason=match.game_over_reason,
    )
