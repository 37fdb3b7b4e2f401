from collections.abc import Iterable

from heliclockter import datetime_utc

from thematch.database import database
from thematch.models.db.player import Player, PlayerBody, PlayerInsertable
from thematch.utils.id_types import PlayerId


async def insert_player(player_body: PlayerBody) -> Player:
    player = Player(
        **PlayerInsertable(**player_body.model_dump(), created=datetime_utc.now()).model_dump(),
        id=PlayerId(database.next_id("players")),
    )
    database.players[player.id] = player
    return player


async def get_player_by_id(player_id: PlayerId) -> Player | None:
    return database.players.get(player_id)


async def get_players_by_ids(player_ids: Iterable[PlayerId]) -> list[Player]:
    """Known players among `player_ids`, ordered by surname then given name."""
    players = {
        player_id: database.players[player_id]
        for player_id in player_ids
        if player_id in database.players
    }
    return sorted(players.values(), key=lambda player: player.get_name_sort_key())
