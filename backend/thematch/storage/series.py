from fastapi import HTTPException
from heliclockter import datetime_utc
from starlette import status

from thematch.database import database
from thematch.models.db.player import Player
from thematch.models.db.series import Series, SeriesBody, SeriesInsertable, SeriesStatus
from thematch.storage.players import get_players_by_ids
from thematch.utils.id_types import PlayerId, SeriesId


async def create_series(series_body: SeriesBody) -> Series:
    series = Series(
        **SeriesInsertable(
            **series_body.model_dump(exclude={"player_ids"}), created=datetime_utc.now()
        ).model_dump(),
        id=SeriesId(database.next_id("series")),
    )
    database.series[series.id] = series
    for player_id in series_body.player_ids:
        await add_player_to_series(series.id, player_id)
    return series


async def get_series(series_id: SeriesId) -> Series:
    series = database.series.get(series_id)
    if series is None:
        raise HTTPException(
            status.HTTP_404_NOT_FOUND, f"Could not find series with id {series_id}"
        )
    return series


async def add_player_to_series(series_id: SeriesId, player_id: PlayerId) -> None:
    database.series_players[series_id].add(player_id)


async def remove_player_from_series(series_id: SeriesId, player_id: PlayerId) -> None:
    database.series_players[series_id].discard(player_id)


async def get_series_players(series_id: SeriesId) -> list[Player]:
    return await get_players_by_ids(database.series_players[series_id])


async def complete_series(series_id: SeriesId) -> Series:
    series = (await get_series(series_id)).model_copy(
        update={"status": SeriesStatus.COMPLETED, "end_date": datetime_utc.now()}
    )
    database.series[series_id] = series
    return series
