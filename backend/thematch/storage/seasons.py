from fastapi import HTTPException
from heliclockter import datetime_utc
from starlette import status

from thematch.config import config
from thematch.database import database
from thematch.models.db.season import Season, SeasonBody, SeasonInsertable, SeasonStatus
from thematch.utils.id_types import LeagueId, PlayerId, SeasonId


async def create_season(league_id: LeagueId, season_body: SeasonBody) -> Season:
    weeks_duration = season_body.weeks_duration or config.default_weeks_duration
    season = Season(
        **SeasonInsertable(
            league_id=league_id,
            name=season_body.name,
            start_date=season_body.start_date,
            weeks_duration=weeks_duration,
            created=datetime_utc.now(),
        ).model_dump(),
        id=SeasonId(database.next_id("seasons")),
    )
    database.seasons[season.id] = season
    return season


async def get_season(season_id: SeasonId) -> Season:
    season = database.seasons.get(season_id)
    if season is None:
        raise HTTPException(
            status.HTTP_404_NOT_FOUND, f"Could not find season with id {season_id}"
        )
    return season


async def get_seasons_for_league(league_id: LeagueId) -> list[Season]:
    seasons = [season for season in database.seasons.values() if season.league_id == league_id]
    return sorted(seasons, key=lambda season: season.start_date, reverse=True)


async def get_active_season(league_id: LeagueId) -> Season | None:
    return next(
        (
            season
            for season in await get_seasons_for_league(league_id)
            if season.status is SeasonStatus.ACTIVE
        ),
        None,
    )


async def update_season(season: Season) -> Season:
    database.seasons[season.id] = season
    return season


async def record_week_attendance(
    season_id: SeasonId, week_number: int, player_ids: list[PlayerId]
) -> None:
    database.week_attendance[(season_id, week_number)] = list(dict.fromkeys(player_ids))


async def get_week_attendance(season_id: SeasonId, week_number: int) -> list[PlayerId]:
    return list(database.week_attendance.get((season_id, week_number), []))


async def get_attendance_for_season(season_id: SeasonId) -> dict[int, list[PlayerId]]:
    return {
        week_number: list(player_ids)
        for (attendance_season_id, week_number), player_ids in database.week_attendance.items()
        if attendance_season_id == season_id
    }
