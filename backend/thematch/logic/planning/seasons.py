from collections.abc import Sequence

from fastapi import HTTPException
from starlette import status

from thematch.database import database
from thematch.models.db.season import Season, SeasonStatus
from thematch.storage.seasons import get_season, record_week_attendance, update_season
from thematch.utils.id_types import PlayerId, SeasonId


def _check_season_is_active(season: Season) -> None:
    if not season.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Season {season.id} is already completed",
        )


def advance_week(season: Season) -> Season:
    _check_season_is_active(season)
    return season.model_copy(update={"current_week": season.current_week + 1})


def complete_season(season: Season) -> Season:
    return season.model_copy(update={"status": SeasonStatus.COMPLETED})


async def advance_season_week(season_id: SeasonId) -> Season:
    async with database.transaction(("season", season_id)):
        return await update_season(advance_week(await get_season(season_id)))


async def complete_season_by_id(season_id: SeasonId) -> Season:
    async with database.transaction(("season", season_id)):
        return await update_season(complete_season(await get_season(season_id)))


async def set_week_attendance(
    season_id: SeasonId, week_number: int, player_ids: Sequence[PlayerId]
) -> None:
    """Replace whoever was marked present for a week of the season."""
    async with database.transaction(("season", season_id)):
        season = await get_season(season_id)
        if week_number > season.current_week:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=(
                    f"Cannot record attendance for week {week_number}, "
                    f"season {season_id} is in week {season.current_week}"
                ),
            )
        await record_week_attendance(season_id, week_number, list(player_ids))
