from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from thematch.config import config
from thematch.logic.planning.seasons import (
    advance_season_week,
    complete_season_by_id,
    set_week_attendance,
)
from thematch.logic.scheduling.builder import create_tournament_for_season
from thematch.logic.scheduling.round_robin import (
    get_makeup_matches,
    get_owed_matches,
    get_scheduled_matches,
)
from thematch.models.db.season import Season, WeekAttendanceBody
from thematch.models.db.tournament import TournamentBody
from thematch.routes.models import (
    OwedMatchesResponse,
    OwedMatchesViewResponse,
    SeasonResponse,
    SuccessResponse,
    TournamentResponse,
)
from thematch.routes.util import season_dependency
from thematch.utils.id_types import PlayerId, SeasonId

router = APIRouter(prefix=config.api_prefix)

PlayerIdsQuery = Annotated[list[PlayerId] | None, Query()]


@router.put(
    "/seasons/{season_id}/weeks/{week_number}/attendance", response_model=SuccessResponse
)
async def put_week_attendance(
    season_id: SeasonId,
    week_number: Annotated[int, Path(ge=1)],
    body: WeekAttendanceBody,
    _: Season = Depends(season_dependency),
) -> SuccessResponse:
    await set_week_attendance(season_id, week_number, body.player_ids)
    return SuccessResponse()


@router.get("/seasons/{season_id}/scheduled_matches", response_model=OwedMatchesResponse)
async def get_season_scheduled_matches(
    season_id: SeasonId,
    player_ids: PlayerIdsQuery = None,
    _: Season = Depends(season_dependency),
) -> OwedMatchesResponse:
    return OwedMatchesResponse(data=await get_scheduled_matches(season_id, player_ids))


@router.get("/seasons/{season_id}/makeup_matches", response_model=OwedMatchesResponse)
async def get_season_makeup_matches(
    season_id: SeasonId,
    player_ids: PlayerIdsQuery = None,
    _: Season = Depends(season_dependency),
) -> OwedMatchesResponse:
    return OwedMatchesResponse(data=await get_makeup_matches(season_id, player_ids))


@router.get("/seasons/{season_id}/owed_matches", response_model=OwedMatchesViewResponse)
async def get_season_owed_matches(
    season_id: SeasonId,
    player_ids: PlayerIdsQuery = None,
    _: Season = Depends(season_dependency),
) -> OwedMatchesViewResponse:
    return OwedMatchesViewResponse(data=await get_owed_matches(season_id, player_ids))


@router.post("/seasons/{season_id}/advance_week", response_model=SeasonResponse)
async def post_advance_week(
    season_id: SeasonId, _: Season = Depends(season_dependency)
) -> SeasonResponse:
    return SeasonResponse(data=await advance_season_week(season_id))


@router.post("/seasons/{season_id}/complete", response_model=SeasonResponse)
async def post_complete_season(
    season_id: SeasonId, _: Season = Depends(season_dependency)
) -> SeasonResponse:
    return SeasonResponse(data=await complete_season_by_id(season_id))


@router.post("/seasons/{season_id}/tournament", response_model=TournamentResponse)
async def post_season_tournament(
    season_id: SeasonId,
    body: TournamentBody,
    _: Season = Depends(season_dependency),
) -> TournamentResponse:
    return TournamentResponse(data=await create_tournament_for_season(season_id, body))
