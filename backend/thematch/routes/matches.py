from fastapi import APIRouter, Depends

from thematch.config import config
from thematch.models.db.league import League
from thematch.models.db.match import MatchBody
from thematch.routes.models import SingleMatchResponse, SuccessResponse
from thematch.routes.util import check_match_belongs_to_league, league_dependency
from thematch.storage.matches import create_match, delete_match, get_match
from thematch.utils.id_types import LeagueId, MatchId
from thematch.utils.logging import logger

router = APIRouter(prefix=config.api_prefix)


@router.post("/leagues/{league_id}/matches", response_model=SingleMatchResponse)
async def post_match(
    league_id: LeagueId,
    match_body: MatchBody,
    league: League = Depends(league_dependency),
) -> SingleMatchResponse:
    await check_match_belongs_to_league(match_body, league)
    match = await create_match(match_body.model_copy(update={"league_id": league_id}))
    return SingleMatchResponse(data=match)


@router.delete("/matches/{match_id}", response_model=SuccessResponse)
async def remove_match(match_id: MatchId) -> SuccessResponse:
    match = await get_match(match_id)
    await delete_match(match.id)
    logger.info(
        "Deleted match: match_id=%s league_id=%s season_id=%s",
        int(match.id),
        match.league_id,
        match.season_id,
    )
    return SuccessResponse()
