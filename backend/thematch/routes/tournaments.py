from fastapi import APIRouter, Depends

from thematch.config import config
from thematch.logic.ranking.elimination import record_tournament_game
from thematch.models.db.tournament import Tournament, TournamentGameBody
from thematch.routes.models import BracketResponse, TournamentResponse
from thematch.routes.util import tournament_dependency
from thematch.storage.tournaments import (
    get_tournament_matches_with_details,
    get_tournament_with_matches,
)
from thematch.utils.id_types import TournamentId, TournamentMatchId

router = APIRouter(prefix=config.api_prefix)


@router.get("/tournaments/{tournament_id}", response_model=TournamentResponse)
async def get_tournament_details(
    tournament_id: TournamentId, _: Tournament = Depends(tournament_dependency)
) -> TournamentResponse:
    return TournamentResponse(data=await get_tournament_with_matches(tournament_id))


@router.get("/tournaments/{tournament_id}/bracket", response_model=BracketResponse)
async def get_bracket(
    tournament_id: TournamentId, _: Tournament = Depends(tournament_dependency)
) -> BracketResponse:
    return BracketResponse(data=await get_tournament_matches_with_details(tournament_id))


@router.post(
    "/tournaments/{tournament_id}/matches/{match_id}/games", response_model=TournamentResponse
)
async def post_tournament_game(
    tournament_id: TournamentId,
    match_id: TournamentMatchId,
    body: TournamentGameBody,
    _: Tournament = Depends(tournament_dependency),
) -> TournamentResponse:
    return TournamentResponse(
        data=await record_tournament_game(tournament_id, match_id, body.winner_id)
    )
