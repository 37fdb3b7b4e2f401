from fastapi import APIRouter, Depends

from thematch.config import config
from thematch.logic.ranking.standings import get_head_to_head_record, get_league_leaderboard
from thematch.logic.ranking.statistics import format_recent_form, format_streak, get_player_stats
from thematch.models.db.league import League
from thematch.models.league import PlayerStatsView
from thematch.routes.models import HeadToHeadResponse, LeaderboardResponse, PlayerStatsResponse
from thematch.routes.util import league_dependency
from thematch.storage.matches import get_completed_matches_for_league
from thematch.utils.id_types import LeagueId, PlayerId, SeasonId

router = APIRouter(prefix=config.api_prefix)


@router.get("/leagues/{league_id}/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(
    league_id: LeagueId,
    season_id: SeasonId | None = None,
    _: League = Depends(league_dependency),
) -> LeaderboardResponse:
    return LeaderboardResponse(data=await get_league_leaderboard(league_id, season_id))


@router.get(
    "/leagues/{league_id}/players/{player_id}/stats", response_model=PlayerStatsResponse
)
async def get_stats(
    league_id: LeagueId,
    player_id: PlayerId,
    _: League = Depends(league_dependency),
) -> PlayerStatsResponse:
    stats = await get_player_stats(player_id, league_id)
    return PlayerStatsResponse(
        data=PlayerStatsView(
            **stats.model_dump(),
            streak_label=format_streak(stats.current_streak),
            recent_form_label=format_recent_form(stats.recent_form),
        )
    )


@router.get("/leagues/{league_id}/head_to_head", response_model=HeadToHeadResponse)
async def get_head_to_head(
    league_id: LeagueId,
    player_id: PlayerId,
    opponent_id: PlayerId,
    _: League = Depends(league_dependency),
) -> HeadToHeadResponse:
    matches = await get_completed_matches_for_league(league_id)
    return HeadToHeadResponse(data=get_head_to_head_record(player_id, opponent_id, matches))
