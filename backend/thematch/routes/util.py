from fastapi import HTTPException
from starlette import status

from thematch.models.db.league import League
from thematch.models.db.match import MatchBody
from thematch.models.db.season import Season
from thematch.models.db.tournament import Tournament
from thematch.storage.leagues import get_league
from thematch.storage.players import get_players_by_ids
from thematch.storage.seasons import get_season
from thematch.storage.tournaments import get_tournament
from thematch.utils.id_types import LeagueId, SeasonId, TournamentId


async def league_dependency(league_id: LeagueId) -> League:
    return await get_league(league_id)


async def season_dependency(season_id: SeasonId) -> Season:
    return await get_season(season_id)


async def tournament_dependency(tournament_id: TournamentId) -> Tournament:
    return await get_tournament(tournament_id)


async def check_match_belongs_to_league(match_body: MatchBody, league: League) -> None:
    player_ids = {participant.player_id for participant in match_body.participants}
    if len(player_ids) != len(match_body.participants):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A player can only take part once in a match",
        )

    if len(await get_players_by_ids(player_ids)) != len(player_ids):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Match refers to an unknown player",
        )

    if match_body.league_id is not None and match_body.league_id != league.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Match belongs to league {match_body.league_id}, not {league.id}",
        )

    if match_body.season_id is not None:
        season = await get_season(match_body.season_id)
        if season.league_id != league.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Season {season.id} does not belong to league {league.id}",
            )
