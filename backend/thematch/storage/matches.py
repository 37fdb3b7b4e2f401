from fastapi import HTTPException
from heliclockter import datetime_utc
from starlette import status

from thematch.database import database
from thematch.models.db.match import Match, MatchBody, MatchInsertable
from thematch.utils.id_types import LeagueId, MatchId, PlayerId, SeasonId, SeriesId


async def create_match(match_body: MatchBody) -> Match:
    match = Match(
        **MatchInsertable(**match_body.model_dump(), created=datetime_utc.now()).model_dump(),
        id=MatchId(database.next_id("matches")),
    )
    database.matches[match.id] = match
    return match


async def get_match(match_id: MatchId) -> Match:
    match = database.matches.get(match_id)
    if match is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, f"Could not find match with id {match_id}")
    return match


async def delete_match(match_id: MatchId) -> None:
    database.matches.pop(match_id, None)


async def get_completed_matches_for_league(
    league_id: LeagueId, season_id: SeasonId | None = None
) -> list[Match]:
    return [
        match
        for match in database.matches.values()
        if match.league_id == league_id
        and match.is_completed
        and (season_id is None or match.season_id == season_id)
    ]


async def get_matches_for_season(season_id: SeasonId) -> list[Match]:
    """All matches of a season, completed or still in progress."""
    return [match for match in database.matches.values() if match.season_id == season_id]


async def get_completed_matches_for_series(series_id: SeriesId) -> list[Match]:
    return [
        match
        for match in database.matches.values()
        if match.series_id == series_id and match.is_completed
    ]


async def get_completed_matches_for_player(
    player_id: PlayerId, league_id: LeagueId
) -> list[Match]:
    """Completed league matches the player took part in, newest first."""
    matches = [
        match
        for match in database.matches.values()
        if match.league_id == league_id
        and match.is_completed
        and player_id in match.get_player_ids()
    ]
    return sorted(matches, key=lambda match: (match.date, match.created), reverse=True)
