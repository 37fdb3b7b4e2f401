from fastapi import HTTPException
from heliclockter import datetime_utc
from starlette import status

from thematch.database import database
from thematch.models.db.league import League, LeagueBody, LeagueInsertable, LeagueMembership
from thematch.models.db.player import Player
from thematch.storage.players import get_players_by_ids
from thematch.utils.id_types import LeagueId, PlayerId


async def create_league(league_body: LeagueBody) -> League:
    league = League(
        **LeagueInsertable(**league_body.model_dump(), created=datetime_utc.now()).model_dump(),
        id=LeagueId(database.next_id("leagues")),
    )
    database.leagues[league.id] = league
    return league


async def get_league(league_id: LeagueId) -> League:
    league = database.leagues.get(league_id)
    if league is None:
        raise HTTPException(
            status.HTTP_404_NOT_FOUND, f"Could not find league with id {league_id}"
        )
    return league


async def add_player_to_league(league_id: LeagueId, player_id: PlayerId) -> None:
    key = (league_id, player_id)
    if key not in database.league_memberships:
        database.league_memberships[key] = LeagueMembership(
            league_id=league_id, player_id=player_id, created=datetime_utc.now()
        )


async def get_league_roster(league_id: LeagueId) -> list[Player]:
    return await get_players_by_ids(
        membership.player_id
        for membership in database.league_memberships.values()
        if membership.league_id == league_id
    )
