import re

import pytest
from heliclockter import datetime_utc
from starlette.exceptions import HTTPException

from thematch.database import database
from thematch.models.db.league import GameType, League, LeagueBody, LeagueFormat
from thematch.models.db.match import MatchBody, MatchParticipant
from thematch.models.db.player import Player, PlayerBody
from thematch.models.db.season import Season, SeasonBody, SeasonStatus, WeekAttendanceBody
from thematch.models.db.tournament import (
    SeriesFormat,
    TournamentBody,
    TournamentGameBody,
    TournamentMatchStatus,
)
from thematch.routes import matches as match_routes
from thematch.routes import seasons as season_routes
from thematch.routes import tournaments as tournament_routes
from thematch.storage.leagues import add_player_to_league, create_league
from thematch.storage.players import insert_player
from thematch.storage.seasons import create_season, get_week_attendance
from thematch.storage.tournaments import get_tournament
from thematch.utils.id_types import TournamentMatchId


async def _create_league_with_players(*names: tuple[str, str]) -> tuple[League, list[Player]]:
    league = await create_league(
        LeagueBody(name="Tuesday Pool", game_type=GameType.POOL, format=LeagueFormat.ROUND_ROBIN)
    )
    players = []
    for first_name, last_name in names:
        player = await insert_player(PlayerBody(first_name=first_name, last_name=last_name))
        await add_player_to_league(league.id, player.id)
        players.append(player)
    return league, players


async def _create_season(league: League) -> Season:
    return await create_season(
        league.id, SeasonBody(name="Spring", start_date=datetime_utc.now(), weeks_duration=4)
    )


async def _post_result(
    league: League, winner: Player, loser: Player, season: Season | None = None
) -> None:
    await match_routes.post_match(
        league.id,
        MatchBody(
            date=datetime_utc.now(),
            season_id=season.id if season is not None else None,
            week_number=1 if season is not None else None,
            participants=[
                MatchParticipant(player_id=winner.id, is_winner=True),
                MatchParticipant(player_id=loser.id, seat_index=1),
            ],
        ),
        league,
    )


@pytest.mark.asyncio
async def test_season_tournament_is_seeded_from_season_standings() -> None:
    league, (adams, baker, clark, davis) = await _create_league_with_players(
        ("Ann", "Adams"), ("Bob", "Baker"), ("Cid", "Clark"), ("Dee", "Davis")
    )
    season = await _create_season(league)
    await _post_result(league, davis, adams, season)
    await _post_result(league, davis, baker, season)
    await _post_result(league, clark, baker, season)
    # Outside the season, so it must not influence seeding.
    for _ in range(3):
        await _post_result(league, baker, adams)

    response = await season_routes.post_season_tournament(
        season.id, TournamentBody(name="Spring Playoffs", player_count=3), season
    )
    tournament = response.data

    assert tournament.league_id == league.id
    assert tournament.champion_id is None
    assert [match.id for match in tournament.matches] == [2, 3, 1]
    bye, semifinal, finals = tournament.matches
    assert (bye.player_a_id, bye.winner_id) == (davis.id, davis.id)
    assert bye.status is TournamentMatchStatus.COMPLETED
    assert (semifinal.player_a_id, semifinal.player_b_id) == (clark.id, adams.id)
    assert semifinal.series_format is SeriesFormat.BEST_OF_3
    assert (finals.player_a_id, finals.player_b_id) == (davis.id, None)

    with pytest.raises(HTTPException, match="already has a tournament"):
        await season_routes.post_season_tournament(
            season.id, TournamentBody(name="Again"), season
        )


@pytest.mark.asyncio
async def test_tournament_games_advance_winner_to_finals() -> None:
    league, (adams, _, clark) = await _create_league_with_players(
        ("Ann", "Adams"), ("Bob", "Baker"), ("Cid", "Clark")
    )
    season = await _create_season(league)
    tournament = (
        await season_routes.post_season_tournament(
            season.id, TournamentBody(name="Playoffs"), season
        )
    ).data
    stored = await get_tournament(tournament.id)

    for _ in range(2):
        await tournament_routes.post_tournament_game(
            tournament.id,
            TournamentMatchId(3),
            TournamentGameBody(winner_id=clark.id),
            stored,
        )

    bracket = (await tournament_routes.get_bracket(tournament.id, stored)).data
    finals = next(match for match in bracket if match.id == 1)
    assert finals.player_a_name == adams.full_name
    assert finals.player_b_name == clark.full_name
    assert finals.status is TournamentMatchStatus.PENDING

    for _ in range(3):
        response = await tournament_routes.post_tournament_game(
            tournament.id,
            TournamentMatchId(1),
            TournamentGameBody(winner_id=adams.id),
            stored,
        )

    assert response.data.champion_id == adams.id
    assert (await get_tournament(tournament.id)).is_completed

    details = (await tournament_routes.get_tournament_details(tournament.id, stored)).data
    assert details.champion_id == adams.id
    assert len(details.matches) == 3


@pytest.mark.asyncio
async def test_tournament_needs_at_least_two_players() -> None:
    league, _ = await _create_league_with_players(("Ann", "Adams"))
    season = await _create_season(league)

    err_msg = re.escape("400: Number of players invalid, should be between 2 and 64")
    with pytest.raises(HTTPException, match=err_msg):
        await season_routes.post_season_tournament(
            season.id, TournamentBody(name="Playoffs"), season
        )

    assert database.tournaments == {}


@pytest.mark.asyncio
async def test_tournament_for_empty_league_is_rejected_without_storing_it() -> None:
    league, _ = await _create_league_with_players()
    season = await _create_season(league)

    for _ in range(2):
        with pytest.raises(HTTPException) as exc_info:
            await season_routes.post_season_tournament(
                season.id, TournamentBody(name="Playoffs"), season
            )
        assert exc_info.value.status_code == 400
        assert "Number of players invalid" in exc_info.value.detail

    assert database.tournaments == {}


@pytest.mark.asyncio
async def test_advance_and_complete_season() -> None:
    league, _ = await _create_league_with_players(("Ann", "Adams"), ("Bob", "Baker"))
    season = await _create_season(league)

    advanced = (await season_routes.post_advance_week(season.id, season)).data
    assert advanced.current_week == 2

    completed = (await season_routes.post_complete_season(season.id, advanced)).data
    assert completed.status is SeasonStatus.COMPLETED
    assert completed.current_week == 2

    with pytest.raises(HTTPException) as exc_info:
        await season_routes.post_advance_week(season.id, completed)
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_week_attendance_replaces_previous_and_rejects_future_weeks() -> None:
    league, (adams, baker) = await _create_league_with_players(("Ann", "Adams"), ("Bob", "Baker"))
    season = await _create_season(league)

    await season_routes.put_week_attendance(
        season.id, 1, WeekAttendanceBody(player_ids=[adams.id, baker.id]), season
    )
    await season_routes.put_week_attendance(
        season.id, 1, WeekAttendanceBody(player_ids=[baker.id, baker.id]), season
    )
    assert await get_week_attendance(season.id, 1) == [baker.id]

    with pytest.raises(HTTPException, match="Cannot record attendance for week 2"):
        await season_routes.put_week_attendance(
            season.id, 2, WeekAttendanceBody(player_ids=[adams.id]), season
        )


@pytest.mark.asyncio
async def test_owed_matches_route_uses_week_attendance() -> None:
    league, (adams, baker, clark) = await _create_league_with_players(
        ("Ann", "Adams"), ("Bob", "Baker"), ("Cid", "Clark")
    )
    season = await _create_season(league)
    await season_routes.put_week_attendance(
        season.id, 1, WeekAttendanceBody(player_ids=[adams.id, clark.id]), season
    )
    await _post_result(league, clark, adams, season)

    view = (await season_routes.get_season_owed_matches(season.id, None, season)).data
    assert view.scheduled == []
    assert view.makeup == []

    scheduled = (
        await season_routes.get_season_scheduled_matches(
            season.id, [adams.id, baker.id, clark.id], season
        )
    ).data
    assert [(match.player_id, match.opponent_id) for match in scheduled] == [
        (adams.id, baker.id),
        (baker.id, clark.id),
    ]
