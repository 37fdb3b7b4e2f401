from zoneinfo import ZoneInfo

from heliclockter import datetime_utc, timedelta

from thematch.models.db.league import GameType, League, LeagueFormat
from thematch.models.db.match import Match, MatchParticipant, MatchStatus
from thematch.models.db.player import Player
from thematch.models.db.tournament import Tournament
from thematch.utils.id_types import (
    LeagueId,
    MatchId,
    PlayerId,
    SeasonId,
    TournamentId,
)

DUMMY_MOCK_TIME = datetime_utc(2024, 3, 4, 19, 30, 0, tzinfo=ZoneInfo("UTC"))


def make_player(player_id: int, first_name: str, last_name: str) -> Player:
    return Player(
        id=PlayerId(player_id),
        first_name=first_name,
        last_name=last_name,
        created=DUMMY_MOCK_TIME,
    )


def make_league(league_format: LeagueFormat = LeagueFormat.ROUND_ROBIN) -> League:
    return League(
        id=LeagueId(1),
        name="Tuesday Pool",
        game_type=GameType.POOL,
        format=league_format,
        created=DUMMY_MOCK_TIME,
    )


def make_match(
    match_id: int,
    player_id: int,
    opponent_id: int,
    *,
    winner_id: int | None = None,
    league_id: int = 1,
    season_id: int | None = None,
    week_number: int | None = None,
    status: MatchStatus = MatchStatus.COMPLETED,
) -> Match:
    return Match(
        id=MatchId(match_id),
        date=DUMMY_MOCK_TIME + timedelta(days=match_id),
        created=DUMMY_MOCK_TIME + timedelta(days=match_id),
        league_id=LeagueId(league_id),
        season_id=SeasonId(season_id) if season_id is not None else None,
        week_number=week_number,
        status=status,
        participants=[
            MatchParticipant(
                player_id=PlayerId(player_id), seat_index=0, is_winner=winner_id == player_id
            ),
            MatchParticipant(
                player_id=PlayerId(opponent_id), seat_index=1, is_winner=winner_id == opponent_id
            ),
        ],
    )


def make_tournament(tournament_id: int = 1) -> Tournament:
    return Tournament(
        id=TournamentId(tournament_id),
        season_id=SeasonId(1),
        league_id=LeagueId(1),
        name="Season 1 Playoffs",
        created=DUMMY_MOCK_TIME,
    )
