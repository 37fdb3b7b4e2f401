from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence

from thematch.models.db.league import League
from thematch.models.db.match import Match
from thematch.models.db.player import Player
from thematch.models.db.season import Season
from thematch.models.league import OwedMatch, OwedMatchesView
from thematch.storage.leagues import get_league
from thematch.storage.matches import get_matches_for_season
from thematch.storage.players import get_players_by_ids
from thematch.storage.seasons import get_attendance_for_season, get_season, get_week_attendance
from thematch.utils.id_types import PlayerId, SeasonId
from thematch.utils.logging import logger

PlayerPair = frozenset[PlayerId]


def get_pair(player_id: PlayerId, opponent_id: PlayerId) -> PlayerPair:
    return frozenset((player_id, opponent_id))


def get_recorded_pairs_per_week(matches: Iterable[Match]) -> dict[int, set[PlayerPair]]:
    """
    Pairs that already have a match, completed or pending, per week number.

    Matches without a week number or with more than two players are not part of
    a round-robin schedule.
    """
    recorded: dict[int, set[PlayerPair]] = defaultdict(set)
    for match in matches:
        player_ids = match.get_player_ids()
        if match.week_number is None or len(player_ids) != 2:
            continue
        recorded[match.week_number].add(get_pair(player_ids[0], player_ids[1]))
    return recorded


def _build_owed_match(
    player: Player, opponent: Player, week_number: int, *, is_makeup: bool
) -> OwedMatch:
    return OwedMatch(
        player_id=player.id,
        player_name=player.full_name,
        opponent_id=opponent.id,
        opponent_name=opponent.full_name,
        week_number=week_number,
        is_makeup=is_makeup,
    )


def _sort_by_name(players: Iterable[Player]) -> list[Player]:
    return sorted(players, key=lambda player: player.get_name_sort_key())


def determine_scheduled_matches(
    league: League,
    current_week: int,
    attendees: Sequence[Player],
    recorded_pairs: set[PlayerPair],
) -> list[OwedMatch]:
    """Every pairing of this week's attendees that has not been recorded this week."""
    if not league.is_round_robin or len(attendees) < 2:
        return []

    players = _sort_by_name(attendees)
    return [
        _build_owed_match(player, opponent, current_week, is_makeup=False)
        for i, player in enumerate(players)
        for opponent in players[i + 1 :]
        if get_pair(player.id, opponent.id) not in recorded_pairs
    ]


def determine_makeup_matches(
    league: League,
    current_week: int,
    attendees: Sequence[Player],
    attendance_per_week: Mapping[int, Sequence[Player]],
    recorded_pairs_per_week: Mapping[int, set[PlayerPair]],
) -> list[OwedMatch]:
    """
    Pairings owed from earlier weeks.

    An attendee who missed week `w` owes one match, tagged with week `w`, against
    every player who was present that week. Each missed week is its own
    obligation and only a match recorded for that exact week settles it.
    """
    if not league.is_round_robin or len(attendees) < 2:
        return []

    current_players = _sort_by_name(attendees)
    makeup_matches: list[OwedMatch] = []
    for week_number in range(1, current_week):
        present = _sort_by_name(attendance_per_week.get(week_number, []))
        if len(present) < 1:
            continue

        present_ids = {player.id for player in present}
        recorded_pairs = recorded_pairs_per_week.get(week_number, set())
        for player in current_players:
            if player.id in present_ids:
                continue

            makeup_matches.extend(
                _build_owed_match(player, opponent, week_number, is_makeup=True)
                for opponent in present
                if get_pair(player.id, opponent.id) not in recorded_pairs
            )

    return makeup_matches


async def _get_attendees(season: Season, player_ids: Sequence[PlayerId] | None) -> list[Player]:
    if player_ids is None:
        player_ids = await get_week_attendance(season.id, season.current_week)
    return await get_players_by_ids(player_ids)


async def get_scheduled_matches(
    season_id: SeasonId, player_ids: Sequence[PlayerId] | None = None
) -> list[OwedMatch]:
    season = await get_season(season_id)
    league = await get_league(season.league_id)
    attendees = await _get_attendees(season, player_ids)
    recorded_pairs = get_recorded_pairs_per_week(await get_matches_for_season(season_id))

    return determine_scheduled_matches(
        league, season.current_week, attendees, recorded_pairs[season.current_week]
    )


async def get_makeup_matches(
    season_id: SeasonId, player_ids: Sequence[PlayerId] | None = None
) -> list[OwedMatch]:
    season = await get_season(season_id)
    league = await get_league(season.league_id)
    attendees = await _get_attendees(season, player_ids)

    attendance = await get_attendance_for_season(season_id)
    attended_ids = {player_id for week_ids in attendance.values() for player_id in week_ids}
    players_by_id = {player.id: player for player in await get_players_by_ids(attended_ids)}
    attendance_per_week = {
        week_number: [
            players_by_id[player_id] for player_id in week_ids if player_id in players_by_id
        ]
        for week_number, week_ids in attendance.items()
    }
    recorded_pairs = get_recorded_pairs_per_week(await get_matches_for_season(season_id))

    makeup_matches = determine_makeup_matches(
        league, season.current_week, attendees, attendance_per_week, recorded_pairs
    )
    logger.debug(
        "Determined makeup matches: season_id=%s current_week=%s count=%s",
        int(season_id),
        season.current_week,
        len(makeup_matches),
    )
    return makeup_matches


async def get_owed_matches(
    season_id: SeasonId, player_ids: Sequence[PlayerId] | None = None
) -> OwedMatchesView:
    return OwedMatchesView(
        scheduled=await get_scheduled_matches(season_id, player_ids),
        makeup=await get_makeup_matches(season_id, player_ids),
    )
