import pytest
from heliclockter import datetime_utc

from thematch.logic.scheduling.round_robin import (
    determine_makeup_matches,
    determine_scheduled_matches,
    get_owed_matches,
    get_pair,
    get_recorded_pairs_per_week,
)
from thematch.models.db.league import GameType, LeagueBody, LeagueFormat
from thematch.models.db.match import MatchBody, MatchParticipant, MatchStatus
from thematch.models.db.player import PlayerBody
from thematch.models.db.season import SeasonBody
from thematch.storage.leagues import add_player_to_league, create_league
from thematch.storage.matches import create_match
from thematch.storage.players import insert_player
from thematch.storage.seasons import create_season, record_week_attendance, update_season
from thematch.utils.id_types import PlayerId
from tests.shared import make_league, make_match, make_player

PLAYERS = [
    make_player(1, "Dana", "Davis"),
    make_player(2, "Anna", "Adams"),
    make_player(3, "Carl", "Clark"),
    make_player(4, "Bert", "Baker"),
]


def _pairs(owed_matches: list) -> list[tuple[int, int, int]]:
    return [(owed.player_id, owed.opponent_id, owed.week_number) for owed in owed_matches]


def test_all_pairs_are_due_without_recorded_matches() -> None:
    scheduled = determine_scheduled_matches(make_league(), 1, PLAYERS, set())

    assert len(scheduled) == 4 * 3 // 2
    assert _pairs(scheduled) == [
        (2, 4, 1),
        (2, 3, 1),
        (2, 1, 1),
        (4, 3, 1),
        (4, 1, 1),
        (3, 1, 1),
    ]
    assert scheduled[0].player_name == "Anna Adams"
    assert scheduled[0].opponent_name == "Bert Baker"
    assert not any(owed.is_makeup for owed in scheduled)


def test_recorded_pair_is_no_longer_due() -> None:
    recorded = get_recorded_pairs_per_week(
        [
            make_match(1, 1, 3, winner_id=1, season_id=1, week_number=2),
            make_match(2, 2, 4, season_id=1, week_number=2, status=MatchStatus.IN_PROGRESS),
            make_match(3, 2, 3, winner_id=3, season_id=1, week_number=1),
        ]
    )

    scheduled = determine_scheduled_matches(make_league(), 2, PLAYERS, recorded[2])

    assert len(scheduled) == 4 * 3 // 2 - 2
    assert get_pair(PlayerId(1), PlayerId(3)) not in {
        get_pair(owed.player_id, owed.opponent_id) for owed in scheduled
    }
    assert (2, 3, 2) in _pairs(scheduled)


def test_nothing_is_scheduled_outside_round_robin_or_without_opponents() -> None:
    free_play = make_league(LeagueFormat.FREE_PLAY)

    assert determine_scheduled_matches(free_play, 1, PLAYERS, set()) == []
    assert determine_scheduled_matches(make_league(), 1, PLAYERS[:1], set()) == []
    assert determine_makeup_matches(free_play, 3, PLAYERS, {1: PLAYERS}, {}) == []
    assert determine_makeup_matches(make_league(), 3, PLAYERS[:1], {1: PLAYERS[1:]}, {}) == []


def test_makeup_obligation_for_missed_week() -> None:
    player = make_player(1, "Paul", "Parker")
    opponent = make_player(2, "Quinn", "Quigley")
    attendance = {1: [player, opponent], 2: [opponent]}

    makeup = determine_makeup_matches(make_league(), 3, [player, opponent], attendance, {})

    assert _pairs(makeup) == [(1, 2, 2)]
    assert makeup[0].is_makeup

    recorded = get_recorded_pairs_per_week(
        [make_match(1, 2, 1, winner_id=2, season_id=1, week_number=2)]
    )
    makeup = determine_makeup_matches(make_league(), 3, [player, opponent], attendance, recorded)
    assert makeup == []


def test_each_missed_week_is_its_own_obligation() -> None:
    player = make_player(1, "Paul", "Parker")
    opponent = make_player(2, "Quinn", "Quigley")
    other = make_player(3, "Rita", "Reed")
    attendance = {1: [opponent, other], 2: [opponent], 3: [player, opponent]}
    recorded = get_recorded_pairs_per_week(
        [make_match(1, 1, 3, winner_id=3, season_id=1, week_number=3)]
    )

    makeup = determine_makeup_matches(
        make_league(), 4, [player, opponent], attendance, recorded
    )

    assert _pairs(makeup) == [(1, 2, 1), (1, 3, 1), (1, 2, 2)]


def test_weeks_without_recorded_attendance_owe_nothing() -> None:
    player = make_player(1, "Paul", "Parker")
    opponent = make_player(2, "Quinn", "Quigley")

    makeup = determine_makeup_matches(
        make_league(), 3, [player, opponent], {2: [player, opponent]}, {}
    )

    assert makeup == []


@pytest.mark.asyncio
async def test_owed_matches_for_current_week() -> None:
    league = await create_league(
        LeagueBody(name="Monday Pool", game_type=GameType.POOL, format=LeagueFormat.ROUND_ROBIN)
    )
    season = await create_season(
        league.id, SeasonBody(name="Spring", start_date=datetime_utc.now())
    )
    paul = await insert_player(PlayerBody(first_name="Paul", last_name="Parker"))
    quinn = await insert_player(PlayerBody(first_name="Quinn", last_name="Quigley"))
    rita = await insert_player(PlayerBody(first_name="Rita", last_name="Reed"))
    for player in (paul, quinn, rita):
        await add_player_to_league(league.id, player.id)

    await record_week_attendance(season.id, 1, [paul.id, quinn.id, rita.id])
    await record_week_attendance(season.id, 2, [quinn.id, rita.id])
    await record_week_attendance(season.id, 3, [paul.id, quinn.id, rita.id])
    await update_season(season.model_copy(update={"current_week": 3}))

    owed = await get_owed_matches(season.id)
    assert _pairs(owed.scheduled) == [
        (paul.id, quinn.id, 3),
        (paul.id, rita.id, 3),
        (quinn.id, rita.id, 3),
    ]
    assert _pairs(owed.makeup) == [(paul.id, quinn.id, 2), (paul.id, rita.id, 2)]

    await create_match(
        MatchBody(
            date=datetime_utc.now(),
            league_id=league.id,
            season_id=season.id,
            week_number=2,
            is_makeup=True,
            participants=[
                MatchParticipant(player_id=quinn.id, seat_index=0, is_winner=True),
                MatchParticipant(player_id=paul.id, seat_index=1),
            ],
        )
    )

    owed = await get_owed_matches(season.id)
    assert len(owed.scheduled) == 3
    assert _pairs(owed.makeup) == [(paul.id, rita.id, 2)]

    owed_for_two = await get_owed_matches(season.id, [rita.id, paul.id])
    assert _pairs(owed_for_two.scheduled) == [(paul.id, rita.id, 3)]
    assert _pairs(owed_for_two.makeup) == [(paul.id, rita.id, 2)]
