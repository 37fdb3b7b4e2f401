from collections import Counter
from collections.abc import Sequence

from thematch.config import config
from thematch.logic.ranking.standings import get_win_percentage
from thematch.models.db.match import Match
from thematch.models.db.player import Player
from thematch.models.league import GameOutcome, PlayerStats, SeriesStanding
from thematch.storage.matches import (
    get_completed_matches_for_player,
    get_completed_matches_for_series,
)
from thematch.storage.players import get_players_by_ids
from thematch.storage.series import get_series
from thematch.utils.id_types import LeagueId, PlayerId, SeriesId


def get_outcomes(player_id: PlayerId, matches_newest_first: Sequence[Match]) -> list[GameOutcome]:
    outcomes: list[GameOutcome] = []
    for match in matches_newest_first:
        participant = next(
            (p for p in match.participants if p.player_id == player_id), None
        )
        if participant is not None:
            outcomes.append("W" if participant.is_winner else "L")
    return outcomes


def get_current_streak(outcomes_newest_first: Sequence[GameOutcome]) -> int:
    """Length of the latest run of equal results, negative for a losing run."""
    if len(outcomes_newest_first) < 1:
        return 0

    latest = outcomes_newest_first[0]
    streak = 0
    for outcome in outcomes_newest_first:
        if outcome != latest:
            break
        streak += 1

    return streak if latest == "W" else -streak


def get_best_win_streak(outcomes_newest_first: Sequence[GameOutcome]) -> int:
    best = 0
    running = 0
    for outcome in reversed(outcomes_newest_first):
        running = running + 1 if outcome == "W" else 0
        best = max(best, running)
    return best


def determine_player_stats(
    player_id: PlayerId, league_id: LeagueId, matches_newest_first: Sequence[Match]
) -> PlayerStats:
    outcomes = get_outcomes(player_id, matches_newest_first)
    return PlayerStats(
        player_id=player_id,
        league_id=league_id,
        current_streak=get_current_streak(outcomes),
        best_win_streak=get_best_win_streak(outcomes),
        recent_form=outcomes[: config.recent_form_length],
    )


def format_streak(streak: int) -> str:
    if streak == 0:
        return "No streak"

    outcome = "W" if streak > 0 else "L"
    return f"{outcome}{abs(streak)}"


def format_recent_form(form: Sequence[GameOutcome]) -> str:
    if len(form) < 1:
        return "No matches"
    return "-".join(form)


def determine_series_standings(
    players: Sequence[Player], matches: Sequence[Match]
) -> list[SeriesStanding]:
    """
    Win/loss table for a series, where a match may have any number of participants.

    Every participant that is not flagged as a winner takes a loss.
    """
    wins: Counter[PlayerId] = Counter()
    appearances: Counter[PlayerId] = Counter()
    for match in matches:
        for participant in match.participants:
            appearances[participant.player_id] += 1
            if participant.is_winner:
                wins[participant.player_id] += 1

    standings = [
        SeriesStanding(
            player_id=player.id,
            first_name=player.first_name,
            last_name=player.last_name,
            wins=wins[player.id],
            losses=appearances[player.id] - wins[player.id],
            games_played=appearances[player.id],
            win_percentage=get_win_percentage(wins[player.id], appearances[player.id]),
        )
        for player in players
        if appearances[player.id] > 0
    ]
    return sorted(
        standings,
        key=lambda standing: (
            -standing.wins,
            standing.last_name.casefold(),
            standing.first_name.casefold(),
        ),
    )


async def get_player_stats(player_id: PlayerId, league_id: LeagueId) -> PlayerStats:
    matches = await get_completed_matches_for_player(player_id, league_id)
    return determine_player_stats(player_id, league_id, matches)


async def get_series_standings(series_id: SeriesId) -> list[SeriesStanding]:
    await get_series(series_id)
    matches = await get_completed_matches_for_series(series_id)
    players = await get_players_by_ids(
        {player_id for match in matches for player_id in match.get_player_ids()}
    )
    return determine_series_standings(players, matches)
