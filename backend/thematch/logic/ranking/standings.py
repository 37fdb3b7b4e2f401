import time
from collections import Counter
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal
from itertools import groupby

from thematch.config import config
from thematch.models.db.match import Match
from thematch.models.db.player import Player
from thematch.models.league import HeadToHeadRecord, LeaderboardEntry
from thematch.storage.leagues import get_league_roster
from thematch.storage.matches import get_completed_matches_for_league
from thematch.utils.id_types import LeagueId, PlayerId, SeasonId
from thematch.utils.logging import logger


def get_win_percentage(wins: int, games_played: int) -> float:
    """Percentage of games won, rounded half-up to one decimal."""
    if games_played < 1:
        return 0.0

    percentage = Decimal(100 * wins) / Decimal(games_played)
    return float(percentage.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def get_decided_results(matches: Sequence[Match]) -> Counter[tuple[PlayerId, PlayerId]]:
    """Number of decided games per (winner, loser) pair."""
    results: Counter[tuple[PlayerId, PlayerId]] = Counter()
    for match in matches:
        if (result := match.get_decided_result()) is not None:
            results[(result.winner_id, result.loser_id)] += 1
    return results


def get_head_to_head_record(
    player_id: PlayerId, opponent_id: PlayerId, matches: Sequence[Match]
) -> HeadToHeadRecord:
    results = get_decided_results(
        [match for match in matches if match.is_between(player_id, opponent_id)]
    )
    return HeadToHeadRecord(
        player_id=player_id,
        opponent_id=opponent_id,
        wins=results[(player_id, opponent_id)],
        losses=results[(opponent_id, player_id)],
    )


def _tally_entries(
    players: Sequence[Player], results: Counter[tuple[PlayerId, PlayerId]]
) -> list[LeaderboardEntry]:
    wins: Counter[PlayerId] = Counter()
    losses: Counter[PlayerId] = Counter()
    for (winner_id, loser_id), count in results.items():
        wins[winner_id] += count
        losses[loser_id] += count

    entries = []
    for player in players:
        games_played = wins[player.id] + losses[player.id]
        entries.append(
            LeaderboardEntry(
                player_id=player.id,
                first_name=player.first_name,
                last_name=player.last_name,
                wins=wins[player.id],
                losses=losses[player.id],
                games_played=games_played,
                win_percentage=get_win_percentage(wins[player.id], games_played),
            )
        )
    return entries


def _name_sort_key(entry: LeaderboardEntry) -> tuple[str, str]:
    return entry.last_name.casefold(), entry.first_name.casefold()


def get_head_to_head_ratio(
    entry: LeaderboardEntry,
    group: Sequence[LeaderboardEntry],
    results: Counter[tuple[PlayerId, PlayerId]],
) -> float:
    """Share of decided games won against the other members of a tie group."""
    total_wins = 0
    total_games = 0
    for opponent in group:
        if opponent.player_id == entry.player_id:
            continue

        wins = results[(entry.player_id, opponent.player_id)]
        total_wins += wins
        total_games += wins + results[(opponent.player_id, entry.player_id)]

    return total_wins / total_games if total_games > 0 else 0.0


def sort_by_head_to_head(
    group: Sequence[LeaderboardEntry], results: Counter[tuple[PlayerId, PlayerId]]
) -> list[LeaderboardEntry]:
    ratios = {entry.player_id: get_head_to_head_ratio(entry, group, results) for entry in group}
    return sorted(
        group, key=lambda entry: (-ratios[entry.player_id], *_name_sort_key(entry))
    )


def determine_leaderboard(
    players: Sequence[Player], matches: Sequence[Match]
) -> list[LeaderboardEntry]:
    """
    Rank players by wins, resolving equal win counts by head-to-head results.

    Players tied on wins share a rank and the next group starts at
    `rank + group size`. Within a tie group the order is decided by the win ratio
    over games played against the other group members only, then by surname and
    given name.
    """
    results = get_decided_results(matches)
    provisional = sorted(
        _tally_entries(players, results),
        key=lambda entry: (-entry.wins, *_name_sort_key(entry)),
    )

    leaderboard: list[LeaderboardEntry] = []
    current_rank = 1
    for _, grouped in groupby(provisional, key=lambda entry: entry.wins):
        group = list(grouped)
        if len(group) > 1:
            group = sort_by_head_to_head(group, results)

        leaderboard.extend(entry.model_copy(update={"rank": current_rank}) for entry in group)
        current_rank += len(group)

    return leaderboard


async def get_league_leaderboard(
    league_id: LeagueId, season_id: SeasonId | None = None
) -> list[LeaderboardEntry]:
    started_at = time.monotonic()
    players = await get_league_roster(league_id)
    matches = await get_completed_matches_for_league(league_id, season_id)
    leaderboard = determine_leaderboard(players, matches)

    duration_ms = int((time.monotonic() - started_at) * 1000)
    if duration_ms >= config.slow_recalculation_warn_ms:
        logger.warning(
            "Leaderboard calculation was slow: league_id=%s season_id=%s duration_ms=%s",
            int(league_id),
            season_id,
            duration_ms,
        )
    return leaderboard
