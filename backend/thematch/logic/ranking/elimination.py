from collections import deque
from collections.abc import Iterable

from fastapi import HTTPException
from starlette import status

from thematch.database import database
from thematch.models.db.tournament import (
    TournamentMatch,
    TournamentMatchStatus,
    TournamentStatus,
    TournamentWithMatches,
)
from thematch.storage.tournaments import get_tournament_with_matches, save_tournament_with_matches
from thematch.utils.id_types import PlayerId, TournamentId, TournamentMatchId
from thematch.utils.logging import logger


def get_feeder_match_ids(
    match_id: TournamentMatchId,
) -> tuple[TournamentMatchId, TournamentMatchId]:
    return TournamentMatchId(2 * match_id), TournamentMatchId(2 * match_id + 1)


def place_player_in_next_match(next_match: TournamentMatch, player_id: PlayerId) -> TournamentMatch:
    if next_match.player_a_id is None:
        return next_match.model_copy(update={"player_a_id": player_id})
    if next_match.player_b_id is None:
        return next_match.model_copy(update={"player_b_id": player_id})

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=f"Match {next_match.id} has no open slot for player {player_id}",
    )


def _sort_matches(matches: Iterable[TournamentMatch]) -> list[TournamentMatch]:
    return sorted(matches, key=lambda match: (-match.round, match.match_number))


class _BracketProgress:
    """Mutable working copy of a bracket while winners are propagated."""

    def __init__(self, bracket: TournamentWithMatches) -> None:
        self.bracket = bracket
        self.matches = {match.id: match for match in bracket.matches}
        self.champion_id = bracket.champion_id

    def get_match(self, match_id: TournamentMatchId) -> TournamentMatch:
        match = self.matches.get(match_id)
        if match is None:
            raise HTTPException(
                status.HTTP_404_NOT_FOUND,
                f"Could not find match {match_id} in tournament {self.bracket.id}",
            )
        return match

    def has_pending_feeders(self, match: TournamentMatch) -> bool:
        return any(
            not self.matches[feeder_id].is_completed
            for feeder_id in get_feeder_match_ids(match.id)
            if feeder_id in self.matches
        )

    def complete(self, match: TournamentMatch, winner_id: PlayerId | None) -> None:
        """Store a decided match and move its winner up the bracket."""
        self.matches[match.id] = match.model_copy(
            update={"winner_id": winner_id, "status": TournamentMatchStatus.COMPLETED}
        )
        if winner_id is None:
            return

        if match.next_match_id is not None:
            next_match = self.get_match(match.next_match_id)
            self.matches[next_match.id] = place_player_in_next_match(next_match, winner_id)
        else:
            self.champion_id = winner_id

    def to_bracket(self) -> TournamentWithMatches:
        update: dict[str, object] = {"matches": _sort_matches(self.matches.values())}
        if self.champion_id is not None:
            update |= {"champion_id": self.champion_id, "status": TournamentStatus.COMPLETED}
        return self.bracket.model_copy(update=update)


def _advance_byes(progress: _BracketProgress, match_ids: Iterable[TournamentMatchId]) -> None:
    """
    Resolve matches that can never get a second player.

    A match is a bye when it has at most one player and every match feeding it is
    decided. Resolving one may turn the match it feeds into a bye too, so that
    match is queued next.
    """
    queue = deque(match_ids)
    while queue:
        match = progress.matches.get(queue.popleft())
        if match is None or match.is_completed or match.status is TournamentMatchStatus.IN_PROGRESS:
            continue

        player_ids = match.get_player_ids()
        if len(player_ids) > 1 or progress.has_pending_feeders(match):
            continue

        winner_id = player_ids[0] if player_ids else None
        logger.debug(
            "Auto-advancing bye: tournament_id=%s match_id=%s winner_id=%s",
            int(match.tournament_id),
            int(match.id),
            winner_id,
        )
        progress.complete(match, winner_id)
        if match.next_match_id is not None:
            queue.append(match.next_match_id)


def auto_advance_byes_in_bracket(bracket: TournamentWithMatches) -> TournamentWithMatches:
    progress = _BracketProgress(bracket)
    _advance_byes(progress, [match.id for match in _sort_matches(bracket.matches)])
    return progress.to_bracket()


def record_game(
    bracket: TournamentWithMatches, match_id: TournamentMatchId, winner_id: PlayerId
) -> TournamentWithMatches:
    """
    Count one game won by `winner_id` towards the series of a bracket match.

    The series is decided once a side reaches the number of games its format needs.
    A decided match is terminal: recording another game for it is rejected.
    """
    progress = _BracketProgress(bracket)
    match = progress.get_match(match_id)

    if match.is_completed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Series of match {match_id} has already been decided",
        )

    if match.player_a_id is None or match.player_b_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Match {match_id} is still waiting for its players",
        )

    if winner_id == match.player_a_id:
        update = {"player_a_wins": match.player_a_wins + 1}
    elif winner_id == match.player_b_id:
        update = {"player_b_wins": match.player_b_wins + 1}
    else:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Player {winner_id} does not play in match {match_id}",
        )

    match = match.model_copy(update={**update, "status": TournamentMatchStatus.IN_PROGRESS})
    progress.matches[match.id] = match

    games_needed = match.series_format.get_games_needed_to_win()
    if match.player_a_wins >= games_needed:
        progress.complete(match, match.player_a_id)
    elif match.player_b_wins >= games_needed:
        progress.complete(match, match.player_b_id)

    if match.next_match_id is not None and progress.matches[match.id].is_completed:
        _advance_byes(progress, [match.next_match_id])

    return progress.to_bracket()


async def record_tournament_game(
    tournament_id: TournamentId, match_id: TournamentMatchId, winner_id: PlayerId
) -> TournamentWithMatches:
    async with database.transaction(("tournament", tournament_id)):
        bracket = await get_tournament_with_matches(tournament_id)
        updated = record_game(bracket, match_id, winner_id)
        await save_tournament_with_matches(updated)

    if updated.champion_id is not None and not bracket.is_completed:
        logger.info(
            "Tournament decided: tournament_id=%s champion_id=%s",
            int(tournament_id),
            int(updated.champion_id),
        )
    return updated
