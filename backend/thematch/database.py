import asyncio
from collections import defaultdict
from collections.abc import AsyncIterator, Hashable
from contextlib import asynccontextmanager
from itertools import count

from thematch.models.db.league import League, LeagueMembership
from thematch.models.db.match import Match
from thematch.models.db.player import Player
from thematch.models.db.season import Season
from thematch.models.db.series import Series
from thematch.models.db.tournament import Tournament, TournamentMatch
from thematch.utils.id_types import (
    LeagueId,
    MatchId,
    PlayerId,
    SeasonId,
    SeriesId,
    TournamentId,
    TournamentMatchId,
)


class MatchStore:
    """
    In-memory storage collaborator.

    Rows are pydantic models and are replaced, never mutated in place. Every
    read-modify-write on a season or a tournament runs inside `transaction`, which
    serializes writers per scope.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.players: dict[PlayerId, Player] = {}
        self.leagues: dict[LeagueId, League] = {}
        self.league_memberships: dict[tuple[LeagueId, PlayerId], LeagueMembership] = {}
        self.seasons: dict[SeasonId, Season] = {}
        self.week_attendance: dict[tuple[SeasonId, int], list[PlayerId]] = {}
        self.matches: dict[MatchId, Match] = {}
        self.series: dict[SeriesId, Series] = {}
        self.series_players: dict[SeriesId, set[PlayerId]] = defaultdict(set)
        self.tournaments: dict[TournamentId, Tournament] = {}
        self.tournament_matches: dict[
            TournamentId, dict[TournamentMatchId, TournamentMatch]
        ] = defaultdict(dict)
        self._sequences: dict[str, count[int]] = defaultdict(lambda: count(1))
        self._locks: dict[Hashable, asyncio.Lock] = defaultdict(asyncio.Lock)

    def next_id(self, table: str) -> int:
        return next(self._sequences[table])

    @asynccontextmanager
    async def transaction(self, scope: Hashable = None) -> AsyncIterator[None]:
        async with self._locks[scope]:
            yield


database = MatchStore()
