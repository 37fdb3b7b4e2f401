from typing import Generic, TypeVar

from pydantic import BaseModel

from thematch.models.db.match import Match
from thematch.models.db.season import Season
from thematch.models.db.tournament import TournamentMatchWithDetails, TournamentWithMatches
from thematch.models.league import (
    HeadToHeadRecord,
    LeaderboardEntry,
    OwedMatch,
    OwedMatchesView,
    PlayerStatsView,
    SeriesStanding,
)


class SuccessResponse(BaseModel):
    success: bool = True


DataT = TypeVar("DataT")


class DataResponse(BaseModel, Generic[DataT]):
    data: DataT


class LeaderboardResponse(DataResponse[list[LeaderboardEntry]]):
    pass


class HeadToHeadResponse(DataResponse[HeadToHeadRecord]):
    pass


class PlayerStatsResponse(DataResponse[PlayerStatsView]):
    pass


class SingleMatchResponse(DataResponse[Match]):
    pass


class SeasonResponse(DataResponse[Season]):
    pass


class OwedMatchesResponse(DataResponse[list[OwedMatch]]):
    pass


class OwedMatchesViewResponse(DataResponse[OwedMatchesView]):
    pass


class TournamentResponse(DataResponse[TournamentWithMatches]):
    pass


class BracketResponse(DataResponse[list[TournamentMatchWithDetails]]):
    pass


class SeriesStandingsResponse(DataResponse[list[SeriesStanding]]):
    pass
