from enum import auto
from typing import NamedTuple

from heliclockter import datetime_utc
from pydantic import BaseModel, Field

from thematch.models.db.shared import BaseModelORM
from thematch.utils.id_types import (
    LeagueId,
    MatchId,
    PlayerId,
    SeasonId,
    SeriesId,
    TournamentId,
)
from thematch.utils.types import EnumAutoStr


class MatchStatus(EnumAutoStr):
    IN_PROGRESS = auto()
    COMPLETED = auto()


class MatchParticipant(BaseModel):
    player_id: PlayerId
    seat_index: int = 0
    score: int | None = None
    finish_position: int | None = None
    is_winner: bool = False


class DecidedResult(NamedTuple):
    winner_id: PlayerId
    loser_id: PlayerId


class MatchBody(BaseModel):
    date: datetime_utc
    league_id: LeagueId | None = None
    season_id: SeasonId | None = None
    series_id: SeriesId | None = None
    tournament_id: TournamentId | None = None
    week_number: int | None = Field(default=None, ge=1)
    is_makeup: bool = False
    status: MatchStatus = MatchStatus.COMPLETED
    participants: list[MatchParticipant] = Field(min_length=2)


class MatchInsertable(MatchBody):
    created: datetime_utc


class Match(MatchInsertable, BaseModelORM):
    id: MatchId

    @property
    def is_completed(self) -> bool:
        return self.status is MatchStatus.COMPLETED

    def get_player_ids(self) -> list[PlayerId]:
        return [participant.player_id for participant in self.participants]

    def is_between(self, player_id: PlayerId, opponent_id: PlayerId) -> bool:
        return len(self.participants) == 2 and set(self.get_player_ids()) == {
            player_id,
            opponent_id,
        }

    def get_decided_result(self) -> DecidedResult | None:
        """
        Winner and loser of a completed two-sided match.

        Matches with more than two sides, with no winner or with more than one winner
        have no decided result and count towards neither wins nor losses.
        """
        if not self.is_completed or len(self.participants) != 2:
            return None

        first, second = self.participants
        if first.player_id == second.player_id or first.is_winner == second.is_winner:
            return None

        if first.is_winner:
            return DecidedResult(winner_id=first.player_id, loser_id=second.player_id)
        return DecidedResult(winner_id=second.player_id, loser_id=first.player_id)
