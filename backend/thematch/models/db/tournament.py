from enum import auto

from heliclockter import datetime_utc
from pydantic import BaseModel, Field

from thematch.models.db.shared import BaseModelORM
from thematch.utils.id_types import (
    LeagueId,
    PlayerId,
    SeasonId,
    TournamentId,
    TournamentMatchId,
)
from thematch.utils.types import EnumAutoStr


class SeriesFormat(EnumAutoStr):
    BEST_OF_3 = auto()
    BEST_OF_5 = auto()

    def get_games_needed_to_win(self) -> int:
        return {
            SeriesFormat.BEST_OF_3: 2,
            SeriesFormat.BEST_OF_5: 3,
        }[self]


class TournamentStatus(EnumAutoStr):
    ACTIVE = auto()
    COMPLETED = auto()


class TournamentMatchStatus(EnumAutoStr):
    PENDING = auto()
    IN_PROGRESS = auto()
    COMPLETED = auto()


class TournamentBody(BaseModel):
    name: str
    player_count: int | None = Field(default=None, ge=2)


class TournamentInsertable(BaseModel):
    season_id: SeasonId
    league_id: LeagueId
    name: str
    status: TournamentStatus = TournamentStatus.ACTIVE
    champion_id: PlayerId | None = None
    created: datetime_utc


class Tournament(TournamentInsertable, BaseModelORM):
    id: TournamentId

    @property
    def is_completed(self) -> bool:
        return self.status is TournamentStatus.COMPLETED


class TournamentMatch(BaseModelORM):
    id: TournamentMatchId
    tournament_id: TournamentId
    round: int = Field(ge=1)
    match_number: int = Field(ge=0)
    player_a_id: PlayerId | None = None
    player_b_id: PlayerId | None = None
    player_a_wins: int = 0
    player_b_wins: int = 0
    winner_id: PlayerId | None = None
    next_match_id: TournamentMatchId | None = None
    series_format: SeriesFormat
    status: TournamentMatchStatus = TournamentMatchStatus.PENDING
    created: datetime_utc

    @property
    def is_completed(self) -> bool:
        return self.status is TournamentMatchStatus.COMPLETED

    def get_player_ids(self) -> list[PlayerId]:
        return [
            player_id for player_id in (self.player_a_id, self.player_b_id) if player_id is not None
        ]


class TournamentMatchWithDetails(TournamentMatch):
    player_a_name: str | None = None
    player_b_name: str | None = None
    winner_name: str | None = None


class TournamentWithMatches(Tournament):
    matches: list[TournamentMatch] = Field(default_factory=list)


class TournamentGameBody(BaseModel):
    winner_id: PlayerId
