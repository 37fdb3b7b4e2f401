from typing import Literal

from pydantic import BaseModel, Field

from thematch.utils.id_types import LeagueId, PlayerId

GameOutcome = Literal["W", "L"]


class LeaderboardEntry(BaseModel):
    player_id: PlayerId
    first_name: str
    last_name: str
    wins: int = 0
    losses: int = 0
    games_played: int = 0
    win_percentage: float = 0
    rank: int = 1


class HeadToHeadRecord(BaseModel):
    player_id: PlayerId
    opponent_id: PlayerId
    wins: int = 0
    losses: int = 0

    @property
    def games_played(self) -> int:
        return self.wins + self.losses


class OwedMatch(BaseModel):
    player_id: PlayerId
    player_name: str
    opponent_id: PlayerId
    opponent_name: str
    week_number: int
    is_makeup: bool = False


class OwedMatchesView(BaseModel):
    scheduled: list[OwedMatch] = Field(default_factory=list)
    makeup: list[OwedMatch] = Field(default_factory=list)


class PlayerStats(BaseModel):
    player_id: PlayerId
    league_id: LeagueId
    current_streak: int = 0
    best_win_streak: int = 0
    recent_form: list[GameOutcome] = Field(default_factory=list)


class SeriesStanding(BaseModel):
    player_id: PlayerId
    first_name: str
    last_name: str
    wins: int = 0
    losses: int = 0
    games_played: int = 0
    win_percentage: float = 0


class PlayerStatsView(PlayerStats):
    streak_label: str
    recent_form_label: str
