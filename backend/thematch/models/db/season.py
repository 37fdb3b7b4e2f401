from enum import auto

from heliclockter import datetime_utc
from pydantic import BaseModel, Field

from thematch.models.db.shared import BaseModelORM
from thematch.utils.id_types import LeagueId, PlayerId, SeasonId
from thematch.utils.types import EnumAutoStr


class SeasonStatus(EnumAutoStr):
    ACTIVE = auto()
    COMPLETED = auto()


class SeasonBody(BaseModel):
    name: str
    start_date: datetime_utc
    weeks_duration: int | None = Field(default=None, ge=1)


class SeasonInsertable(BaseModel):
    league_id: LeagueId
    name: str
    start_date: datetime_utc
    weeks_duration: int = Field(ge=1)
    current_week: int = Field(default=1, ge=1)
    status: SeasonStatus = SeasonStatus.ACTIVE
    created: datetime_utc


class Season(SeasonInsertable, BaseModelORM):
    id: SeasonId

    @property
    def is_active(self) -> bool:
        return self.status is SeasonStatus.ACTIVE


class WeekAttendanceBody(BaseModel):
    player_ids: list[PlayerId] = Field(default_factory=list)
