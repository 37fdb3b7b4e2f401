from enum import auto

from heliclockter import datetime_utc
from pydantic import BaseModel, Field

from thematch.models.db.league import GameType
from thematch.models.db.shared import BaseModelORM
from thematch.utils.id_types import PlayerId, SeriesId
from thematch.utils.types import EnumAutoStr


class SeriesStatus(EnumAutoStr):
    ACTIVE = auto()
    COMPLETED = auto()


class SeriesBody(BaseModel):
    name: str
    description: str | None = None
    game_type: GameType
    start_date: datetime_utc
    player_ids: list[PlayerId] = Field(default_factory=list)


class SeriesInsertable(BaseModel):
    name: str
    description: str | None = None
    game_type: GameType
    start_date: datetime_utc
    end_date: datetime_utc | None = None
    status: SeriesStatus = SeriesStatus.ACTIVE
    created: datetime_utc


class Series(SeriesInsertable, BaseModelORM):
    id: SeriesId
