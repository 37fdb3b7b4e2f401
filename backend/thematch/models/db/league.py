from enum import auto

from heliclockter import datetime_utc
from pydantic import BaseModel

from thematch.models.db.shared import BaseModelORM
from thematch.utils.id_types import LeagueId, PlayerId
from thematch.utils.types import EnumAutoStr


class GameType(EnumAutoStr):
    POOL = auto()
    DARTS = auto()
    DOMINOS = auto()
    UNO = auto()
    CUSTOM = auto()


class LeagueFormat(EnumAutoStr):
    ROUND_ROBIN = auto()
    FREE_PLAY = auto()


class LeagueBody(BaseModel):
    name: str
    game_type: GameType
    format: LeagueFormat = LeagueFormat.FREE_PLAY
    location: str | None = None


class LeagueInsertable(LeagueBody):
    created: datetime_utc


class League(LeagueInsertable, BaseModelORM):
    id: LeagueId

    @property
    def is_round_robin(self) -> bool:
        return self.format is LeagueFormat.ROUND_ROBIN


class LeagueMembership(BaseModelORM):
    league_id: LeagueId
    player_id: PlayerId
    created: datetime_utc
