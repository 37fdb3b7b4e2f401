from typing import Annotated

from heliclockter import datetime_utc
from pydantic import BaseModel, StringConstraints

from thematch.models.db.shared import BaseModelORM
from thematch.utils.id_types import PlayerId


class PlayerBody(BaseModel):
    first_name: Annotated[str, StringConstraints(min_length=1, max_length=50)]
    last_name: Annotated[str, StringConstraints(min_length=1, max_length=50)]


class PlayerInsertable(PlayerBody):
    created: datetime_utc


class Player(PlayerInsertable, BaseModelORM):
    id: PlayerId

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def get_name_sort_key(self) -> tuple[str, str]:
        """Surname first, then given name, case-insensitive."""
        return self.last_name.casefold(), self.first_name.casefold()
