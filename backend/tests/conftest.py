from collections.abc import Iterator

import pytest

from thematch.database import database


@pytest.fixture(autouse=True)
def reset_database() -> Iterator[None]:
    database.reset()
    yield
    database.reset()
