from fastapi import APIRouter

from thematch.config import config
from thematch.logic.ranking.statistics import get_series_standings
from thematch.routes.models import SeriesStandingsResponse
from thematch.utils.id_types import SeriesId

router = APIRouter(prefix=config.api_prefix)


@router.get("/series/{series_id}/standings", response_model=SeriesStandingsResponse)
async def get_standings(series_id: SeriesId) -> SeriesStandingsResponse:
    return SeriesStandingsResponse(data=await get_series_standings(series_id))
