from collections.abc import Sequence

from fastapi import HTTPException
from heliclockter import datetime_utc
from starlette import status

from thematch.database import database
from thematch.logic.ranking.elimination import auto_advance_byes_in_bracket
from thematch.logic.ranking.standings import get_league_leaderboard
from thematch.logic.scheduling.elimination import (
    determine_bracket_matches,
    determine_matches_first_round,
    validate_player_count_range,
)
from thematch.models.db.tournament import (
    Tournament,
    TournamentBody,
    TournamentInsertable,
    TournamentWithMatches,
)
from thematch.storage.seasons import get_season
from thematch.storage.tournaments import (
    create_tournament,
    get_tournament_for_season,
    save_tournament_with_matches,
)
from thematch.utils.id_types import PlayerId, SeasonId
from thematch.utils.logging import logger


def build_single_elimination_bracket(
    tournament: Tournament, seeded_player_ids: Sequence[PlayerId]
) -> TournamentWithMatches:
    """Seeded bracket with all byes already resolved."""
    validate_player_count_range(len(seeded_player_ids))
    matches = determine_bracket_matches(tournament.id, len(seeded_player_ids))
    matches = determine_matches_first_round(matches, seeded_player_ids)
    return auto_advance_byes_in_bracket(
        TournamentWithMatches(**tournament.model_dump(), matches=matches)
    )


async def create_tournament_for_season(
    season_id: SeasonId, body: TournamentBody
) -> TournamentWithMatches:
    async with database.transaction(("season", season_id)):
        season = await get_season(season_id)
        if await get_tournament_for_season(season_id) is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Season {season_id} already has a tournament",
            )

        standings = await get_league_leaderboard(season.league_id, season.id)
        seeded_player_ids = [entry.player_id for entry in standings][: body.player_count]
        validate_player_count_range(len(seeded_player_ids))

        tournament = await create_tournament(
            TournamentInsertable(
                season_id=season.id,
                league_id=season.league_id,
                name=body.name,
                created=datetime_utc.now(),
            )
        )
        bracket = build_single_elimination_bracket(tournament, seeded_player_ids)
        await save_tournament_with_matches(bracket)

    logger.info(
        "Created tournament: tournament_id=%s season_id=%s players=%s",
        int(bracket.id),
        int(season_id),
        len(seeded_player_ids),
    )
    return bracket
