from fastapi import HTTPException
from starlette import status

from thematch.database import database
from thematch.models.db.tournament import (
    Tournament,
    TournamentInsertable,
    TournamentMatch,
    TournamentMatchWithDetails,
    TournamentWithMatches,
)
from thematch.utils.id_types import PlayerId, SeasonId, TournamentId


async def create_tournament(tournament: TournamentInsertable) -> Tournament:
    created = Tournament(
        **tournament.model_dump(), id=TournamentId(database.next_id("tournaments"))
    )
    database.tournaments[created.id] = created
    return created


async def get_tournament(tournament_id: TournamentId) -> Tournament:
    tournament = database.tournaments.get(tournament_id)
    if tournament is None:
        raise HTTPException(
            status.HTTP_404_NOT_FOUND, f"Could not find tournament with id {tournament_id}"
        )
    return tournament


async def get_tournament_for_season(season_id: SeasonId) -> Tournament | None:
    return next(
        (
            tournament
            for tournament in database.tournaments.values()
            if tournament.season_id == season_id
        ),
        None,
    )


async def get_tournament_matches(tournament_id: TournamentId) -> list[TournamentMatch]:
    """Bracket matches, first round first and top of the bracket first within a round."""
    return sorted(
        database.tournament_matches[tournament_id].values(),
        key=lambda match: (-match.round, match.match_number),
    )


async def get_tournament_with_matches(tournament_id: TournamentId) -> TournamentWithMatches:
    tournament = await get_tournament(tournament_id)
    return TournamentWithMatches(
        **tournament.model_dump(), matches=await get_tournament_matches(tournament_id)
    )


async def save_tournament_with_matches(bracket: TournamentWithMatches) -> None:
    database.tournaments[bracket.id] = Tournament.model_validate(
        bracket.model_dump(exclude={"matches"})
    )
    database.tournament_matches[bracket.id] = {match.id: match for match in bracket.matches}


async def get_tournament_matches_with_details(
    tournament_id: TournamentId,
) -> list[TournamentMatchWithDetails]:
    matches = await get_tournament_matches(tournament_id)

    def get_name(player_id: PlayerId | None) -> str | None:
        player = database.players.get(player_id) if player_id is not None else None
        return player.full_name if player is not None else None

    return [
        TournamentMatchWithDetails(
            **match.model_dump(),
            player_a_name=get_name(match.player_a_id),
            player_b_name=get_name(match.player_b_id),
            winner_name=get_name(match.winner_id),
        )
        for match in matches
    ]
