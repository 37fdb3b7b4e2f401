from collections.abc import Sequence

from fastapi import HTTPException
from heliclockter import datetime_utc
from starlette import status

from thematch.config import config
from thematch.models.db.tournament import SeriesFormat, TournamentMatch
from thematch.utils.id_types import PlayerId, TournamentId, TournamentMatchId

FINALS_ROUND = 1


def get_bracket_size(player_count: int) -> int:
    if player_count < 1:
        return 0
    return 1 << (player_count - 1).bit_length()


def get_seed_order(bracket_size: int) -> list[int]:
    """
    Standard bracket placement of seeds, pairwise per first-round match.

    Each seed of the half-size order is followed by its complement, so the top
    seeds can only meet in the latest possible round: 1, 8, 4, 5, 2, 7, 3, 6 for 8.
    """
    if bracket_size == 1:
        return [1]

    previous = get_seed_order(bracket_size // 2)
    return [
        seed
        for prev_seed in previous
        for seed in (prev_seed, bracket_size + 1 - prev_seed)
    ]


def get_bracket_match_id(round_: int, match_number: int) -> TournamentMatchId:
    """
    Position of a match in the bracket tree, the finals being 1.

    Round `r` holds ids `2**(r-1)` up to `2**r - 1`, so a match feeds into `id // 2`.
    """
    return TournamentMatchId((1 << (round_ - 1)) + match_number)


def get_series_format_for_round(round_: int) -> SeriesFormat:
    return SeriesFormat.BEST_OF_5 if round_ == FINALS_ROUND else SeriesFormat.BEST_OF_3


def validate_player_count_range(player_count: int, minimum: int = 2) -> None:
    if not (minimum <= player_count <= config.max_elimination_player_count):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Number of players invalid, should be between {minimum} "
                f"and {config.max_elimination_player_count}"
            ),
        )


def get_number_of_rounds_to_create_single_elimination(player_count: int) -> int:
    validate_player_count_range(player_count)
    bracket_size = get_bracket_size(player_count)
    return bracket_size.bit_length() - 1


def determine_bracket_matches(
    tournament_id: TournamentId, player_count: int
) -> list[TournamentMatch]:
    """Empty bracket slots, first round first, each wired to the match its winner enters."""
    rounds_count = get_number_of_rounds_to_create_single_elimination(player_count)
    created = datetime_utc.now()

    matches: list[TournamentMatch] = []
    for round_ in range(rounds_count, FINALS_ROUND - 1, -1):
        for match_number in range(1 << (round_ - 1)):
            matches.append(
                TournamentMatch(
                    id=get_bracket_match_id(round_, match_number),
                    tournament_id=tournament_id,
                    round=round_,
                    match_number=match_number,
                    next_match_id=(
                        get_bracket_match_id(round_ - 1, match_number // 2)
                        if round_ > FINALS_ROUND
                        else None
                    ),
                    series_format=get_series_format_for_round(round_),
                    created=created,
                )
            )
    return matches


def determine_matches_first_round(
    matches: Sequence[TournamentMatch], seeded_player_ids: Sequence[PlayerId]
) -> list[TournamentMatch]:
    """Place seeds into the first round, seed 1 being the best standing."""
    first_round = max(match.round for match in matches)
    bracket_size = get_bracket_size(len(seeded_player_ids))
    ordered_seeds = get_seed_order(bracket_size)
    seed_lookup: dict[int, PlayerId] = {
        i + 1: player_id for i, player_id in enumerate(seeded_player_ids)
    }

    seeded: list[TournamentMatch] = []
    for match in matches:
        if match.round != first_round:
            seeded.append(match)
            continue

        player_a_id = seed_lookup.get(ordered_seeds[2 * match.match_number + 0])
        player_b_id = seed_lookup.get(ordered_seeds[2 * match.match_number + 1])
        if player_a_id is None and player_b_id is not None:
            player_a_id, player_b_id = player_b_id, None

        seeded.append(
            match.model_copy(update={"player_a_id": player_a_id, "player_b_id": player_b_id})
        )

    return seeded
