"""Swiss round generation."""

# Swiss Core
# Copyright (C) 2025  Swiss Core developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from swisscore.constants import FORCED_REPEAT_REASON, MAX_POOL_SIZE
from swisscore.exceptions import InvalidInputException
from swisscore.models.config import SolverSettings
from swisscore.models.pairing import Pairing
from swisscore.models.pairing_history import PairingHistory
from swisscore.models.pairing_result import PairingResult
from swisscore.models.round_data import RoundData
from swisscore.pairing.bye import choose_bye
from swisscore.pairing.colors import assign_colors
from swisscore.pairing.solver import (
    ScoreFunction,
    SearchContext,
    SearchResult,
    group_by_score,
    is_better,
    solve_flat,
    solve_score_groups,
)
from swisscore.player import Competitor
from swisscore.utils import setup_logger

logger = setup_logger(__name__)


def raw_score(competitor: Competitor) -> float:
    return competitor.score


def validate_pool(pool: Sequence[Competitor], round_number: int) -> None:
    """Reject malformed pairing requests.

    Raises
    ------
    InvalidInputException
        On duplicate ids, negative scores, an oversized pool or a round
        number below 1.
    """
    if round_number < 1:
        raise InvalidInputException(f"Round numbers start at 1, got {round_number}")
    if len(pool) > MAX_POOL_SIZE:
        raise InvalidInputException(
            f"Pool of {len(pool)} exceeds the supported maximum of {MAX_POOL_SIZE}"
        )
    seen = set()
    for competitor in pool:
        if competitor.id in seen:
            raise InvalidInputException(f"Duplicate competitor id {competitor.id!r}")
        seen.add(competitor.id)
        if competitor.score < 0:
            raise InvalidInputException(
                f"Competitor {competitor.id!r} has negative score {competitor.score}"
            )


def _build_pairings(
    result: Optional[SearchResult],
    bye: Optional[Competitor],
    round_number: int,
) -> List[Pairing]:
    pairings: List[Pairing] = []
    board = 1
    for match in result.matches if result is not None else ():
        white, black = assign_colors(match.first, match.second, round_number)
        pairings.append(
            Pairing(
                white=white,
                black=black,
                board_number=board,
                is_repeat=match.is_repeat,
            )
        )
        board += 1
    if bye is not None:
        pairings.append(Pairing.bye(bye, board))
    return pairings


def generate_swiss_round(
    pool: Sequence[Competitor],
    round_number: int,
    prior_rounds: Iterable[RoundData] = (),
    score_of: Optional[ScoreFunction] = None,
    seed_bias_weight: int = 0,
    settings: Optional[SolverSettings] = None,
) -> PairingResult:
    """Pair one Swiss round.

    The bye (for an odd pool) is taken out first. The remaining competitors
    are paired by score group without repeats; if that fails the whole pool
    is tried as a single bracket, and only if no repeat-free pairing exists
    at all is the search repeated with repeats allowed, minimizing the number
    of repeats and then the cost.

    Parameters
    ----------
    pool : sequence of Competitor
        Competitors to pair this round.
    round_number : int
        1-based round number.
    prior_rounds : iterable of RoundData
        Earlier rounds, in any order.
    score_of : callable, optional
        Effective score function, defaults to the raw score.
    seed_bias_weight : int
        Strength of the top-half against bottom-half preference.
    settings : SolverSettings, optional
        Search budget and warning switches.

    Returns
    -------
    PairingResult
        Boards 1..n in search order followed by the bye entry, if any.
    """
    settings = settings or SolverSettings()
    validate_pool(pool, round_number)
    score_of = score_of or raw_score

    if len(pool) < 2:
        logger.info("Round %s: fewer than two competitors, nothing to pair", round_number)
        return PairingResult()

    history = PairingHistory.from_rounds(prior_rounds, pool)
    bye = choose_bye(pool, history.bye_counts)
    pairing_pool = [c for c in pool if bye is None or c.id != bye.id]

    context = SearchContext(
        round_number=round_number,
        history=history,
        score_of=score_of,
        seed_bias_weight=seed_bias_weight,
        allow_repeats=False,
        max_search_nodes=settings.max_search_nodes,
    )
    groups = group_by_score(pairing_pool, score_of)

    result = solve_score_groups(groups, context)
    if result is None:
        logger.debug("Round %s: grouped search found no repeat-free pairing", round_number)
        result = solve_flat(pairing_pool, context)

    if result is None:
        context.allow_repeats = True
        result = solve_score_groups(groups, context)
        # one floater per group can force extra repeats the flat search avoids
        flat = solve_flat(pairing_pool, context)
        if flat is not None and is_better(flat, result, allow_repeats=True):
            result = flat

    repeat_count = result.repeat_count if result is not None else 0
    forced = repeat_count > 0
    notes = {"forced_repeat_reason": FORCED_REPEAT_REASON} if forced else {}
    if forced and settings.warn_on_forced_repeat:
        logger.warning(
            "Round %s: %s, forced repeats=%s",
            round_number,
            FORCED_REPEAT_REASON,
            repeat_count,
        )
    if context.budget_exhausted:
        notes["search_budget_exhausted"] = True

    pairings = _build_pairings(result, bye, round_number)
    logger.info(
        "Round %s paired: %s boards, bye: %s",
        round_number,
        len(pairings) - (1 if bye is not None else 0),
        bye.id if bye is not None else "None",
    )
    return PairingResult(
        pairings=pairings,
        forced_repeat=forced,
        repeat_count=repeat_count,
        notes=notes,
    )
