"""Cost of pairing two competitors."""

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

from typing import NamedTuple

from swisscore.constants import (
    MAX_POOL_SIZE,
    MAX_ROUNDS,
    MAX_SEED_BIAS_WEIGHT,
    W_COLOR,
    W_CONSEC_REPEAT,
    W_REPEAT,
    W_SCORE,
    W_STREAK,
)
from swisscore.pairing.colors import assign_colors, would_create_three_same
from swisscore.player import Competitor
from swisscore.type_hints import BLACK, WHITE


class PairCostContext(NamedTuple):
    """Per-candidate facts the cost depends on."""

    round_number: int
    score_gap: float
    is_repeat: bool = False
    is_consecutive_repeat: bool = False
    seed_bias_penalty: int = 0


def score_gap_cost(score_gap: float) -> int:
    # gaps are multiples of half a point
    return int(round(abs(score_gap) * W_SCORE))


def calculate_pair_cost(
    first: Competitor, second: Competitor, context: PairCostContext
) -> int:
    """Integer cost of pairing ``first`` with ``second`` (lower is better).

    Tiers, highest first: consecutive repeat, repeat, score gap, then colour
    balance, colour streak and seed bias.
    """
    cost = score_gap_cost(context.score_gap)
    cost += abs(first.color_balance + second.color_balance) * W_COLOR

    white, black = assign_colors(first, second, context.round_number)
    if would_create_three_same(white, WHITE) or would_create_three_same(black, BLACK):
        cost += W_STREAK

    if context.is_repeat:
        cost += W_REPEAT
    if context.is_consecutive_repeat:
        cost += W_CONSEC_REPEAT

    cost += context.seed_bias_penalty
    return cost


def low_tier_bound(pairs: int = MAX_POOL_SIZE // 2) -> int:
    """Largest colour + streak + seed bias total a round can accumulate."""
    per_pair = (
        W_COLOR * 2 * MAX_ROUNDS + W_STREAK + MAX_SEED_BIAS_WEIGHT * MAX_POOL_SIZE
    )
    return pairs * per_pair


def weights_dominate() -> bool:
    """Check that every cost tier outweighs all lower tiers combined.

    The bounds are taken over a whole round at the maximum supported pool
    size and round count.
    """
    pairs = MAX_POOL_SIZE // 2
    low = low_tier_bound(pairs)
    # smallest non-zero score gap is half a point
    if score_gap_cost(0.5) <= low:
        return False
    score_tier = pairs * score_gap_cost(MAX_ROUNDS + 1) + low
    if W_REPEAT <= score_tier:
        return False
    return W_CONSEC_REPEAT > pairs * W_REPEAT + score_tier
