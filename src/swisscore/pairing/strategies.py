"""Swiss pairing variants: standard, USCF, FIDE Dutch and accelerated."""

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

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence

from swisscore.constants import (
    ACCELERATION_BONUS,
    MAX_ACCELERATED_ROUNDS,
    VARIANT_ACCELERATED,
    VARIANT_FIDE_DUTCH,
    VARIANT_STANDARD,
    VARIANT_USCF,
)
from swisscore.exceptions import InvalidInputException
from swisscore.models.config import SolverSettings
from swisscore.models.pairing_result import PairingResult
from swisscore.models.round_data import RoundData
from swisscore.pairing.engine import generate_swiss_round, raw_score
from swisscore.pairing.solver import ScoreFunction, rating_order
from swisscore.player import Competitor
from swisscore.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class SwissStrategy:
    """Parameters that distinguish one Swiss variant from another.

    Attributes
    ----------
    name : str
        Registry name of the variant.
    seed_bias_weight : int
        Weight of the top-half against bottom-half preference inside a bracket.
    accelerated : bool
        Whether the top half of the roster gets virtual points early on.
    acceleration_bonus : float
        Virtual points added while accelerated.
    max_accelerated_rounds : int
        Cap on the number of accelerated rounds.
    """

    name: str
    seed_bias_weight: int
    accelerated: bool = False
    acceleration_bonus: float = ACCELERATION_BONUS
    max_accelerated_rounds: int = MAX_ACCELERATED_ROUNDS

    def accelerated_rounds(self, total_rounds: int) -> int:
        """Number of leading rounds that are accelerated."""
        if not self.accelerated:
            return 0
        return min(self.max_accelerated_rounds, total_rounds // 3)

    def score_function(
        self,
        round_number: int,
        roster: Sequence[Competitor],
        total_rounds: Optional[int],
    ) -> ScoreFunction:
        """Effective score used for grouping this round."""
        if not self.accelerated:
            return raw_score
        if total_rounds is None:
            raise InvalidInputException(
                f"The {self.name} variant needs the total number of rounds"
            )
        if round_number > self.accelerated_rounds(total_rounds):
            return raw_score

        seeded = rating_order(roster)
        top_ids = frozenset(c.id for c in seeded[: math.ceil(len(seeded) / 2)])
        bonus = self.acceleration_bonus
        logger.debug(
            "Round %s accelerated: %s competitors get +%s", round_number, len(top_ids), bonus
        )

        def accelerated_score(competitor: Competitor) -> float:
            return competitor.score + (bonus if competitor.id in top_ids else 0.0)

        return accelerated_score

    def pair_round(
        self,
        pool: Sequence[Competitor],
        round_number: int,
        full_roster: Optional[Sequence[Competitor]] = None,
        prior_rounds: Iterable[RoundData] = (),
        total_rounds: Optional[int] = None,
        settings: Optional[SolverSettings] = None,
    ) -> PairingResult:
        roster = full_roster if full_roster else pool
        return generate_swiss_round(
            pool,
            round_number,
            prior_rounds,
            score_of=self.score_function(round_number, roster, total_rounds),
            seed_bias_weight=self.seed_bias_weight,
            settings=settings,
        )


STANDARD = SwissStrategy(VARIANT_STANDARD, seed_bias_weight=0)
USCF = SwissStrategy(VARIANT_USCF, seed_bias_weight=5)
FIDE_DUTCH = SwissStrategy(VARIANT_FIDE_DUTCH, seed_bias_weight=10)
ACCELERATED = SwissStrategy(VARIANT_ACCELERATED, seed_bias_weight=10, accelerated=True)

STRATEGIES: Dict[str, SwissStrategy] = {
    s.name: s for s in (STANDARD, USCF, FIDE_DUTCH, ACCELERATED)
}


def get_strategy(name: str) -> SwissStrategy:
    """Look up a variant by name."""
    try:
        return STRATEGIES[name]
    except KeyError:
        raise InvalidInputException(
            f"Unknown Swiss variant {name!r}; expected one of {', '.join(STRATEGIES)}"
        ) from None


def generate_pairings(
    pool: Sequence[Competitor],
    round_number: int,
    full_roster: Optional[Sequence[Competitor]] = None,
    prior_rounds: Iterable[RoundData] = (),
    total_rounds: Optional[int] = None,
    variant: str = VARIANT_STANDARD,
    settings: Optional[SolverSettings] = None,
) -> PairingResult:
    """Pair one Swiss round with the named variant.

    Args:
        pool: Competitors to pair this round
        round_number: 1-based round number
        full_roster: Whole field, used to seed acceleration (defaults to pool)
        prior_rounds: Earlier rounds of the tournament
        total_rounds: Planned number of rounds, required by "accelerated"
        variant: "standard", "uscf", "fide_dutch" or "accelerated"
        settings: Optional search settings

    Returns:
        The round's pairings, bye entry last
    """
    return get_strategy(variant).pair_round(
        pool,
        round_number,
        full_roster=full_roster,
        prior_rounds=prior_rounds,
        total_rounds=total_rounds,
        settings=settings,
    )
