"""Round-robin (all-play-all) pairing by the circle method."""

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

import random
from typing import Iterable, List, Optional, Sequence, Tuple

from swisscore.exceptions import PairingException
from swisscore.models.pairing import Pairing
from swisscore.player import Competitor
from swisscore.utils import id_sort_key, setup_logger

logger = setup_logger(__name__)

# A seat in the rotation; None is the phantom whose partner sits out
Seat = Optional[Competitor]


def calculate_rounds(num_competitors: int, is_double_round_robin: bool = False) -> int:
    """Rounds needed for everyone to meet everyone once (or twice)."""
    if num_competitors < 2:
        return 0
    per_cycle = num_competitors if num_competitors % 2 else num_competitors - 1
    return per_cycle * 2 if is_double_round_robin else per_cycle


def assign_pairing_numbers(
    competitors: Iterable[Competitor], seed: Optional[int] = None
) -> List[Competitor]:
    """Draw lots for pairing numbers 1..N.

    The same seed always yields the same draw. Returns the competitors in
    pairing-number order.
    """
    drawn = sorted(competitors, key=lambda c: id_sort_key(c.id))
    random.Random(seed).shuffle(drawn)
    for number, competitor in enumerate(drawn, start=1):
        competitor.pairing_number = number
    return drawn


def _pairing_order(competitor: Competitor):
    number = competitor.pairing_number
    return (number is None, number if number is not None else 0, id_sort_key(competitor.id))


class RoundRobin:
    """
    Full all-play-all schedule for a fixed field.

    Competitors are seated by pairing number. The first seat is fixed and
    the others rotate one place per round; an odd field gets a phantom seat,
    and whoever meets the phantom has the bye. Each cycle therefore pairs
    every two competitors exactly once and gives everyone one bye when the
    field is odd.

    Attributes:
        competitors: Competitors in pairing-number order
        is_double_round_robin: Whether the cycle is played twice
        rounds_per_cycle: Rounds in one cycle
        number_of_rounds: Total rounds in the schedule

    Example:
        >>> schedule = RoundRobin([Competitor(1), Competitor(2), Competitor(3), Competitor(4)])
        >>> schedule.number_of_rounds
        3
    """

    def __init__(
        self, competitors: Iterable[Competitor], is_double_round_robin: bool = False
    ) -> None:
        self.competitors: Tuple[Competitor, ...] = tuple(
            sorted(competitors, key=_pairing_order)
        )
        n = len(self.competitors)
        if n < 2:
            logger.error("Invalid competitor count for round robin: %d", n)
            raise PairingException(f"Round robin needs at least 2 competitors, got {n}")
        self.is_double_round_robin = is_double_round_robin
        self.rounds_per_cycle = calculate_rounds(n)
        self.number_of_rounds = calculate_rounds(n, is_double_round_robin)
        self._seats: List[Seat] = list(self.competitors)
        if n % 2:
            self._seats.append(None)
        self._position = {c.id: i for i, c in enumerate(self.competitors)}

    def _number(self, competitor: Competitor) -> int:
        if competitor.pairing_number is not None:
            return competitor.pairing_number
        return self._position[competitor.id] + 1

    def _colours(
        self, a: Competitor, b: Competitor, round_number: int, reverse: bool
    ) -> Tuple[Competitor, Competitor]:
        higher, lower = (a, b) if self._number(a) > self._number(b) else (b, a)
        higher_white = round_number % 2 == 1
        if reverse:
            higher_white = not higher_white
        return (higher, lower) if higher_white else (lower, higher)

    def seat_pairs(self, cycle_round: int) -> List[Tuple[Seat, Seat]]:
        """Seat pairs for a round within one cycle (1-based)."""
        fixed, rotating = self._seats[0], self._seats[1:]
        shift = (cycle_round - 1) % len(rotating)
        rotated = rotating[shift:] + rotating[:shift]
        half = len(self._seats) // 2
        pairs = [(fixed, rotated[0])]
        for i in range(1, half):
            pairs.append((rotated[i], rotated[len(rotated) - i]))
        return pairs

    def get_round_pairings(self, round_number: int) -> List[Pairing]:
        """Pairings for a round of the schedule, bye entry last.

        Raises:
            PairingException: If the round is outside the schedule
        """
        if not 1 <= round_number <= self.number_of_rounds:
            raise PairingException(
                f"Round {round_number} is outside the {self.number_of_rounds}-round schedule"
            )
        reverse = round_number > self.rounds_per_cycle
        cycle_round = round_number - self.rounds_per_cycle if reverse else round_number

        pairings: List[Pairing] = []
        bye: Optional[Competitor] = None
        for a, b in self.seat_pairs(cycle_round):
            if a is None or b is None:
                bye = b if a is None else a
                continue
            white, black = self._colours(a, b, cycle_round, reverse)
            pairings.append(Pairing(white=white, black=black, board_number=len(pairings) + 1))
        if bye is not None:
            pairings.append(Pairing.bye(bye, len(pairings) + 1))
        return pairings


def generate_round_robin_pairings(
    pool: Sequence[Competitor], round_number: int, is_double_round_robin: bool = False
) -> List[Pairing]:
    """Pairings for one round-robin round.

    Returns an empty list for fewer than two competitors.
    """
    if len(pool) < 2:
        return []
    return RoundRobin(pool, is_double_round_robin).get_round_pairings(round_number)
