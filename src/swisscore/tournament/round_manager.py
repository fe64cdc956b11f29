"""Round progression and pairing generation for tournaments."""

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

from typing import TYPE_CHECKING, List, Optional

from swisscore.constants import PAIRING_SYSTEM_ROUND_ROBIN
from swisscore.exceptions import RoundNotFoundException, TournamentStateException
from swisscore.models.config import SolverSettings
from swisscore.models.pairing_result import PairingResult
from swisscore.models.round_data import RoundData
from swisscore.pairing.round_robin import RoundRobin
from swisscore.pairing.strategies import generate_pairings
from swisscore.tournament.standings import competitors_for_next_round
from swisscore.utils import setup_logger

if TYPE_CHECKING:
    from swisscore.tournament.tournament import Tournament

logger = setup_logger(__name__)


class RoundManager:
    """Manages round progression and pairing generation for a tournament.

    This class is responsible for:
    - Refusing a new round until the previous one is completed
    - Generating pairings with the tournament's pairing system
    - Appending rounds, and undoing an uncompleted last round
    """

    def __init__(self, tournament: "Tournament", settings: Optional[SolverSettings] = None):
        self.tournament = tournament
        self.settings = settings or SolverSettings()
        self.round_robin: Optional[RoundRobin] = None

    @property
    def rounds(self) -> List[RoundData]:
        return self.tournament.rounds

    @property
    def current_round_number(self) -> int:
        """Number of the latest round, 0 before the first round."""
        return len(self.rounds)

    @property
    def completed_rounds_count(self) -> int:
        return sum(1 for r in self.rounds if r.is_completed)

    def get_round(self, round_number: int) -> RoundData:
        """Get a round by number.

        Raises:
            RoundNotFoundException: If the round does not exist
        """
        if 1 <= round_number <= len(self.rounds):
            return self.rounds[round_number - 1]
        raise RoundNotFoundException(f"Round {round_number} does not exist")

    def _check_can_pair(self) -> int:
        config = self.tournament.config
        if self.rounds and not self.rounds[-1].is_completed:
            raise TournamentStateException(
                f"Round {self.rounds[-1].round_number} must be completed before pairing the next"
            )
        if len(self.rounds) >= config.num_rounds:
            raise TournamentStateException(
                f"Cannot create more rounds: already at {config.num_rounds} rounds"
            )
        if len(self.tournament.competitors) < 2:
            raise TournamentStateException("At least two competitors are needed to pair")
        return len(self.rounds) + 1

    def create_next_round(self) -> RoundData:
        """Pair and append the next round.

        Raises:
            TournamentStateException: If the previous round is not completed,
                all rounds exist already, or the field is too small
        """
        round_number = self._check_can_pair()
        config = self.tournament.config
        logger.info(
            "Creating round %s with %s competitors",
            round_number,
            len(self.tournament.competitors),
        )

        if config.pairing_system == PAIRING_SYSTEM_ROUND_ROBIN:
            result = self._create_round_robin_pairings(round_number)
        else:
            pool = competitors_for_next_round(self.tournament)
            result = generate_pairings(
                pool,
                round_number,
                full_roster=pool,
                prior_rounds=self.rounds,
                total_rounds=config.num_rounds,
                variant=config.pairing_system,
                settings=self.settings,
            )

        round_data = result.to_round(round_number)
        self.tournament.append_round(round_data)
        return round_data

    def _create_round_robin_pairings(self, round_number: int) -> PairingResult:
        # Roster changes are only possible before round 1, so rebuild then
        if self.round_robin is None or round_number == 1:
            self.round_robin = RoundRobin(
                self.tournament.competitors.values(),
                self.tournament.config.double_round_robin,
            )
            if self.tournament.config.num_rounds != self.round_robin.number_of_rounds:
                logger.info(
                    "Updating tournament rounds from %s to %s for round robin",
                    self.tournament.config.num_rounds,
                    self.round_robin.number_of_rounds,
                )
                self.tournament.config.num_rounds = self.round_robin.number_of_rounds
        return PairingResult(pairings=self.round_robin.get_round_pairings(round_number))

    def undo_last_round(self) -> bool:
        """Remove the last round if it hasn't been completed.

        Returns:
            True if a round was removed
        """
        if not self.rounds:
            logger.warning("Cannot undo: no rounds exist")
            return False
        last_round = self.rounds[-1]
        if last_round.is_completed:
            logger.warning("Cannot undo completed round %s", last_round.round_number)
            return False
        self.tournament.drop_last_round()
        if not self.rounds:
            self.round_robin = None
        logger.info("Undid round %s", last_round.round_number)
        return True
