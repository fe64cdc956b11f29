"""Tournament aggregate: roster, rounds and lifecycle."""

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

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from swisscore.constants import VARIANT_STANDARD
from swisscore.exceptions import (
    CompetitorNotFoundException,
    DuplicateCompetitorException,
    TournamentStateException,
)
from swisscore.models.config import SolverSettings, TournamentConfig
from swisscore.models.pairing import Pairing
from swisscore.models.round_data import RoundData
from swisscore.player import Competitor
from swisscore.tournament.result_recorder import ResultEntries, ResultRecorder
from swisscore.tournament.round_manager import RoundManager
from swisscore.tournament.standings import RankedCompetitor, calculate_standings
from swisscore.type_hints import CompetitorId
from swisscore.utils import setup_logger

logger = setup_logger(__name__)


class TournamentStatus(Enum):
    REGISTRATION = "registration"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Tournament:
    """Main tournament class.

    Coordinates tournament operations through specialized managers:
    - RoundManager: creates rounds in sequence
    - ResultRecorder: records and validates results

    Rounds are only ever appended. Registration closes when the first round
    is paired, and the tournament is completed once its last round is.
    """

    def __init__(
        self,
        name: str,
        competitors: Iterable[Competitor] = (),
        num_rounds: int = 5,
        pairing_system: str = VARIANT_STANDARD,
        double_round_robin: bool = False,
        settings: Optional[SolverSettings] = None,
    ) -> None:
        """Initialize a new tournament.

        Args
        ----
        name: Tournament name
        competitors: Initial roster
        num_rounds: Number of rounds to play
        pairing_system: A Swiss variant name or "round_robin"
        double_round_robin: Play the round robin cycle twice
        settings: Search settings for Swiss pairing
        """
        self.config = TournamentConfig(
            name=name,
            num_rounds=num_rounds,
            pairing_system=pairing_system,
            double_round_robin=double_round_robin,
        )
        self.competitors: Dict[CompetitorId, Competitor] = {}
        self.rounds: List[RoundData] = []
        self.status = TournamentStatus.REGISTRATION
        for competitor in competitors:
            self.add_competitor(competitor)

        self.round_manager = RoundManager(self, settings)
        self.result_recorder = ResultRecorder()

    # ========== Properties ==========

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def num_rounds(self) -> int:
        return self.config.num_rounds

    @property
    def pairing_system(self) -> str:
        return self.config.pairing_system

    @property
    def current_round(self) -> Optional[RoundData]:
        """The latest round, None before pairing starts."""
        return self.rounds[-1] if self.rounds else None

    # ========== Competitor Management ==========

    def add_competitor(self, competitor: Competitor) -> None:
        if self.status is not TournamentStatus.REGISTRATION:
            raise TournamentStateException("Registration is closed")
        if competitor.id in self.competitors:
            raise DuplicateCompetitorException(
                f"Competitor {competitor.id!r} is already registered"
            )
        self.competitors[competitor.id] = competitor
        logger.info("Added competitor: %s (%s)", competitor.name, competitor.id)

    def remove_competitor(self, competitor_id: CompetitorId) -> Competitor:
        if self.status is not TournamentStatus.REGISTRATION:
            raise TournamentStateException("Registration is closed")
        try:
            competitor = self.competitors.pop(competitor_id)
        except KeyError:
            raise CompetitorNotFoundException(
                f"No competitor with id {competitor_id!r}"
            ) from None
        logger.info("Removed competitor: %s (%s)", competitor.name, competitor_id)
        return competitor

    def get_competitor(self, competitor_id: CompetitorId) -> Competitor:
        try:
            return self.competitors[competitor_id]
        except KeyError:
            raise CompetitorNotFoundException(
                f"No competitor with id {competitor_id!r}"
            ) from None

    # ========== Round Management ==========

    def append_round(self, round_data: RoundData) -> None:
        """Append a freshly paired round."""
        expected = len(self.rounds) + 1
        if round_data.round_number != expected:
            raise TournamentStateException(
                f"Expected round {expected}, got round {round_data.round_number}"
            )
        self.rounds.append(round_data)
        if self.status is TournamentStatus.REGISTRATION:
            self.status = TournamentStatus.IN_PROGRESS
        self._refresh_status()

    def drop_last_round(self) -> RoundData:
        if not self.rounds or self.rounds[-1].is_completed:
            raise TournamentStateException("Only an uncompleted last round can be removed")
        dropped = self.rounds.pop()
        if not self.rounds:
            self.status = TournamentStatus.REGISTRATION
        return dropped

    def create_pairings(self) -> RoundData:
        """Pair the next round."""
        return self.round_manager.create_next_round()

    def get_round(self, round_number: int) -> RoundData:
        return self.round_manager.get_round(round_number)

    # ========== Result Management ==========

    def record_result(self, round_number: int, board_number: int, result: Any) -> Pairing:
        pairing = self.result_recorder.record_result(
            self.get_round(round_number), board_number, result
        )
        self._refresh_status()
        return pairing

    def record_results(self, round_number: int, results: ResultEntries) -> bool:
        """Record results for a round.

        Returns:
            True if the round is completed afterwards
        """
        completed = self.result_recorder.record_round_results(
            self.get_round(round_number), results
        )
        self._refresh_status()
        return completed

    def _refresh_status(self) -> None:
        last = self.current_round
        if (
            last is not None
            and last.is_completed
            and len(self.rounds) >= self.config.num_rounds
        ):
            if self.status is not TournamentStatus.COMPLETED:
                logger.info("Tournament %s completed", self.name)
            self.status = TournamentStatus.COMPLETED

    # ========== Standings ==========

    def get_standings(self) -> List[RankedCompetitor]:
        return calculate_standings(self)

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        return {
            "config": self.config.to_dict(),
            "status": self.status.value,
            "competitors": [c.to_dict() for c in self.competitors.values()],
            "rounds": [r.to_dict() for r in self.rounds],
        }

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], settings: Optional[SolverSettings] = None
    ) -> "Tournament":
        config = TournamentConfig.from_dict(data["config"])
        tournament = cls(
            name=config.name,
            competitors=[Competitor.from_dict(c) for c in data.get("competitors", [])],
            num_rounds=config.num_rounds,
            pairing_system=config.pairing_system,
            double_round_robin=config.double_round_robin,
            settings=settings,
        )
        tournament.rounds = [
            RoundData.from_dict(r, tournament.competitors) for r in data.get("rounds", [])
        ]
        tournament.status = TournamentStatus(
            data.get("status", TournamentStatus.REGISTRATION.value)
        )
        return tournament
