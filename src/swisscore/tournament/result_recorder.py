"""Result recording for tournament rounds."""

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

from typing import Any, Iterable, Mapping, Tuple, Union

from swisscore.exceptions import InvalidResultException, TournamentStateException
from swisscore.models.pairing import GameResult, Pairing
from swisscore.models.round_data import RoundData
from swisscore.utils import setup_logger

logger = setup_logger(__name__)

ResultEntries = Union[Mapping[int, Any], Iterable[Tuple[int, Any]]]


class ResultRecorder:
    """Handles recording and validating game results.

    This class is responsible for:
    - Validating result strings and board numbers
    - Refusing changes to completed rounds
    - Completing a round once every board has a result
    """

    def record_result(self, round_data: RoundData, board_number: int, result: Any) -> Pairing:
        """Record a single board.

        Raises:
            TournamentStateException: If the round is already completed
            InvalidResultException: If the board or result is invalid
        """
        pairing = round_data.record_result(board_number, result)
        logger.info(
            "Round %s board %s: %s",
            round_data.round_number,
            board_number,
            pairing.result.value,
        )
        if round_data.is_completed:
            logger.info("Round %s completed", round_data.round_number)
        return pairing

    def record_round_results(self, round_data: RoundData, results: ResultEntries) -> bool:
        """Record several boards at once, validating all entries first.

        Args:
            round_data: The round to record results for
            results: Mapping or pairs of board number to result

        Returns:
            True if the round is completed afterwards
        """
        if round_data.is_completed:
            raise TournamentStateException(
                f"Round {round_data.round_number} is already completed"
            )
        entries = list(results.items()) if isinstance(results, Mapping) else list(results)

        seen = set()
        parsed = []
        for board_number, result in entries:
            if board_number in seen:
                raise InvalidResultException(
                    f"Board {board_number} appears twice in round {round_data.round_number}"
                )
            seen.add(board_number)
            pairing = round_data.board(board_number)
            if pairing.is_bye:
                raise InvalidResultException(f"Board {board_number} is a bye")
            parsed.append((board_number, GameResult.parse(result)))

        for board_number, result in parsed:
            self.record_result(round_data, board_number, result)

        missing = [p.board_number for p in round_data.pairings if not p.is_finished]
        if missing:
            logger.debug(
                "Round %s still waiting for boards %s", round_data.round_number, missing
            )
        return round_data.is_completed
