"""Data model for a tournament round."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from swisscore.exceptions import InvalidResultException, TournamentStateException
from swisscore.models.pairing import GameResult, Pairing
from swisscore.type_hints import CompetitorId


@dataclass
class RoundData:
    """Container for all data related to a single tournament round.

    Attributes
    ----------
    round_number : int
        Round number (1-indexed).
    pairings : list of Pairing
        Boards in board order, the bye entry (if any) last.
    forced_repeat : bool
        True when no repeat-free pairing existed for this round.
    repeat_count : int
        Number of repeat pairings in the round.
    notes : dict
        Free-form annotations, e.g. the forced repeat reason.
    is_completed : bool
        Set once every game has a result. Pairings are frozen from then on.
    """

    round_number: int
    pairings: List[Pairing] = field(default_factory=list)
    forced_repeat: bool = False
    repeat_count: int = 0
    notes: Dict[str, Any] = field(default_factory=dict)
    is_completed: bool = False

    @property
    def games(self) -> List[Pairing]:
        return [p for p in self.pairings if not p.is_bye]

    @property
    def bye(self) -> Optional[Pairing]:
        for p in self.pairings:
            if p.is_bye:
                return p
        return None

    def board(self, board_number: int) -> Pairing:
        for p in self.pairings:
            if p.board_number == board_number:
                return p
        raise InvalidResultException(
            f"Round {self.round_number} has no board {board_number}"
        )

    def pairing_for(self, competitor_id: CompetitorId) -> Optional[Pairing]:
        for p in self.pairings:
            if p.involves(competitor_id):
                return p
        return None

    def record_result(self, board_number: int, result: Any) -> Pairing:
        """Set the result of one board and refresh completion."""
        if self.is_completed:
            raise TournamentStateException(
                f"Round {self.round_number} is completed; its pairings are final"
            )
        pairing = self.board(board_number)
        if pairing.is_bye:
            raise InvalidResultException("A bye has no result to record")
        pairing.result = GameResult.parse(result)
        self.refresh_completion()
        return pairing

    def refresh_completion(self) -> bool:
        self.is_completed = all(p.is_finished for p in self.pairings)
        return self.is_completed

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "roundNumber": self.round_number,
            "pairings": [p.to_dict() for p in self.pairings],
            "forcedRepeat": self.forced_repeat,
            "repeatCount": self.repeat_count,
            "notes": dict(self.notes),
            "isCompleted": self.is_completed,
        }

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], roster: Dict[CompetitorId, Any]
    ) -> "RoundData":
        """Deserialize round data, resolving competitors through ``roster``."""
        pairings = []
        for entry in data.get("pairings", []):
            white = roster[entry["whitePlayerId"]]
            black_id = entry.get("blackPlayerId")
            result = entry.get("result")
            pairings.append(
                Pairing(
                    white=white,
                    black=roster[black_id] if black_id is not None else None,
                    board_number=entry["boardNumber"],
                    is_repeat=entry.get("isRepeat", False),
                    is_bye=entry.get("isBye", black_id is None),
                    result=GameResult.parse(result) if result is not None else None,
                )
            )
        return cls(
            round_number=data["roundNumber"],
            pairings=pairings,
            forced_repeat=data.get("forcedRepeat", False),
            repeat_count=data.get("repeatCount", 0),
            notes=dict(data.get("notes", {})),
            is_completed=data.get("isCompleted", False),
        )
