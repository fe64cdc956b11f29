"""Pairing and game result models."""

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

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from swisscore.constants import (
    BYE_SCORE,
    DRAW_SCORE,
    LOSS_SCORE,
    RESULT_BLACK_WIN,
    RESULT_DRAW,
    RESULT_WHITE_WIN,
    WIN_SCORE,
)
from swisscore.exceptions import InvalidResultException
from swisscore.player import Competitor
from swisscore.type_hints import CompetitorId


class GameResult(Enum):
    """Outcome of a game, valued by its wire string (white score first)."""

    WHITE_WIN = RESULT_WHITE_WIN
    BLACK_WIN = RESULT_BLACK_WIN
    DRAW = RESULT_DRAW

    @classmethod
    def parse(cls, value: Any) -> "GameResult":
        """Accept a GameResult or one of its wire strings."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidResultException(f"Unknown result: {value!r}") from None

    @property
    def scores(self) -> Tuple[float, float]:
        """(white points, black points)."""
        if self is GameResult.WHITE_WIN:
            return WIN_SCORE, LOSS_SCORE
        if self is GameResult.BLACK_WIN:
            return LOSS_SCORE, WIN_SCORE
        return DRAW_SCORE, DRAW_SCORE


@dataclass
class Pairing:
    """One board of a round, or the bye entry when ``black`` is None.

    Attributes
    ----------
    white : Competitor
        Competitor with white. For a bye entry, the bye recipient.
    black : Competitor or None
        Competitor with black, None for the bye entry.
    board_number : int
        1-based board number; the bye entry comes last.
    is_repeat : bool
        True when the two competitors had already met.
    is_bye : bool
        True for the bye entry.
    result : GameResult or None
        Recorded outcome, None until the game is finished.
    """

    white: Competitor
    black: Optional[Competitor]
    board_number: int
    is_repeat: bool = False
    is_bye: bool = False
    result: Optional[GameResult] = None

    @classmethod
    def bye(cls, competitor: Competitor, board_number: int) -> "Pairing":
        return cls(white=competitor, black=None, board_number=board_number, is_bye=True)

    @property
    def white_id(self) -> CompetitorId:
        return self.white.id

    @property
    def black_id(self) -> Optional[CompetitorId]:
        return self.black.id if self.black is not None else None

    @property
    def is_finished(self) -> bool:
        return self.is_bye or self.result is not None

    def involves(self, competitor_id: CompetitorId) -> bool:
        return competitor_id in (self.white_id, self.black_id)

    def points(self) -> Dict[CompetitorId, float]:
        """Points earned by each competitor on this board."""
        if self.is_bye:
            return {self.white_id: BYE_SCORE}
        if self.result is None:
            return {}
        white_points, black_points = self.result.scores
        return {self.white_id: white_points, self.black_id: black_points}

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready view (player1 is white, player2 is black)."""
        return {
            "player1": self.white.to_summary(),
            "player2": self.black.to_summary() if self.black is not None else None,
            "boardNumber": self.board_number,
            "whitePlayerId": self.white_id,
            "blackPlayerId": self.black_id,
            "isBye": self.is_bye,
            "isRepeat": self.is_repeat,
            "result": self.result.value if self.result is not None else None,
        }

    def __repr__(self) -> str:
        if self.is_bye:
            return f"<Pairing #{self.board_number} BYE {self.white_id}>"
        return f"<Pairing #{self.board_number} {self.white_id}-{self.black_id}>"
