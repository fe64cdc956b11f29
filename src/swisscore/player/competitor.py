"""Competitor data model used as pairing input."""

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

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from swisscore.constants import BYE_SCORE
from swisscore.type_hints import BLACK, WHITE, Colour, CompetitorId, MaybeColour
from swisscore.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class Competitor:
    """A competitor as seen by the pairing engine.

    Attributes:
        id: Stable unique identifier (numeric or string)
        name: Display name
        rating: Rating, None when unrated (treated as 0 in every ordering)
        score: Current score in points
        color_balance: Whites minus blacks
        color_history: Colours played in round order, None for a bye
        previous_opponents: Ids of every opponent already met
        bye_count: Number of byes received
        pairing_number: Starting number, used by round robin
    """

    id: CompetitorId
    name: str = ""
    rating: Optional[int] = None
    score: float = 0.0
    color_balance: int = 0
    color_history: List[MaybeColour] = field(default_factory=list)
    previous_opponents: Set[CompetitorId] = field(default_factory=set)
    bye_count: int = 0
    pairing_number: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.name:
            self.name = str(self.id)

    @property
    def rating_or_zero(self) -> int:
        """Rating used for ordering, unrated counts as 0."""
        return self.rating if self.rating is not None else 0

    def last_colors(self, n: int) -> List[Colour]:
        """Return the last ``n`` colours actually played, skipping byes."""
        played = [c for c in self.color_history if c is not None]
        return played[-n:] if n > 0 else []

    @property
    def last_color(self) -> Optional[Colour]:
        recent = self.last_colors(1)
        return recent[0] if recent else None

    def add_game(
        self, opponent_id: CompetitorId, colour: Colour, points: float
    ) -> None:
        """Record a played game."""
        self.previous_opponents.add(opponent_id)
        self.color_history.append(colour)
        self.color_balance += 1 if colour == WHITE else -1
        self.score += points

    def add_bye(self, points: float = BYE_SCORE) -> None:
        """Record a bye. Colour balance is unchanged."""
        self.color_history.append(None)
        self.bye_count += 1
        self.score += points

    def snapshot(self) -> "Competitor":
        """Independent copy, safe to hand to the engine."""
        return copy.deepcopy(self)

    def to_summary(self) -> Dict[str, Any]:
        """The id/name/rating view used in pairing output."""
        return {"id": self.id, "name": self.name, "rating": self.rating}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "rating": self.rating,
            "score": self.score,
            "colorBalance": self.color_balance,
            "colorHistory": list(self.color_history),
            "previousOpponents": sorted(self.previous_opponents, key=str),
            "byeCount": self.bye_count,
            "pairingNumber": self.pairing_number,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Competitor":
        history = data.get("colorHistory", [])
        for colour in history:
            if colour not in (WHITE, BLACK, None):
                logger.warning("Unknown colour %r in history of %s", colour, data.get("id"))
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            rating=data.get("rating"),
            score=float(data.get("score", 0.0)),
            color_balance=int(data.get("colorBalance", 0)),
            color_history=[c for c in history if c in (WHITE, BLACK, None)],
            previous_opponents=set(data.get("previousOpponents", [])),
            bye_count=int(data.get("byeCount", 0)),
            pairing_number=data.get("pairingNumber"),
        )

    def __repr__(self) -> str:
        return f"<Competitor {self.id} {self.name} ({self.rating}) {self.score}>"
