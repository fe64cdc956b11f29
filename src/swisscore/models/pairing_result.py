"""Result of a pairing computation for a single round."""

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

from swisscore.models.pairing import Pairing
from swisscore.models.round_data import RoundData


@dataclass
class PairingResult:
    """Pairings for one round plus the forced-repeat annotations."""

    pairings: List[Pairing] = field(default_factory=list)
    forced_repeat: bool = False
    repeat_count: int = 0
    notes: Dict[str, Any] = field(default_factory=dict)

    @property
    def bye(self) -> Optional[Pairing]:
        for p in self.pairings:
            if p.is_bye:
                return p
        return None

    @property
    def games(self) -> List[Pairing]:
        return [p for p in self.pairings if not p.is_bye]

    def to_round(self, round_number: int) -> RoundData:
        """Wrap these pairings into a new, uncompleted round."""
        rnd = RoundData(
            round_number=round_number,
            pairings=list(self.pairings),
            forced_repeat=self.forced_repeat,
            repeat_count=self.repeat_count,
            notes=dict(self.notes),
        )
        rnd.refresh_completion()
        return rnd

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pairings": [p.to_dict() for p in self.pairings],
            "forcedRepeat": self.forced_repeat,
            "repeatCount": self.repeat_count,
            "notes": dict(self.notes),
        }
