"""Configuration dataclasses."""

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

from dataclasses import dataclass
from typing import Any, Dict

from swisscore.constants import (
    DEFAULT_MAX_SEARCH_NODES,
    MAX_ROUNDS,
    PAIRING_SYSTEMS,
    VARIANT_STANDARD,
)
from swisscore.exceptions import InvalidConfigurationException


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    num_rounds : int
        Number of rounds in the tournament.
    pairing_system : str
        One of the Swiss variants ("standard", "uscf", "fide_dutch",
        "accelerated") or "round_robin".
    double_round_robin : bool
        Play every pairing twice with colours reversed (round robin only).
    """

    name: str
    num_rounds: int
    pairing_system: str = VARIANT_STANDARD
    double_round_robin: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.pairing_system not in PAIRING_SYSTEMS:
            raise InvalidConfigurationException(
                f"Unknown pairing system {self.pairing_system!r}; "
                f"expected one of {', '.join(PAIRING_SYSTEMS)}"
            )
        if not 0 < self.num_rounds <= MAX_ROUNDS:
            raise InvalidConfigurationException(
                f"num_rounds must be between 1 and {MAX_ROUNDS}, got {self.num_rounds}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "num_rounds": self.num_rounds,
            "pairing_system": self.pairing_system,
            "double_round_robin": self.double_round_robin,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            name=data.get("name", "Untitled Tournament"),
            num_rounds=data["num_rounds"],
            pairing_system=data.get("pairing_system", VARIANT_STANDARD),
            double_round_robin=data.get("double_round_robin", False),
        )


@dataclass(frozen=True)
class SolverSettings:
    """Knobs for the Swiss search.

    Attributes
    ----------
    max_search_nodes : int
        Upper bound on nodes explored by one bracket search. When reached,
        the best complete pairing found so far is used.
    warn_on_forced_repeat : bool
        Log a warning whenever a round needs repeat pairings.
    """

    max_search_nodes: int = DEFAULT_MAX_SEARCH_NODES
    warn_on_forced_repeat: bool = True

    def __post_init__(self) -> None:
        if self.max_search_nodes <= 0:
            raise InvalidConfigurationException("max_search_nodes must be positive")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "max_search_nodes": self.max_search_nodes,
            "warn_on_forced_repeat": self.warn_on_forced_repeat,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SolverSettings":
        return cls(
            max_search_nodes=data.get("max_search_nodes", DEFAULT_MAX_SEARCH_NODES),
            warn_on_forced_repeat=data.get("warn_on_forced_repeat", True),
        )
