"""Swiss Core: Swiss-system and round-robin pairing engine."""

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

from swisscore.exceptions import (
    InvalidInputException,
    PairingException,
    SwissCoreException,
    TournamentStateException,
)
from swisscore.models import (
    GameResult,
    Pairing,
    PairingHistory,
    PairingResult,
    RoundData,
    SolverSettings,
    TournamentConfig,
)
from swisscore.pairing import (
    RoundRobin,
    SwissStrategy,
    assign_colors,
    calculate_pair_cost,
    choose_bye,
    generate_pairings,
    generate_round_robin_pairings,
    generate_swiss_round,
    get_strategy,
)
from swisscore.player import Competitor
from swisscore.tournament import (
    RankedCompetitor,
    Tournament,
    TournamentStatus,
    calculate_standings,
)

__version__ = "0.1.0"

__all__ = [
    "Competitor",
    "GameResult",
    "InvalidInputException",
    "Pairing",
    "PairingException",
    "PairingHistory",
    "PairingResult",
    "RankedCompetitor",
    "RoundData",
    "RoundRobin",
    "SolverSettings",
    "SwissCoreException",
    "SwissStrategy",
    "Tournament",
    "TournamentConfig",
    "TournamentStateException",
    "TournamentStatus",
    "assign_colors",
    "calculate_pair_cost",
    "calculate_standings",
    "choose_bye",
    "generate_pairings",
    "generate_round_robin_pairings",
    "generate_swiss_round",
    "get_strategy",
]
