"""Pairing algorithms."""

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

from swisscore.pairing.bye import choose_bye
from swisscore.pairing.colors import ColorAssignment, assign_colors
from swisscore.pairing.cost import PairCostContext, calculate_pair_cost
from swisscore.pairing.engine import generate_swiss_round
from swisscore.pairing.round_robin import (
    RoundRobin,
    assign_pairing_numbers,
    calculate_rounds,
    generate_round_robin_pairings,
)
from swisscore.pairing.strategies import (
    STRATEGIES,
    SwissStrategy,
    generate_pairings,
    get_strategy,
)

__all__ = [
    "ColorAssignment",
    "PairCostContext",
    "RoundRobin",
    "STRATEGIES",
    "SwissStrategy",
    "assign_colors",
    "assign_pairing_numbers",
    "calculate_pair_cost",
    "calculate_rounds",
    "choose_bye",
    "generate_pairings",
    "generate_round_robin_pairings",
    "generate_swiss_round",
    "get_strategy",
]
