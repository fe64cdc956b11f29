"""Tournament management: rounds, results and standings."""

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

from swisscore.tournament.result_recorder import ResultRecorder
from swisscore.tournament.round_manager import RoundManager
from swisscore.tournament.standings import (
    RankedCompetitor,
    aggregate_standings,
    calculate_standings,
    competitors_for_next_round,
)
from swisscore.tournament.tournament import Tournament, TournamentStatus

__all__ = [
    "RankedCompetitor",
    "ResultRecorder",
    "RoundManager",
    "Tournament",
    "TournamentStatus",
    "aggregate_standings",
    "calculate_standings",
    "competitors_for_next_round",
]
