"""Type hints used in Swiss Core."""

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

from typing import Dict, FrozenSet, List, Literal, Optional, Set, Tuple, Union

# Colour string constants (for runtime use)
WHITE = "White"
BLACK = "Black"

# Colour type aliases (for type hints)
W = Literal["White"]
B = Literal["Black"]
# white or black
Colour = Literal["White", "Black"]
# None marks a bye in a colour history
MaybeColour = Optional[Colour]

# Competitor identifiers are either numeric or opaque strings
CompetitorId = Union[int, str]
# Unordered pair of competitor ids
PairKey = FrozenSet[CompetitorId]

PlayedPairs = Set[PairKey]
OpponentMap = Dict[CompetitorId, Set[CompetitorId]]
ByeCounts = Dict[CompetitorId, int]

# Ordered (first, second) id pair produced by the solver
IdPair = Tuple[CompetitorId, CompetitorId]
IdPairs = List[IdPair]


def opposite(colour: Colour) -> Colour:
    """Return the other colour."""
    return BLACK if colour == WHITE else WHITE
