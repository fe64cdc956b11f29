"""Colour allocation for a pair of competitors."""

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

from typing import NamedTuple

from swisscore.player import Competitor
from swisscore.type_hints import BLACK, WHITE, Colour, opposite
from swisscore.utils import id_sort_key


class ColorAssignment(NamedTuple):
    white: Competitor
    black: Competitor


def needs_opposite(competitor: Competitor) -> bool:
    """True when the last two colours played were the same."""
    last_two = competitor.last_colors(2)
    return len(last_two) == 2 and last_two[0] == last_two[1]


def would_create_three_same(competitor: Competitor, colour: Colour) -> bool:
    """True when ``colour`` would be the third identical colour in a row."""
    last_two = competitor.last_colors(2)
    return len(last_two) == 2 and last_two[0] == last_two[1] == colour


def _give(competitor: Competitor, colour: Colour, other: Competitor) -> ColorAssignment:
    if colour == WHITE:
        return ColorAssignment(competitor, other)
    return ColorAssignment(other, competitor)


def assign_colors(
    first: Competitor, second: Competitor, round_number: int
) -> ColorAssignment:
    """Decide who plays white.

    Rules, first match wins:

    1. If exactly one competitor played the same colour in each of their last
       two games, that competitor gets the other colour.
    2. The competitor with the lower colour balance gets white.
    3. On odd rounds, alternate relative to ``first``'s most recent colour.
    4. The lower id gets white.

    Parameters
    ----------
    first, second : Competitor
        The two competitors; the order only matters for rule 3.
    round_number : int
        1-based round number.

    Returns
    -------
    ColorAssignment
        ``(white, black)``
    """
    first_needs = needs_opposite(first)
    second_needs = needs_opposite(second)
    if first_needs and not second_needs:
        return _give(first, opposite(first.last_color), second)
    if second_needs and not first_needs:
        return _give(second, opposite(second.last_color), first)

    if first.color_balance != second.color_balance:
        if first.color_balance < second.color_balance:
            return ColorAssignment(first, second)
        return ColorAssignment(second, first)

    if round_number % 2 == 1:
        last = first.last_color
        if last == BLACK:
            return ColorAssignment(first, second)
        if last == WHITE:
            return ColorAssignment(second, first)

    if id_sort_key(first.id) <= id_sort_key(second.id):
        return ColorAssignment(first, second)
    return ColorAssignment(second, first)
