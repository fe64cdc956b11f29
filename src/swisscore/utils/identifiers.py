"""Helpers for comparing and keying competitor identifiers."""

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

from typing import Any, Tuple

from swisscore.type_hints import CompetitorId, PairKey


def _as_number(value: Any):
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            try:
                return float(value)
            except ValueError:
                return None
    return None


def id_sort_key(competitor_id: CompetitorId) -> Tuple[int, Any, str]:
    """Total order on competitor ids.

    Numeric ids (including numeric strings) compare numerically and sort
    before opaque string ids, which compare lexicographically.
    """
    number = _as_number(competitor_id)
    if number is not None:
        return (0, number, str(competitor_id))
    return (1, 0, str(competitor_id))


def pair_key(first: CompetitorId, second: CompetitorId) -> PairKey:
    """Canonical unordered key for two competitors."""
    return frozenset((first, second))
