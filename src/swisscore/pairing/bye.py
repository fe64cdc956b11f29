"""Bye selection for odd-sized pools."""

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

from typing import Mapping, Optional, Sequence

from swisscore.player import Competitor
from swisscore.type_hints import CompetitorId
from swisscore.utils import id_sort_key, setup_logger

logger = setup_logger(__name__)


def bye_order_key(competitor: Competitor):
    """Lowest score first, then lowest rating (unrated as 0), then id."""
    return (competitor.score, competitor.rating_or_zero, id_sort_key(competitor.id))


def choose_bye(
    pool: Sequence[Competitor], bye_counts: Mapping[CompetitorId, int]
) -> Optional[Competitor]:
    """Pick the competitor who sits out this round.

    Returns None for an even pool. Otherwise the first competitor in
    :func:`bye_order_key` order who has not had a bye yet; when everyone
    has had one, the first competitor in that order gets a second bye.
    """
    if len(pool) % 2 == 0:
        return None
    ordered = sorted(pool, key=bye_order_key)
    for competitor in ordered:
        if bye_counts.get(competitor.id, 0) == 0:
            return competitor
    logger.info(
        "Every competitor has had a bye; %s receives another", ordered[0].id
    )
    return ordered[0]
