"""Standings aggregation from completed rounds."""

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

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Iterable, List

from swisscore.constants import WIN_SCORE
from swisscore.models.round_data import RoundData
from swisscore.player import Competitor
from swisscore.type_hints import BLACK, WHITE, CompetitorId
from swisscore.utils import id_sort_key, setup_logger

if TYPE_CHECKING:
    from swisscore.tournament.tournament import Tournament

logger = setup_logger(__name__)


@dataclass
class RankedCompetitor:
    """One row of the standings table."""

    rank: int
    competitor: Competitor
    wins: int = 0
    losses: int = 0
    draws: int = 0
    games_played: int = 0

    @property
    def id(self) -> CompetitorId:
        return self.competitor.id

    @property
    def score(self) -> float:
        return self.competitor.score

    def to_dict(self) -> Dict[str, Any]:
        data = self.competitor.to_dict()
        data.update(
            rank=self.rank,
            wins=self.wins,
            losses=self.losses,
            draws=self.draws,
            gamesPlayed=self.games_played,
        )
        return data


def standings_key(row: RankedCompetitor):
    c = row.competitor
    return (-c.score, -c.rating_or_zero, -c.color_balance, id_sort_key(c.id))


def aggregate_standings(
    roster: Iterable[Competitor], rounds: Iterable[RoundData]
) -> List[RankedCompetitor]:
    """Replay completed rounds over a fresh copy of the roster.

    A bye counts as a win and a game played; it is recorded as a None colour
    and leaves the colour balance unchanged. Rows are ordered by score, then
    rating, then colour balance (all descending), then id, and ranked 1..N.
    """
    rows: Dict[CompetitorId, RankedCompetitor] = {}
    for entry in roster:
        fresh = Competitor(
            id=entry.id,
            name=entry.name,
            rating=entry.rating,
            pairing_number=entry.pairing_number,
        )
        rows[entry.id] = RankedCompetitor(rank=0, competitor=fresh)

    completed = sorted(
        (r for r in rounds if r.is_completed), key=lambda r: r.round_number
    )
    for rnd in completed:
        for pairing in rnd.pairings:
            if pairing.is_bye:
                row = rows.get(pairing.white_id)
                if row is None:
                    logger.warning("Bye for unknown competitor %s", pairing.white_id)
                    continue
                row.competitor.add_bye(WIN_SCORE)
                row.wins += 1
                row.games_played += 1
                continue

            white = rows.get(pairing.white_id)
            black = rows.get(pairing.black_id)
            if white is None or black is None:
                logger.warning(
                    "Round %s board %s references unknown competitors",
                    rnd.round_number,
                    pairing.board_number,
                )
                continue
            points = pairing.points()
            white_points = points[pairing.white_id]
            black_points = points[pairing.black_id]
            white.competitor.add_game(pairing.black_id, WHITE, white_points)
            black.competitor.add_game(pairing.white_id, BLACK, black_points)
            for row, own, other in (
                (white, white_points, black_points),
                (black, black_points, white_points),
            ):
                row.games_played += 1
                if own > other:
                    row.wins += 1
                elif own < other:
                    row.losses += 1
                else:
                    row.draws += 1

    ordered = sorted(rows.values(), key=standings_key)
    for rank, row in enumerate(ordered, start=1):
        row.rank = rank
    return ordered


def calculate_standings(tournament: "Tournament") -> List[RankedCompetitor]:
    """Current standings of a tournament, best first."""
    return aggregate_standings(tournament.competitors.values(), tournament.rounds)


def competitors_for_next_round(tournament: "Tournament") -> List[Competitor]:
    """Competitor snapshots, in standings order, ready to be paired."""
    return [row.competitor for row in calculate_standings(tournament)]
