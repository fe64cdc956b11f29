"""Pairing history derived from prior rounds."""

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

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Set

from swisscore.type_hints import (
    ByeCounts,
    CompetitorId,
    OpponentMap,
    PairKey,
    PlayedPairs,
)
from swisscore.utils import pair_key


@dataclass
class PairingHistory:
    """
    Tracks historical pairings to prevent repeat matches.

    Attributes
    ----------
    played_pairs : set of frozenset
        Unordered id pairs of every game already played.
    opponents : dict
        Competitor id to the set of opponent ids.
    bye_counts : dict
        Competitor id to the number of byes received.
    last_round_pairs : set of frozenset
        Pairs of the most recent round only, used to detect consecutive
        repeats.
    """

    played_pairs: PlayedPairs = field(default_factory=set)
    opponents: OpponentMap = field(default_factory=lambda: defaultdict(set))
    bye_counts: ByeCounts = field(default_factory=lambda: defaultdict(int))
    last_round_pairs: Set[PairKey] = field(default_factory=set)

    def add_pairing(self, first: CompetitorId, second: CompetitorId) -> None:
        """Record that two competitors have been paired."""
        self.played_pairs.add(pair_key(first, second))
        self.opponents[first].add(second)
        self.opponents[second].add(first)

    def add_bye(self, competitor_id: CompetitorId) -> None:
        self.bye_counts[competitor_id] += 1

    def have_played(self, first: CompetitorId, second: CompetitorId) -> bool:
        """Check if two competitors have previously played each other."""
        return pair_key(first, second) in self.played_pairs

    def is_consecutive_repeat(self, first: CompetitorId, second: CompetitorId) -> bool:
        """True when the two met in the immediately preceding round."""
        return pair_key(first, second) in self.last_round_pairs

    def byes_of(self, competitor_id: CompetitorId) -> int:
        return self.bye_counts.get(competitor_id, 0)

    @classmethod
    def from_rounds(
        cls, rounds: Iterable[Any], competitors: Optional[Iterable[Any]] = None
    ) -> "PairingHistory":
        """Build the history by replaying rounds in round-number order.

        Parameters
        ----------
        rounds : iterable of RoundData
            Prior rounds in any order.
        competitors : iterable of Competitor, optional
            When given, their own ``previous_opponents`` are merged in and
            their ``bye_count`` wins over a smaller replayed count.
        """
        history = cls()
        ordered = sorted(rounds, key=lambda r: r.round_number)
        for rnd in ordered:
            for pairing in rnd.pairings:
                if pairing.is_bye or pairing.black is None:
                    history.add_bye(pairing.white_id)
                else:
                    history.add_pairing(pairing.white_id, pairing.black_id)
        if ordered:
            last = ordered[-1]
            history.last_round_pairs = {
                pair_key(p.white_id, p.black_id)
                for p in last.pairings
                if not p.is_bye and p.black is not None
            }

        for competitor in competitors or ():
            for opponent_id in competitor.previous_opponents:
                history.add_pairing(competitor.id, opponent_id)
            if competitor.bye_count > history.byes_of(competitor.id):
                history.bye_counts[competitor.id] = competitor.bye_count
        return history

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing history to dictionary."""
        return {
            "playedPairs": sorted(
                (sorted(pair, key=str) for pair in self.played_pairs), key=str
            ),
            "byeCounts": dict(self.bye_counts),
            "lastRoundPairs": sorted(
                (sorted(pair, key=str) for pair in self.last_round_pairs), key=str
            ),
        }
