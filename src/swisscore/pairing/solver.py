"""Score-group search for minimum-cost Swiss pairings."""

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

from dataclasses import dataclass, field
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

from swisscore.constants import DEFAULT_MAX_SEARCH_NODES
from swisscore.models.pairing_history import PairingHistory
from swisscore.pairing.cost import PairCostContext, calculate_pair_cost
from swisscore.player import Competitor
from swisscore.type_hints import CompetitorId
from swisscore.utils import id_sort_key, setup_logger

logger = setup_logger(__name__)

ScoreFunction = Callable[[Competitor], float]


class PairedMatch(NamedTuple):
    """An unordered match as found by the search, in search order."""

    first: Competitor
    second: Competitor
    is_repeat: bool


class SearchResult(NamedTuple):
    matches: Tuple[PairedMatch, ...]
    cost: int
    repeat_count: int

    def extend(self, other: "SearchResult") -> "SearchResult":
        return SearchResult(
            self.matches + other.matches,
            self.cost + other.cost,
            self.repeat_count + other.repeat_count,
        )


EMPTY_RESULT = SearchResult((), 0, 0)


def is_better(
    candidate: SearchResult, incumbent: Optional[SearchResult], allow_repeats: bool
) -> bool:
    """Strict improvement test. Ties keep the incumbent."""
    if incumbent is None:
        return True
    if allow_repeats:
        return (candidate.repeat_count, candidate.cost) < (
            incumbent.repeat_count,
            incumbent.cost,
        )
    return candidate.cost < incumbent.cost


@dataclass
class SearchContext:
    """Everything a search needs besides the competitors themselves.

    Attributes
    ----------
    round_number : int
        Round being paired.
    history : PairingHistory
        Prior games and byes.
    score_of : callable
        Effective score used for grouping. Score gaps use the real score.
    seed_bias_weight : int
        Weight of the top-half against bottom-half preference.
    allow_repeats : bool
        Whether already played pairs may meet again.
    max_search_nodes : int
        Node budget of one bracket search.
    """

    round_number: int
    history: PairingHistory
    score_of: ScoreFunction
    seed_bias_weight: int = 0
    allow_repeats: bool = False
    max_search_nodes: int = DEFAULT_MAX_SEARCH_NODES
    budget_exhausted: bool = field(default=False, compare=False)


def rating_order(players: Sequence[Competitor]) -> List[Competitor]:
    """Highest rating first, ties by id."""
    return sorted(players, key=lambda p: (-p.rating_or_zero, id_sort_key(p.id)))


def floater_order(players: Sequence[Competitor]) -> List[Competitor]:
    """Lowest rating first, ties by id."""
    return sorted(players, key=lambda p: (p.rating_or_zero, id_sort_key(p.id)))


def group_by_score(
    players: Sequence[Competitor], score_of: ScoreFunction
) -> List[List[Competitor]]:
    """Partition into score groups, highest score first."""
    groups: Dict[float, List[Competitor]] = {}
    for player in players:
        groups.setdefault(score_of(player), []).append(player)
    return [groups[score] for score in sorted(groups, reverse=True)]


class _BracketSearch:
    """Branch and bound over the perfect matchings of one even bracket.

    The competitor with the fewest legal opponents is paired first and its
    candidates are tried cheapest first, so the first complete matching is
    usually a good one. Partial matchings whose cost plus a lower bound on
    the rest cannot beat the incumbent are pruned.
    """

    def __init__(self, players: Sequence[Competitor], context: SearchContext):
        self.players = list(players)
        self.context = context
        self.index = {p.id: i for i, p in enumerate(self.players)}
        self.half = len(self.players) // 2
        self.best: Optional[SearchResult] = None
        self.nodes = 0
        self.aborted = False
        self._costs: Dict[Tuple[CompetitorId, CompetitorId], int] = {}

    def allowed(self, a: Competitor, b: Competitor) -> bool:
        return self.context.allow_repeats or not self.context.history.have_played(
            a.id, b.id
        )

    def seed_bias(self, a: Competitor, b: Competitor) -> int:
        weight = self.context.seed_bias_weight
        if not weight or not self.half:
            return 0
        a_idx = self.index[a.id]
        preferred = a_idx + self.half if a_idx < self.half else a_idx - self.half
        return abs(self.index[b.id] - preferred) * weight

    def pair_cost(self, a: Competitor, b: Competitor) -> int:
        key = (a.id, b.id)
        cost = self._costs.get(key)
        if cost is None:
            history = self.context.history
            cost = calculate_pair_cost(
                a,
                b,
                PairCostContext(
                    round_number=self.context.round_number,
                    score_gap=abs(a.score - b.score),
                    is_repeat=history.have_played(a.id, b.id),
                    is_consecutive_repeat=history.is_consecutive_repeat(a.id, b.id),
                    seed_bias_penalty=self.seed_bias(a, b),
                ),
            )
            self._costs[key] = cost
        return cost

    def _lower_bound(self, remaining: List[Competitor]) -> Optional[int]:
        """Half the sum of each competitor's cheapest legal partner.

        Returns None when some competitor has no legal partner left.
        """
        total = 0
        for a in remaining:
            cheapest = None
            for b in remaining:
                if a is b or not self.allowed(a, b):
                    continue
                cost = min(self.pair_cost(a, b), self.pair_cost(b, a))
                if cheapest is None or cost < cheapest:
                    cheapest = cost
            if cheapest is None:
                return None
            total += cheapest
        return total // 2

    def _prune(self, cost: int, repeats: int, remaining: List[Competitor]) -> bool:
        best = self.best
        if best is None:
            return False
        if self.context.allow_repeats:
            if repeats > best.repeat_count:
                return True
            if repeats < best.repeat_count:
                return False
        if cost >= best.cost:
            return True
        bound = self._lower_bound(remaining) if remaining else 0
        return bound is None or cost + bound >= best.cost

    def _most_constrained(
        self, remaining: List[Competitor]
    ) -> Tuple[Competitor, List[Competitor]]:
        if self.context.allow_repeats:
            return remaining[0], remaining[1:]
        best_idx, best_count = 0, None
        for i, a in enumerate(remaining):
            count = sum(1 for b in remaining if b is not a and self.allowed(a, b))
            if best_count is None or count < best_count:
                best_idx, best_count = i, count
                if count == 0:
                    break
        return remaining[best_idx], remaining[:best_idx] + remaining[best_idx + 1 :]

    def _backtrack(
        self,
        remaining: List[Competitor],
        matches: Tuple[PairedMatch, ...],
        cost: int,
        repeats: int,
    ) -> None:
        if self.aborted:
            return
        self.nodes += 1
        if self.nodes > self.context.max_search_nodes and (
            self.best is not None or not self.context.allow_repeats
        ):
            self.aborted = True
            return

        if not remaining:
            result = SearchResult(matches, cost, repeats)
            if is_better(result, self.best, self.context.allow_repeats):
                self.best = result
            return

        player, rest = self._most_constrained(remaining)
        candidates = [b for b in rest if self.allowed(player, b)]
        candidates.sort(key=lambda b: (self.pair_cost(player, b), id_sort_key(b.id)))

        for opponent in candidates:
            is_repeat = self.context.history.have_played(player.id, opponent.id)
            next_cost = cost + self.pair_cost(player, opponent)
            next_repeats = repeats + (1 if is_repeat else 0)
            next_remaining = [p for p in rest if p is not opponent]
            if self._prune(next_cost, next_repeats, next_remaining):
                continue
            self._backtrack(
                next_remaining,
                matches + (PairedMatch(player, opponent, is_repeat),),
                next_cost,
                next_repeats,
            )
            if self.aborted:
                return

    def run(self) -> Optional[SearchResult]:
        if len(self.players) % 2:
            return None
        if not self.players:
            return EMPTY_RESULT
        self._backtrack(self.players, (), 0, 0)
        # the cap can be passed before the first solution without aborting
        if self.aborted or self.nodes > self.context.max_search_nodes:
            self.context.budget_exhausted = True
            logger.debug(
                "Round %s: search budget of %s nodes spent on a bracket of %s",
                self.context.round_number,
                self.context.max_search_nodes,
                len(self.players),
            )
        return self.best


def solve_bracket(
    players: Sequence[Competitor], context: SearchContext
) -> Optional[SearchResult]:
    """Minimum-cost perfect matching of ``players``, or None if none is legal.

    The order of ``players`` defines the seed positions used by the seed bias.
    """
    return _BracketSearch(players, context).run()


def solve_score_groups(
    groups: Sequence[Sequence[Competitor]], context: SearchContext
) -> Optional[SearchResult]:
    """Pair all score groups top-down, floating at most one competitor down.

    An odd group floats one of its own members (lowest rating tried first)
    into the next group, where it is seeded ahead of that group. Every
    floater choice is tried and the best overall result kept; results for
    the groups below a given ``(group, floater)`` state are memoized since
    they do not depend on how the groups above were paired.
    """
    ordered_groups = [rating_order(g) for g in groups]
    memo: Dict[Tuple[int, Optional[CompetitorId]], Optional[SearchResult]] = {}

    def solve_from(index: int, carry: Optional[Competitor]) -> Optional[SearchResult]:
        if index >= len(ordered_groups):
            return EMPTY_RESULT if carry is None else None
        key = (index, carry.id if carry is not None else None)
        if key in memo:
            return memo[key]

        group = ordered_groups[index]
        pool = ([carry] if carry is not None else []) + group
        best: Optional[SearchResult] = None

        if len(pool) % 2 == 0:
            here = solve_bracket(pool, context)
            if here is not None:
                below = solve_from(index + 1, None)
                if below is not None:
                    best = here.extend(below)
        else:
            for floater in floater_order(group):
                remaining = [p for p in pool if p is not floater]
                here = solve_bracket(remaining, context)
                if here is None:
                    continue
                below = solve_from(index + 1, floater)
                if below is None:
                    continue
                total = here.extend(below)
                if is_better(total, best, context.allow_repeats):
                    best = total

        memo[key] = best
        return best

    return solve_from(0, None)


def solve_flat(
    players: Sequence[Competitor], context: SearchContext
) -> Optional[SearchResult]:
    """Treat the whole pool as one bracket, seeded by effective score then rating."""
    ordered = sorted(
        players,
        key=lambda p: (-context.score_of(p), -p.rating_or_zero, id_sort_key(p.id)),
    )
    return solve_bracket(ordered, context)
