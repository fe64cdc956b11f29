"""Seeded tournament simulator for exercising the pairing engine."""

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

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from swisscore.constants import (
    DEFAULT_MAX_SEARCH_NODES,
    SCORE_EPSILON,
    VARIANT_STANDARD,
)
from swisscore.exceptions import InvalidConfigurationException
from swisscore.models.config import SolverSettings
from swisscore.models.pairing import GameResult, Pairing
from swisscore.player import Competitor
from swisscore.tournament import Tournament
from swisscore.utils import pair_key, setup_logger
from swisscore.validation import ValidationReport, validate_tournament

logger = setup_logger(__name__)


class RatingDistribution(Enum):
    """Rating distribution patterns for generated fields."""

    UNIFORM = "uniform"
    NORMAL = "normal"
    CLUB = "club"
    DESCENDING = "descending"


class ResultPattern(Enum):
    """Result generation patterns."""

    REALISTIC = "realistic"
    BALANCED = "balanced"
    RANDOM = "random"
    SCRIPTED = "scripted"


@dataclass
class SimulationConfig:
    """Configuration for a simulated tournament."""

    num_competitors: int
    num_rounds: int
    pairing_system: str = VARIANT_STANDARD
    rating_distribution: RatingDistribution = RatingDistribution.NORMAL
    rating_range: Tuple[int, int] = (1000, 2400)
    result_pattern: ResultPattern = ResultPattern.REALISTIC
    seed: Optional[int] = None
    draw_percentage: int = 30
    unrated_rate: float = 0.0
    double_round_robin: bool = False
    max_search_nodes: int = DEFAULT_MAX_SEARCH_NODES

    def __post_init__(self) -> None:
        if self.num_competitors < 2:
            raise InvalidConfigurationException("A simulation needs at least 2 competitors")
        if not 0 <= self.draw_percentage <= 100:
            raise InvalidConfigurationException("draw_percentage must be within 0..100")


class CompetitorFactory:
    """Factory for creating rated competitors."""

    def __init__(self, config: SimulationConfig):
        self.config = config
        self.random = random.Random(config.seed)

    def create_competitors(self) -> List[Competitor]:
        competitors = []
        for i in range(self.config.num_competitors):
            rating: Optional[int] = self._generate_rating(i)
            if self.config.unrated_rate and self.random.random() < self.config.unrated_rate:
                rating = None
            competitors.append(
                Competitor(
                    id=i + 1,
                    name=f"Player {i + 1}",
                    rating=rating,
                    pairing_number=i + 1,
                )
            )
        logger.info(
            "Created %s competitors with %s distribution",
            len(competitors),
            self.config.rating_distribution.value,
        )
        return competitors

    def _generate_rating(self, index: int) -> int:
        min_rating, max_rating = self.config.rating_range
        distribution = self.config.rating_distribution
        if distribution == RatingDistribution.UNIFORM:
            return self.random.randint(min_rating, max_rating)
        if distribution == RatingDistribution.CLUB:
            base = self.random.choice([1000, 1200, 1400, 1600, 1800])
            return self.random.randint(base - 100, base + 100)
        if distribution == RatingDistribution.DESCENDING:
            return max(min_rating, max_rating - index * 50 - self.random.randint(0, 49))
        mean = (min_rating + max_rating) / 2
        std_dev = (max_rating - min_rating) / 6
        rating = int(self.random.gauss(mean, std_dev))
        return max(min_rating, min(max_rating, rating))


class ResultSimulator:
    """Simulates game results."""

    def __init__(self, config: SimulationConfig):
        self.config = config
        self.random = random.Random(config.seed)

    def simulate(self, pairing: Pairing) -> GameResult:
        white, black = pairing.white, pairing.black
        pattern = self.config.result_pattern
        if pattern == ResultPattern.SCRIPTED:
            return (GameResult.WHITE_WIN, GameResult.BLACK_WIN, GameResult.DRAW)[
                (pairing.board_number - 1) % 3
            ]
        if pattern == ResultPattern.RANDOM:
            return self.random.choice(list(GameResult))
        if pattern == ResultPattern.BALANCED:
            return self._balanced_result(white, black)
        return self._realistic_result(white, black)

    def _realistic_result(self, white: Competitor, black: Competitor) -> GameResult:
        diff = white.rating_or_zero - black.rating_or_zero
        expected = 1.0 / (1.0 + math.pow(10.0, -diff / 400.0))
        draw_probability = min(
            self.config.draw_percentage / 100.0, 2.0 * min(expected, 1.0 - expected)
        )
        value = self.random.random()
        if value < draw_probability:
            return GameResult.DRAW
        if value < draw_probability + (1.0 - draw_probability) * expected:
            return GameResult.WHITE_WIN
        return GameResult.BLACK_WIN

    def _balanced_result(self, white: Competitor, black: Competitor) -> GameResult:
        diff = white.rating_or_zero - black.rating_or_zero
        win_prob = max(0.05, min(0.95, 0.5 + diff / 1000))
        draw_prob = 0.1
        total = win_prob + draw_prob
        win_prob /= total
        draw_prob /= total
        rand = self.random.random()
        if rand < win_prob:
            return GameResult.WHITE_WIN
        if rand < win_prob + draw_prob:
            return GameResult.DRAW
        return GameResult.BLACK_WIN


@dataclass
class TournamentMetrics:
    """Quality figures for a finished simulation."""

    repeat_count: int = 0
    forced_repeat_rounds: int = 0
    consecutive_repeat_count: int = 0
    score_gaps: List[float] = field(default_factory=list)
    color_imbalances: List[int] = field(default_factory=list)
    max_color_streak: int = 0
    bye_counts: Dict[Any, int] = field(default_factory=dict)
    total_points: float = 0.0
    expected_points: float = 0.0

    @property
    def avg_score_gap(self) -> float:
        return sum(self.score_gaps) / len(self.score_gaps) if self.score_gaps else 0.0

    @property
    def max_score_gap(self) -> float:
        return max(self.score_gaps) if self.score_gaps else 0.0

    @property
    def color_imbalance_avg(self) -> float:
        if not self.color_imbalances:
            return 0.0
        return sum(self.color_imbalances) / len(self.color_imbalances)

    @property
    def points_conserved(self) -> bool:
        return abs(self.total_points - self.expected_points) <= SCORE_EPSILON

    def to_dict(self) -> Dict[str, Any]:
        return {
            "repeatCount": self.repeat_count,
            "forcedRepeatRounds": self.forced_repeat_rounds,
            "consecutiveRepeatCount": self.consecutive_repeat_count,
            "avgScoreGap": self.avg_score_gap,
            "maxScoreGap": self.max_score_gap,
            "colorImbalanceAvg": self.color_imbalance_avg,
            "maxColorStreak": self.max_color_streak,
            "totalPoints": self.total_points,
            "expectedPoints": self.expected_points,
        }


@dataclass
class SimulationResult:
    tournament: Tournament
    metrics: TournamentMetrics
    report: ValidationReport


def _max_streak(colours: List[Optional[str]]) -> int:
    best = current = 0
    previous = None
    for colour in colours:
        if colour is None:
            continue
        current = current + 1 if colour == previous else 1
        previous = colour
        best = max(best, current)
    return best


def collect_metrics(tournament: Tournament) -> TournamentMetrics:
    """Replay a tournament and measure repeats, score gaps and colours."""
    metrics = TournamentMetrics()
    played = set()
    last_round = set()
    scores: Dict[Any, float] = {cid: 0.0 for cid in tournament.competitors}

    for rnd in tournament.rounds:
        if rnd.forced_repeat:
            metrics.forced_repeat_rounds += 1
        this_round = set()
        for pairing in rnd.pairings:
            metrics.expected_points += 1.0
            if pairing.is_bye:
                metrics.bye_counts[pairing.white_id] = (
                    metrics.bye_counts.get(pairing.white_id, 0) + 1
                )
                continue
            key = pair_key(pairing.white_id, pairing.black_id)
            if key in played:
                metrics.repeat_count += 1
            if key in last_round:
                metrics.consecutive_repeat_count += 1
            played.add(key)
            this_round.add(key)
            metrics.score_gaps.append(
                abs(scores[pairing.white_id] - scores[pairing.black_id])
            )
        for cid, points in _round_points(rnd.pairings).items():
            scores[cid] += points
        last_round = this_round

    for row in tournament.get_standings():
        metrics.total_points += row.score
        if any(c is not None for c in row.competitor.color_history):
            metrics.color_imbalances.append(abs(row.competitor.color_balance))
        metrics.max_color_streak = max(
            metrics.max_color_streak, _max_streak(row.competitor.color_history)
        )
    return metrics


def _round_points(pairings: List[Pairing]) -> Dict[Any, float]:
    points: Dict[Any, float] = {}
    for pairing in pairings:
        for cid, value in pairing.points().items():
            points[cid] = points.get(cid, 0.0) + value
    return points


class TournamentSimulator:
    """Plays a whole tournament: generate field, pair, score, repeat."""

    def __init__(self, config: SimulationConfig):
        self.config = config
        self.competitor_factory = CompetitorFactory(config)
        self.result_simulator = ResultSimulator(config)

    def build_tournament(self) -> Tournament:
        return Tournament(
            name=f"Simulation {self.config.seed}",
            competitors=self.competitor_factory.create_competitors(),
            num_rounds=self.config.num_rounds,
            pairing_system=self.config.pairing_system,
            double_round_robin=self.config.double_round_robin,
            settings=SolverSettings(max_search_nodes=self.config.max_search_nodes),
        )

    def play_round(self, tournament: Tournament) -> None:
        round_data = tournament.create_pairings()
        results = {
            p.board_number: self.result_simulator.simulate(p)
            for p in round_data.pairings
            if not p.is_bye
        }
        tournament.record_results(round_data.round_number, results)

    def run(self) -> SimulationResult:
        tournament = self.build_tournament()
        logger.info(
            "Simulating %s: %s competitors, %s rounds",
            self.config.pairing_system,
            self.config.num_competitors,
            self.config.num_rounds,
        )
        while len(tournament.rounds) < tournament.num_rounds:
            self.play_round(tournament)

        metrics = collect_metrics(tournament)
        if not metrics.points_conserved:
            logger.error(
                "Score not conserved: %s awarded, %s expected",
                metrics.total_points,
                metrics.expected_points,
            )
        report = validate_tournament(tournament)
        return SimulationResult(tournament, metrics, report)


def simulate(
    num_competitors: int,
    num_rounds: int,
    pairing_system: str = VARIANT_STANDARD,
    seed: Optional[int] = None,
    **kwargs: Any,
) -> SimulationResult:
    """Convenience wrapper around :class:`TournamentSimulator`."""
    config = SimulationConfig(
        num_competitors=num_competitors,
        num_rounds=num_rounds,
        pairing_system=pairing_system,
        seed=seed,
        **kwargs,
    )
    return TournamentSimulator(config).run()
