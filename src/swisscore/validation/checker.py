"""Hard-invariant checks for generated pairings."""

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

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Union

from swisscore.constants import PAIRING_SYSTEM_ROUND_ROBIN
from swisscore.models.pairing_history import PairingHistory
from swisscore.models.pairing_result import PairingResult
from swisscore.models.round_data import RoundData
from swisscore.pairing.colors import would_create_three_same
from swisscore.player import Competitor
from swisscore.tournament.standings import aggregate_standings
from swisscore.type_hints import BLACK, WHITE
from swisscore.utils import setup_logger

logger = setup_logger(__name__)

RoundLike = Union[PairingResult, RoundData]


class CriterionStatus(Enum):
    """Status of a single check."""

    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class ViolationType(Enum):
    """Severity of a failed check."""

    ABSOLUTE = "ABSOLUTE"  # hard invariant broken
    WARNING = "WARNING"  # quality issue only


@dataclass
class CriterionResult:
    """Result of one check."""

    criterion: str
    status: CriterionStatus
    violation_type: Optional[ViolationType] = None
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status is not CriterionStatus.VIOLATION


@dataclass
class ValidationReport:
    """Complete validation report for one or more rounds."""

    total_criteria: int
    compliant_count: int
    violations: List[CriterionResult]
    overall_status: CriterionStatus
    summary: str
    quality_warnings: List[CriterionResult] = field(default_factory=list)
    criteria_results: List[CriterionResult] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def compliance_percentage(self) -> float:
        """Calculate compliance percentage."""
        if self.total_criteria == 0:
            return 100.0
        return (self.compliant_count / self.total_criteria) * 100.0


def _compliant(criterion: str, description: str = "") -> CriterionResult:
    return CriterionResult(criterion, CriterionStatus.COMPLIANT, description=description)


def _violation(
    criterion: str,
    description: str,
    details: Optional[Dict[str, object]] = None,
    violation_type: ViolationType = ViolationType.ABSOLUTE,
) -> CriterionResult:
    return CriterionResult(
        criterion,
        CriterionStatus.VIOLATION,
        violation_type,
        description,
        details or {},
    )


class PairingChecker:
    """Checks one round of pairings against the engine's guarantees."""

    def check_completeness(
        self, pool: Sequence[Competitor], round_data: RoundLike
    ) -> CriterionResult:
        name = "Completeness: every competitor appears exactly once"
        seen = Counter()
        for p in round_data.pairings:
            seen[p.white_id] += 1
            if p.black_id is not None:
                seen[p.black_id] += 1
        expected = {c.id for c in pool}
        missing = [i for i in expected if seen[i] == 0]
        doubled = [i for i, n in seen.items() if n > 1]
        unknown = [i for i in seen if i not in expected]
        if missing or doubled or unknown:
            return _violation(
                name,
                "Competitors missing, doubled or unknown",
                {"missing": missing, "doubled": doubled, "unknown": unknown},
            )
        return _compliant(name)

    def check_bye_parity(
        self, pool: Sequence[Competitor], round_data: RoundLike
    ) -> CriterionResult:
        name = "Bye parity: one bye for an odd pool, none for an even pool"
        if len(pool) < 2:
            return CriterionResult(name, CriterionStatus.NOT_APPLICABLE)
        byes = [p for p in round_data.pairings if p.is_bye]
        expected = len(pool) % 2
        if len(byes) != expected:
            return _violation(
                name,
                f"Expected {expected} bye(s), found {len(byes)}",
                {"byes": [b.white_id for b in byes]},
            )
        return _compliant(name)

    def check_no_self_pairing(self, round_data: RoundLike) -> CriterionResult:
        name = "No competitor is paired against themself"
        bad = [p.board_number for p in round_data.pairings if p.white_id == p.black_id]
        if bad:
            return _violation(name, "Self pairings found", {"boards": bad})
        return _compliant(name)

    def check_board_numbers(self, round_data: RoundLike) -> CriterionResult:
        name = "Boards numbered 1..n with the bye last"
        numbers = [p.board_number for p in round_data.pairings]
        if numbers != list(range(1, len(numbers) + 1)):
            return _violation(name, "Board numbers are not consecutive", {"boards": numbers})
        bye_positions = [i for i, p in enumerate(round_data.pairings) if p.is_bye]
        if bye_positions and bye_positions != [len(numbers) - 1]:
            return _violation(name, "Bye entry is not the last board")
        return _compliant(name)

    def check_repeats(
        self, round_data: RoundLike, history: PairingHistory
    ) -> CriterionResult:
        """Repeat flags, repeat count and forced flag must agree with history."""
        name = "Repeats only when forced"
        repeats = []
        mislabelled = []
        for p in round_data.pairings:
            if p.is_bye:
                continue
            played = history.have_played(p.white_id, p.black_id)
            if played:
                repeats.append(p.board_number)
            if played != p.is_repeat:
                mislabelled.append(p.board_number)
        details = {"repeat_boards": repeats, "mislabelled_boards": mislabelled}
        if mislabelled:
            return _violation(name, "Repeat flags disagree with history", details)
        if len(repeats) != round_data.repeat_count:
            return _violation(
                name,
                f"repeat_count is {round_data.repeat_count} but {len(repeats)} repeats found",
                details,
            )
        if repeats and not round_data.forced_repeat:
            return _violation(name, "Repeat pairings without forced_repeat", details)
        if round_data.forced_repeat and not repeats:
            return _violation(name, "forced_repeat set without any repeat", details)
        return _compliant(name)

    def check_bye_fairness(
        self, pool: Sequence[Competitor], round_data: RoundLike, history: PairingHistory
    ) -> CriterionResult:
        name = "No second bye while someone has had none"
        bye = next((p for p in round_data.pairings if p.is_bye), None)
        if bye is None:
            return CriterionResult(name, CriterionStatus.NOT_APPLICABLE)
        if history.byes_of(bye.white_id) == 0:
            return _compliant(name)
        without = [c.id for c in pool if history.byes_of(c.id) == 0]
        if without:
            return _violation(
                name,
                f"{bye.white_id} gets another bye while others have none",
                {"without_bye": without},
            )
        return _compliant(name)

    def check_color_streaks(
        self, pool: Sequence[Competitor], round_data: RoundLike
    ) -> CriterionResult:
        name = "No third consecutive colour"
        by_id = {c.id: c for c in pool}
        streaks = []
        for p in round_data.pairings:
            if p.is_bye:
                continue
            for cid, colour in ((p.white_id, WHITE), (p.black_id, BLACK)):
                competitor = by_id.get(cid)
                if competitor is not None and would_create_three_same(competitor, colour):
                    streaks.append(cid)
        if streaks:
            return _violation(
                name,
                f"{len(streaks)} competitor(s) get a third colour in a row",
                {"competitors": streaks},
                ViolationType.WARNING,
            )
        return _compliant(name)

    def validate_round(
        self,
        pool: Sequence[Competitor],
        round_data: RoundLike,
        prior_rounds: Iterable[RoundData] = (),
        swiss: bool = True,
    ) -> ValidationReport:
        """Run every check on one round.

        Round-robin rounds (``swiss=False``) skip the repeat and bye fairness
        checks, which only apply to Swiss pairing.
        """
        history = PairingHistory.from_rounds(prior_rounds, pool)
        results = [
            self.check_completeness(pool, round_data),
            self.check_bye_parity(pool, round_data),
            self.check_no_self_pairing(round_data),
            self.check_board_numbers(round_data),
            self.check_color_streaks(pool, round_data),
        ]
        if swiss:
            results.append(self.check_repeats(round_data, history))
            results.append(self.check_bye_fairness(pool, round_data, history))
        return build_report(results)


def build_report(results: List[CriterionResult]) -> ValidationReport:
    applicable = [r for r in results if r.status is not CriterionStatus.NOT_APPLICABLE]
    absolute = [r for r in applicable if r.violation_type is ViolationType.ABSOLUTE]
    warnings = [r for r in applicable if r.violation_type is ViolationType.WARNING]
    compliant = sum(1 for r in applicable if r.status is CriterionStatus.COMPLIANT)

    if not applicable:
        overall = CriterionStatus.NOT_APPLICABLE
        summary = "Nothing to validate"
    elif absolute:
        overall = CriterionStatus.VIOLATION
        summary = (
            f"Hard invariant violations - {len(absolute)} checks failed; "
            f"{len(warnings)} quality warnings"
        )
    else:
        overall = CriterionStatus.COMPLIANT
        summary = f"All hard invariants hold; {len(warnings)} quality warnings"

    logger.debug("Pairing validation complete: %s", summary)
    return ValidationReport(
        total_criteria=len(applicable),
        compliant_count=compliant,
        violations=absolute,
        overall_status=overall,
        summary=summary,
        quality_warnings=warnings,
        criteria_results=results,
    )


def validate_tournament(tournament) -> ValidationReport:
    """Validate every round of a tournament against the rounds before it.

    The pool of each round is the set of competitors appearing in it, with
    colour histories rebuilt from the earlier rounds.
    """
    checker = PairingChecker()
    swiss = tournament.config.pairing_system != PAIRING_SYSTEM_ROUND_ROBIN
    results: List[CriterionResult] = []
    for index, rnd in enumerate(tournament.rounds):
        prior = tournament.rounds[:index]
        state = {
            row.id: row.competitor
            for row in aggregate_standings(tournament.competitors.values(), prior)
        }
        ids = []
        for p in rnd.pairings:
            ids.append(p.white_id)
            if p.black_id is not None:
                ids.append(p.black_id)
        pool = [state[i] for i in ids if i in state]
        report = checker.validate_round(pool, rnd, prior, swiss=swiss)
        for result in report.criteria_results:
            result.details.setdefault("round", rnd.round_number)
        results.extend(report.criteria_results)
    report = build_report(results)
    logger.info("Tournament validation complete: %s", report.summary)
    return report
