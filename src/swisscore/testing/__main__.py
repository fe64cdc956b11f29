"""Developer CLI for simulating, validating and benchmarking pairings."""

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

import argparse
import json
import sys
import time
from pathlib import Path
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from swisscore.constants import PAIRING_SYSTEMS, VARIANT_STANDARD
from swisscore.exceptions import SwissCoreException
from swisscore.models.round_data import RoundData
from swisscore.pairing.strategies import generate_pairings
from swisscore.player import Competitor
from swisscore.testing.simulator import (
    RatingDistribution,
    ResultPattern,
    SimulationConfig,
    TournamentSimulator,
)
from swisscore.tournament import Tournament
from swisscore.utils import setup_logger
from swisscore.validation import validate_tournament

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Command definitions with their options
COMMANDS = {
    "simulate": {
        "description": "Play a seeded random tournament and report metrics",
        "options": {
            "--players": "Number of competitors (default: 16)",
            "--rounds": "Number of rounds (default: 5)",
            "--system": "Pairing system (standard/uscf/fide_dutch/accelerated/round_robin)",
            "--distribution": "Rating distribution (uniform/normal/club/descending)",
            "--pattern": "Result pattern (realistic/balanced/random/scripted)",
            "--seed": "Random seed for reproducibility",
            "--double": "Double round robin",
            "--output": "Write the tournament as JSON",
        },
    },
    "pair": {
        "description": "Pair one round from a JSON pool file",
        "options": {
            "--file": "JSON file with 'competitors' and optional 'rounds'",
            "--round": "Round number to pair",
            "--variant": "Swiss variant (default: standard)",
            "--total-rounds": "Planned rounds, needed for accelerated",
        },
    },
    "validate": {
        "description": "Check a saved tournament against the pairing invariants",
        "options": {
            "--file": "Tournament file to validate (JSON)",
            "--detailed": "Show every violation",
        },
    },
    "benchmark": {
        "description": "Time whole simulated tournaments",
        "options": {
            "--size": "Tournament size (default: 32)",
            "--rounds": "Number of rounds (default: 7)",
            "--iterations": "Number of iterations (default: 5)",
            "--system": "Pairing system",
        },
    },
    "help": {
        "description": "Show help for specific command",
        "options": {"<command>": "Command name to get help for"},
    },
    "exit": {"description": "Exit the interactive mode", "options": {}},
}


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║                    SWISS CORE TEST - CLI                      ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝{Colors.ENDC}

Type {Colors.BOLD}/help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave interactive mode
"""
    print(banner)


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:15}{Colors.ENDC} - {info['description']}")
    print()


def print_command_help(command: str):
    """Print detailed help for a specific command."""
    if command not in COMMANDS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print_commands_list()
        return

    cmd_info = COMMANDS[command]
    print(f"\n{Colors.BOLD}{Colors.OKBLUE}Command: {command}{Colors.ENDC}")
    print(f"{Colors.BOLD}Description:{Colors.ENDC} {cmd_info['description']}\n")
    if cmd_info["options"]:
        print(f"{Colors.BOLD}Options:{Colors.ENDC}")
        for option, description in cmd_info["options"].items():
            print(f"  {Colors.OKCYAN}{option:20}{Colors.ENDC} {description}")
    print()


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
    completions = {}
    for cmd, info in COMMANDS.items():
        options_completer = (
            WordCompleter(list(info["options"].keys())) if info["options"] else None
        )
        completions[cmd] = options_completer
        completions[f"/{cmd}"] = options_completer
    completions["/help"] = None
    completions["/list"] = None
    return NestedCompleter.from_nested_dict(completions)


def run_simulate_command(args: argparse.Namespace) -> int:
    """Run the simulate command."""
    config = SimulationConfig(
        num_competitors=args.players,
        num_rounds=args.rounds,
        pairing_system=args.system,
        rating_distribution=RatingDistribution(args.distribution),
        result_pattern=ResultPattern(args.pattern),
        seed=args.seed,
        double_round_robin=args.double,
    )
    result = TournamentSimulator(config).run()
    metrics = result.metrics

    print(f"\n{Colors.BOLD}Tournament simulated:{Colors.ENDC}")
    print(f"  Competitors: {len(result.tournament.competitors)}")
    print(f"  Rounds: {len(result.tournament.rounds)}")
    print(f"  Repeats: {metrics.repeat_count} ({metrics.forced_repeat_rounds} forced rounds)")
    print(f"  Consecutive repeats: {metrics.consecutive_repeat_count}")
    print(f"  Score gap avg/max: {metrics.avg_score_gap:.2f} / {metrics.max_score_gap:.2f}")
    print(f"  Colour imbalance avg: {metrics.color_imbalance_avg:.2f}")
    print(f"  Longest colour streak: {metrics.max_color_streak}")
    colour = Colors.OKGREEN if result.report.is_valid else Colors.FAIL
    print(f"  {colour}{result.report.summary}{Colors.ENDC}")

    print(f"\n{Colors.BOLD}Standings:{Colors.ENDC}")
    for row in result.tournament.get_standings():
        c = row.competitor
        print(f"  {row.rank:3}. {c.name:12} {c.rating or 0:5} {c.score:4.1f}")

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(
            json.dumps(result.tournament.to_dict(), indent=2), encoding="utf-8"
        )
        print(f"{Colors.OKGREEN}Tournament saved to: {output_path}{Colors.ENDC}")
    return 0 if result.report.is_valid and metrics.points_conserved else 1


def run_pair_command(args: argparse.Namespace) -> int:
    """Pair one round from a JSON file."""
    data = json.loads(Path(args.file).read_text(encoding="utf-8"))
    competitors = [Competitor.from_dict(c) for c in data.get("competitors", [])]
    roster = {c.id: c for c in competitors}
    rounds = [RoundData.from_dict(r, roster) for r in data.get("rounds", [])]
    result = generate_pairings(
        competitors,
        args.round,
        prior_rounds=rounds,
        total_rounds=args.total_rounds,
        variant=args.variant,
    )
    print(json.dumps(result.to_dict(), indent=2))
    return 0


def run_validate_command(args: argparse.Namespace) -> int:
    """Run the validation command."""
    file_path = Path(args.file)
    if not file_path.exists():
        print(f"{Colors.FAIL}Error: File not found: {file_path}{Colors.ENDC}")
        return 1

    print(f"\n{Colors.BOLD}Validating tournament: {file_path}{Colors.ENDC}")
    tournament = Tournament.from_dict(json.loads(file_path.read_text(encoding="utf-8")))
    report = validate_tournament(tournament)

    print(f"\n{Colors.BOLD}Validation Results:{Colors.ENDC}")
    print(f"  Compliance: {report.compliance_percentage:.1f}%")
    print(f"  Summary: {report.summary}")
    if args.detailed:
        print(f"\n{Colors.BOLD}Violations:{Colors.ENDC}")
        for violation in report.violations + report.quality_warnings:
            round_number = violation.details.get("round", "?")
            print(f"  - round {round_number}: {violation.criterion}: {violation.description}")
    return 0 if report.is_valid else 1


def run_benchmark_command(args: argparse.Namespace) -> int:
    """Run performance benchmarks."""
    print(f"\n{Colors.BOLD}Running performance benchmark...{Colors.ENDC}")
    print(f"Tournament size: {args.size} competitors, {args.rounds} rounds")
    print(f"Iterations: {args.iterations}\n")

    times = []
    for i in range(args.iterations):
        config = SimulationConfig(
            num_competitors=args.size,
            num_rounds=args.rounds,
            pairing_system=args.system,
            seed=42 + i,
        )
        start = time.perf_counter()
        TournamentSimulator(config).run()
        elapsed = time.perf_counter() - start
        times.append(elapsed)
        print(f"  Iteration {i+1}/{args.iterations}: {elapsed*1000:.2f}ms")

    print(f"\n{Colors.BOLD}Results:{Colors.ENDC}")
    print(f"  Average: {sum(times) / len(times) * 1000:.2f}ms")
    print(f"  Min: {min(times) * 1000:.2f}ms")
    print(f"  Max: {max(times) * 1000:.2f}ms")
    return 0


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="swisscore-test",
        description="Testing CLI for the Swiss Core pairing engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  swisscore-test

  # Simulate an accelerated tournament
  swisscore-test simulate --players 24 --rounds 7 --system accelerated

  # Validate a saved tournament
  swisscore-test validate --file tournament.json

  # Benchmark
  swisscore-test benchmark --size 64 --iterations 3
        """,
    )
    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sim_parser = subparsers.add_parser("simulate", help="Simulate a tournament")
    sim_parser.add_argument("--players", type=int, default=16)
    sim_parser.add_argument("--rounds", type=int, default=5)
    sim_parser.add_argument("--system", choices=PAIRING_SYSTEMS, default=VARIANT_STANDARD)
    sim_parser.add_argument(
        "--distribution",
        choices=[d.value for d in RatingDistribution],
        default=RatingDistribution.NORMAL.value,
    )
    sim_parser.add_argument(
        "--pattern",
        choices=[p.value for p in ResultPattern],
        default=ResultPattern.REALISTIC.value,
    )
    sim_parser.add_argument("--seed", type=int, default=42)
    sim_parser.add_argument("--double", action="store_true")
    sim_parser.add_argument("--output")
    sim_parser.set_defaults(func=run_simulate_command)

    pair_parser = subparsers.add_parser("pair", help="Pair one round from a file")
    pair_parser.add_argument("--file", required=True)
    pair_parser.add_argument("--round", type=int, required=True)
    pair_parser.add_argument("--variant", default=VARIANT_STANDARD)
    pair_parser.add_argument("--total-rounds", type=int)
    pair_parser.set_defaults(func=run_pair_command)

    val_parser = subparsers.add_parser("validate", help="Validate a saved tournament")
    val_parser.add_argument("--file", required=True)
    val_parser.add_argument("--detailed", action="store_true")
    val_parser.set_defaults(func=run_validate_command)

    bench_parser = subparsers.add_parser("benchmark", help="Performance benchmarking")
    bench_parser.add_argument("--size", type=int, default=32)
    bench_parser.add_argument("--rounds", type=int, default=7)
    bench_parser.add_argument("--iterations", type=int, default=5)
    bench_parser.add_argument("--system", choices=PAIRING_SYSTEMS, default=VARIANT_STANDARD)
    bench_parser.set_defaults(func=run_benchmark_command)

    return parser


def dispatch(argv: List[str]) -> int:
    """Parse ``argv`` and run the selected command."""
    parser = create_main_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    try:
        return args.func(args)
    except SwissCoreException as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1
    except (ValueError, KeyError) as e:
        # json.JSONDecodeError is a ValueError
        print(f"{Colors.FAIL}Error: malformed input: {e}{Colors.ENDC}")
        return 1


def run_interactive_mode() -> int:
    """Run in interactive mode with autocomplete."""
    print_banner()
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=Style.from_dict({"prompt": "#00aa00 bold"}),
    )

    while True:
        try:
            user_input = session.prompt("swisscore-test> ").strip()
            if not user_input:
                continue
            if user_input in ["exit", "quit", "q"]:
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break
            if user_input in ["/help", "help", "?", "/list"]:
                print_commands_list()
                continue
            if user_input.startswith("/help ") or user_input.startswith("help "):
                print_command_help(user_input.split()[1].lstrip("/"))
                continue

            parts = user_input.split()
            command = parts[0].lstrip("/")
            if command not in COMMANDS:
                print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
                print(f"Type {Colors.BOLD}/help{Colors.ENDC} to see available commands")
                continue
            try:
                dispatch([command] + parts[1:])
            except SystemExit:
                # argparse calls sys.exit on error
                continue
            except (OSError, ValueError) as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
                logger.exception("Command execution failed")

        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the swisscore-test CLI."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv or "--interactive" in argv or "-i" in argv:
        return run_interactive_mode()
    return dispatch(argv)


if __name__ == "__main__":
    sys.exit(main())
