"""Main CLI interface for the player development tools."""

import argparse
import json
import logging
import sys

import numpy as np

from .analysis.career_sampler import CareerDistributionSampler, CareerSamplerConfig
from .analysis.reporting import (
    format_average_arc_report,
    format_career_arc_report,
    format_max_rating_report,
    format_regression_report,
)
from .data.loader import RecordFormatError, RecordLoader
from .development.develop import develop
from .linalg.errors import LinearAlgebraError
from .linalg.regression import RegressionConfig, fit_ratings_regression
from .models.league import LeagueContext


def _print_lines(lines):
    for line in lines:
        print(line)


def _sampler_config(args) -> CareerSamplerConfig:
    weights = None
    if args.weights:
        with open(args.weights, "r") as f:
            weights = json.load(f)

    return CareerSamplerConfig(
        num_players=args.players,
        num_seasons=args.seasons,
        random_seed=args.seed,
        parallel_workers=args.workers,
        coaching_rank=args.coaching_rank,
        league=LeagueContext(num_active_teams=args.num_teams),
        overall_weights=weights,
    )


def run_max_dists(args):
    """Report career-high rating distributions."""
    sampler = CareerDistributionSampler(_sampler_config(args))
    _print_lines(format_max_rating_report(sampler.max_rating_dists()))
    return 0


def run_avg_dists(args):
    """Report q1/median/q3 career arcs."""
    sampler = CareerDistributionSampler(_sampler_config(args))
    _print_lines(format_career_arc_report(sampler.avg_rating_dists()))
    return 0


def run_career_arc(args):
    """Report the mean career arc."""
    sampler = CareerDistributionSampler(_sampler_config(args))
    try:
        arc = sampler.average_career_arc(args.rating)
    except KeyError as e:
        print(f"Error: {e}")
        return 1
    _print_lines(format_average_arc_report(arc))
    return 0


def run_regress(args):
    """Fit the ratings regression on exported player seasons."""
    print(f"Loading player seasons from {args.input}...")
    try:
        records = RecordLoader.load_player_seasons(args.input)
    except (OSError, RecordFormatError) as e:
        print(f"Error loading data: {e}")
        return 1

    config = RegressionConfig(
        outcome=args.outcome,
        min_minutes=args.min_minutes,
        active_only=args.active_only,
        fit_intercept=args.intercept,
    )

    try:
        result = fit_ratings_regression(records, config)
    except (LinearAlgebraError, RecordFormatError) as e:
        print(f"Error: {e}")
        return 1

    _print_lines(format_regression_report(result))

    if args.output:
        with open(args.output, "w") as f:
            json.dump(result.coefficients.to_dict(), f, indent=2)
        print(f"\nCoefficients written to {args.output}")
    return 0


def run_develop(args):
    """Develop one rating profile and print the result."""
    try:
        ratings = RecordLoader.load_profile(args.input)
    except (OSError, RecordFormatError) as e:
        print(f"Error loading profile: {e}")
        return 1

    before = ratings.to_dict()
    final_age = develop(
        ratings,
        args.age,
        years=args.years,
        coaching_rank=args.coaching_rank,
        league=LeagueContext(num_active_teams=args.num_teams),
        rng=np.random.default_rng(args.seed),
    )

    report = {
        "age": final_age,
        "ratings": ratings.to_dict(),
        "change": {k: ratings[k] - before[k] for k in before},
    }
    print(json.dumps(report, indent=2))

    if args.output:
        with open(args.output, "w") as f:
            json.dump(report, f, indent=2)
    return 0


def _add_sampler_arguments(parser):
    parser.add_argument("--players", "-n", type=int, default=100, help="Careers to simulate (default: 100)")
    parser.add_argument("--seasons", type=int, default=20, help="Seasons per career (default: 20)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--workers", type=int, default=1, help="Worker processes (default: 1)")
    parser.add_argument("--coaching-rank", type=float, default=None, help="Coaching rank, 1 is best (default: league average)")
    parser.add_argument("--num-teams", type=int, default=30, help="Active teams in the league (default: 30)")
    parser.add_argument("--weights", default=None, help="JSON of rating coefficients for an extra 'ovr' rating")


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Player development simulator - season rating progression and calibration tools"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    max_parser = subparsers.add_parser("max-dists", help="Distribution of career-high ratings")
    _add_sampler_arguments(max_parser)

    avg_parser = subparsers.add_parser("avg-dists", help="q1/median/q3 career arcs per rating")
    _add_sampler_arguments(avg_parser)

    arc_parser = subparsers.add_parser("career-arc", help="Mean career arc per rating")
    _add_sampler_arguments(arc_parser)
    arc_parser.add_argument("--rating", default=None, help="Only report this rating")

    regress_parser = subparsers.add_parser("regress", help="Regress an outcome stat on ratings")
    regress_parser.add_argument("--input", "-i", required=True, help="Player export (JSON or CSV)")
    regress_parser.add_argument("--output", "-o", default=None, help="Write coefficients JSON here")
    regress_parser.add_argument("--outcome", default="per", help="Outcome stat column (default: per)")
    regress_parser.add_argument("--min-minutes", type=float, default=500.0, help="Ignore seasons at or below this many minutes")
    regress_parser.add_argument("--active-only", action="store_true", help="Exclude retired players")
    regress_parser.add_argument("--intercept", action="store_true", help="Fit an intercept term")

    develop_parser = subparsers.add_parser("develop", help="Develop one rating profile")
    develop_parser.add_argument("--input", "-i", required=True, help="Rating profile JSON")
    develop_parser.add_argument("--output", "-o", default=None, help="Write the developed profile here")
    develop_parser.add_argument("--age", type=int, required=True, help="Player age this season")
    develop_parser.add_argument("--years", type=int, default=1, help="Seasons to develop (default: 1)")
    develop_parser.add_argument("--coaching-rank", type=float, default=None, help="Coaching rank, 1 is best")
    develop_parser.add_argument("--num-teams", type=int, default=30, help="Active teams in the league (default: 30)")
    develop_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "max-dists":
        return run_max_dists(args)
    elif args.command == "avg-dists":
        return run_avg_dists(args)
    elif args.command == "career-arc":
        return run_career_arc(args)
    elif args.command == "regress":
        return run_regress(args)
    elif args.command == "develop":
        return run_develop(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
