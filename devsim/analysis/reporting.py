"""Human-readable summaries of calibration runs."""

import json
from typing import List

from ..linalg.regression import RegressionResult
from .career_sampler import AverageCareerArc, CareerArcDistribution, MaxRatingDistribution


def _fmt(values) -> str:
    return json.dumps([round(v, 2) if isinstance(v, float) else v for v in values])


def format_max_rating_report(dist: MaxRatingDistribution) -> List[str]:
    lines = [f"Players sampled: {dist.num_players}", "Ranges are min/q1/median/q3/max", ""]
    for key, summary in dist.ratings.items():
        lines.append(f"{key}:")
        lines.append(f"Max ratings: {_fmt(summary.as_list())}")
        lines.append(f"Ages of max ratings: {_fmt(dist.ages[key].as_list())}")
        lines.append(f"Number of 100s: {dist.num_100s[key]}")
        lines.append("")
    return lines


def format_career_arc_report(dist: CareerArcDistribution) -> List[str]:
    lines = [
        f"Players sampled: {dist.num_players}",
        "Career arc for the q1/median/q3 player (first entry is the draft)",
        "",
    ]
    keys = list(dist.seasons[0]) if dist.seasons else []
    for key in keys:
        lines.append(f"{key}:")
        lines.append(f"q1: {_fmt(dist.q1(key))}")
        lines.append(f"q2: {_fmt(dist.median(key))}")
        lines.append(f"q3: {_fmt(dist.q3(key))}")
        lines.append("")
    return lines


def format_average_arc_report(arc: AverageCareerArc) -> List[str]:
    lines = [f"Players sampled: {arc.num_players}", ""]
    for key, means in arc.means.items():
        lines.append(f"{key}:")
        lines.append(_fmt(means))
        lines.append("")
    return lines


def format_regression_report(result: RegressionResult) -> List[str]:
    """Coefficients scaled by 100 so small weights stay readable."""
    lines = [f"{result.outcome} regressed on {result.num_samples} player seasons", ""]
    for key, coef in result.coefficients.items():
        lines.append(f"{key}: {coef * 100:.4f}")
    return lines
