"""Offline calibration tooling for the development engine."""

from .career_sampler import (
    AverageCareerArc,
    CareerArcDistribution,
    CareerDistributionSampler,
    CareerSamplerConfig,
    MaxRatingDistribution,
    average_career_arc,
    avg_rating_dists,
    max_rating_dists,
)
from .quantiles import DistributionSummary, quartile_indices, summarize, summarize_sorted

__all__ = [
    "AverageCareerArc",
    "CareerArcDistribution",
    "CareerDistributionSampler",
    "CareerSamplerConfig",
    "DistributionSummary",
    "MaxRatingDistribution",
    "average_career_arc",
    "avg_rating_dists",
    "max_rating_dists",
    "quartile_indices",
    "summarize",
    "summarize_sorted",
]
