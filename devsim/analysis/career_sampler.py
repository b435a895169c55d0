"""
Career distribution sampler for calibrating the age curves.

Develops thousands of synthetic prospects through full careers and reduces
the results to quartile summaries: how high each rating peaks and when, and
what the q1/median/q3 career arc of each rating looks like.
"""

import logging
import multiprocessing
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from ..development.develop import develop_season
from ..development.prospects import generate_prospect
from ..linalg.regression import composite_rating
from ..models.league import LeagueContext
from ..models.ratings import DEVELOPED_RATING_KEYS, RATING_MAX, RatingProfile
from .quantiles import DistributionSummary, summarize

logger = logging.getLogger(__name__)


OVERALL_KEY = "ovr"

MODE_PEAK = "peak"
MODE_ARC = "arc"

CandidateFactory = Callable[[np.random.Generator], Tuple[RatingProfile, int]]


@dataclass
class CareerSamplerConfig:
    """Configuration for career sampling runs."""

    num_players: int = 100
    num_seasons: int = 20
    random_seed: Optional[int] = None
    parallel_workers: Optional[int] = 1  # None = use all CPUs but one
    batch_size: int = 250  # Careers per batch
    coaching_rank: Optional[float] = None  # None = league-average staff
    league: LeagueContext = field(default_factory=LeagueContext)
    # Must be a module-level function so batches can run in subprocesses
    candidate_factory: CandidateFactory = generate_prospect
    rating_keys: Tuple[str, ...] = DEVELOPED_RATING_KEYS
    # Coefficients for an extra composite "ovr" rating, e.g. from a PER fit
    overall_weights: Optional[Dict[str, float]] = None
    progress_interval: float = 0.05

    def __post_init__(self):
        if self.parallel_workers is None:
            self.parallel_workers = max(1, multiprocessing.cpu_count() - 1)
        if self.num_players < 1:
            raise ValueError(f"num_players must be positive, got {self.num_players}")
        if self.num_seasons < 1:
            raise ValueError(f"num_seasons must be positive, got {self.num_seasons}")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")

    @property
    def tracked_keys(self) -> Tuple[str, ...]:
        if self.overall_weights:
            return (OVERALL_KEY,) + tuple(self.rating_keys)
        return tuple(self.rating_keys)


@dataclass
class MaxRatingDistribution:
    """Distribution of career-high ratings and the ages they were reached."""

    num_players: int
    ratings: Dict[str, DistributionSummary] = field(default_factory=dict)
    ages: Dict[str, DistributionSummary] = field(default_factory=dict)
    num_100s: Dict[str, int] = field(default_factory=dict)


@dataclass
class CareerArcDistribution:
    """
    Per-season rating distributions across the sampled population.

    ``seasons[0]`` is the draft snapshot; ``seasons[j]`` is after ``j``
    developed seasons.
    """

    num_players: int
    seasons: List[Dict[str, DistributionSummary]] = field(default_factory=list)

    def arc(self, rating_key: str, quantile: str = "median") -> List[float]:
        return [getattr(season[rating_key], quantile) for season in self.seasons]

    def q1(self, rating_key: str) -> List[float]:
        return self.arc(rating_key, "q1")

    def median(self, rating_key: str) -> List[float]:
        return self.arc(rating_key, "median")

    def q3(self, rating_key: str) -> List[float]:
        return self.arc(rating_key, "q3")


@dataclass
class AverageCareerArc:
    """Mean rating per season (index 0 = draft) across the population."""

    num_players: int
    means: Dict[str, List[float]] = field(default_factory=dict)


class _ProgressLogger:
    """Logs completed careers each time another ``interval`` of the run finishes."""

    def __init__(self, total: int, interval: float, label: str):
        self.total = total
        self.label = label
        self.step = max(1, int(round(total * interval)))
        self.done = 0

    def advance(self, n: int = 1) -> None:
        before = self.done // self.step
        self.done += n
        if self.done // self.step > before or self.done == self.total:
            logger.info(
                "%s: %d%% (%d/%d careers)",
                self.label, round(100 * self.done / self.total), self.done, self.total,
            )


def _snapshot(ratings: RatingProfile, config: CareerSamplerConfig) -> Dict[str, float]:
    snap = {key: ratings[key] for key in config.rating_keys}
    if config.overall_weights:
        snap[OVERALL_KEY] = composite_rating(ratings, config.overall_weights)
    return snap


def _simulate_peak(
    ratings: RatingProfile,
    age: int,
    config: CareerSamplerConfig,
    rng: np.random.Generator,
) -> Tuple[Dict[str, float], Dict[str, int]]:
    """Career-high of each rating and the age it was first reached."""
    max_ratings = _snapshot(ratings, config)
    max_ages = {key: age for key in max_ratings}

    for _ in range(config.num_seasons):
        develop_season(ratings, age, config.coaching_rank, league=config.league, rng=rng)
        age += 1

        snap = _snapshot(ratings, config)
        for key, value in snap.items():
            if value > max_ratings[key]:
                max_ratings[key] = value
                max_ages[key] = age

    return max_ratings, max_ages


def _simulate_arc(
    ratings: RatingProfile,
    age: int,
    config: CareerSamplerConfig,
    rng: np.random.Generator,
) -> List[Dict[str, float]]:
    """Snapshot at the draft and after every developed season."""
    arc = [_snapshot(ratings, config)]
    for _ in range(config.num_seasons):
        develop_season(ratings, age, config.coaching_rank, league=config.league, rng=rng)
        age += 1
        arc.append(_snapshot(ratings, config))
    return arc


def _run_batch(
    mode: str,
    batch_size: int,
    seed: int,
    config: CareerSamplerConfig,
    progress: Optional[_ProgressLogger] = None,
) -> List:
    """
    Simulate a batch of independent careers.

    Each batch owns its generator, so batches can run in any order or in
    separate processes without changing their output.
    """
    rng = np.random.default_rng(seed)
    simulate = _simulate_peak if mode == MODE_PEAK else _simulate_arc
    results = []

    for _ in range(batch_size):
        ratings, age = config.candidate_factory(rng)
        results.append(simulate(ratings, age, config, rng))
        if progress is not None:
            progress.advance()

    return results


class CareerDistributionSampler:
    """
    Samples rating development over many synthetic careers.

    Features:
    - Independent seeded batches, optionally spread over a ProcessPoolExecutor
    - Exact sort-and-index quartiles (no interpolation)
    - Progress logging at fixed percentage intervals
    """

    def __init__(self, config: CareerSamplerConfig = None):
        self.config = config or CareerSamplerConfig()

    def _batches(self) -> List[Tuple[int, int]]:
        """Split the run into (size, seed) batches with distinct seeds."""
        base_seed = 42 if self.config.random_seed is None else self.config.random_seed
        batches = []
        remaining = self.config.num_players
        batch_idx = 0
        while remaining > 0:
            bs = min(self.config.batch_size, remaining)
            batches.append((bs, base_seed + batch_idx * 1000))
            remaining -= bs
            batch_idx += 1
        return batches

    def _run_sequential(self, mode: str, batches, progress: _ProgressLogger) -> List[List]:
        return [
            _run_batch(mode, bs, seed, self.config, progress)
            for bs, seed in batches
        ]

    def _run(self, mode: str, label: str) -> List:
        """Run all careers and return their results in batch order."""
        batches = self._batches()
        n_workers = self.config.parallel_workers
        progress = _ProgressLogger(self.config.num_players, self.config.progress_interval, label)

        if n_workers > 1 and len(batches) > 1:
            try:
                by_batch: List[Optional[List]] = [None] * len(batches)
                with ProcessPoolExecutor(max_workers=n_workers) as executor:
                    futures = {
                        executor.submit(_run_batch, mode, bs, seed, self.config): idx
                        for idx, (bs, seed) in enumerate(batches)
                    }
                    for future in as_completed(futures):
                        batch_results = future.result()
                        by_batch[futures[future]] = batch_results
                        progress.advance(len(batch_results))
            except (RuntimeError, OSError) as e:
                logger.warning("Parallel career sampling failed (%s); running sequentially", e)
                progress = _ProgressLogger(self.config.num_players, self.config.progress_interval, label)
                by_batch = self._run_sequential(mode, batches, progress)
        else:
            by_batch = self._run_sequential(mode, batches, progress)

        return [career for batch in by_batch for career in batch]

    def max_rating_dists(self) -> MaxRatingDistribution:
        """Distribution of each rating's career maximum and the age at that maximum."""
        careers = self._run(MODE_PEAK, "Max rating distributions")
        keys = self.config.tracked_keys

        result = MaxRatingDistribution(num_players=len(careers))
        for key in keys:
            maxima = [max_ratings[key] for max_ratings, _ in careers]
            ages = [max_ages[key] for _, max_ages in careers]
            result.ratings[key] = summarize(maxima)
            result.ages[key] = summarize(ages)
            result.num_100s[key] = sum(1 for v in maxima if v == RATING_MAX)

        return result

    def avg_rating_dists(self) -> CareerArcDistribution:
        """Per-season quartiles of every rating across the population."""
        careers = self._run(MODE_ARC, "Career arc distributions")
        keys = self.config.tracked_keys

        result = CareerArcDistribution(num_players=len(careers))
        for season_idx in range(self.config.num_seasons + 1):
            result.seasons.append({
                key: summarize([arc[season_idx][key] for arc in careers])
                for key in keys
            })

        return result

    def average_career_arc(self, rating_key: Optional[str] = None) -> AverageCareerArc:
        """Mean of each rating (or just ``rating_key``) per season."""
        if rating_key is not None and rating_key not in self.config.tracked_keys:
            raise KeyError(f"Rating '{rating_key}' is not tracked by this sampler")
        careers = self._run(MODE_ARC, "Average career arc")
        keys = (rating_key,) if rating_key else self.config.tracked_keys

        result = AverageCareerArc(num_players=len(careers))
        for key in keys:
            values = np.array([[snap[key] for snap in arc] for arc in careers], dtype=float)
            result.means[key] = values.mean(axis=0).tolist()

        return result


def max_rating_dists(config: CareerSamplerConfig = None) -> MaxRatingDistribution:
    """Convenience wrapper for ``CareerDistributionSampler.max_rating_dists``."""
    return CareerDistributionSampler(config).max_rating_dists()


def avg_rating_dists(config: CareerSamplerConfig = None) -> CareerArcDistribution:
    """Convenience wrapper for ``CareerDistributionSampler.avg_rating_dists``."""
    return CareerDistributionSampler(config).avg_rating_dists()


def average_career_arc(
    config: CareerSamplerConfig = None,
    rating_key: Optional[str] = None,
) -> AverageCareerArc:
    """Convenience wrapper for ``CareerDistributionSampler.average_career_arc``."""
    return CareerDistributionSampler(config).average_career_arc(rating_key)
