"""Loader for exported historical player records."""

import json
import logging
from pathlib import Path
from typing import Dict, List, Union

import pandas as pd

from ..models.ratings import RATING_KEYS, RatingProfile

logger = logging.getLogger(__name__)


class RecordFormatError(ValueError):
    """Raised when a player record export is missing required structure."""


STAT_COLUMNS = ("season", "playoffs", "min", "per")


class RecordLoader:
    """Loads player records exported from the league database."""

    @staticmethod
    def load_player_seasons(file_path: Union[str, Path]) -> pd.DataFrame:
        """
        Load one row per (player, season) with ratings and season stats.

        JSON exports are nested player documents with ``ratings`` and
        ``stats`` lists; each ratings entry is joined to the stats rows of
        the same season. CSV exports are expected to be already flat.

        Args:
            file_path: Path to a ``.json`` or ``.csv`` export

        Returns:
            DataFrame with ``pid``, ``retired``, ``season``, ``playoffs``,
            ``min``, ``per`` and one column per rating
        """
        path = Path(file_path)
        if path.suffix.lower() == ".csv":
            frame = pd.read_csv(path)
        else:
            with open(path, "r") as f:
                data = json.load(f)
            frame = RecordLoader.player_seasons_from_dict(data)

        missing = [c for c in ("season", "min") + RATING_KEYS if c not in frame.columns]
        if missing:
            raise RecordFormatError(
                f"{path}: player seasons missing columns: {', '.join(missing)}"
            )

        if "playoffs" not in frame.columns:
            frame["playoffs"] = False
        if "retired" not in frame.columns:
            frame["retired"] = False

        logger.info("Loaded %d player seasons from %s", len(frame), path)
        return frame

    @staticmethod
    def player_seasons_from_dict(data: Dict) -> pd.DataFrame:
        """Flatten a ``{"players": [...]}`` export into player-season rows."""
        players = data.get("players")
        if not isinstance(players, list):
            raise RecordFormatError("Player export must include a 'players' list")

        rating_rows: List[Dict] = []
        stat_rows: List[Dict] = []
        for idx, player in enumerate(players):
            if not isinstance(player, dict):
                raise RecordFormatError(f"players[{idx}] must be an object")
            pid = player.get("pid", idx)
            retired = bool(player.get("retired", False))

            for ratings in player.get("ratings", []):
                row = {k: ratings.get(k) for k in ("season",) + RATING_KEYS}
                row.update(pid=pid, retired=retired)
                rating_rows.append(row)

            for stats in player.get("stats", []):
                row = {k: stats.get(k) for k in STAT_COLUMNS}
                row["playoffs"] = bool(row["playoffs"])
                row["pid"] = pid
                stat_rows.append(row)

        ratings_df = pd.DataFrame(
            rating_rows, columns=["pid", "retired", "season"] + list(RATING_KEYS)
        )
        stats_df = pd.DataFrame(stat_rows, columns=["pid"] + list(STAT_COLUMNS))

        return ratings_df.merge(stats_df, on=["pid", "season"], how="inner")

    @staticmethod
    def load_profile(file_path: Union[str, Path]) -> RatingProfile:
        """
        Load a single rating profile from JSON.

        Accepts either a flat ``{"hgt": .., "stre": .., ...}`` object or one
        nested under a ``ratings`` key.
        """
        with open(file_path, "r") as f:
            data = json.load(f)

        if isinstance(data.get("ratings"), dict):
            data = data["ratings"]

        try:
            return RatingProfile.from_dict(data)
        except ValueError as e:
            raise RecordFormatError(f"{file_path}: {e}") from e
