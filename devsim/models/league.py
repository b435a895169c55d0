"""League-level context consumed by the development engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LeagueContext:
    """
    League configuration needed for player development.

    Passed explicitly to the engine instead of being read from global
    game state.
    """

    num_active_teams: int = 30

    def __post_init__(self):
        if self.num_active_teams < 1:
            raise ValueError(
                f"num_active_teams must be at least 1, got {self.num_active_teams}"
            )

    @property
    def average_coaching_rank(self) -> float:
        """Coaching rank of a league-average staff."""
        return (self.num_active_teams + 1) / 2
