"""Offseason settings: league rules, generation seed, and logging, read from the environment."""

from __future__ import annotations

import random
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings

VALID_ENVS = frozenset({"development", "production", "test"})


class Settings(BaseSettings):
    """Gridiron offseason configuration.

    All values can be overridden via environment variables or .env file.
    Money values are in thousands of dollars.
    """

    # Environment
    gridiron_env: str = "development"

    # Randomness. Every content generator draws from an rng derived from the seed.
    gridiron_rng_seed: int = 0
    gridiron_deterministic: bool = True

    # League rules
    gridiron_roster_limit: int = 53
    gridiron_practice_squad_limit: int = 16
    gridiron_practice_squad_max_experience: int = 3  # PS eligible while experience < this
    gridiron_salary_cap: int = 255_000
    gridiron_guarantee_threshold: int = 500  # current-year bonus that protects a player
    gridiron_preseason_games: int = 3

    # Display
    gridiron_recent_events_limit: int = 20

    # Logging
    gridiron_log_level: str = "INFO"

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def _check_league_rules(self) -> Settings:
        """Reject rule values no league could be played under."""
        if self.gridiron_env not in VALID_ENVS:
            msg = f"GRIDIRON_ENV must be one of {sorted(VALID_ENVS)}, got {self.gridiron_env!r}"
            raise ValueError(msg)
        if self.gridiron_roster_limit < 1:
            msg = "GRIDIRON_ROSTER_LIMIT must be at least 1"
            raise ValueError(msg)
        if self.gridiron_practice_squad_limit < 0:
            msg = "GRIDIRON_PRACTICE_SQUAD_LIMIT cannot be negative"
            raise ValueError(msg)
        if not 1 <= self.gridiron_preseason_games <= 4:
            msg = "GRIDIRON_PRESEASON_GAMES must be between 1 and 4"
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def _force_determinism_in_production(self) -> Settings:
        """In production, generation must be seeded so saves replay identically."""
        if self.gridiron_env == "production" and not self.gridiron_deterministic:
            self.gridiron_deterministic = True
        return self

    def rng_for(self, year: int, phase: str, step: str) -> random.Random:
        """Return the rng for one generation step.

        Deterministic settings derive a fresh stream per (year, phase, step) so
        regenerating one field never shifts the draws of another.
        """
        if self.gridiron_deterministic:
            return random.Random(f"{self.gridiron_rng_seed}:{year}:{phase}:{step}")
        return random.Random()


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read once."""
    return Settings()
