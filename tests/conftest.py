"""Shared test fixtures."""

import pytest

from gridiron.config import Settings
from gridiron.core.seeding import generate_league
from gridiron.models.league import LeagueState


@pytest.fixture
def settings() -> Settings:
    """Test settings with defaults and a fixed rng seed."""
    return Settings(gridiron_env="test", gridiron_rng_seed=7)


@pytest.fixture
def league() -> LeagueState:
    """A small deterministic league: four teams of 55 players."""
    return generate_league(num_teams=4, players_per_team=55, seed=42)
