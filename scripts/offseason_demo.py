"""Seed a league and run its offseason for demo purposes.

Usage:
    python scripts/offseason_demo.py seed [PATH]     # Generate a league and save it
    python scripts/offseason_demo.py run [PATH]      # Simulate the full offseason, save result
    python scripts/offseason_demo.py status [PATH]   # Print offseason progress and recent events

PATH defaults to demo_league.yaml.
"""

from __future__ import annotations

import sys
from pathlib import Path

from gridiron.config import get_settings
from gridiron.core.orchestrator import get_offseason_progress
from gridiron.core.phases import get_recent_events, get_summary
from gridiron.core.seeding import generate_league, load_league_yaml, save_league_yaml
from gridiron.main import configure_logging, run_offseason

DEFAULT_PATH = Path("demo_league.yaml")


def seed(path: Path) -> None:
    settings = get_settings()
    league = generate_league(seed=settings.gridiron_rng_seed or 42)
    save_league_yaml(league, path)
    team = league.user_team
    print(f"Seeded {len(league.teams)} teams, {len(league.players)} players -> {path}")
    print(f"You are the {team.name} ({team.record.wins}-{team.record.losses})")


def run(path: Path) -> None:
    settings = get_settings()
    league = load_league_yaml(path)
    result = run_offseason(league, settings)
    save_league_yaml(result.league, path)
    if not result.success:
        print(f"Offseason stopped: {'; '.join(result.errors)}")
        return
    summary = get_summary(result.league.offseason_state)
    print(f"Offseason {summary.year} complete")
    print(f"  Phases:   {summary.phases_completed}")
    print(f"  Signings: {summary.total_signings}")
    print(f"  Releases: {summary.total_releases}")
    print(f"  Moves:    {summary.total_roster_moves}")


def status(path: Path) -> None:
    """Print offseason progress for a saved league."""
    settings = get_settings()
    league = load_league_yaml(path)
    progress = get_offseason_progress(league)
    if progress is None:
        print("No offseason in progress.")
        return

    print(
        f"Phase {progress.current_phase_number}/{progress.total_phases}: "
        f"{progress.current_phase_name} (day {progress.phase_day}) | "
        f"{progress.percent_complete}% complete"
    )
    print(f"{'Event':<18} {'Phase':<22} Description")
    print("-" * 70)
    for event in get_recent_events(league.offseason_state, settings.gridiron_recent_events_limit):
        print(f"{event.type:<18} {event.phase:<22} {event.description}")


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        return

    cmd = sys.argv[1]
    path = Path(sys.argv[2]) if len(sys.argv) > 2 else DEFAULT_PATH
    configure_logging(get_settings())
    if cmd == "seed":
        seed(path)
    elif cmd == "run":
        run(path)
    elif cmd == "status":
        status(path)
    else:
        print(f"Unknown command: {cmd}")
        print(__doc__)


if __name__ == "__main__":
    main()
