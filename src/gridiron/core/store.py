"""Persistent offseason data store: create, validate, merge, generate-once.

OffseasonData is frozen. Every write goes through merge_offseason_data, which
is a shallow field replace plus metadata stamping. It never concatenates:
callers appending to an accumulator pass the full new list.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import ValidationError

from gridiron.models.records import OffseasonData

logger = logging.getLogger(__name__)

ACCUMULATOR_FIELDS: frozenset[str] = frozenset(
    {
        "draft_selections",
        "free_agent_signings",
        "udfa_signings",
        "contract_decisions",
        "coaching_changes",
        "practice_squad_signings",
    }
)

GENERATED_FIELDS: frozenset[str] = frozenset(
    {
        "awards",
        "draft_order",
        "coach_evaluations",
        "ota_reports",
        "rookie_integration_reports",
        "position_battles",
        "development_reveals",
        "camp_injuries",
        "preseason_games",
        "preseason_evaluations",
        "udfa_pool",
        "owner_expectations",
        "media_projections",
        "season_goals",
    }
)

_METADATA_FIELDS = frozenset({"last_updated_at"})


def create_empty_offseason_data() -> OffseasonData:
    """Every field at its zero value."""
    return OffseasonData()


def validate_offseason_data(data: OffseasonData | Mapping[str, Any]) -> bool:
    """Check that deserialized data has the right shape before merging it.

    List fields must be lists, map fields must be mappings, and every value
    must validate against its record type.
    """
    if isinstance(data, OffseasonData):
        return True
    if not isinstance(data, Mapping):
        return False
    for name, field in OffseasonData.model_fields.items():
        if name not in data:
            continue
        origin = getattr(field.annotation, "__origin__", None)
        value = data[name]
        if origin is list and not isinstance(value, list):
            return False
        if origin is dict and not isinstance(value, Mapping):
            return False
    try:
        OffseasonData.model_validate(dict(data))
    except ValidationError as exc:
        logger.warning("offseason_data_invalid errors=%d", exc.error_count())
        return False
    return True


def merge_offseason_data(
    existing: OffseasonData,
    updates: Mapping[str, Any],
    *,
    phase: str | None = None,
) -> OffseasonData:
    """Shallow-replace the fields named in ``updates``.

    Keys absent from ``updates`` are preserved. ``last_updated_at`` always
    moves strictly forward, even when the wall clock has not.
    """
    known = {k: v for k, v in updates.items() if k in OffseasonData.model_fields}
    unknown = set(updates) - set(known)
    if unknown:
        logger.warning("offseason_merge_unknown_fields fields=%s", sorted(unknown))
    known.pop("last_updated_at", None)

    now = datetime.now(UTC)
    floor = existing.last_updated_at + timedelta(microseconds=1)
    stamp: dict[str, Any] = {"last_updated_at": max(now, floor)}
    if phase is not None:
        stamp["last_updated_phase"] = phase

    # Round-trip through validation so plain dicts become records.
    validated = OffseasonData.model_validate({**dict(existing), **known, **stamp})
    return validated


def is_empty(value: object) -> bool:
    """Empty means unset: None, False, zero, or a zero-length collection."""
    if value is None or value is False:
        return True
    if isinstance(value, int | float) and not isinstance(value, bool):
        return value == 0
    if isinstance(value, list | dict | tuple | set | str):
        return len(value) == 0
    return False


def set_if_empty(
    data: OffseasonData,
    field: str,
    factory: Callable[[], Any],
    *,
    phase: str | None = None,
) -> tuple[OffseasonData, bool]:
    """Generate-once: call ``factory`` and store its result only if ``field`` is empty.

    Returns the (possibly unchanged) data and whether the factory ran.
    """
    if field not in OffseasonData.model_fields or field in _METADATA_FIELDS:
        msg = f"Unknown offseason data field: {field}"
        raise KeyError(msg)
    if not is_empty(getattr(data, field)):
        return data, False
    value = factory()
    logger.debug("offseason_field_generated field=%s phase=%s", field, phase)
    return merge_offseason_data(data, {field: value}, phase=phase), True


def append_records(
    data: OffseasonData,
    field: str,
    records: list[Any],
    *,
    phase: str | None = None,
) -> OffseasonData:
    """Append to an accumulator field by merging the concatenated list."""
    if field not in ACCUMULATOR_FIELDS:
        msg = f"{field} is not an accumulator field"
        raise KeyError(msg)
    if not records:
        return data
    return merge_offseason_data(data, {field: [*getattr(data, field), *records]}, phase=phase)
