from __future__ import annotations

from datetime import datetime
from typing import Any

from influencehub.db.enums import COLLABORATION_TRANSITIONS, CollaborationStatusEnum
from influencehub.db.errors import ValidationError


def check_transition(current: str, target: str) -> None:
    """Raise ValidationError unless ``current -> target`` is a legal status move."""
    current_status = CollaborationStatusEnum(current)
    target_status = CollaborationStatusEnum(target)
    if current_status == target_status:
        return
    allowed = COLLABORATION_TRANSITIONS.get(current_status, frozenset())
    if target_status not in allowed:
        raise ValidationError(
            f"Collaboration cannot move from {current_status.value} to {target_status.value}"
        )


def prepare_collaboration_changes(
    current_status: str,
    changes: dict[str, Any],
    *,
    now: datetime,
    strict: bool,
) -> dict[str, Any]:
    """Validate a status change and keep ``completed_at`` consistent with it."""
    target = changes.get("status")
    if target is None or target == current_status:
        return changes
    if strict:
        check_transition(current_status, target)

    prepared = dict(changes)
    if target == CollaborationStatusEnum.completed.value:
        if prepared.get("completed_at") is None:
            prepared["completed_at"] = now
    elif current_status == CollaborationStatusEnum.completed.value and "completed_at" not in changes:
        prepared["completed_at"] = None
    return prepared


def initial_completed_at(status: str, completed_at: datetime | None, *, now: datetime) -> datetime | None:
    if status == CollaborationStatusEnum.completed.value and completed_at is None:
        return now
    return completed_at
