from datetime import datetime, timezone

import pytest

from influencehub.db.errors import ValidationError
from influencehub.services.collaborations import (
    check_transition,
    initial_completed_at,
    prepare_collaboration_changes,
)

NOW = datetime(2024, 6, 20, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "current,target",
    [
        ("pending", "accepted"),
        ("pending", "declined"),
        ("accepted", "completed"),
        ("active", "cancelled"),
        ("completed", "completed"),
    ],
)
def test_legal_transitions(current, target):
    check_transition(current, target)


@pytest.mark.parametrize(
    "current,target",
    [
        ("pending", "completed"),
        ("completed", "active"),
        ("declined", "pending"),
        ("cancelled", "active"),
    ],
)
def test_illegal_transitions(current, target):
    with pytest.raises(ValidationError):
        check_transition(current, target)


def test_permissive_mode_allows_any_move_and_tracks_completion():
    changes = prepare_collaboration_changes("pending", {"status": "completed"}, now=NOW, strict=False)
    assert changes == {"status": "completed", "completed_at": NOW}

    reopened = prepare_collaboration_changes("completed", {"status": "active"}, now=NOW, strict=False)
    assert reopened == {"status": "active", "completed_at": None}


def test_explicit_completed_at_is_kept():
    stamp = datetime(2024, 5, 25, tzinfo=timezone.utc)
    changes = prepare_collaboration_changes(
        "active", {"status": "completed", "completed_at": stamp}, now=NOW, strict=True
    )
    assert changes["completed_at"] == stamp


def test_unchanged_status_leaves_patch_alone():
    patch = {"status": "active", "deliverables": "1 reel"}
    assert prepare_collaboration_changes("active", patch, now=NOW, strict=True) is patch
    assert prepare_collaboration_changes("active", {}, now=NOW, strict=True) == {}


def test_strict_mode_rejects_illegal_move():
    with pytest.raises(ValidationError):
        prepare_collaboration_changes("pending", {"status": "completed"}, now=NOW, strict=True)


def test_initial_completed_at():
    assert initial_completed_at("completed", None, now=NOW) == NOW
    assert initial_completed_at("pending", None, now=NOW) is None
