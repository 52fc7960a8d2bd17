"""
Checkpoint scheduling for the SCALE track.

SCALE clients check in every CHECKPOINT_INTERVAL completed sessions. The
scheduler works on counts only and reads checkpoint records as given;
find_checkpoint_issues() is the separate boundary check for bad records.
"""
from typing import Iterable, List, Optional

from schemas import Checkpoint, ScaleCheckpointStatus

CHECKPOINT_INTERVAL = 6


def _latest(checkpoints: List[Checkpoint]) -> Optional[Checkpoint]:
    if not checkpoints:
        return None
    return max(checkpoints, key=lambda c: c.checkpoint_number)


def schedule_checkpoints(
    completed_session_count: int,
    checkpoints: Iterable[Checkpoint],
) -> ScaleCheckpointStatus:
    """Work out which check-in is next and whether it is due now."""
    checkpoints = list(checkpoints or [])
    latest = _latest(checkpoints)

    current_number = latest.checkpoint_number + 1 if latest else 1
    due_at = current_number * CHECKPOINT_INTERVAL
    sessions_at_latest = (latest.session_count_at_checkpoint or 0) if latest else 0

    return ScaleCheckpointStatus(
        is_scale_user=True,
        current_checkpoint_number=current_number,
        sessions_since_last_checkpoint=completed_session_count - sessions_at_latest,
        next_checkpoint_due_at_session=due_at,
        is_checkpoint_due=completed_session_count >= due_at,
        checkpoints=checkpoints,
        latest_checkpoint=latest,
    )


def inactive_checkpoint_status() -> ScaleCheckpointStatus:
    """Status for clients outside the SCALE track: nothing is ever due."""
    return ScaleCheckpointStatus(
        is_scale_user=False,
        current_checkpoint_number=0,
        sessions_since_last_checkpoint=0,
        next_checkpoint_due_at_session=0,
        is_checkpoint_due=False,
        checkpoints=[],
        latest_checkpoint=None,
    )


def checkpoint_label(checkpoint_number: int) -> str:
    if checkpoint_number == 1:
        return "First check-in"
    return f"Check-in {checkpoint_number}"


def find_checkpoint_issues(checkpoints: Iterable[Checkpoint]) -> List[str]:
    """List inconsistencies in a set of checkpoint records.

    Checks that numbers run 1, 2, 3, ... without gaps or repeats and that each
    record sits at checkpoint_number * CHECKPOINT_INTERVAL sessions. Returns an
    empty list for clean data.
    """
    checkpoints = list(checkpoints or [])
    issues = []
    numbers = sorted(c.checkpoint_number for c in checkpoints)

    seen = set()
    for number in numbers:
        if number in seen:
            issues.append(f"checkpoint {number} recorded more than once")
        seen.add(number)

    expected = list(range(1, len(seen) + 1))
    if sorted(seen) != expected:
        issues.append(f"checkpoint numbers {sorted(seen)} are not contiguous from 1")

    for c in checkpoints:
        expected_count = c.checkpoint_number * CHECKPOINT_INTERVAL
        if c.session_count_at_checkpoint is None:
            issues.append(f"checkpoint {c.checkpoint_number} has no session count")
        elif c.session_count_at_checkpoint != expected_count:
            issues.append(
                f"checkpoint {c.checkpoint_number} taken at session "
                f"{c.session_count_at_checkpoint}, expected {expected_count}"
            )
    return issues
