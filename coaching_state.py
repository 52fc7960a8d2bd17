"""
Coaching lifecycle classifier.

Classifies an employee snapshot into one of five lifecycle states:

1. NOT_SIGNED_UP             - no employee record or no program enrollment
2. SIGNED_UP_NOT_MATCHED     - enrolled, no coach assigned yet
3. MATCHED_PRE_FIRST_SESSION - coach assigned, no completed sessions
4. ACTIVE_PROGRAM            - at least one completed session
5. COMPLETED_PROGRAM         - any completion signal is present

The state is recomputed from scratch on every call. There are no stored
transitions; calling classify() on a newer snapshot is the transition.
"""
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from loguru import logger

from program_types import normalize_program_type
from schemas import (
    BaselineSurvey,
    CoachingState,
    CoachingStateData,
    CompetencyScore,
    Employee,
    ProgramType,
    Session,
    SessionStatus,
)

END_OF_PROGRAM_SCORE_TYPE = "end_of_program"
COMPLETION_STATUS_MARKERS = ("completed", "graduated", "finished")

STATE_LABELS = {
    CoachingState.NOT_SIGNED_UP: "Get Started",
    CoachingState.SIGNED_UP_NOT_MATCHED: "Finding Your Coach",
    CoachingState.MATCHED_PRE_FIRST_SESSION: "Ready to Begin",
    CoachingState.ACTIVE_PROGRAM: "Active Coaching",
    CoachingState.COMPLETED_PROGRAM: "Program Graduate",
}

_PENDING_STATUSES = (SessionStatus.UPCOMING.value, SessionStatus.SCHEDULED.value)
_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)
_LATEST = datetime.max.replace(tzinfo=timezone.utc)


def _session_date(session: Session, missing: datetime) -> datetime:
    # naive timestamps are taken as UTC so mixed inputs stay comparable
    value = session.session_date
    if value is None:
        return missing
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _next_upcoming(sessions: List[Session]) -> Optional[Session]:
    pending = [s for s in sessions if s.status in _PENDING_STATUSES]
    if not pending:
        return None
    # min() keeps the first of equal dates
    return min(pending, key=lambda s: _session_date(s, _LATEST))


def _most_recent(sessions: List[Session]) -> Optional[Session]:
    if not sessions:
        return None
    return max(sessions, key=lambda s: _session_date(s, _EARLIEST))


def _status_marks_completion(employee: Employee) -> bool:
    status = (employee.status or "").lower()
    return any(marker in status for marker in COMPLETION_STATUS_MARKERS)


def classify(
    employee: Optional[Employee],
    sessions: Iterable[Session],
    baseline: Optional[BaselineSurvey],
    competency_scores: Optional[Iterable[CompetencyScore]] = None,
) -> CoachingStateData:
    """Derive the lifecycle state and every fact the views render from it.

    Total: any combination of missing records produces a result.
    """
    sessions = list(sessions or [])
    competency_scores = list(competency_scores or [])

    completed = [s for s in sessions if s.status == SessionStatus.COMPLETED.value]
    completed_count = len(completed)
    upcoming_session = _next_upcoming(sessions)
    last_session = _most_recent(completed)
    has_upcoming_status = any(s.status == SessionStatus.UPCOMING.value for s in sessions)

    # a session implies an assignment even when coach_id lags behind
    has_coach = bool(employee and employee.coach_id) or len(sessions) > 0
    has_program = bool(employee and employee.program)

    program = normalize_program_type(employee.program if employee else None)
    total_expected = program.total_expected_sessions
    program_progress = min(100, round(completed_count / total_expected * 100))

    has_end_of_program_scores = any(
        cs.score_type == END_OF_PROGRAM_SCORE_TYPE for cs in competency_scores
    )

    is_completed = (
        (employee is not None and _status_marks_completion(employee))
        or has_end_of_program_scores
        or (completed_count >= total_expected and not has_upcoming_status)
    )

    if not has_program:
        state = CoachingState.NOT_SIGNED_UP
    elif is_completed:
        state = CoachingState.COMPLETED_PROGRAM
    elif not has_coach:
        state = CoachingState.SIGNED_UP_NOT_MATCHED
    elif completed_count == 0:
        state = CoachingState.MATCHED_PRE_FIRST_SESSION
    else:
        state = CoachingState.ACTIVE_PROGRAM

    logger.debug(
        f"Classified employee={employee.id if employee else None} as {state.value} "
        f"(program={program.type.value}, completed={completed_count}/{total_expected})"
    )

    return CoachingStateData(
        state=state,
        has_program=has_program,
        has_coach=has_coach,
        has_baseline=baseline is not None,
        has_completed_sessions=completed_count > 0,
        has_upcoming_session=upcoming_session is not None,
        completed_session_count=completed_count,
        total_expected_sessions=total_expected,
        program_progress=program_progress,
        upcoming_session=upcoming_session,
        last_session=last_session,
        is_grow_or_exec=program.type in (ProgramType.GROW, ProgramType.EXEC),
        is_scale=program.type == ProgramType.SCALE,
        program_type=program.type,
        is_program_type_known=program.is_known,
        has_end_of_program_scores=has_end_of_program_scores,
    )


def can_book_sessions(state: CoachingState) -> bool:
    return state in (CoachingState.MATCHED_PRE_FIRST_SESSION, CoachingState.ACTIVE_PROGRAM)


def is_alumni_state(state: CoachingState) -> bool:
    return state == CoachingState.COMPLETED_PROGRAM


def is_pre_first_session(state: CoachingState) -> bool:
    return state == CoachingState.MATCHED_PRE_FIRST_SESSION


def get_state_label(state: CoachingState) -> str:
    return STATE_LABELS[state]
