from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel, Field

import config
from checkpoints import (
    checkpoint_label,
    find_checkpoint_issues,
    inactive_checkpoint_status,
    schedule_checkpoints,
)
from coaching_state import STATE_LABELS, can_book_sessions, classify, get_state_label, is_alumni_state
from logger import setup_logger
from program_types import normalize_program_type
from schemas import (
    BaselineSurvey,
    Checkpoint,
    CoachingStateData,
    CompetencyScore,
    DerivedModel,
    Employee,
    PendingSurvey,
    ProgramInfo,
    ScaleCheckpointStatus,
    Session,
)

setup_logger(level=config.LOG_LEVEL)

app = FastAPI(title=config.APP_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------- Request / Response Models ----------
class ClassifyRequest(BaseModel):
    employee: Optional[Employee] = None
    sessions: List[Session] = Field(default_factory=list)
    baseline: Optional[BaselineSurvey] = None
    competency_scores: List[CompetencyScore] = Field(default_factory=list)

class CoachingStateView(CoachingStateData):
    label: str
    can_book_sessions: bool
    is_alumni: bool

class CheckpointStatusRequest(BaseModel):
    completed_session_count: int = Field(..., ge=0)
    checkpoints: List[Checkpoint] = Field(default_factory=list)

class CheckpointStatusView(ScaleCheckpointStatus):
    label: Optional[str] = None
    issues: List[str] = Field(default_factory=list)

class DashboardSnapshot(ClassifyRequest):
    checkpoints: List[Checkpoint] = Field(default_factory=list)
    pending_survey: Optional[PendingSurvey] = None

class DashboardSummary(DerivedModel):
    coaching: CoachingStateView
    checkpoint_status: CheckpointStatusView
    pending_survey: Optional[PendingSurvey] = None


def _coaching_view(payload: ClassifyRequest) -> CoachingStateView:
    data = classify(payload.employee, payload.sessions, payload.baseline, payload.competency_scores)
    return CoachingStateView(
        **data.model_dump(),
        label=get_state_label(data.state),
        can_book_sessions=can_book_sessions(data.state),
        is_alumni=is_alumni_state(data.state),
    )

def _checkpoint_view(status: ScaleCheckpointStatus, checkpoints: List[Checkpoint]) -> CheckpointStatusView:
    issues = find_checkpoint_issues(checkpoints)
    for issue in issues:
        logger.warning(f"Checkpoint data issue: {issue}")
    return CheckpointStatusView(
        **status.model_dump(),
        label=checkpoint_label(status.current_checkpoint_number) if status.is_scale_user else None,
        issues=issues,
    )

# ---------- Routes ----------
@app.get("/")
def root():
    return {"name": config.APP_NAME, "status": "ok"}

@app.get("/states")
def list_states():
    return [
        {
            "state": state.value,
            "label": label,
            "canBookSessions": can_book_sessions(state),
            "isAlumni": is_alumni_state(state),
        }
        for state, label in STATE_LABELS.items()
    ]

# ---- Programs ----
@app.get("/programs/normalize", response_model=ProgramInfo)
def normalize_program(program: Optional[str] = None):
    return normalize_program_type(program)

# ---- Coaching state ----
@app.post("/coaching-state", response_model=CoachingStateView)
async def coaching_state(payload: ClassifyRequest):
    return _coaching_view(payload)

# ---- Checkpoints (SCALE) ----
@app.post("/checkpoints/status", response_model=CheckpointStatusView)
async def checkpoint_status(payload: CheckpointStatusRequest):
    status = schedule_checkpoints(payload.completed_session_count, payload.checkpoints)
    return _checkpoint_view(status, payload.checkpoints)

# ---- Dashboard overview ----
@app.post("/dashboard/summary", response_model=DashboardSummary)
async def dashboard_summary(payload: DashboardSnapshot):
    coaching = _coaching_view(payload)
    if coaching.is_scale:
        status = schedule_checkpoints(coaching.completed_session_count, payload.checkpoints)
        checkpoint = _checkpoint_view(status, payload.checkpoints)
    else:
        checkpoint = _checkpoint_view(inactive_checkpoint_status(), [])
    logger.info(
        f"Dashboard summary for employee={payload.employee.id if payload.employee else None}: "
        f"state={coaching.state.value}, checkpoint_due={checkpoint.is_checkpoint_due}"
    )
    return DashboardSummary(
        coaching=coaching,
        checkpoint_status=checkpoint,
        pending_survey=payload.pending_survey,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
