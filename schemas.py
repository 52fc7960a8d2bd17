"""
Schemas for the coaching lifecycle engine

Input models mirror the records the dashboard data layer loads (employee,
sessions, baseline survey, competency scores, checkpoints) and keep its
snake_case column names. Derived models (ProgramInfo, CoachingStateData,
ScaleCheckpointStatus) are built fresh by the engine on every call, are
frozen, and serialize with camelCase keys for the views that consume them.
"""
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProgramType(str, Enum):
    GROW = "GROW"
    EXEC = "EXEC"
    SCALE = "SCALE"
    UNKNOWN = "Unknown"


class CoachingState(str, Enum):
    NOT_SIGNED_UP = "NOT_SIGNED_UP"
    SIGNED_UP_NOT_MATCHED = "SIGNED_UP_NOT_MATCHED"
    MATCHED_PRE_FIRST_SESSION = "MATCHED_PRE_FIRST_SESSION"
    ACTIVE_PROGRAM = "ACTIVE_PROGRAM"
    COMPLETED_PROGRAM = "COMPLETED_PROGRAM"


class SessionStatus(str, Enum):
    COMPLETED = "Completed"
    UPCOMING = "Upcoming"
    SCHEDULED = "Scheduled"
    CANCELLED = "Cancelled"
    NO_SHOW = "No Show"


# ---------- Snapshot records ----------
class Employee(BaseModel):
    id: Optional[str] = None
    company_email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    program: Optional[str] = Field(None, description="Free-text program label, e.g. 'GROW - Cohort 1'")
    coach_id: Optional[str] = None
    status: Optional[str] = Field(None, description="Free-text enrollment status, e.g. 'Active', 'Program Graduated'")
    booking_link: Optional[str] = None
    created_at: Optional[datetime] = None


class Session(BaseModel):
    id: Optional[str] = None
    employee_id: Optional[str] = None
    session_date: Optional[datetime] = None
    status: Optional[str] = Field(None, description="Completed, Upcoming, Scheduled, Cancelled, No Show")
    coach_name: Optional[str] = None
    goals: Optional[str] = None
    plan: Optional[str] = None
    summary: Optional[str] = None
    appointment_number: Optional[int] = None


class BaselineSurvey(BaseModel):
    id: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    # wellbeing
    satisfaction: Optional[int] = None
    productivity: Optional[int] = None
    work_life_balance: Optional[int] = None
    motivation: Optional[int] = None
    # competency pre-scores, 1-5 (0 when unanswered)
    comp_adaptability_and_resilience: Optional[int] = None
    comp_building_relationships_at_work: Optional[int] = None
    comp_change_management: Optional[int] = None
    comp_delegation_and_accountability: Optional[int] = None
    comp_effective_communication: Optional[int] = None
    comp_effective_planning_and_execution: Optional[int] = None
    comp_emotional_intelligence: Optional[int] = None
    comp_giving_and_receiving_feedback: Optional[int] = None
    comp_persuasion_and_influence: Optional[int] = None
    comp_self_confidence_and_imposter_syndrome: Optional[int] = None
    comp_strategic_thinking: Optional[int] = None
    comp_time_management_and_productivity: Optional[int] = None


class CompetencyScore(BaseModel):
    id: Optional[str] = None
    email: Optional[str] = None
    competency_name: Optional[str] = None
    score: Optional[int] = None
    score_label: Optional[str] = None
    score_type: Optional[str] = Field(None, description="e.g. 'baseline', 'end_of_program'")
    program_title: Optional[str] = None
    created_at: Optional[datetime] = None


class Checkpoint(BaseModel):
    id: Optional[str] = None
    email: Optional[str] = None
    checkpoint_number: int = Field(..., description="1, 2, 3, ...")
    session_count_at_checkpoint: Optional[int] = Field(None, description="Expected to be checkpoint_number * 6")
    competency_scores: Dict[str, Optional[int]] = Field(default_factory=dict)
    reflection_text: Optional[str] = None
    focus_area: Optional[str] = None
    wellbeing_satisfaction: Optional[int] = None
    wellbeing_productivity: Optional[int] = None
    wellbeing_balance: Optional[int] = None
    nps_score: Optional[int] = None
    testimonial_consent: Optional[bool] = None
    created_at: Optional[datetime] = None


class PendingSurvey(BaseModel):
    """Result of the external pending-survey lookup. Passed through untouched."""
    survey_type: str
    session_number: Optional[int] = None


# ---------- Derived ----------
class DerivedModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ProgramInfo(DerivedModel):
    type: ProgramType
    total_expected_sessions: int
    is_known: bool


class CoachingStateData(DerivedModel):
    state: CoachingState
    has_program: bool
    has_coach: bool
    has_baseline: bool
    has_completed_sessions: bool
    has_upcoming_session: bool
    completed_session_count: int
    total_expected_sessions: int
    program_progress: int = Field(..., ge=0, le=100)
    upcoming_session: Optional[Session] = None
    last_session: Optional[Session] = None
    is_grow_or_exec: bool
    is_scale: bool
    program_type: ProgramType
    is_program_type_known: bool
    has_end_of_program_scores: bool


class ScaleCheckpointStatus(DerivedModel):
    is_scale_user: bool
    current_checkpoint_number: int
    sessions_since_last_checkpoint: int
    next_checkpoint_due_at_session: int
    is_checkpoint_due: bool
    checkpoints: List[Checkpoint] = Field(default_factory=list)
    latest_checkpoint: Optional[Checkpoint] = None
