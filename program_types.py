"""
Program-type normalization.

Maps the free-text program label stored on an employee record
("GROW - Cohort 1", "exec-2024", "SCALE") onto one of the known coaching
tracks and the number of sessions that track is expected to run.
"""
from typing import Optional

from schemas import ProgramInfo, ProgramType

# Expected total sessions per track
PROGRAM_SESSION_COUNTS = {
    ProgramType.GROW: 12,
    ProgramType.EXEC: 12,
    ProgramType.SCALE: 6,
}

# Unrecognized labels fall back to the GROW/EXEC length
DEFAULT_EXPECTED_SESSIONS = 12

# Label prefixes, checked in order
_LABEL_PREFIXES = (
    ("GROW", ProgramType.GROW),
    ("EXEC", ProgramType.EXEC),
    ("SCALE", ProgramType.SCALE),
)

# Legacy name of the SCALE track, recognized anywhere in the label
_SCALE_ALIAS = "SLX"

_SEPARATORS = (" ", "-")


def _matches_label(label: str, prefix: str) -> bool:
    if label == prefix:
        return True
    return label.startswith(prefix) and label[len(prefix)] in _SEPARATORS


def _program_type_for(label: str) -> Optional[ProgramType]:
    for prefix, program_type in _LABEL_PREFIXES:
        if _matches_label(label, prefix):
            return program_type
    if _SCALE_ALIAS in label:
        return ProgramType.SCALE
    return None


def normalize_program_type(raw: Optional[str]) -> ProgramInfo:
    """Classify a program label. Never raises; None and junk both give Unknown."""
    program_type = _program_type_for((raw or "").strip().upper())
    if program_type is None:
        return ProgramInfo(
            type=ProgramType.UNKNOWN,
            total_expected_sessions=DEFAULT_EXPECTED_SESSIONS,
            is_known=False,
        )
    return ProgramInfo(
        type=program_type,
        total_expected_sessions=PROGRAM_SESSION_COUNTS[program_type],
        is_known=True,
    )
