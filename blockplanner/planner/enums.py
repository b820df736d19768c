"""Canonical enums for the block planner.

All enums are string-based so records serialize cleanly to JSON for the
persistence layer.
"""

from enum import StrEnum


# -----------------------------
# Block Goal
# -----------------------------
class BlockGoal(StrEnum):
    """Goal of a training block; selects the progression formula."""

    PEAKING = "peaking"
    MAINTENANCE = "maintenance"


# -----------------------------
# Per-set Coloring
# -----------------------------
class ExertionDeviation(StrEnum):
    """Three-way distance between reported and target exertion."""

    ON_TARGET = "on_target"
    MODERATE_DEVIATION = "moderate_deviation"
    LARGE_DEVIATION = "large_deviation"


# -----------------------------
# Session Classification
# -----------------------------
class SetOutcome(StrEnum):
    """Coarse outcome of a single set, used for session feedback."""

    PUSHED = "pushed"
    UNDERPERFORMED = "underperformed"
    ON_TARGET = "on_target"


class FeedbackCategory(StrEnum):
    """Headline category of a completed session."""

    SEVERE_UNDERPERFORMANCE = "severe_underperformance"
    MILD_UNDERPERFORMANCE = "mild_underperformance"
    OVERREACH = "overreach"
    ADHERENCE_SUCCESS = "adherence_success"


class FeedbackTone(StrEnum):
    GOOD = "good"
    WARN = "warn"
    BAD = "bad"


# -----------------------------
# Session Lifecycle
# -----------------------------
class SessionStatus(StrEnum):
    ACTIVE = "active"
    COMPLETED = "completed"


class SetField(StrEnum):
    """Editable fields of a performed set."""

    LOAD = "load"
    REPS = "reps"
    REPORTED_EXERTION = "reported_exertion"
