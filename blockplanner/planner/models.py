"""Core immutable data models for block planning.

This module defines the value records that flow through the planner:
- Exercise prescription (steady-state target, per-week targets)
- Logged training (performed sets, logged exercises, session records)
- Derived output (session feedback, next-week preview, rotation outcome)

All models are frozen. Edits produce new records via dataclasses.replace,
so a session's sets are only ever rewritten by the session that owns them.
"""

import uuid
from dataclasses import dataclass, field

from blockplanner.planner.enums import BlockGoal, FeedbackCategory, FeedbackTone, SessionStatus


def new_id() -> str:
    return uuid.uuid4().hex


# -----------------------------
# Prescription
# -----------------------------
@dataclass(frozen=True)
class ExerciseTarget:
    """Steady-state prescription of one exercise.

    Attributes:
        one_rep_max: One-rep-max in kg (0 = unknown)
        target_reps: Target repetitions per set (>= 1)
        baseline_exertion: Week-1 anchor exertion (6-10, 0.5 steps)
        set_count: Baseline number of sets (>= 1)
    """

    one_rep_max: float
    target_reps: int
    baseline_exertion: float
    set_count: int


@dataclass(frozen=True)
class WeeklyTargets:
    """Effective targets of one exercise for one week of a block.

    Always recomputable from ExerciseTarget + week + block length + goal.
    """

    effective_exertion: float
    effective_set_count: int
    is_deload_week: bool = False
    is_peak_week: bool = False


@dataclass(frozen=True)
class BlockSnapshot:
    """Block parameters needed to preview the following week.

    Attributes:
        goal: Block goal
        total_weeks: Block length in weeks
        representative: First exercise of the block, used for previews (None if the block has no exercises)
    """

    goal: BlockGoal
    total_weeks: int
    representative: ExerciseTarget | None = None


# -----------------------------
# Logged Training
# -----------------------------
@dataclass(frozen=True)
class PerformedSet:
    """One set as entered by the lifter.

    Attributes:
        load: Load in kg (None = not entered)
        reps: Repetitions performed (None = not entered)
        reported_exertion: Reported or inferred exertion (None = unknown)
        completed: Whether the lifter ticked the set off
        id: Set identifier
    """

    load: float | None = None
    reps: int | None = None
    reported_exertion: float | None = None
    completed: bool = False
    id: str = field(default_factory=new_id)


@dataclass(frozen=True)
class LoggedExercise:
    """Exercise inside a session: prescription snapshot plus its sets.

    Attributes:
        name: Exercise name
        target: Prescription snapshot taken when the session started
        target_exertion: Effective target exertion for this session's week
        sets: Performed sets, in order
        exercise_id: Identifier of the program exercise (or ad-hoc id)
        temporary: True for exercises added during the session only
    """

    name: str
    target: ExerciseTarget
    target_exertion: float
    sets: tuple[PerformedSet, ...] = ()
    exercise_id: str = field(default_factory=new_id)
    temporary: bool = False


@dataclass(frozen=True)
class SessionRecord:
    """One training session of a block.

    Created ACTIVE when a session starts, edited set by set, frozen as
    COMPLETED at the end.
    """

    program_id: str
    day_id: str
    day_name: str
    day_index: int
    week_number: int
    date: str  # ISO date
    exercises: tuple[LoggedExercise, ...] = ()
    status: SessionStatus = SessionStatus.ACTIVE
    id: str = field(default_factory=new_id)

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE


# -----------------------------
# Derived Output
# -----------------------------
@dataclass(frozen=True)
class SessionFeedback:
    """Reduction of a completed session.

    Attributes:
        category: Headline category
        tone: Presentation tone (good, warn, bad)
        headline: Short headline text
        body: One or two sentences of advice
        counted_sets: Sets with both reported and target exertion
        pushed_sets: Counted sets at least 2 points above target
        underperformed_sets: Counted sets at least 2 points below target
        on_target_sets: Remaining counted sets
        volume: Sum of load x reps, rounded to an integer
        week_message: Week-transition or block-completion message, if any
    """

    category: FeedbackCategory
    tone: FeedbackTone
    headline: str
    body: str
    counted_sets: int
    pushed_sets: int
    underperformed_sets: int
    on_target_sets: int
    volume: int
    week_message: str | None = None


@dataclass(frozen=True)
class NextWeekPreview:
    week: int
    target_exertion: float
    is_deload_week: bool
    is_peak_week: bool
    example_load: float | None


@dataclass(frozen=True)
class RotationOutcome:
    """Result of completing one training day of the rotation.

    Attributes:
        week_completed: True if this completion finished the whole rotation
        previous_week: Week number before the completion
        new_week: Week number after the completion
        new_index: Rotation index of the next training day
    """

    week_completed: bool
    previous_week: int
    new_week: int
    new_index: int


@dataclass(frozen=True)
class E1rmPoint:
    date: str
    e1rm: float
    best_load: float
