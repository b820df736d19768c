"""Program record schemas.

These models describe the program record the persistence layer hands to the
planner: the block configuration, its training days and their exercises.
Validation happens here, at the boundary; the calculation modules trust
their inputs.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blockplanner.config.settings import settings
from blockplanner.planner.constants import EXERTION_STEP, MAX_EXERTION, MIN_EXERTION
from blockplanner.planner.enums import BlockGoal
from blockplanner.planner.models import BlockSnapshot, ExerciseTarget, RotationOutcome, new_id


def _check_exertion(value: float | None) -> float | None:
    if value is None:
        return value
    if not MIN_EXERTION <= value <= MAX_EXERTION:
        raise ValueError(f"exertion must be between {MIN_EXERTION} and {MAX_EXERTION}, got {value}")
    if (value / EXERTION_STEP) != int(value / EXERTION_STEP):
        raise ValueError(f"exertion must be a multiple of {EXERTION_STEP}, got {value}")
    return value


class ExerciseTemplate(BaseModel):
    """Exercise as configured on a training day."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    name: str
    set_count: int = Field(default_factory=lambda: settings.default_set_count, ge=1)
    target_reps: int = Field(default_factory=lambda: settings.default_target_reps, ge=1)
    target_exertion: float | None = None
    start_exertion: float | None = None  # Week-1 baseline for progression
    one_rep_max: float = Field(default=0.0, ge=0)

    @field_validator("target_exertion", "start_exertion")
    @classmethod
    def validate_exertion(cls, value: float | None) -> float | None:
        return _check_exertion(value)

    def baseline_exertion(self, fallback: float | None = None) -> float:
        """Week-1 anchor: start exertion, else target exertion, else fallback (the program's start exertion)."""
        if self.start_exertion is not None:
            return self.start_exertion
        if self.target_exertion is not None:
            return self.target_exertion
        if fallback is not None:
            return fallback
        return settings.default_start_exertion

    def to_target(self, fallback_exertion: float | None = None) -> ExerciseTarget:
        return ExerciseTarget(
            one_rep_max=self.one_rep_max,
            target_reps=self.target_reps,
            baseline_exertion=self.baseline_exertion(fallback_exertion),
            set_count=self.set_count,
        )


class TrainingDay(BaseModel):
    """One training day in the block's rotation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    name: str
    exercises: list[ExerciseTemplate] = Field(default_factory=list)


class Program(BaseModel):
    """A training block.

    current_index points at the next training day of the rotation;
    current_week advances when the rotation wraps around.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    name: str
    description: str = ""
    goal: BlockGoal = Field(default_factory=lambda: BlockGoal(settings.default_goal))
    total_weeks: int = Field(default_factory=lambda: settings.default_total_weeks, ge=1)
    start_exertion: float = Field(default_factory=lambda: settings.default_start_exertion)
    current_index: int = Field(default=0, ge=0)
    current_week: int = Field(default=1, ge=1)
    active: bool = False
    days: list[TrainingDay] = Field(default_factory=list)

    @field_validator("start_exertion")
    @classmethod
    def validate_start_exertion(cls, value: float) -> float:
        return _check_exertion(value)

    def representative_exercise(self) -> ExerciseTemplate | None:
        """First exercise of the first training day, used for block previews."""
        if not self.days or not self.days[0].exercises:
            return None
        return self.days[0].exercises[0]

    def target_for(self, exercise: ExerciseTemplate) -> ExerciseTarget:
        return exercise.to_target(self.start_exertion)

    def block_snapshot(self) -> BlockSnapshot:
        representative = self.representative_exercise()
        return BlockSnapshot(
            goal=self.goal,
            total_weeks=self.total_weeks,
            representative=self.target_for(representative) if representative else None,
        )

    def apply_rotation(self, outcome: RotationOutcome) -> "Program":
        """Return a copy of the program positioned after a completed session."""
        return self.model_copy(update={"current_index": outcome.new_index, "current_week": outcome.new_week})
