"""Root conftest for all tests.

Shared fixtures: a 6-week peaking block starting at RPE 7.5 with the three
competition lifts, and helpers to build logged exercises.
"""

from datetime import date

import pytest

from blockplanner.planner.enums import BlockGoal
from blockplanner.planner.models import ExerciseTarget, LoggedExercise, PerformedSet
from blockplanner.schemas.program import ExerciseTemplate, Program, TrainingDay


@pytest.fixture
def squat_target() -> ExerciseTarget:
    """Back squat: 1RM 140 kg, 4x3 from RPE 7.5."""
    return ExerciseTarget(one_rep_max=140, target_reps=3, baseline_exertion=7.5, set_count=4)


@pytest.fixture
def peaking_program() -> Program:
    """Six-week peaking block with a single training day."""
    return Program(
        name="Test Peaking Block",
        goal=BlockGoal.PEAKING,
        total_weeks=6,
        start_exertion=7.5,
        days=[
            TrainingDay(
                name="Training A",
                exercises=[
                    ExerciseTemplate(name="Back Squat", set_count=4, target_reps=3, target_exertion=7.5, one_rep_max=140),
                    ExerciseTemplate(name="Bench Press", set_count=4, target_reps=3, target_exertion=7.5, one_rep_max=100),
                    ExerciseTemplate(name="Deadlift", set_count=3, target_reps=3, target_exertion=7.5, one_rep_max=180),
                ],
            )
        ],
    )


@pytest.fixture
def two_day_program() -> Program:
    """Eight-week peaking block rotating over two training days."""
    return Program(
        name="Upper / Lower",
        goal=BlockGoal.PEAKING,
        total_weeks=8,
        start_exertion=7.0,
        days=[
            TrainingDay(
                name="Lower",
                exercises=[ExerciseTemplate(name="Back Squat", set_count=3, target_reps=5, one_rep_max=150)],
            ),
            TrainingDay(
                name="Upper",
                exercises=[ExerciseTemplate(name="Bench Press", set_count=3, target_reps=5, one_rep_max=100)],
            ),
        ],
    )


@pytest.fixture
def session_date() -> date:
    return date(2025, 3, 3)


@pytest.fixture
def make_exercise():
    """Factory for logged exercises with one set per reported exertion."""

    def _make(
        target_exertion: float,
        exertions: list[float | None],
        load: float | None = 100.0,
        reps: int | None = 5,
        name: str = "Back Squat",
    ) -> LoggedExercise:
        return LoggedExercise(
            name=name,
            target=ExerciseTarget(
                one_rep_max=0,
                target_reps=reps or 5,
                baseline_exertion=target_exertion,
                set_count=len(exertions),
            ),
            target_exertion=target_exertion,
            sets=tuple(PerformedSet(load=load, reps=reps, reported_exertion=e, completed=True) for e in exertions),
        )

    return _make
