"""Tests for session materialization, set edits and rotation."""

from dataclasses import replace
from datetime import date

import pytest

from blockplanner.planner.enums import FeedbackCategory, SessionStatus, SetField
from blockplanner.planner.errors import EmptyProgramError, SessionStateError, SetIndexError
from blockplanner.planner.models import ExerciseTarget, PerformedSet
from blockplanner.planner.session_builder import (
    add_exercise,
    add_set,
    advance_rotation,
    apply_set_edit,
    complete_session,
    edit_set,
    fill_set_defaults,
    preview_next_week,
    remove_set,
    start_session,
    summarize_session,
    toggle_set_completed,
)
from blockplanner.planner.session_feedback import classify_session
from blockplanner.schemas.program import ExerciseTemplate, Program, TrainingDay


# -----------------------------
# start_session
# -----------------------------
def test_start_session_prefills_week_one(peaking_program: Program, session_date: date) -> None:
    """Test that week 1 sets carry the predicted load, target reps and implied RPE."""
    record = start_session(peaking_program, on=session_date)

    assert record.status == SessionStatus.ACTIVE
    assert record.day_name == "Training A"
    assert record.day_index == 0
    assert record.week_number == 1
    assert record.date == "2025-03-03"
    assert [e.name for e in record.exercises] == ["Back Squat", "Bench Press", "Deadlift"]

    squat = record.exercises[0]
    assert squat.target_exertion == 7.5
    assert len(squat.sets) == 4
    assert all(s.load == 120.0 and s.reps == 3 and s.reported_exertion == 8 for s in squat.sets)
    assert not any(s.completed for s in squat.sets)

    bench, deadlift = record.exercises[1], record.exercises[2]
    assert bench.sets[0].load == 87.5
    assert deadlift.sets[0].load == 155.0
    assert len(deadlift.sets) == 3


def test_start_session_in_deload_week(peaking_program: Program, session_date: date) -> None:
    program = peaking_program.model_copy(update={"current_week": 5})
    record = start_session(program, on=session_date)

    squat = record.exercises[0]
    assert record.week_number == 5
    assert squat.target_exertion == 7.5
    assert len(squat.sets) == 3


def test_start_session_in_peak_week(peaking_program: Program, session_date: date) -> None:
    program = peaking_program.model_copy(update={"current_week": 6})
    squat = start_session(program, on=session_date).exercises[0]
    assert squat.target_exertion == 9.5
    assert len(squat.sets) == 2
    assert squat.sets[0].load == 130.0


def test_unknown_one_rep_max_uses_target_exertion(session_date: date) -> None:
    program = Program(
        name="No maxes",
        total_weeks=4,
        start_exertion=7,
        days=[TrainingDay(name="Day", exercises=[ExerciseTemplate(name="Lunge", set_count=2, target_reps=8)])],
    )
    exercise = start_session(program, on=session_date).exercises[0]
    assert exercise.sets[0].load is None
    assert exercise.sets[0].reps == 8
    assert exercise.sets[0].reported_exertion == 7


def test_rotation_index_selects_day(two_day_program: Program, session_date: date) -> None:
    program = two_day_program.model_copy(update={"current_index": 3})
    record = start_session(program, on=session_date)
    assert record.day_index == 1
    assert record.day_name == "Upper"


def test_empty_program_raises(session_date: date) -> None:
    with pytest.raises(EmptyProgramError, match="no training days"):
        start_session(Program(name="Empty"), on=session_date)


def test_active_session_is_reused(peaking_program: Program, session_date: date) -> None:
    """Test that starting while a session is active returns that session."""
    active = start_session(peaking_program, on=session_date)
    assert start_session(peaking_program, on=date(2025, 3, 5), active_session=active) is active


def test_completed_session_does_not_block_start(peaking_program: Program, session_date: date) -> None:
    finished, _ = complete_session(start_session(peaking_program, on=session_date), peaking_program)
    record = start_session(peaking_program, on=session_date, active_session=finished)
    assert record.id != finished.id
    assert record.is_active


# -----------------------------
# apply_set_edit
# -----------------------------
@pytest.fixture
def prefilled_set() -> PerformedSet:
    return PerformedSet(load=120.0, reps=3, reported_exertion=8)


def test_load_edit_reinfers_exertion(prefilled_set: PerformedSet) -> None:
    """Test that 130 kg x 3 on a 140 kg max reads as RPE 10."""
    edited = apply_set_edit(prefilled_set, SetField.LOAD, 130.0, one_rep_max=140)
    assert edited.load == 130.0
    assert edited.reported_exertion == 10
    assert edited.id == prefilled_set.id


def test_reps_edit_reinfers_exertion(prefilled_set: PerformedSet) -> None:
    """Test that 120 kg x 1 on a 140 kg max reads as RPE 6."""
    edited = apply_set_edit(prefilled_set, SetField.REPS, 1, one_rep_max=140)
    assert edited.reps == 1
    assert edited.reported_exertion == 6


def test_fractional_reps_edit_rounds_half_up() -> None:
    """Test that 5.6 reps is stored as 6, and 100 kg x 6 on a 120 kg max reads as RPE 10."""
    performed = PerformedSet(load=100.0, reps=5, reported_exertion=8)
    edited = apply_set_edit(performed, SetField.REPS, 5.6, one_rep_max=120)
    assert edited.reps == 6
    assert edited.reported_exertion == 10


def test_exertion_edit_is_kept(prefilled_set: PerformedSet) -> None:
    edited = apply_set_edit(prefilled_set, SetField.REPORTED_EXERTION, 9.5, one_rep_max=140)
    assert edited.reported_exertion == 9.5


def test_unknown_max_keeps_reported_exertion(prefilled_set: PerformedSet) -> None:
    edited = apply_set_edit(prefilled_set, SetField.LOAD, 200.0, one_rep_max=0)
    assert edited.load == 200.0
    assert edited.reported_exertion == 8


def test_clearing_load_keeps_reported_exertion(prefilled_set: PerformedSet) -> None:
    edited = apply_set_edit(prefilled_set, SetField.LOAD, None, one_rep_max=140)
    assert edited.load is None
    assert edited.reported_exertion == 8


def test_edit_accepts_field_name(prefilled_set: PerformedSet) -> None:
    assert apply_set_edit(prefilled_set, "reps", 2.0, one_rep_max=0).reps == 2


# -----------------------------
# Session edits
# -----------------------------
def test_edit_set_replaces_only_target_set(peaking_program: Program, session_date: date) -> None:
    record = start_session(peaking_program, on=session_date)
    edited = edit_set(record, 0, 1, SetField.LOAD, 130.0)

    assert edited.exercises[0].sets[1].load == 130.0
    assert edited.exercises[0].sets[1].reported_exertion == 10
    assert edited.exercises[0].sets[0] == record.exercises[0].sets[0]
    assert record.exercises[0].sets[1].load == 120.0


def test_edit_out_of_range_raises(peaking_program: Program, session_date: date) -> None:
    record = start_session(peaking_program, on=session_date)
    with pytest.raises(SetIndexError):
        edit_set(record, 5, 0, SetField.LOAD, 100.0)
    with pytest.raises(SetIndexError):
        edit_set(record, 0, 9, SetField.LOAD, 100.0)


def test_edit_completed_session_raises(peaking_program: Program, session_date: date) -> None:
    finished, _ = complete_session(start_session(peaking_program, on=session_date), peaking_program)
    with pytest.raises(SessionStateError):
        edit_set(finished, 0, 0, SetField.LOAD, 100.0)


def test_toggle_set_completed(peaking_program: Program, session_date: date) -> None:
    record = start_session(peaking_program, on=session_date)
    toggled = toggle_set_completed(record, 0, 0)
    assert toggled.exercises[0].sets[0].completed
    assert not toggle_set_completed(toggled, 0, 0).exercises[0].sets[0].completed


def test_add_set_copies_previous_load(peaking_program: Program, session_date: date) -> None:
    record = start_session(peaking_program, on=session_date)
    record = edit_set(record, 0, 3, SetField.LOAD, 125.0)
    extended = add_set(record, 0)

    new_set = extended.exercises[0].sets[-1]
    assert len(extended.exercises[0].sets) == 5
    assert new_set.load == 125.0
    assert new_set.reps == 3
    assert new_set.reported_exertion is None
    assert not new_set.completed


def test_remove_set_keeps_last_one(peaking_program: Program, session_date: date) -> None:
    record = start_session(peaking_program, on=session_date)
    for _ in range(3):
        record = remove_set(record, 0, 0)
    assert len(record.exercises[0].sets) == 1
    assert remove_set(record, 0, 0) is record


def test_add_temporary_exercise(peaking_program: Program, session_date: date) -> None:
    record = start_session(peaking_program, on=session_date)
    target = ExerciseTarget(one_rep_max=100, target_reps=5, baseline_exertion=8, set_count=3)
    extended = add_exercise(record, "Barbell Row", target)

    row = extended.exercises[-1]
    assert len(extended.exercises) == 4
    assert row.temporary
    assert row.target_exertion == 8
    assert len(row.sets) == 3
    assert row.sets[0].load == 80.0
    assert row.sets[0].reported_exertion == 8


def test_added_exercise_without_max_has_unknown_exertion(peaking_program: Program, session_date: date) -> None:
    """Test that untouched sets of an ad-hoc exercise with no max do not count as on-target."""
    record = start_session(peaking_program, on=session_date)
    target = ExerciseTarget(one_rep_max=0, target_reps=10, baseline_exertion=8, set_count=3)
    extended = add_exercise(record, "Curl", target)

    curl = extended.exercises[-1]
    assert [(s.load, s.reps, s.reported_exertion) for s in curl.sets] == [(None, 10, None)] * 3
    assert classify_session([curl]).counted_sets == 0


def test_fill_set_defaults(peaking_program: Program, session_date: date) -> None:
    record = start_session(peaking_program, on=session_date)
    squat = record.exercises[0]
    emptied = replace(record, exercises=(replace(squat, sets=(PerformedSet(),)), *record.exercises[1:]))

    filled = fill_set_defaults(emptied).exercises[0].sets[0]
    assert filled.load == 120.0
    assert filled.reps == 3
    assert filled.reported_exertion == 8


# -----------------------------
# Completion and rotation
# -----------------------------
def test_advance_rotation_within_week(two_day_program: Program) -> None:
    outcome = advance_rotation(two_day_program, 0)
    assert not outcome.week_completed
    assert outcome.new_index == 1
    assert outcome.new_week == outcome.previous_week == 1


def test_advance_rotation_wraps_week(two_day_program: Program) -> None:
    outcome = advance_rotation(two_day_program, 1)
    assert outcome.week_completed
    assert outcome.new_index == 0
    assert outcome.previous_week == 1
    assert outcome.new_week == 2


def test_complete_session_freezes_record(peaking_program: Program, session_date: date) -> None:
    record = start_session(peaking_program, on=session_date)
    finished, outcome = complete_session(record, peaking_program)

    assert finished.status == SessionStatus.COMPLETED
    assert record.status == SessionStatus.ACTIVE
    assert outcome.week_completed

    advanced = peaking_program.apply_rotation(outcome)
    assert advanced.current_week == 2
    assert advanced.current_index == 0
    assert peaking_program.current_week == 1

    with pytest.raises(SessionStateError):
        complete_session(finished, peaking_program)


def test_full_week_on_plan(peaking_program: Program, session_date: date) -> None:
    """Test that a session logged as prescribed is a success and previews week 2."""
    record = start_session(peaking_program, on=session_date)
    finished, outcome = complete_session(record, peaking_program)
    feedback = summarize_session(finished, peaking_program, outcome)

    assert feedback.category == FeedbackCategory.ADHERENCE_SUCCESS
    assert feedback.counted_sets == 11
    assert feedback.volume == 3885  # 4x3x120 + 4x3x87.5 + 3x3x155
    assert feedback.week_message == "Week 1 done. Next week: RPE 8."


def test_summary_without_program_has_no_week_message(peaking_program: Program, session_date: date) -> None:
    record = start_session(peaking_program, on=session_date)
    assert summarize_session(record).week_message is None


def test_preview_next_week(peaking_program: Program) -> None:
    preview = preview_next_week(peaking_program)
    assert preview is not None
    assert preview.week == 2
    assert preview.target_exertion == 8.0
    assert preview.example_load == 120.0


def test_no_preview_after_last_week(peaking_program: Program) -> None:
    assert preview_next_week(peaking_program.model_copy(update={"current_week": 6})) is None
