"""Session lifecycle: materialization, set edits and rotation.

A session is materialized from the program's next training day:
1. Pick day current_index mod day count
2. Ask the week planner for each exercise's targets in current_week
3. Pre-fill effective_set_count sets with the predicted load, target reps
   and the exertion implied by that load (or the target exertion when the
   one-rep-max is unknown)

Edits are pure reducers: every function returns a new SessionRecord. The
calling layer is responsible for keeping at most one session active per
user; start_session returns the existing active session when given one.
"""

from dataclasses import replace
from datetime import date

from loguru import logger

from blockplanner.planner.enums import SessionStatus, SetField
from blockplanner.planner.errors import EmptyProgramError, SessionStateError, SetIndexError
from blockplanner.planner.exertion import infer_exertion
from blockplanner.planner.load_predictor import predict_load
from blockplanner.planner.models import (
    ExerciseTarget,
    LoggedExercise,
    NextWeekPreview,
    PerformedSet,
    RotationOutcome,
    SessionFeedback,
    SessionRecord,
    new_id,
)
from blockplanner.planner.session_feedback import classify_session
from blockplanner.planner.week_progression import compute_weekly_targets, preview_week
from blockplanner.schemas.program import Program
from blockplanner.utils.rounding import round_half_up_int


def _prefilled_set(
    target: ExerciseTarget,
    target_exertion: float,
    unknown_max_exertion: float | None,
) -> PerformedSet:
    load = predict_load(target.one_rep_max, target.target_reps, target_exertion)
    if load is not None and target.one_rep_max > 0:
        exertion = infer_exertion(load, target.target_reps, target.one_rep_max)
    else:
        exertion = unknown_max_exertion
    return PerformedSet(load=load, reps=target.target_reps, reported_exertion=exertion)


def start_session(
    program: Program,
    on: date | None = None,
    active_session: SessionRecord | None = None,
) -> SessionRecord:
    """Materialize the next training day of a program as an active session.

    Args:
        program: Program record (rotation index, current week, days)
        on: Session date; defaults to today
        active_session: Session already in progress for this user, if any

    Returns:
        New ACTIVE SessionRecord, or active_session unchanged when it is still active

    Raises:
        EmptyProgramError: If the program has no training days
    """
    if active_session is not None and active_session.is_active:
        logger.info(
            "Session already in progress, reusing it",
            session_id=active_session.id,
            program_id=active_session.program_id,
        )
        return active_session

    if not program.days:
        raise EmptyProgramError(f"Program {program.id} has no training days")

    day_index = program.current_index % len(program.days)
    day = program.days[day_index]
    week = program.current_week

    exercises: list[LoggedExercise] = []
    for template in day.exercises:
        target = program.target_for(template)
        weekly = compute_weekly_targets(target, week, program.total_weeks, program.goal)
        exercises.append(
            LoggedExercise(
                name=template.name,
                target=target,
                target_exertion=weekly.effective_exertion,
                sets=tuple(
                    _prefilled_set(target, weekly.effective_exertion, weekly.effective_exertion)
                    for _ in range(weekly.effective_set_count)
                ),
                exercise_id=template.id,
            )
        )

    record = SessionRecord(
        program_id=program.id,
        day_id=day.id,
        day_name=day.name,
        day_index=day_index,
        week_number=week,
        date=(on or date.today()).isoformat(),
        exercises=tuple(exercises),
    )
    logger.info(
        "Session started",
        session_id=record.id,
        program_id=program.id,
        day=day.name,
        week=week,
        exercises=len(exercises),
    )
    return record


# -----------------------------
# Set Edits
# -----------------------------
def apply_set_edit(
    performed: PerformedSet,
    field: SetField,
    value: float | None,
    one_rep_max: float,
) -> PerformedSet:
    """Replace one field of a set, re-inferring exertion on load/reps edits.

    When load or reps change, the one-rep-max is known and both load and reps
    are present, the reported exertion is replaced by the implied exertion.

    Args:
        performed: Set being edited
        field: Field to replace
        value: New value (None clears the field)
        one_rep_max: One-rep-max of the exercise (0 = unknown)

    Returns:
        New PerformedSet
    """
    field = SetField(field)
    if field == SetField.REPS and value is not None:
        value = round_half_up_int(value)
    edited = replace(performed, **{field.value: value})

    if field in (SetField.LOAD, SetField.REPS) and one_rep_max > 0 and edited.load and edited.reps:
        implied = infer_exertion(edited.load, edited.reps, one_rep_max)
        if implied is not None:
            edited = replace(edited, reported_exertion=implied)
    return edited


def _require_active(record: SessionRecord) -> None:
    if not record.is_active:
        raise SessionStateError(f"Session {record.id} is {record.status}, not active")


def _exercise_at(record: SessionRecord, exercise_index: int) -> LoggedExercise:
    if not 0 <= exercise_index < len(record.exercises):
        raise SetIndexError(f"No exercise at index {exercise_index} in session {record.id}")
    return record.exercises[exercise_index]


def _check_set_index(exercise: LoggedExercise, set_index: int) -> None:
    if not 0 <= set_index < len(exercise.sets):
        raise SetIndexError(f"No set at index {set_index} for {exercise.name}")


def _with_exercise(record: SessionRecord, exercise_index: int, exercise: LoggedExercise) -> SessionRecord:
    exercises = list(record.exercises)
    exercises[exercise_index] = exercise
    return replace(record, exercises=tuple(exercises))


def _with_sets(
    record: SessionRecord,
    exercise_index: int,
    sets: list[PerformedSet],
) -> SessionRecord:
    exercise = record.exercises[exercise_index]
    return _with_exercise(record, exercise_index, replace(exercise, sets=tuple(sets)))


def edit_set(
    record: SessionRecord,
    exercise_index: int,
    set_index: int,
    field: SetField,
    value: float | None,
) -> SessionRecord:
    """Edit one field of one set of an active session."""
    _require_active(record)
    exercise = _exercise_at(record, exercise_index)
    _check_set_index(exercise, set_index)

    sets = list(exercise.sets)
    sets[set_index] = apply_set_edit(sets[set_index], field, value, exercise.target.one_rep_max)
    return _with_sets(record, exercise_index, sets)


def toggle_set_completed(record: SessionRecord, exercise_index: int, set_index: int) -> SessionRecord:
    _require_active(record)
    exercise = _exercise_at(record, exercise_index)
    _check_set_index(exercise, set_index)

    sets = list(exercise.sets)
    sets[set_index] = replace(sets[set_index], completed=not sets[set_index].completed)
    return _with_sets(record, exercise_index, sets)


def add_set(record: SessionRecord, exercise_index: int) -> SessionRecord:
    """Append a set copying the previous set's load and reps; exertion starts unknown."""
    _require_active(record)
    exercise = _exercise_at(record, exercise_index)

    last = exercise.sets[-1] if exercise.sets else PerformedSet()
    sets = [*exercise.sets, PerformedSet(load=last.load, reps=last.reps)]
    return _with_sets(record, exercise_index, sets)


def remove_set(record: SessionRecord, exercise_index: int, set_index: int) -> SessionRecord:
    """Remove a set. The last remaining set of an exercise is never removed."""
    _require_active(record)
    exercise = _exercise_at(record, exercise_index)
    _check_set_index(exercise, set_index)

    if len(exercise.sets) <= 1:
        return record
    sets = [s for i, s in enumerate(exercise.sets) if i != set_index]
    return _with_sets(record, exercise_index, sets)


def add_exercise(
    record: SessionRecord,
    name: str,
    target: ExerciseTarget,
    temporary: bool = True,
) -> SessionRecord:
    """Add an exercise to an active session.

    The exercise is prescribed at its own baseline exertion; it is not part
    of the block's progression. Persisting it to the program is up to the
    caller (temporary=False marks that intent). Without a known one-rep-max
    the sets start with no reported exertion.
    """
    _require_active(record)
    exercise = LoggedExercise(
        name=name,
        target=target,
        target_exertion=target.baseline_exertion,
        sets=tuple(_prefilled_set(target, target.baseline_exertion, None) for _ in range(target.set_count)),
        exercise_id=new_id(),
        temporary=temporary,
    )
    logger.debug("Exercise added to session", session_id=record.id, exercise=name, temporary=temporary)
    return replace(record, exercises=(*record.exercises, exercise))


def fill_set_defaults(record: SessionRecord) -> SessionRecord:
    """Fill sets left empty with the session's targets.

    Missing loads get the predicted load, missing reps the target reps, and
    missing exertion the implied exertion when the one-rep-max is known.
    """
    exercises: list[LoggedExercise] = []
    for exercise in record.exercises:
        target = exercise.target
        predicted = predict_load(target.one_rep_max, target.target_reps, exercise.target_exertion)
        sets: list[PerformedSet] = []
        for performed in exercise.sets:
            load = performed.load if performed.load else predicted
            reps = performed.reps if performed.reps else target.target_reps
            exertion = performed.reported_exertion
            if exertion is None and load and reps and target.one_rep_max > 0:
                exertion = infer_exertion(load, reps, target.one_rep_max)
            sets.append(replace(performed, load=load, reps=reps, reported_exertion=exertion))
        exercises.append(replace(exercise, sets=tuple(sets)))
    return replace(record, exercises=tuple(exercises))


# -----------------------------
# Completion
# -----------------------------
def advance_rotation(program: Program, day_index: int) -> RotationOutcome:
    """Compute the rotation position after finishing a training day.

    The week advances only when the completed day was the last one of the
    rotation; the index then wraps to 0.
    """
    new_index = day_index + 1
    week_completed = new_index >= len(program.days)
    previous_week = program.current_week
    return RotationOutcome(
        week_completed=week_completed,
        previous_week=previous_week,
        new_week=previous_week + 1 if week_completed else previous_week,
        new_index=0 if week_completed else new_index,
    )


def complete_session(record: SessionRecord, program: Program) -> tuple[SessionRecord, RotationOutcome]:
    """Freeze an active session and advance the program's rotation.

    Returns:
        Tuple of (completed SessionRecord, RotationOutcome); apply the
        outcome with Program.apply_rotation

    Raises:
        SessionStateError: If the session is not active
    """
    _require_active(record)
    completed = replace(record, status=SessionStatus.COMPLETED)
    outcome = advance_rotation(program, record.day_index)
    logger.info(
        "Session completed",
        session_id=record.id,
        program_id=program.id,
        week_completed=outcome.week_completed,
        new_week=outcome.new_week,
    )
    return completed, outcome


def summarize_session(
    record: SessionRecord,
    program: Program | None = None,
    outcome: RotationOutcome | None = None,
) -> SessionFeedback:
    """Feedback for a finished session, with a week message when the rotation wrapped."""
    if program is None or outcome is None:
        return classify_session(record.exercises)
    return classify_session(
        record.exercises,
        week_completed=outcome.week_completed,
        next_week=outcome.new_week,
        block=program.block_snapshot(),
    )


def preview_next_week(program: Program) -> NextWeekPreview | None:
    """Targets of the week after the program's current week.

    Returns:
        NextWeekPreview for the representative exercise, or None when the
        program has no exercises or the current week is the last one
    """
    return preview_week(program.block_snapshot(), program.current_week + 1)
