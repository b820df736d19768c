"""Progress analytics over logged sessions.

Feeds the progress chart (best e1RM per date) and the completion screen
(best e1RM per exercise, completed set count).
"""

from collections.abc import Iterable

from loguru import logger

from blockplanner.config.settings import settings
from blockplanner.planner.enums import SessionStatus
from blockplanner.planner.exertion import estimate_one_rep_max
from blockplanner.planner.models import E1rmPoint, LoggedExercise, SessionRecord


def _best_of(exercise: LoggedExercise) -> tuple[float, float]:
    best_e1rm = 0.0
    best_load = 0.0
    for performed in exercise.sets:
        if not performed.load or not performed.reps:
            continue
        e1rm = estimate_one_rep_max(performed.load, performed.reps)
        if e1rm and e1rm > best_e1rm:
            best_e1rm = e1rm
        best_load = max(best_load, performed.load)
    return best_e1rm, best_load


def exercise_history(
    sessions: Iterable[SessionRecord],
    exercise_name: str,
    limit: int | None = None,
) -> list[E1rmPoint]:
    """Best estimated one-rep-max per date for one exercise.

    Only completed sessions count. Names match case-insensitively. When a
    date has several sessions, the highest e1RM is kept.

    Args:
        sessions: Logged sessions, in any order
        exercise_name: Exercise to chart
        limit: Maximum number of points (most recent kept); defaults to settings.history_limit

    Returns:
        Points sorted oldest first
    """
    if limit is None:
        limit = settings.history_limit
    wanted = exercise_name.lower()

    by_date: dict[str, E1rmPoint] = {}
    for record in sessions:
        if record.status != SessionStatus.COMPLETED:
            continue
        exercise = next((e for e in record.exercises if e.name.lower() == wanted), None)
        if exercise is None:
            continue

        best_e1rm, best_load = _best_of(exercise)
        if best_e1rm <= 0:
            continue
        current = by_date.get(record.date)
        if current is None or best_e1rm > current.e1rm:
            by_date[record.date] = E1rmPoint(date=record.date, e1rm=best_e1rm, best_load=best_load)

    points = sorted(by_date.values(), key=lambda p: p.date)
    logger.debug(f"e1RM history for {exercise_name}: {len(points)} points, returning last {limit}")
    return points[max(len(points) - limit, 0):]


def e1rm_trend(points: list[E1rmPoint]) -> float | None:
    """Change in e1RM from the first to the last point; None with fewer than two points."""
    if len(points) < 2:
        return None
    return points[-1].e1rm - points[0].e1rm


def exercise_names(sessions: Iterable[SessionRecord]) -> list[str]:
    """Unique exercise names across completed sessions, sorted."""
    names = {
        exercise.name
        for record in sessions
        if record.status == SessionStatus.COMPLETED
        for exercise in record.exercises
        if exercise.name
    }
    return sorted(names)


def best_e1rm_by_exercise(record: SessionRecord) -> dict[str, float | None]:
    """Best e1RM per exercise of one session; None when no set has load and reps."""
    result: dict[str, float | None] = {}
    for exercise in record.exercises:
        best_e1rm, _ = _best_of(exercise)
        result[exercise.name] = best_e1rm or None
    return result


def set_completion(record: SessionRecord) -> tuple[int, int]:
    """(completed sets, total sets) of a session."""
    total = sum(len(exercise.sets) for exercise in record.exercises)
    completed = sum(1 for exercise in record.exercises for s in exercise.sets if s.completed)
    return completed, total
