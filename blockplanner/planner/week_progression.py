"""Week progression for periodized training blocks.

Peaking block:
- Build weeks (1 .. totalWeeks-2): exertion climbs +0.5 per week from the
  baseline, capped at 9.0; sets unchanged
- Deload week (totalWeeks-1, only when totalWeeks > 2): exertion back to
  baseline, sets x0.7
- Peak week (totalWeeks): exertion 9.5, sets x0.5

Maintenance block: baseline exertion and sets every week.

The planner is a pure function of (target, week, block length, goal). It
never holds or advances the current week; the session rotation does that.
"""

from blockplanner.planner.constants import (
    BUILD_WEEK_EXERTION_CAP,
    DELOAD_SET_MULTIPLIER,
    EXERTION_STEP,
    MIN_SET_COUNT,
    MIN_WEEKS_FOR_DELOAD,
    PEAK_SET_MULTIPLIER,
    PEAK_WEEK_EXERTION,
)
from blockplanner.planner.enums import BlockGoal
from blockplanner.planner.load_predictor import predict_load
from blockplanner.planner.models import BlockSnapshot, ExerciseTarget, NextWeekPreview, WeeklyTargets
from blockplanner.utils.rounding import round_half_up, round_half_up_int


def _scaled_sets(set_count: int, multiplier: float) -> int:
    return max(MIN_SET_COUNT, round_half_up_int(set_count * multiplier))


def compute_weekly_targets(
    target: ExerciseTarget,
    week: int,
    total_weeks: int,
    goal: BlockGoal,
) -> WeeklyTargets:
    """Compute an exercise's effective exertion and set count for a week.

    Args:
        target: Steady-state prescription (baseline exertion and sets)
        week: Current week number (clamped into [1, total_weeks])
        total_weeks: Block length in weeks
        goal: Block goal

    Returns:
        WeeklyTargets for the week
    """
    if goal == BlockGoal.MAINTENANCE:
        return WeeklyTargets(
            effective_exertion=target.baseline_exertion,
            effective_set_count=target.set_count,
        )

    w = max(1, min(week, total_weeks))

    if w == total_weeks:
        return WeeklyTargets(
            effective_exertion=PEAK_WEEK_EXERTION,
            effective_set_count=_scaled_sets(target.set_count, PEAK_SET_MULTIPLIER),
            is_peak_week=True,
        )

    if w == total_weeks - 1 and total_weeks >= MIN_WEEKS_FOR_DELOAD:
        return WeeklyTargets(
            effective_exertion=target.baseline_exertion,
            effective_set_count=_scaled_sets(target.set_count, DELOAD_SET_MULTIPLIER),
            is_deload_week=True,
        )

    ramped = target.baseline_exertion + (w - 1) * EXERTION_STEP
    return WeeklyTargets(
        effective_exertion=min(BUILD_WEEK_EXERTION_CAP, round_half_up(ramped, EXERTION_STEP)),
        effective_set_count=target.set_count,
    )


def preview_week(block: BlockSnapshot, week: int) -> NextWeekPreview | None:
    """Preview a week of a block through its representative exercise.

    Returns:
        NextWeekPreview, or None if the block has no exercises or the week
        lies beyond the block
    """
    if block.representative is None or week > block.total_weeks:
        return None

    targets = compute_weekly_targets(block.representative, week, block.total_weeks, block.goal)
    return NextWeekPreview(
        week=week,
        target_exertion=targets.effective_exertion,
        is_deload_week=targets.is_deload_week,
        is_peak_week=targets.is_peak_week,
        example_load=predict_load(
            block.representative.one_rep_max,
            block.representative.target_reps,
            targets.effective_exertion,
        ),
    )
