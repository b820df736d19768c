"""Session feedback: adherence classification and volume of a finished session.

Each set with both a reported and a target exertion is counted:
- actual - target >= +2  -> pushed
- actual - target <= -2  -> underperformed
- otherwise              -> on target

Category, first match wins:
1. underperformed / counted >= 0.5      -> severe underperformance
2. 1 <= underperformed <= 2             -> mild underperformance
3. pushed > on target and pushed > 0    -> overreach
4. otherwise                            -> adherence success

Volume is a separate accumulator over every set with a load and reps,
independent of completion or exertion data.
"""

from collections.abc import Iterable

from blockplanner.planner.constants import (
    MILD_UNDERPERFORMANCE_MAX_SETS,
    PUSHED_THRESHOLD,
    SEVERE_UNDERPERFORMANCE_RATIO,
    UNDERPERFORMED_THRESHOLD,
)
from blockplanner.planner.enums import FeedbackCategory, FeedbackTone, SetOutcome
from blockplanner.planner.models import BlockSnapshot, LoggedExercise, SessionFeedback
from blockplanner.planner.week_progression import compute_weekly_targets
from blockplanner.utils.rounding import round_half_up_int

_HEADLINES: dict[FeedbackCategory, tuple[FeedbackTone, str]] = {
    FeedbackCategory.SEVERE_UNDERPERFORMANCE: (FeedbackTone.BAD, "WEAKLING SESSION"),
    FeedbackCategory.MILD_UNDERPERFORMANCE: (FeedbackTone.WARN, "Almost there"),
    FeedbackCategory.OVERREACH: (FeedbackTone.WARN, "You pushed it"),
    FeedbackCategory.ADHERENCE_SUCCESS: (FeedbackTone.GOOD, "Strong session"),
}


def format_exertion(value: float) -> str:
    """Render an exertion value without a trailing .0 (8 -> "8", 7.5 -> "7.5")."""
    return f"{value:g}"


def classify_set(reported_exertion: float | None, target_exertion: float | None) -> SetOutcome | None:
    """Classify one set against its target; None if either exertion is missing."""
    if not reported_exertion or not target_exertion:
        return None
    deviation = reported_exertion - target_exertion
    if deviation >= PUSHED_THRESHOLD:
        return SetOutcome.PUSHED
    if deviation <= UNDERPERFORMED_THRESHOLD:
        return SetOutcome.UNDERPERFORMED
    return SetOutcome.ON_TARGET


def session_volume(exercises: Iterable[LoggedExercise]) -> float:
    """Sum of load x reps over every set where both are present."""
    volume = 0.0
    for exercise in exercises:
        for performed in exercise.sets:
            if performed.load and performed.reps:
                volume += performed.load * performed.reps
    return volume


def _body(category: FeedbackCategory, underperformed: int) -> str:
    if category == FeedbackCategory.SEVERE_UNDERPERFORMANCE:
        return (
            "You trained structurally too light. Add weight or be honest about your RPE. "
            "Strength is not built by sparing yourself."
        )
    if category == FeedbackCategory.MILD_UNDERPERFORMANCE:
        sets = "1 set was" if underperformed == 1 else f"{underperformed} sets were"
        return f"{sets} too light. Stick to the plan next time."
    if category == FeedbackCategory.OVERREACH:
        return (
            "You trained harder than planned. Fine if it was deliberate, "
            "but watch out for overtraining in the long run."
        )
    return "You stuck to the plan. Consistency is the foundation of strength."


def week_transition_message(block: BlockSnapshot, next_week: int) -> str | None:
    """Message shown after the last training day of a week.

    Returns:
        Block-completion message when next_week is past the block, a
        deload/peak/build message for next_week, or None when the block has
        no representative exercise
    """
    if next_week > block.total_weeks:
        return f"Block complete after {block.total_weeks} weeks. Time for a test or a new block."

    if block.representative is None:
        return None

    finished = next_week - 1
    targets = compute_weekly_targets(block.representative, next_week, block.total_weeks, block.goal)
    if targets.is_deload_week:
        return (
            f"Week {finished} done. Next week: DELOAD at RPE {format_exertion(targets.effective_exertion)}, "
            f"{targets.effective_set_count} sets."
        )
    if targets.is_peak_week:
        return f"Week {finished} done. Next week: PEAK WEEK. Leave nothing in the tank."
    return f"Week {finished} done. Next week: RPE {format_exertion(targets.effective_exertion)}."


def classify_session(
    exercises: Iterable[LoggedExercise],
    week_completed: bool = False,
    next_week: int | None = None,
    block: BlockSnapshot | None = None,
) -> SessionFeedback:
    """Reduce a finished session to feedback.

    Args:
        exercises: Logged exercises with their targets and sets
        week_completed: True if this session finished a full rotation of the block's training days
        next_week: Week number after the rotation (required for a week message)
        block: Block parameters used for the week message

    Returns:
        SessionFeedback with category, texts, set counts, volume and optional week message
    """
    exercises = list(exercises)

    pushed = underperformed = on_target = 0
    for exercise in exercises:
        for performed in exercise.sets:
            outcome = classify_set(performed.reported_exertion, exercise.target_exertion)
            if outcome == SetOutcome.PUSHED:
                pushed += 1
            elif outcome == SetOutcome.UNDERPERFORMED:
                underperformed += 1
            elif outcome == SetOutcome.ON_TARGET:
                on_target += 1

    counted = pushed + underperformed + on_target
    ratio = underperformed / counted if counted > 0 else 0.0

    if ratio >= SEVERE_UNDERPERFORMANCE_RATIO:
        category = FeedbackCategory.SEVERE_UNDERPERFORMANCE
    elif 1 <= underperformed <= MILD_UNDERPERFORMANCE_MAX_SETS:
        category = FeedbackCategory.MILD_UNDERPERFORMANCE
    elif pushed > on_target and pushed > 0:
        category = FeedbackCategory.OVERREACH
    else:
        category = FeedbackCategory.ADHERENCE_SUCCESS

    week_message = None
    if week_completed and block is not None and next_week is not None:
        week_message = week_transition_message(block, next_week)

    tone, headline = _HEADLINES[category]
    return SessionFeedback(
        category=category,
        tone=tone,
        headline=headline,
        body=_body(category, underperformed),
        counted_sets=counted,
        pushed_sets=pushed,
        underperformed_sets=underperformed,
        on_target_sets=on_target,
        volume=round_half_up_int(session_volume(exercises)),
        week_message=week_message,
    )
