"""Load prediction from one-rep-max, target reps and target exertion."""

from blockplanner.config.settings import settings
from blockplanner.planner.rpe_table import percentage_for
from blockplanner.utils.rounding import round_half_up


def predict_load(
    one_rep_max: float | None,
    target_reps: float,
    target_exertion: float,
    increment: float | None = None,
) -> float | None:
    """Prescribe a load for a set.

    The raw load (one_rep_max x table percentage) is rounded to the nearest
    plate increment so it can be loaded with standard equipment.

    Args:
        one_rep_max: One-rep-max in kg
        target_reps: Target repetitions (clamped to 1..10)
        target_exertion: Target exertion (clamped to 6..10, rounded to an integer row)
        increment: Plate increment in kg; defaults to settings.load_increment_kg

    Returns:
        Prescribed load in kg, or None if one_rep_max is unknown (missing or <= 0)
    """
    if not one_rep_max or one_rep_max <= 0:
        return None

    step = increment if increment is not None else settings.load_increment_kg
    raw = one_rep_max * percentage_for(target_exertion, target_reps)
    return round_half_up(raw, step)
