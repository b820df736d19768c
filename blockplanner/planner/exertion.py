"""Exertion estimation from performed sets.

Implements:
- Estimated one-rep-max from a load/rep pair (Epley-style)
- Implied exertion from load, reps and a known one-rep-max (inverse RPE table lookup)
- Three-way deviation of reported vs target exertion (per-set coloring)
- One-directional underperformance warning (target - actual >= 2)

The coloring and the warning are separate policies over the same inputs and
are kept as separate functions.
"""

from collections.abc import Iterable

from blockplanner.planner import rpe_table
from blockplanner.planner.constants import (
    EPLEY_COEFFICIENT,
    MODERATE_DEVIATION_TOLERANCE,
    ON_TARGET_TOLERANCE,
    UNDERPERFORMANCE_WARNING_GAP,
)
from blockplanner.planner.enums import ExertionDeviation
from blockplanner.planner.models import PerformedSet
from blockplanner.utils.rounding import round_half_up_int


def estimate_one_rep_max(load: float | None, reps: float | None) -> float | None:
    """Estimate one-rep-max from a performed set.

    Args:
        load: Load lifted in kg
        reps: Repetitions performed

    Returns:
        Estimated one-rep-max (the load itself for a single), or None if
        load or reps are missing or non-positive
    """
    if not load or not reps or load <= 0 or reps < 1:
        return None
    if reps == 1:
        return load
    return round_half_up_int(load * (1 + reps * EPLEY_COEFFICIENT))


def infer_exertion(load: float | None, reps: float | None, one_rep_max: float | None) -> int | None:
    """Infer the exertion implied by a performed set.

    Nearest-match search over the table column for the (clamped) rep count.
    Rows are scanned in ascending exertion order and the first strictly
    smallest difference wins, so ties resolve to the lower exertion.

    Args:
        load: Load lifted in kg
        reps: Repetitions performed
        one_rep_max: Known one-rep-max in kg

    Returns:
        Exertion in {6, 7, 8, 9, 10}, or None if any input is missing or one_rep_max <= 0
    """
    if not load or not reps or not one_rep_max or one_rep_max <= 0:
        return None

    fraction = load / one_rep_max
    rep_index = rpe_table.clamp_reps(reps) - 1

    best_exertion: int | None = None
    best_diff = float("inf")
    for exertion, row in rpe_table.iter_rows():
        diff = abs(row[rep_index] - fraction)
        if diff < best_diff:
            best_diff = diff
            best_exertion = exertion

    return best_exertion


def classify_exertion_deviation(actual: float | None, target: float | None) -> ExertionDeviation | None:
    """Three-way distance between reported and target exertion.

    Returns:
        ON_TARGET within 0.5, MODERATE_DEVIATION within 1.5, LARGE_DEVIATION
        beyond; None if either value is missing or zero
    """
    if not actual or not target:
        return None
    diff = abs(actual - target)
    if diff <= ON_TARGET_TOLERANCE:
        return ExertionDeviation.ON_TARGET
    if diff <= MODERATE_DEVIATION_TOLERANCE:
        return ExertionDeviation.MODERATE_DEVIATION
    return ExertionDeviation.LARGE_DEVIATION


def is_underperforming(actual: float | None, target: float | None) -> bool:
    """True when a set was reported at least 2 exertion points below target."""
    if actual is None or target is None:
        return False
    return target - actual >= UNDERPERFORMANCE_WARNING_GAP


def underperformance_gap(sets: Iterable[PerformedSet], target: float) -> int | None:
    """Gap between target and the lowest reported exertion among warned sets.

    Returns:
        Rounded gap in exertion points, or None when no set trips the warning
    """
    warned = [s.reported_exertion for s in sets if is_underperforming(s.reported_exertion, target)]
    if not warned:
        return None
    return round_half_up_int(target - min(warned))
