"""RPE table: percentage of one-rep-max by (exertion, repetitions).

Rows follow the RTS-style multi-rep chart. Each row is indexed by reps 1..10.
Higher exertion means the same rep count is performed closer to the true
one-rep-max; within a row, more reps means a lower percentage. Neighbouring
rows are the same series shifted by one rep.
"""

from collections.abc import Iterator

from blockplanner.planner.constants import FALLBACK_EXERTION, MAX_EXERTION, MAX_REPS, MIN_EXERTION, MIN_REPS
from blockplanner.utils.rounding import round_half_up_int

RPE_TABLE: dict[int, tuple[float, ...]] = {
    6: (0.863, 0.837, 0.811, 0.786, 0.762, 0.739, 0.707, 0.680, 0.653, 0.626),
    7: (0.892, 0.863, 0.837, 0.811, 0.786, 0.762, 0.739, 0.707, 0.680, 0.653),
    8: (0.922, 0.892, 0.863, 0.837, 0.811, 0.786, 0.762, 0.739, 0.707, 0.680),
    9: (0.955, 0.922, 0.892, 0.863, 0.837, 0.811, 0.786, 0.762, 0.739, 0.707),
    10: (1.000, 0.955, 0.922, 0.892, 0.863, 0.837, 0.811, 0.786, 0.762, 0.739),
}


def normalize_exertion(exertion: float) -> int:
    """Clamp exertion into [6, 10] and round it to a table row key."""
    clamped = min(MAX_EXERTION, max(MIN_EXERTION, exertion))
    return round_half_up_int(clamped)


def clamp_reps(reps: float) -> int:
    """Round reps and clamp them into the table's [1, 10] column range."""
    return min(MAX_REPS, max(MIN_REPS, round_half_up_int(reps)))


def row_for(exertion_level: int) -> tuple[float, ...]:
    """Return the row for an integer exertion level, falling back to the exertion-8 row."""
    return RPE_TABLE.get(exertion_level, RPE_TABLE[FALLBACK_EXERTION])


def percentage_for(exertion_level: float, reps: float) -> float:
    """Fraction of one-rep-max for an exertion level and rep count.

    Args:
        exertion_level: Perceived exertion; rounded and clamped to 6..10
        reps: Repetitions; clamped to 1..10

    Returns:
        Fraction in (0, 1]
    """
    row = row_for(normalize_exertion(exertion_level))
    return row[clamp_reps(reps) - 1]


def iter_rows() -> Iterator[tuple[int, tuple[float, ...]]]:
    """Yield (exertion, row) pairs in ascending exertion order."""
    for exertion in sorted(RPE_TABLE):
        yield exertion, RPE_TABLE[exertion]
