"""Domain-specific errors for session orchestration.

The calculation modules never raise: missing data yields None. These errors
cover structural misuse by the calling layer.
"""


class PlannerError(Exception):
    """Base exception for all planner errors."""

    pass


class EmptyProgramError(PlannerError):
    """Raised when a session is started from a program without training days."""

    pass


class SessionStateError(PlannerError):
    """Raised when a session is edited or completed outside the active state."""

    pass


class SetIndexError(PlannerError):
    """Raised when an exercise or set index does not exist in the session."""

    pass


class CatalogError(PlannerError):
    """Raised when the exercise catalog data file is missing or malformed."""

    pass
