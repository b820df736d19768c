"""RPE-based load prescription and week-progression engine."""
