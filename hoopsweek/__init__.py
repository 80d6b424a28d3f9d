"""Schedule and slate aware weekly projections for fantasy basketball rosters."""

__version__ = "1.0.0"
