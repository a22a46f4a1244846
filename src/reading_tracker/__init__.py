"""Reading tracker: queue selection, prioritization and streaks."""

__version__ = "0.1.0"
