"""AI itinerary planner: trip parameters in, budgeted day-by-day plan out."""

__version__ = "0.1.0"
