"""Day planner core: time slots, activities, and their derived groups."""

__version__ = "0.1.0"
