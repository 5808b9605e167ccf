"""
Scheduling core: catalog, status calculation, ranking and unit helpers.

Everything here is pure; I/O lives in lift_rotation.io.
"""

from .ranking import rank_exercises
from .status import compute_status, exercises_with_status
from .units import convert_weight, format_date, last_sessions

__all__ = [
    "compute_status",
    "convert_weight",
    "exercises_with_status",
    "format_date",
    "last_sessions",
    "rank_exercises",
]
