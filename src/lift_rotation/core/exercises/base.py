"""
Base types for catalog entries.

An Exercise is an immutable catalog row: a stable id, a display name and
one of the three training categories used for grouping and ranking.
"""

from dataclasses import dataclass
from typing import Literal

Category = Literal["push", "pull", "legs"]


@dataclass(frozen=True)
class Exercise:
    """One entry of the exercise catalog."""

    id: str           # e.g. "dips", "leg-curls"
    name: str         # e.g. "Bröst Press"
    category: Category
