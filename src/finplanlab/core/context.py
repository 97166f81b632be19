"""
Context classes for FinPlanLab projections.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .entities import AssumptionOverride, FinancialPlan, PlanAssumptions


def year_range(start_year: int, end_year: int) -> np.ndarray:
    """
    Inclusive integer year index ``[start_year, end_year]``.

    **Example:**
        ```python
        year_range(2024, 2026)  # array([2024, 2025, 2026])
        ```
    """
    return np.arange(start_year, end_year + 1, dtype=int)


@dataclass
class ProjectionContext:
    """
    Context object passed to every item projector.

    Attributes:
        years: Ascending integer year index; ``years[0]`` is the plan start year
        assumptions: Effective plan or scenario defaults
        overrides: Effective overrides, in precedence order
        plan: The plan being projected, used to find flows linked to an asset

    Note:
        Every projected series is aligned with ``years``, so each item's series
        starts at the plan start year regardless of the item's own start year.
    """

    years: np.ndarray
    assumptions: PlanAssumptions
    overrides: Sequence[AssumptionOverride]
    plan: FinancialPlan | None = None

    @property
    def start_year(self) -> int:
        return int(self.years[0])

    @property
    def end_year(self) -> int:
        return int(self.years[-1])

    def index_of(self, year: int) -> int | None:
        """Position of ``year`` in the index, or None when out of range."""
        offset = year - self.start_year
        if 0 <= offset < len(self.years):
            return offset
        return None
