"""
Projector interface protocol for FinPlanLab.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .context import ProjectionContext
from .results import ProjectionItem


@runtime_checkable
class IItemProjector(Protocol):
    """
    Contract for per-kind item projectors.

    Responsibilities: turn one entity into a value series aligned with
    ``ctx.years`` and collect the warnings raised along the way.
    """

    def project(self, entity, ctx: ProjectionContext) -> ProjectionItem | None:
        """
        Project ``entity`` over the whole context range.

        Returns:
            ProjectionItem, or None when the entity contributes nothing in any
            year of the range and should be left out of the item list.
        """
        ...


__all__ = ["IItemProjector"]
