"""
Life event projector.
"""

from __future__ import annotations

import numpy as np

from finplanlab.core.context import ProjectionContext
from finplanlab.core.entities import Event
from finplanlab.core.interfaces import IItemProjector
from finplanlab.core.results import ProjectionItem


def event_amounts(event: Event, years: np.ndarray) -> np.ndarray:
    """Signed event amount in every year the event occurs, zero elsewhere."""
    return np.array(
        [float(event.amount) if event.occurs_in(int(y)) else 0.0 for y in years],
        dtype=float,
    )


class EventProjector(IItemProjector):
    """
    Event projector (kind: 'event').

    One-off events contribute in their year only; recurring events from their
    year through ``recurring_end_year``. An event that never occurs inside the
    range yields an all-zero item, which the engine drops by default.
    """

    def project(self, event: Event, ctx: ProjectionContext) -> ProjectionItem:
        values = event_amounts(event, ctx.years)
        return ProjectionItem(
            id=event.id,
            name=event.name,
            kind=event.kind,
            category=event.totals_category,
            owner_ids=list(event.affected_person_ids),
            years=ctx.years,
            values=values,
            warnings=[],
            has_overrides=False,
        )
