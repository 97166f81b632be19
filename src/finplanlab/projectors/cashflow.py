"""
Recurring income and commitment projectors.
"""

from __future__ import annotations

import numpy as np

from finplanlab.core.assumptions import has_overrides, resolve_rate
from finplanlab.core.context import ProjectionContext
from finplanlab.core.diagnostics import negative_value
from finplanlab.core.entities import CashFlowItem, Commitment, Income
from finplanlab.core.interfaces import IItemProjector
from finplanlab.core.kinds import RateKind
from finplanlab.core.results import ProjectionItem


def project_annual_amounts(
    item: CashFlowItem, rate_kind: str, ctx: ProjectionContext
) -> np.ndarray:
    """
    Annualized amount of a recurring flow for every year of the context.

    Years outside ``[start_year, end_year]`` are zero. Inside the window the
    annual amount compounds by the rate resolved for that year, raised to the
    number of years elapsed since the item's own start year.

    Args:
        item: Income or commitment
        rate_kind: ``"growth"`` for income, ``"inflation"`` for commitments
        ctx: Projection context

    Returns:
        Positive-signed amounts (negative only when the input amount is)
    """
    amounts = np.zeros(len(ctx.years))
    annual = item.annual_amount()
    for t, year in enumerate(ctx.years):
        year = int(year)
        if not item.is_active(year):
            continue
        elapsed = year - item.start_year
        amount = annual
        if elapsed > 0:
            rate = resolve_rate(item, rate_kind, year, ctx.assumptions, ctx.overrides)
            amount *= (1 + rate / 100) ** elapsed
        amounts[t] = amount
    return amounts


class _RecurringFlowProjector(IItemProjector):
    rate_kind: str = RateKind.GROWTH
    sign: float = 1.0

    def project(self, item: CashFlowItem, ctx: ProjectionContext) -> ProjectionItem:
        amounts = project_annual_amounts(item, self.rate_kind, ctx)
        warnings = [
            negative_value(item.kind, item.name, int(year), item.id)
            for year, amount in zip(ctx.years, amounts)
            if amount < 0
        ]
        # 0.0 - x keeps inactive years at +0.0 for commitments
        values = amounts if self.sign > 0 else 0.0 - amounts
        return ProjectionItem(
            id=item.id,
            name=item.name,
            kind=item.kind,
            category=item.totals_category,
            owner_ids=list(item.owner_ids),
            years=ctx.years,
            values=values,
            warnings=warnings,
            has_overrides=has_overrides(item, ctx.overrides),
        )


class IncomeProjector(_RecurringFlowProjector):
    """
    Recurring income projector (kind: 'income').

    The annualized amount compounds by the resolved growth rate. Negative
    amounts pass through unclamped with a ``negative_income`` warning.
    """

    rate_kind = RateKind.GROWTH
    sign = 1.0

    def project(self, item: Income, ctx: ProjectionContext) -> ProjectionItem:
        return super().project(item, ctx)


class CommitmentProjector(_RecurringFlowProjector):
    """
    Recurring commitment projector (kind: 'commitment').

    The annualized amount compounds by the resolved inflation rate and is
    stored negative to represent an outflow. A negative input amount raises a
    ``negative_commitment`` warning and passes through unclamped.
    """

    rate_kind = RateKind.INFLATION
    sign = -1.0

    def project(self, item: Commitment, ctx: ProjectionContext) -> ProjectionItem:
        return super().project(item, ctx)
