"""
Asset valuation projector.
"""

from __future__ import annotations

import numpy as np

from finplanlab.core.assumptions import has_overrides, resolve_rate
from finplanlab.core.context import ProjectionContext
from finplanlab.core.diagnostics import is_unrealistic, negative_balance, unrealistic_growth
from finplanlab.core.entities import Asset
from finplanlab.core.interfaces import IItemProjector
from finplanlab.core.kinds import AssetCategory, RateKind
from finplanlab.core.results import ProjectionItem

from .cashflow import project_annual_amounts
from .event import event_amounts
from .loan import project_loans


def linked_flow_series(asset: Asset, ctx: ProjectionContext) -> np.ndarray:
    """
    Net yearly flow into ``asset`` from the plan's linked items.

    Income paid into the asset adds, commitments paid from it subtract and
    events linked to it add their signed amount.
    """
    net = np.zeros(len(ctx.years))
    if ctx.plan is None:
        return net
    for income in ctx.plan.income:
        if income.linked_asset_id == asset.id:
            net += project_annual_amounts(income, RateKind.GROWTH, ctx)
    for commitment in ctx.plan.commitments:
        if commitment.linked_asset_id == asset.id:
            net -= project_annual_amounts(commitment, RateKind.INFLATION, ctx)
    for event in ctx.plan.events:
        if event.linked_asset_id == asset.id:
            net += event_amounts(event, ctx.years)
    return net


class AssetProjector(IItemProjector):
    """
    Asset valuation projector (kind: 'asset').

    The series is seeded with ``current_value`` in the plan start year. Each
    later year compounds by ``growth - inflation`` (both resolved for that
    year), then applies linked flows.

    Rules:
        - Non-cash assets that go negative are clamped to zero with a
          ``negative_balance`` warning (high)
        - An effective rate beyond +/-50% raises ``unrealistic_growth`` (medium)
        - A manual value override replaces that year's value; later years
          compound from the override
    """

    def project(self, asset: Asset, ctx: ProjectionContext) -> ProjectionItem:
        T = len(ctx.years)
        values = np.zeros(T)
        warnings = []
        linked = linked_flow_series(asset, ctx)
        clampable = asset.type != AssetCategory.CASH

        value = float(asset.current_value)
        for t, year in enumerate(ctx.years):
            year = int(year)
            manual = asset.value_override_for(year)

            if t > 0:
                growth = resolve_rate(
                    asset, RateKind.GROWTH, year, ctx.assumptions, ctx.overrides
                )
                inflation = resolve_rate(
                    asset, RateKind.INFLATION, year, ctx.assumptions, ctx.overrides
                )
                effective = growth - inflation
                value *= 1 + effective / 100
                value += linked[t]

                if manual is None and clampable and value < 0:
                    value = 0.0
                    warnings.append(negative_balance(asset.name, year, asset.id))

                if is_unrealistic(effective):
                    warnings.append(
                        unrealistic_growth(asset.name, effective, year, asset.id)
                    )

            if manual is not None:
                value = float(manual.value)
            values[t] = value

        return ProjectionItem(
            id=asset.id,
            name=asset.name,
            kind=asset.kind,
            category=asset.totals_category,
            owner_ids=list(asset.owner_ids),
            years=ctx.years,
            values=values,
            warnings=warnings,
            has_overrides=has_overrides(asset, ctx.overrides),
            loan_balances=project_loans(asset.loans, ctx.years),
        )
