"""
Projector registry setup for FinPlanLab.
"""

from __future__ import annotations

from finplanlab.core.interfaces import IItemProjector
from finplanlab.core.kinds import K

from .asset import AssetProjector
from .cashflow import CommitmentProjector, IncomeProjector
from .event import EventProjector


def default_projectors() -> dict[str, IItemProjector]:
    """
    Build a fresh mapping from entity kind to projector.

    Registered Projectors:
        - 'asset': compounding valuation with clamping and manual overrides
        - 'income': annualized, growth-compounded recurring income
        - 'commitment': annualized, inflation-compounded recurring outgoing
        - 'event': one-off or recurring signed amounts

    Note:
        A new dictionary is returned on every call. Engines that need a
        different behavior for a kind take a modified copy.
    """
    return {
        K.ASSET: AssetProjector(),
        K.INCOME: IncomeProjector(),
        K.COMMITMENT: CommitmentProjector(),
        K.EVENT: EventProjector(),
    }
