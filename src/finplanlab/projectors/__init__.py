"""
Item projector implementations for FinPlanLab.

Each projector turns one entity kind into a year-aligned value series:

- ``AssetProjector``: compounding valuation, clamping, manual overrides, loans
- ``IncomeProjector`` / ``CommitmentProjector``: annualized recurring flows
- ``EventProjector``: one-off and recurring life events

``default_projectors()`` maps entity kinds to fresh projector instances.
"""

from .asset import AssetProjector, linked_flow_series
from .cashflow import CommitmentProjector, IncomeProjector, project_annual_amounts
from .event import EventProjector, event_amounts
from .loan import project_loan_balance, project_loans
from .registry import default_projectors

__all__ = [
    "AssetProjector",
    "IncomeProjector",
    "CommitmentProjector",
    "EventProjector",
    "default_projectors",
    "project_annual_amounts",
    "event_amounts",
    "linked_flow_series",
    "project_loan_balance",
    "project_loans",
]
