"""
Side-by-side comparison of a plan's scenarios.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

from .engine import ProjectionEngine
from .entities import FinancialPlan, Scenario
from .errors import ConfigError
from .results import ProjectionSummary

COMPARED_ASSUMPTIONS = [
    "inflation_rate",
    "income_growth_rate",
    "commitment_growth_rate",
    "retirement_age",
    "life_expectancy",
]


@dataclass
class ScenarioComparison:
    """
    Projections of every scenario measured against the base scenario.

    Attributes:
        base_id: Scenario used as the reference
        summaries: Scenario id -> projection
        assumptions: Assumption rows x scenario id columns
        net_worth_deltas: Scenario id -> final-year net worth minus the base's
    """

    base_id: str
    summaries: dict[str, ProjectionSummary]
    assumptions: pd.DataFrame
    net_worth_deltas: dict[str, float] = field(default_factory=dict)

    def net_worth_frame(self) -> pd.DataFrame:
        """Net worth per year (rows) for each scenario (columns)."""
        return pd.DataFrame(
            {sid: s.to_frame()["net_worth"] for sid, s in self.summaries.items()}
        )


def _pick_base(plan: FinancialPlan) -> Scenario:
    base = plan.base_scenario()
    return base if base is not None else plan.scenarios[0]


def compare_scenarios(
    plan: FinancialPlan,
    start_year: int | None = None,
    end_year: int | None = None,
    engine: ProjectionEngine | None = None,
) -> ScenarioComparison:
    """
    Project every scenario of ``plan`` and compare it to the base scenario.

    The base is the scenario flagged ``is_base``, or the first scenario when
    none is flagged.

    Raises:
        ConfigError: If the plan has no scenarios or more than one base
    """
    if not plan.scenarios:
        raise ConfigError(f"Plan '{plan.id}' has no scenarios to compare")
    engine = engine or ProjectionEngine()
    base = _pick_base(plan)
    ordered = [base] + [s for s in plan.scenarios if s.id != base.id]

    summaries = {
        s.id: engine.calculate_projections(plan, s, start_year, end_year)
        for s in ordered
    }
    table = {}
    for scenario in ordered:
        assumptions, _, _ = plan.effective_inputs(scenario)
        table[scenario.id] = [getattr(assumptions, name) for name in COMPARED_ASSUMPTIONS]
    frame = pd.DataFrame(table, index=pd.Index(COMPARED_ASSUMPTIONS, name="assumption"))

    base_final = summaries[base.id].snapshots[-1].net_worth
    deltas = {
        sid: summary.snapshots[-1].net_worth - base_final
        for sid, summary in summaries.items()
        if sid != base.id
    }
    return ScenarioComparison(
        base_id=base.id, summaries=summaries, assumptions=frame, net_worth_deltas=deltas
    )
