"""
Property-based tests using Hypothesis for projection purity and clamping.
"""

import numpy as np
from hypothesis import given, settings
from hypothesis import strategies as st

from finplanlab.core.diagnostics import Severity, WarningType
from finplanlab.core.engine import calculate_projections
from finplanlab.core.entities import Asset, Commitment, FinancialPlan, PlanAssumptions

money = st.floats(min_value=0.0, max_value=1_000_000.0, allow_nan=False, allow_infinity=False).map(
    lambda x: round(x, 2)
)
rates = st.floats(min_value=-30.0, max_value=30.0, allow_nan=False, allow_infinity=False)
categories = st.sampled_from(["ISA", "SIPP", "Property", "Investment", "Crypto", "Other"])


def _plan(value, growth, outflow, category, inflation):
    return FinancialPlan(
        id="p",
        name="P",
        assets=[
            Asset(id="a", name="Asset", type=category, current_value=value, growth_rate=growth)
        ],
        commitments=[
            Commitment(
                id="draw",
                name="Drawdown",
                amount=outflow,
                frequency="annually",
                start_year=2024,
                source="asset",
                source_asset_id="a",
            )
        ],
        assumptions=PlanAssumptions(inflation_rate=inflation),
    )


class TestProjectionProperties:
    """Properties that hold for any well-formed single-asset plan."""

    @settings(max_examples=50, deadline=None)
    @given(
        value=money,
        growth=rates,
        outflow=money,
        category=categories,
        inflation=st.floats(min_value=0.0, max_value=10.0, allow_nan=False),
    )
    def test_non_cash_assets_never_negative(self, value, growth, outflow, category, inflation):
        summary = calculate_projections(_plan(value, growth, outflow, category, inflation), None, 2024, 2034)
        asset = summary.items[0]

        assert (asset.values >= 0).all()
        for warning in asset.warnings:
            if warning.type == WarningType.NEGATIVE_BALANCE:
                assert warning.severity == Severity.HIGH
                assert asset.value_at(warning.year) == 0.0

    @settings(max_examples=50, deadline=None)
    @given(value=money, growth=rates, outflow=money, category=categories)
    def test_one_clamp_warning_per_year_at_most(self, value, growth, outflow, category):
        summary = calculate_projections(_plan(value, growth, outflow, category, 0.0), None, 2024, 2034)

        for snapshot in summary.snapshots:
            clamps = [w for w in snapshot.warnings if w.type == WarningType.NEGATIVE_BALANCE]
            assert len(clamps) <= 1

    @settings(max_examples=25, deadline=None)
    @given(value=money, growth=rates, outflow=money, category=categories)
    def test_projection_is_pure(self, value, growth, outflow, category):
        plan = _plan(value, growth, outflow, category, 2.5)
        first = calculate_projections(plan, None, 2024, 2030)
        second = calculate_projections(plan, None, 2024, 2030)

        assert first.to_dict() == second.to_dict()
        assert all(np.array_equal(a.values, b.values) for a, b in zip(first.items, second.items))
