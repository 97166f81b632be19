"""
Tests for the asset valuation projector.
"""

import numpy as np
import pytest

from finplanlab.core.context import ProjectionContext, year_range
from finplanlab.core.diagnostics import Severity, WarningType
from finplanlab.core.entities import (
    Asset,
    AssumptionOverride,
    Commitment,
    Event,
    FinancialPlan,
    Income,
    Loan,
    PlanAssumptions,
    ValueOverride,
)
from finplanlab.projectors import AssetProjector, linked_flow_series


def _ctx(plan=None, start=2024, end=2026, overrides=(), inflation=0.0):
    return ProjectionContext(
        years=year_range(start, end),
        assumptions=PlanAssumptions(inflation_rate=inflation),
        overrides=list(overrides),
        plan=plan,
    )


def _asset(**kwargs):
    kwargs.setdefault("type", "ISA")
    kwargs.setdefault("current_value", 10000)
    kwargs.setdefault("growth_rate", 0.0)
    return Asset(id="isa", name="ISA", **kwargs)


class TestValuation:
    """Compounding, inflation and manual overrides."""

    def test_seeded_with_current_value(self):
        item = AssetProjector().project(_asset(growth_rate=10.0), _ctx())

        assert item.kind == "asset"
        assert item.category == "ISA"
        np.testing.assert_allclose(item.values, [10000, 11000, 12100])

    def test_inflation_reduces_growth(self):
        item = AssetProjector().project(_asset(growth_rate=5.0), _ctx(inflation=3.0))
        assert item.value_at(2025) == pytest.approx(10200)

    def test_category_default_growth(self):
        item = AssetProjector().project(_asset(growth_rate=None, type="Property"), _ctx(end=2025))
        assert item.value_at(2025) == pytest.approx(10400)

    def test_manual_override_replaces_value(self):
        asset = _asset(growth_rate=5.0, value_overrides=[ValueOverride(year=2025, value=75000)])
        item = AssetProjector().project(asset, _ctx())

        assert item.value_at(2025) == 75000
        assert item.value_at(2026) == pytest.approx(78750)

    def test_manual_override_in_start_year(self):
        asset = _asset(value_overrides=[ValueOverride(year=2024, value=500)])
        item = AssetProjector().project(asset, _ctx())
        np.testing.assert_allclose(item.values, [500, 500, 500])

    def test_category_override_window(self):
        override = AssumptionOverride(
            entity_type="category",
            category="ISA",
            override_type="growth",
            value=-50.0,
            start_year=2025,
            end_year=2025,
        )
        item = AssetProjector().project(_asset(growth_rate=10.0), _ctx(overrides=[override]))

        np.testing.assert_allclose(item.values, [10000, 5000, 5500])
        assert item.has_overrides


class TestLinkedFlows:
    """Income, commitments and events routed through the asset."""

    def _plan(self):
        return FinancialPlan(
            id="p",
            name="P",
            assets=[_asset()],
            income=[
                Income(
                    id="bonus",
                    name="Bonus",
                    amount=1000,
                    frequency="annually",
                    start_year=2024,
                    destination="asset",
                    destination_asset_id="isa",
                    growth_rate=0.0,
                ),
                Income(id="salary", name="Salary", amount=99999, frequency="annually", start_year=2024),
            ],
            commitments=[
                Commitment(
                    id="fees",
                    name="Fees",
                    amount=250,
                    frequency="annually",
                    start_year=2024,
                    source="asset",
                    source_asset_id="isa",
                )
            ],
            events=[Event(id="gift", name="Gift", year=2026, amount=2000, type="Windfall", asset_id="isa")],
        )

    def test_linked_flow_series(self):
        plan = self._plan()
        np.testing.assert_allclose(linked_flow_series(plan.assets[0], _ctx(plan)), [750, 750, 2750])

    def test_flows_applied_after_first_year(self):
        plan = self._plan()
        item = AssetProjector().project(plan.assets[0], _ctx(plan))
        np.testing.assert_allclose(item.values, [10000, 10750, 13500])

    def test_no_plan_no_flows(self):
        np.testing.assert_allclose(linked_flow_series(_asset(), _ctx()), [0, 0, 0])


class TestWarnings:
    """Clamping and unrealistic-growth diagnostics."""

    def _drained(self, asset):
        plan = FinancialPlan(
            id="p",
            name="P",
            assets=[asset],
            events=[Event(id="bill", name="Bill", year=2025, amount=-50000, asset_id="isa")],
        )
        return AssetProjector().project(asset, _ctx(plan))

    def test_negative_balance_clamped(self):
        item = self._drained(_asset())

        np.testing.assert_allclose(item.values, [10000, 0, 0])
        assert len(item.warnings) == 1
        warning = item.warnings[0]
        assert warning.type == WarningType.NEGATIVE_BALANCE
        assert warning.severity == Severity.HIGH
        assert warning.year == 2025
        assert warning.item_id == "isa"
        assert warning.message == "ISA balance went negative and was reset to zero"

    def test_cash_may_go_negative(self):
        item = self._drained(_asset(type="Cash"))

        np.testing.assert_allclose(item.values, [10000, -40000, -40000])
        assert item.warnings == []

    def test_manual_override_year_is_not_clamped(self):
        item = self._drained(_asset(value_overrides=[ValueOverride(year=2025, value=1234)]))

        assert item.value_at(2025) == 1234
        assert item.warnings == []

    def test_unrealistic_growth(self):
        item = AssetProjector().project(_asset(type="Crypto", growth_rate=75.0), _ctx(inflation=5.0))

        assert [w.year for w in item.warnings] == [2025, 2026]
        assert item.warnings[0].type == WarningType.UNREALISTIC_GROWTH
        assert item.warnings[0].severity == Severity.MEDIUM
        assert item.warnings[0].message == "ISA has unrealistic growth rate: 70.0%"

    def test_threshold_is_exclusive(self):
        item = AssetProjector().project(_asset(growth_rate=50.0), _ctx())
        assert item.warnings == []


def test_loan_balances_attached():
    loan = Loan(id="m", name="Mortgage", amount=1000, interest_rate=0.0, term_years=1, start_year=2024)
    item = AssetProjector().project(_asset(type="Property", loans=[loan]), _ctx())

    np.testing.assert_allclose(item.loan_balances, [1000, 0, 0])
    assert item.loan_balance_at(2024) == 1000
