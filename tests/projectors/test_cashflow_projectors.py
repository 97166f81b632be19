"""
Tests for the recurring income and commitment projectors.
"""

import numpy as np
import pytest

from finplanlab.core.context import ProjectionContext, year_range
from finplanlab.core.diagnostics import Severity, WarningType
from finplanlab.core.entities import AssumptionOverride, Commitment, Income, PlanAssumptions
from finplanlab.projectors import CommitmentProjector, IncomeProjector, project_annual_amounts


def _ctx(start=2024, end=2027, overrides=(), **assumptions):
    return ProjectionContext(
        years=year_range(start, end),
        assumptions=PlanAssumptions(**assumptions),
        overrides=list(overrides),
    )


def _income(**kwargs):
    kwargs.setdefault("amount", 1000)
    kwargs.setdefault("frequency", "annually")
    kwargs.setdefault("start_year", 2024)
    return Income(id="salary", name="Salary", **kwargs)


class TestIncomeProjector:
    """Income compounds by growth from its own start year."""

    def test_growth_compounding(self):
        item = IncomeProjector().project(_income(growth_rate=10.0), _ctx())

        assert item.kind == "income"
        assert item.category == "Income"
        np.testing.assert_allclose(item.values, [1000, 1100, 1210, 1331])

    def test_plan_income_growth(self):
        item = IncomeProjector().project(_income(), _ctx(income_growth_rate=2.0))
        assert item.value_at(2025) == pytest.approx(1020)

    def test_late_start_is_zero_before_and_unscaled_at_start(self):
        item = IncomeProjector().project(_income(start_year=2026, growth_rate=10.0), _ctx())
        np.testing.assert_allclose(item.values, [0, 0, 1000, 1100])

    def test_item_started_before_range(self):
        """Elapsed years count from the item's own start, not the range start."""
        item = IncomeProjector().project(_income(start_year=2022, growth_rate=10.0), _ctx(end=2024))
        assert item.value_at(2024) == pytest.approx(1210)

    def test_end_year_inclusive(self):
        item = IncomeProjector().project(_income(end_year=2025, growth_rate=0.0), _ctx())
        np.testing.assert_allclose(item.values, [1000, 1000, 0, 0])

    def test_rate_resolved_per_year(self):
        """A one-year override rescales that year only."""
        override = AssumptionOverride(
            entity_type="income",
            entity_id="salary",
            override_type="growth",
            value=20.0,
            start_year=2026,
            end_year=2026,
        )
        item = IncomeProjector().project(_income(growth_rate=10.0), _ctx(overrides=[override]))

        assert item.value_at(2026) == pytest.approx(1000 * 1.2**2)
        assert item.value_at(2027) == pytest.approx(1000 * 1.1**3)
        assert item.has_overrides

    def test_negative_income_warns_without_clamping(self):
        item = IncomeProjector().project(_income(amount=-100, growth_rate=0.0), _ctx(end=2025))

        np.testing.assert_allclose(item.values, [-100, -100])
        assert [w.type for w in item.warnings] == [WarningType.NEGATIVE_INCOME] * 2
        assert item.warnings[0].severity == Severity.MEDIUM

    def test_project_annual_amounts_is_positive(self):
        amounts = project_annual_amounts(_income(amount=500, frequency="monthly"), "growth", _ctx(end=2024))
        np.testing.assert_allclose(amounts, [6000])


class TestCommitmentProjector:
    """Commitments compound by inflation and are stored negative."""

    def _rent(self, **kwargs):
        kwargs.setdefault("frequency", "monthly")
        return Commitment(id="rent", name="Rent", amount=1000, start_year=2024, **kwargs)

    def test_stored_negative(self):
        item = CommitmentProjector().project(self._rent(), _ctx(end=2025, inflation_rate=0.0))

        assert item.category == "Commitments"
        np.testing.assert_allclose(item.values, [-12000, -12000])

    def test_inflation_compounding(self):
        item = CommitmentProjector().project(self._rent(), _ctx(end=2026, inflation_rate=2.5))
        assert item.value_at(2026) == pytest.approx(-12000 * 1.025**2)

    def test_declared_inflation_wins(self):
        item = CommitmentProjector().project(self._rent(inflation_rate=5.0), _ctx(end=2025))
        assert item.value_at(2025) == pytest.approx(-12600)

    def test_growth_rate_is_not_used(self):
        item = CommitmentProjector().project(
            self._rent(growth_rate=50.0), _ctx(end=2025, inflation_rate=0.0)
        )
        assert item.value_at(2025) == pytest.approx(-12000)

    def test_inactive_years_are_zero(self):
        item = CommitmentProjector().project(self._rent(end_year=2024), _ctx(end=2025))

        assert item.value_at(2025) == 0.0
        assert not np.signbit(item.values[1])

    def test_negative_commitment_warns(self):
        rebate = Commitment(id="r", name="Rebate", amount=-50, frequency="annually", start_year=2024)
        item = CommitmentProjector().project(rebate, _ctx(end=2024))

        assert item.value_at(2024) == 50
        assert item.warnings[0].type == WarningType.NEGATIVE_COMMITMENT
