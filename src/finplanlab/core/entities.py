"""
Plan entities consumed by the projection engine.

Every projectable entity carries an explicit ``kind`` discriminator that is
fixed at construction time. The resolver and the engine dispatch on ``kind``
and never infer the entity type from the fields that happen to be present.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date

from .errors import ConfigError
from .kinds import (
    COMMITMENT_OVERRIDE_CATEGORY,
    COMMITMENTS_CATEGORY,
    FLOW_ASSET,
    FLOW_CASH,
    FREQUENCY_MULTIPLIERS,
    INCOME_CATEGORY,
    INCOME_OVERRIDE_CATEGORY,
    AssetCategory,
    K,
)

DEFAULT_ASSET_GROWTH_RATES = {
    AssetCategory.ISA: 7.0,
    AssetCategory.SIPP: 7.0,
    AssetCategory.PROPERTY: 4.0,
    AssetCategory.CASH: 1.0,
    AssetCategory.PREMIUM_BONDS: 1.0,
    AssetCategory.INVESTMENT: 6.0,
    AssetCategory.CRYPTO: 15.0,
    AssetCategory.OTHER: 3.0,
}

DEFAULT_TAX_RATES = {
    "income": 20.0,
    "capital_gains": 20.0,
    "inheritance_tax": 40.0,
}

# Used when the growth table has neither the category nor an "Other" entry
FALLBACK_ASSET_GROWTH_RATE = 3.0


def _coerce_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as exc:
        raise ConfigError(f"Invalid date '{value}'") from exc


def normalize_frequency(frequency: str) -> str:
    """Lower-case a frequency label and check it is one of the known periods."""
    normalized = str(frequency).strip().lower()
    if normalized not in FREQUENCY_MULTIPLIERS:
        raise ConfigError(
            f"Unknown frequency '{frequency}'; expected one of "
            f"{', '.join(FREQUENCY_MULTIPLIERS)}"
        )
    return normalized


@dataclass
class Person:
    """A household member. Read-only to the engine."""

    id: str
    name: str
    date_of_birth: date
    sex: str = "M"

    def __post_init__(self) -> None:
        self.date_of_birth = _coerce_date(self.date_of_birth)


@dataclass
class ValueOverride:
    """Manual asset value for one year; later years compound from it."""

    year: int
    value: float
    reason: str | None = None


@dataclass
class Loan:
    """
    Loan secured against an asset.

    Loans never change the gross asset value. Their projected balances are
    subtracted from the snapshot's net worth.

    Attributes:
        amount: Principal at the start of ``start_year``
        interest_rate: Annual interest rate in percent (e.g. 3.5)
        term_years: Amortization term in years
        start_year: First year in which the balance is outstanding
        monthly_payment: Optional fixed payment; annuity payment if omitted
    """

    id: str
    name: str
    amount: float
    interest_rate: float
    term_years: int
    start_year: int
    monthly_payment: float | None = None

    def payment(self) -> float:
        """Monthly payment, derived from the annuity formula when not given."""
        if self.monthly_payment is not None:
            return float(self.monthly_payment)
        n = int(self.term_years) * 12
        if n <= 0:
            return float(self.amount)
        r = float(self.interest_rate) / 100.0 / 12.0
        if r == 0.0:
            return float(self.amount) / n
        growth = (1 + r) ** n
        return float(self.amount) * r * growth / (growth - 1)


@dataclass
class Asset:
    """
    Asset held by one or more people.

    ``type`` is the asset category (ISA, SIPP, Property, Cash, ...). It selects
    the plan default growth rate and is the key for category overrides.
    """

    id: str
    name: str
    type: str
    current_value: float
    owner_ids: list[str] = field(default_factory=list)
    growth_rate: float | None = None
    inflation_rate: float | None = None
    loans: list[Loan] = field(default_factory=list)
    value_overrides: list[ValueOverride] = field(default_factory=list)
    kind: str = field(default=K.ASSET, init=False)

    @property
    def category(self) -> str:
        return self.type

    @property
    def totals_category(self) -> str:
        return self.type

    def value_override_for(self, year: int) -> ValueOverride | None:
        """First manual override recorded for ``year``, if any."""
        for override in self.value_overrides:
            if int(override.year) == year:
                return override
        return None


@dataclass
class CashFlowItem:
    """
    Shared shape of recurring income and commitments.

    ``amount`` is per ``frequency`` period. The item is active in every year of
    ``[start_year, end_year]``; an unset ``end_year`` means open-ended.
    """

    id: str
    name: str
    amount: float
    frequency: str
    start_year: int
    end_year: int | None = None
    owner_ids: list[str] = field(default_factory=list)
    growth_rate: float | None = None
    inflation_rate: float | None = None
    kind: str = field(default="", init=False)

    def __post_init__(self) -> None:
        self.frequency = normalize_frequency(self.frequency)

    def annual_amount(self) -> float:
        """Per-period amount converted to a yearly figure."""
        return float(self.amount) * FREQUENCY_MULTIPLIERS[self.frequency]

    def is_active(self, year: int) -> bool:
        if year < self.start_year:
            return False
        return self.end_year is None or year <= self.end_year


@dataclass
class Income(CashFlowItem):
    """Recurring income paid into cash, an asset, or outside the plan."""

    destination: str = FLOW_CASH
    destination_asset_id: str | None = None
    kind: str = field(default=K.INCOME, init=False)

    @property
    def category(self) -> str:
        return INCOME_OVERRIDE_CATEGORY

    @property
    def totals_category(self) -> str:
        return INCOME_CATEGORY

    @property
    def linked_asset_id(self) -> str | None:
        if self.destination == FLOW_ASSET:
            return self.destination_asset_id
        return None


@dataclass
class Commitment(CashFlowItem):
    """Recurring outgoing paid from cash, an asset, or outside the plan."""

    source: str = FLOW_CASH
    source_asset_id: str | None = None
    kind: str = field(default=K.COMMITMENT, init=False)

    @property
    def category(self) -> str:
        return COMMITMENT_OVERRIDE_CATEGORY

    @property
    def totals_category(self) -> str:
        return COMMITMENTS_CATEGORY

    @property
    def linked_asset_id(self) -> str | None:
        if self.source == FLOW_ASSET:
            return self.source_asset_id
        return None


@dataclass
class Event:
    """
    Life event with a signed amount.

    A one-off event contributes only in ``year``. A recurring event contributes
    in every year from ``year`` through ``recurring_end_year`` (open-ended when
    unset).
    """

    id: str
    name: str
    year: int
    amount: float
    type: str = "Expense"
    is_recurring: bool = False
    recurring_end_year: int | None = None
    asset_id: str | None = None
    affected_person_ids: list[str] = field(default_factory=list)
    description: str | None = None
    kind: str = field(default=K.EVENT, init=False)

    @property
    def category(self) -> str:
        return self.type

    @property
    def totals_category(self) -> str:
        return self.type

    @property
    def linked_asset_id(self) -> str | None:
        return self.asset_id

    def occurs_in(self, year: int) -> bool:
        if not self.is_recurring:
            return year == self.year
        if year < self.year:
            return False
        return self.recurring_end_year is None or year <= self.recurring_end_year


@dataclass
class PlanAssumptions:
    """
    Plan-wide default rates (percentages) and display-only labels.

    ``retirement_age``, ``life_expectancy`` and ``tax_rates`` are not used by
    the projection math.
    """

    inflation_rate: float = 2.5
    income_growth_rate: float = 3.0
    commitment_growth_rate: float = 2.5
    asset_growth_rates: dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_ASSET_GROWTH_RATES)
    )
    retirement_age: int = 67
    life_expectancy: int = 85
    tax_rates: dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_TAX_RATES)
    )

    def asset_growth_rate(self, category: str) -> float:
        """Default growth for an asset category, falling back to "Other"."""
        if category in self.asset_growth_rates:
            return float(self.asset_growth_rates[category])
        if AssetCategory.OTHER in self.asset_growth_rates:
            return float(self.asset_growth_rates[AssetCategory.OTHER])
        return FALLBACK_ASSET_GROWTH_RATE


@dataclass
class AssumptionOverride:
    """
    Rate correction for one item or for a whole category.

    ``entity_type`` is one of asset/income/commitment (with ``entity_id``) or
    category (with ``category``). The optional ``[start_year, end_year]``
    window limits the years in which the override applies.
    """

    entity_type: str
    override_type: str
    value: float
    entity_id: str | None = None
    category: str | None = None
    start_year: int | None = None
    end_year: int | None = None
    description: str = ""
    id: str = ""

    def applies_in(self, year: int) -> bool:
        if self.start_year is not None and year < self.start_year:
            return False
        return self.end_year is None or year <= self.end_year

    def targets_item(self, item) -> bool:
        return self.entity_type == item.kind and self.entity_id == item.id

    def targets_category(self, item) -> bool:
        return self.entity_type == K.CATEGORY and self.category == item.category


@dataclass
class Scenario:
    """
    Named alternative assumptions/overrides pairing.

    ``None`` for either field means "inherit the plan's own".
    """

    id: str
    name: str
    assumptions: PlanAssumptions | None = None
    overrides: list[AssumptionOverride] | None = None
    is_base: bool = False
    description: str | None = None


@dataclass
class FinancialPlan:
    """The full household model handed to the engine."""

    id: str
    name: str
    people: list[Person] = field(default_factory=list)
    assets: list[Asset] = field(default_factory=list)
    income: list[Income] = field(default_factory=list)
    commitments: list[Commitment] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    assumptions: PlanAssumptions = field(default_factory=PlanAssumptions)
    overrides: list[AssumptionOverride] = field(default_factory=list)
    scenarios: list[Scenario] = field(default_factory=list)
    active_scenario_id: str | None = None

    def entities(self) -> Iterator:
        """All projectable entities, assets first, then income, commitments, events."""
        yield from self.assets
        yield from self.income
        yield from self.commitments
        yield from self.events

    def find_item(self, item_id: str):
        for entity in self.entities():
            if entity.id == item_id:
                return entity
        return None

    def get_scenario(self, scenario_id: str) -> Scenario:
        for scenario in self.scenarios:
            if scenario.id == scenario_id:
                return scenario
        raise ConfigError(f"Scenario '{scenario_id}' not found in plan '{self.id}'")

    def active_scenario(self) -> Scenario | None:
        if self.active_scenario_id is None:
            return None
        return self.get_scenario(self.active_scenario_id)

    def base_scenario(self) -> Scenario | None:
        bases = [s for s in self.scenarios if s.is_base]
        if len(bases) > 1:
            raise ConfigError(
                f"Plan '{self.id}' marks {len(bases)} scenarios as base: "
                f"{', '.join(s.id for s in bases)}"
            )
        return bases[0] if bases else None

    def effective_inputs(
        self, scenario: Scenario | None = None
    ) -> tuple[PlanAssumptions, list[AssumptionOverride], str]:
        """
        Assumptions and overrides in force for a projection.

        An explicit scenario wins over the plan's active scenario, which wins
        over the plan's own settings.

        Returns:
            (assumptions, overrides, label) where label names the source
        """
        if scenario is None:
            scenario = self.active_scenario()
        if scenario is None:
            return self.assumptions, list(self.overrides), f"plan:{self.id}"
        assumptions = (
            scenario.assumptions
            if scenario.assumptions is not None
            else self.assumptions
        )
        overrides = (
            scenario.overrides if scenario.overrides is not None else self.overrides
        )
        return assumptions, list(overrides), f"scenario:{scenario.id}"
