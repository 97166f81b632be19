"""
Assumption resolution: which growth or inflation rate applies to an item in a year.

Resolution walks an explicit, ordered chain of rules and the first rule that
produces a rate wins:

1. ``ItemOverrideRule``      - override aimed at this item (kind, id, rate kind, window)
2. ``CategoryOverrideRule``  - override aimed at the item's category
3. ``ItemDeclaredRule``      - the item's own ``growth_rate`` / ``inflation_rate``
4. ``PlanDefaultRule``       - plan or scenario defaults

Within one rule, overrides are scanned in list order, so the earliest matching
override wins. All functions here are pure.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from .entities import (
    Asset,
    AssumptionOverride,
    Commitment,
    Income,
    PlanAssumptions,
)
from .errors import ConfigError
from .kinds import K, RateKind

RateBearing = Union[Asset, Income, Commitment]

ITEM_OVERRIDE = "Item Override"
CATEGORY_OVERRIDE = "Category Override"
ITEM_SPECIFIC = "Item Specific"
PLAN_DEFAULT = "Plan Default"


def default_assumptions() -> PlanAssumptions:
    """Fresh plan defaults (inflation 2.5%, income growth 3%, ...)."""
    return PlanAssumptions()


class RateRule:
    """One tier of the precedence chain."""

    source: str = ""

    def match(
        self,
        item: RateBearing,
        rate_kind: str,
        year: int,
        assumptions: PlanAssumptions,
        overrides: Sequence[AssumptionOverride],
    ) -> float | None:
        """Return the rate this tier provides, or None to fall through."""
        raise NotImplementedError


class ItemOverrideRule(RateRule):
    source = ITEM_OVERRIDE

    def match(self, item, rate_kind, year, assumptions, overrides):
        for override in overrides:
            if (
                override.targets_item(item)
                and override.override_type == rate_kind
                and override.applies_in(year)
            ):
                return float(override.value)
        return None


class CategoryOverrideRule(RateRule):
    source = CATEGORY_OVERRIDE

    def match(self, item, rate_kind, year, assumptions, overrides):
        for override in overrides:
            if (
                override.targets_category(item)
                and override.override_type == rate_kind
                and override.applies_in(year)
            ):
                return float(override.value)
        return None


class ItemDeclaredRule(RateRule):
    source = ITEM_SPECIFIC

    def match(self, item, rate_kind, year, assumptions, overrides):
        if rate_kind == RateKind.GROWTH and item.growth_rate is not None:
            return float(item.growth_rate)
        if rate_kind == RateKind.INFLATION and item.inflation_rate is not None:
            return float(item.inflation_rate)
        return None


class PlanDefaultRule(RateRule):
    source = PLAN_DEFAULT

    def match(self, item, rate_kind, year, assumptions, overrides):
        if rate_kind == RateKind.INFLATION:
            return float(assumptions.inflation_rate)
        if item.kind == K.ASSET:
            return assumptions.asset_growth_rate(item.category)
        if item.kind == K.INCOME:
            return float(assumptions.income_growth_rate)
        return float(assumptions.commitment_growth_rate)


RATE_PRECEDENCE: tuple[RateRule, ...] = (
    ItemOverrideRule(),
    CategoryOverrideRule(),
    ItemDeclaredRule(),
    PlanDefaultRule(),
)

_SOURCE_RANK = {rule.source: rank for rank, rule in enumerate(RATE_PRECEDENCE)}


def _check_item(item, rate_kind: str) -> None:
    if item.kind not in K.rate_bearing_kinds():
        raise ConfigError(f"Items of kind '{item.kind}' carry no rates")
    if rate_kind not in RateKind.resolvable():
        raise ConfigError(
            f"Cannot resolve '{rate_kind}' rates; expected one of "
            f"{', '.join(RateKind.resolvable())}"
        )


def resolve_rate_with_source(
    item: RateBearing,
    rate_kind: str,
    year: int,
    assumptions: PlanAssumptions,
    overrides: Sequence[AssumptionOverride],
    rules: Sequence[RateRule] = RATE_PRECEDENCE,
) -> tuple[float, str]:
    """
    Resolve a rate and report which tier produced it.

    Args:
        item: Asset, income or commitment
        rate_kind: ``"growth"`` or ``"inflation"``
        year: Projection year (checked against override windows)
        assumptions: Plan or scenario defaults
        overrides: Plan or scenario overrides, in precedence order
        rules: Precedence chain (defaults to ``RATE_PRECEDENCE``)

    Returns:
        (rate in percent, source label)

    Raises:
        ConfigError: For events, unsupported rate kinds, or a custom chain that
            produced nothing
    """
    _check_item(item, rate_kind)
    for rule in rules:
        rate = rule.match(item, rate_kind, year, assumptions, overrides)
        if rate is not None:
            return rate, rule.source
    raise ConfigError(
        f"No rule resolved a {rate_kind} rate for '{item.id}' in {year}"
    )


def resolve_rate(
    item: RateBearing,
    rate_kind: str,
    year: int,
    assumptions: PlanAssumptions,
    overrides: Sequence[AssumptionOverride],
) -> float:
    """Effective growth or inflation rate (percent) for ``item`` in ``year``."""
    rate, _ = resolve_rate_with_source(item, rate_kind, year, assumptions, overrides)
    return rate


def get_applicable_overrides(
    item: RateBearing, year: int, overrides: Sequence[AssumptionOverride]
) -> list[AssumptionOverride]:
    """Overrides aimed at the item or its category whose window contains ``year``."""
    if item.kind not in K.rate_bearing_kinds():
        return []
    return [
        o
        for o in overrides
        if (o.targets_item(item) or o.targets_category(item)) and o.applies_in(year)
    ]


def has_overrides(item, overrides: Sequence[AssumptionOverride]) -> bool:
    """Whether any override targets the item or its category (highlight flag)."""
    if item.kind not in K.rate_bearing_kinds():
        return False
    return any(o.targets_item(item) or o.targets_category(item) for o in overrides)


@dataclass(frozen=True)
class RatePreview:
    """Rates in force for one item and year, with the tier that produced them."""

    inflation: float
    growth: float
    source: str
    inflation_source: str
    growth_source: str


def get_current_rates(
    item: RateBearing,
    year: int,
    assumptions: PlanAssumptions,
    overrides: Sequence[AssumptionOverride],
) -> RatePreview:
    """
    Preview helper for the assumptions screen.

    ``source`` is the highest-precedence tier that produced either rate.
    """
    inflation, inflation_source = resolve_rate_with_source(
        item, RateKind.INFLATION, year, assumptions, overrides
    )
    growth, growth_source = resolve_rate_with_source(
        item, RateKind.GROWTH, year, assumptions, overrides
    )
    source = min(inflation_source, growth_source, key=_SOURCE_RANK.__getitem__)
    return RatePreview(
        inflation=inflation,
        growth=growth,
        source=source,
        inflation_source=inflation_source,
        growth_source=growth_source,
    )
