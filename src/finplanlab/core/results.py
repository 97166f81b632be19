"""
Results and output structures for FinPlanLab.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from .diagnostics import ProjectionWarning, warnings_by_severity
from .kinds import K

SUMMARY_COLUMNS = [
    "total_assets",
    "total_income",
    "total_commitments",
    "event_impact",
    "cash_flow",
    "gross_assets",
    "total_loans",
    "net_worth",
    "warnings",
]


@dataclass
class ProjectionItem:
    """
    One entity's projected series plus metadata.

    Attributes:
        id: Entity id
        name: Entity name
        kind: Entity kind ('asset', 'income', 'commitment', 'event')
        category: Category label used for totals (asset type, 'Income',
            'Commitments', or the event type)
        owner_ids: Owning (or affected) people
        years: Year index the series is aligned with
        values: Projected value per year. Commitments are stored negative.
        warnings: Warnings raised while projecting, across all years
        has_overrides: Whether any override targets the item or its category
        loan_balances: Outstanding loan balance per year (assets only)

    Note:
        ``values`` always start at the plan start year; years outside the
        entity's activation window hold zero.
    """

    id: str
    name: str
    kind: str
    category: str
    owner_ids: list[str]
    years: np.ndarray
    values: np.ndarray
    warnings: list[ProjectionWarning] = field(default_factory=list)
    has_overrides: bool = False
    loan_balances: np.ndarray | None = None

    def _offset(self, year: int) -> int | None:
        if len(self.years) == 0:
            return None
        offset = year - int(self.years[0])
        if 0 <= offset < len(self.years):
            return offset
        return None

    def value_at(self, year: int) -> float:
        """Projected value in ``year``; 0.0 outside the projected range."""
        offset = self._offset(year)
        return 0.0 if offset is None else float(self.values[offset])

    def loan_balance_at(self, year: int) -> float:
        if self.loan_balances is None:
            return 0.0
        offset = self._offset(year)
        return 0.0 if offset is None else float(self.loan_balances[offset])

    @property
    def yearly_values(self) -> dict[int, float]:
        return {int(y): float(v) for y, v in zip(self.years, self.values)}

    def warnings_for(self, year: int) -> list[ProjectionWarning]:
        return [w for w in self.warnings if w.year == year]

    def is_silent(self) -> bool:
        """True when the item is zero in every projected year."""
        return not np.any(self.values)


@dataclass
class YearlySnapshot:
    """
    One year's aggregated financial picture.

    Attributes:
        total_assets: Sum of asset values (gross, loans not subtracted)
        total_income: Sum of income values
        total_commitments: Sum of absolute commitment values (positive)
        event_impact: Signed sum of event values
        cash_flow: ``total_income - total_commitments + event_impact``
        gross_assets: Same as ``total_assets``
        total_loans: Outstanding loan balances secured on assets
        net_worth: ``total_assets - total_loans``
        assets_by_category: Asset category -> summed value
        items: Projection items that took part in the snapshot
        warnings: Warnings stamped with this snapshot's year only
    """

    year: int
    total_assets: float
    total_income: float
    total_commitments: float
    event_impact: float
    cash_flow: float
    gross_assets: float
    total_loans: float
    net_worth: float
    assets_by_category: dict[str, float]
    items: list[ProjectionItem]
    warnings: list[ProjectionWarning]

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "total_assets": self.total_assets,
            "total_income": self.total_income,
            "total_commitments": self.total_commitments,
            "event_impact": self.event_impact,
            "cash_flow": self.cash_flow,
            "gross_assets": self.gross_assets,
            "total_loans": self.total_loans,
            "net_worth": self.net_worth,
            "assets_by_category": dict(self.assets_by_category),
            "warnings": [w._asdict() for w in self.warnings],
        }


@dataclass
class ProjectionSummary:
    """
    Full projection for a year range.

    Attributes:
        start_year: First projected year
        end_year: Last projected year (inclusive)
        snapshots: One snapshot per year, ascending
        total_warnings: Sum of per-snapshot warning counts
        category_totals: category -> {year -> summed item value}
        items: Projection items shared by all snapshots
        source: Label of the assumptions in force ('plan:<id>' or 'scenario:<id>')
    """

    start_year: int
    end_year: int
    snapshots: list[YearlySnapshot]
    total_warnings: int
    category_totals: dict[str, dict[int, float]]
    items: list[ProjectionItem] = field(default_factory=list)
    source: str = ""

    def __iter__(self) -> Iterator[YearlySnapshot]:
        return iter(self.snapshots)

    def __len__(self) -> int:
        return len(self.snapshots)

    def snapshot(self, year: int) -> YearlySnapshot:
        offset = year - self.start_year
        if not 0 <= offset < len(self.snapshots):
            raise KeyError(f"Year {year} outside projection {self.start_year}-{self.end_year}")
        return self.snapshots[offset]

    def all_warnings(self) -> list[ProjectionWarning]:
        return [w for s in self.snapshots for w in s.warnings]

    def to_frame(self) -> pd.DataFrame:
        """Per-year totals as a DataFrame indexed by year."""
        rows = [
            {
                "year": s.year,
                "total_assets": s.total_assets,
                "total_income": s.total_income,
                "total_commitments": s.total_commitments,
                "event_impact": s.event_impact,
                "cash_flow": s.cash_flow,
                "gross_assets": s.gross_assets,
                "total_loans": s.total_loans,
                "net_worth": s.net_worth,
                "warnings": len(s.warnings),
            }
            for s in self.snapshots
        ]
        df = pd.DataFrame(rows, columns=["year"] + SUMMARY_COLUMNS)
        return df.set_index("year")

    def category_frame(self) -> pd.DataFrame:
        """Category totals with years as rows and categories as columns."""
        years = list(range(self.start_year, self.end_year + 1))
        data = {
            category: [by_year.get(y, 0.0) for y in years]
            for category, by_year in self.category_totals.items()
        }
        df = pd.DataFrame(data, index=pd.Index(years, name="year"))
        return df.astype(float)

    def items_frame(self) -> pd.DataFrame:
        """Item series with item ids as rows and years as columns."""
        years = list(range(self.start_year, self.end_year + 1))
        df = pd.DataFrame(
            [[item.value_at(y) for y in years] for item in self.items],
            index=pd.Index([item.id for item in self.items], name="item_id"),
            columns=years,
        )
        df.insert(0, "category", [item.category for item in self.items])
        df.insert(0, "kind", [item.kind for item in self.items])
        df.insert(0, "name", [item.name for item in self.items])
        return df

    def to_dict(self) -> dict:
        return {
            "start_year": self.start_year,
            "end_year": self.end_year,
            "source": self.source,
            "total_warnings": self.total_warnings,
            "snapshots": [s.to_dict() for s in self.snapshots],
            "category_totals": {
                category: {str(y): v for y, v in by_year.items()}
                for category, by_year in self.category_totals.items()
            },
        }


def aggregate_snapshot(year: int, items: Iterable[ProjectionItem]) -> YearlySnapshot:
    """
    Fold projected items into the totals for one year.

    Warnings are filtered to those stamped with ``year``.
    """
    items = list(items)
    total_assets = 0.0
    total_income = 0.0
    total_commitments = 0.0
    event_impact = 0.0
    total_loans = 0.0
    assets_by_category: dict[str, float] = {}
    warnings: list[ProjectionWarning] = []

    for item in items:
        value = item.value_at(year)
        if item.kind == K.ASSET:
            total_assets += value
            total_loans += item.loan_balance_at(year)
            assets_by_category[item.category] = (
                assets_by_category.get(item.category, 0.0) + value
            )
        elif item.kind == K.INCOME:
            total_income += value
        elif item.kind == K.COMMITMENT:
            total_commitments += abs(value)
        elif item.kind == K.EVENT:
            event_impact += value
        warnings.extend(item.warnings_for(year))

    return YearlySnapshot(
        year=year,
        total_assets=total_assets,
        total_income=total_income,
        total_commitments=total_commitments,
        event_impact=event_impact,
        cash_flow=total_income - total_commitments + event_impact,
        gross_assets=total_assets,
        total_loans=total_loans,
        net_worth=total_assets - total_loans,
        assets_by_category=assets_by_category,
        items=items,
        warnings=warnings,
    )


@dataclass
class CategoryGroup:
    items: list[ProjectionItem] = field(default_factory=list)
    total: float = 0.0


def group_projections_by_category(
    items: Iterable[ProjectionItem], year: int
) -> dict[str, CategoryGroup]:
    """Group items by category with the summed value for ``year``."""
    grouped: dict[str, CategoryGroup] = {}
    for item in items:
        group = grouped.setdefault(item.category, CategoryGroup())
        group.items.append(item)
        group.total += item.value_at(year)
    return grouped


def calculate_net_worth_progression(summary: ProjectionSummary) -> dict[int, float]:
    return {s.year: s.net_worth for s in summary.snapshots}


def calculate_cash_flow_progression(summary: ProjectionSummary) -> dict[int, float]:
    return {s.year: s.cash_flow for s in summary.snapshots}


def get_warnings_by_severity(
    summary: ProjectionSummary,
) -> dict[str, list[ProjectionWarning]]:
    return warnings_by_severity(summary.all_warnings())
