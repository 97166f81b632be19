"""
Projection engine: drives the year loop and aggregates yearly snapshots.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date

from .context import ProjectionContext, year_range
from .diagnostics import Severity
from .entities import AssumptionOverride, FinancialPlan, PlanAssumptions, Scenario
from .errors import ConfigError
from .interfaces import IItemProjector
from .kinds import KNOWN_CATEGORIES, K
from .results import ProjectionItem, ProjectionSummary, YearlySnapshot, aggregate_snapshot

logger = logging.getLogger(__name__)


@dataclass
class ProjectionConfig:
    """Configuration options for projection runs."""

    default_horizon_years: int = 50
    log_warnings: bool = False
    drop_silent_events: bool = True


class ProjectionEngine:
    """
    Orchestrates a projection.

    The engine:
    1. Picks the effective assumptions/overrides (scenario or plan)
    2. Projects every entity once over the full year range
    3. Aggregates one snapshot per year
    4. Accumulates per-category totals and counts warnings

    Projection is a pure function of its inputs. The engine holds only its
    projector mapping and configuration, so one engine can serve any number of
    plans.

    **Example Usage:**
        ```python
        from finplanlab import ProjectionEngine

        engine = ProjectionEngine()
        summary = engine.calculate_projections(plan, start_year=2024, end_year=2034)
        summary.to_frame()
        ```
    """

    def __init__(
        self,
        projectors: Mapping[str, IItemProjector] | None = None,
        config: ProjectionConfig | None = None,
    ):
        if projectors is None:
            from finplanlab.projectors.registry import default_projectors

            projectors = default_projectors()
        self.projectors = dict(projectors)
        self.config = config or ProjectionConfig()

    def _projector_for(self, entity) -> IItemProjector:
        try:
            return self.projectors[entity.kind]
        except KeyError:
            raise ConfigError(
                f"No projector registered for kind '{entity.kind}' ({entity.id})"
            ) from None

    def project_items(self, ctx: ProjectionContext) -> list[ProjectionItem]:
        """
        Project every entity of ``ctx.plan``.

        Events that are zero in every year of the range are omitted unless
        ``config.drop_silent_events`` is off.
        """
        items = []
        for entity in ctx.plan.entities():
            item = self._projector_for(entity).project(entity, ctx)
            if item is None:
                continue
            if self.config.drop_silent_events and item.kind == K.EVENT and item.is_silent():
                continue
            items.append(item)
        return items

    def build_snapshot(
        self,
        year: int,
        plan: FinancialPlan,
        assumptions: PlanAssumptions,
        overrides: Sequence[AssumptionOverride],
        start_year: int | None = None,
    ) -> YearlySnapshot:
        """
        Snapshot for a single year.

        Items are projected from ``start_year`` (default: ``year`` itself)
        through ``year`` so compounding state is carried forward.
        """
        if start_year is None:
            start_year = year
        if year < start_year:
            raise ConfigError(f"Snapshot year {year} precedes start year {start_year}")
        ctx = ProjectionContext(
            years=year_range(start_year, year),
            assumptions=assumptions,
            overrides=overrides,
            plan=plan,
        )
        return aggregate_snapshot(year, self.project_items(ctx))

    def calculate_projections(
        self,
        plan: FinancialPlan,
        scenario: Scenario | None = None,
        start_year: int | None = None,
        end_year: int | None = None,
    ) -> ProjectionSummary:
        """
        Project a plan over ``[start_year, end_year]``.

        Args:
            plan: Validated financial plan
            scenario: Scenario whose assumptions/overrides supersede the plan's
                (defaults to the plan's active scenario, if any)
            start_year: First year (default: current calendar year)
            end_year: Last year, inclusive (default: start + configured horizon)

        Returns:
            ProjectionSummary with one snapshot per year

        Raises:
            ConfigError: If ``end_year < start_year``
        """
        if start_year is None:
            start_year = date.today().year
        if end_year is None:
            end_year = start_year + self.config.default_horizon_years
        if end_year < start_year:
            raise ConfigError(f"end_year {end_year} precedes start_year {start_year}")

        assumptions, overrides, source = plan.effective_inputs(scenario)
        ctx = ProjectionContext(
            years=year_range(start_year, end_year),
            assumptions=assumptions,
            overrides=overrides,
            plan=plan,
        )
        items = self.project_items(ctx)
        logger.debug(
            "Projecting plan '%s' %d-%d with %d items using %s",
            plan.id,
            start_year,
            end_year,
            len(items),
            source,
        )

        snapshots = []
        category_totals: dict[str, dict[int, float]] = {c: {} for c in KNOWN_CATEGORIES}
        for year in ctx.years:
            year = int(year)
            snapshot = aggregate_snapshot(year, items)
            snapshots.append(snapshot)
            for item in items:
                by_year = category_totals.setdefault(item.category, {})
                by_year[year] = by_year.get(year, 0.0) + item.value_at(year)

        total_warnings = sum(len(s.warnings) for s in snapshots)
        logger.info(
            "Projection of plan '%s' produced %d warnings", plan.id, total_warnings
        )
        if self.config.log_warnings:
            for snapshot in snapshots:
                for warning in snapshot.warnings:
                    if warning.severity == Severity.HIGH:
                        logger.warning("%d: %s", warning.year, warning.message)

        return ProjectionSummary(
            start_year=start_year,
            end_year=end_year,
            snapshots=snapshots,
            total_warnings=total_warnings,
            category_totals=category_totals,
            items=items,
            source=source,
        )


def build_snapshot(
    year: int,
    plan: FinancialPlan,
    assumptions: PlanAssumptions,
    overrides: Sequence[AssumptionOverride],
    start_year: int | None = None,
) -> YearlySnapshot:
    """Single-year snapshot with the default projectors."""
    return ProjectionEngine().build_snapshot(
        year, plan, assumptions, overrides, start_year=start_year
    )


def calculate_projections(
    plan: FinancialPlan,
    scenario: Scenario | None = None,
    start_year: int | None = None,
    end_year: int | None = None,
    config: ProjectionConfig | None = None,
) -> ProjectionSummary:
    """Project a plan with the default projectors. See ``ProjectionEngine``."""
    return ProjectionEngine(config=config).calculate_projections(
        plan, scenario, start_year, end_year
    )
