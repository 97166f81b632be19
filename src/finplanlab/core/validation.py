"""
Validation and reporting utilities for FinPlanLab.

The engine assumes a well-formed plan. ``validate_plan`` performs the checks
an upstream layer is expected to run before a plan reaches the engine and
returns a structured report instead of raising.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from .entities import FinancialPlan
from .kinds import FLOW_ASSET, FREQUENCY_MULTIPLIERS, K, RateKind


@dataclass
class PlanValidationReport:
    """
    Structured validation report for a financial plan.

    Errors make the plan unsuitable for projection; warnings are worth showing
    but do not block it.
    """

    duplicate_ids: list[str] = field(default_factory=list)
    unknown_owner_ids: list[str] = field(default_factory=list)
    unknown_asset_links: list[str] = field(default_factory=list)
    inverted_windows: list[str] = field(default_factory=list)
    unknown_frequencies: list[str] = field(default_factory=list)
    invalid_overrides: list[str] = field(default_factory=list)
    multiple_base_scenarios: list[str] = field(default_factory=list)
    negative_asset_values: list[str] = field(default_factory=list)
    unknown_active_scenario: str | None = None

    def has_errors(self) -> bool:
        return bool(
            self.duplicate_ids
            or self.unknown_asset_links
            or self.inverted_windows
            or self.unknown_frequencies
            or self.invalid_overrides
            or self.multiple_base_scenarios
            or self.unknown_active_scenario
        )

    def has_warnings(self) -> bool:
        return bool(self.unknown_owner_ids or self.negative_asset_values)

    def is_valid(self) -> bool:
        return not self.has_errors()

    def get_exit_code(self) -> int:
        """
        Get appropriate CLI exit code.

        Returns:
            0: Valid (no errors)
            1: Errors present
            2: Warnings only
        """
        if self.has_errors():
            return 1
        elif self.has_warnings():
            return 2
        else:
            return 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "duplicate_ids": self.duplicate_ids,
            "unknown_owner_ids": self.unknown_owner_ids,
            "unknown_asset_links": self.unknown_asset_links,
            "inverted_windows": self.inverted_windows,
            "unknown_frequencies": self.unknown_frequencies,
            "invalid_overrides": self.invalid_overrides,
            "multiple_base_scenarios": self.multiple_base_scenarios,
            "negative_asset_values": self.negative_asset_values,
            "unknown_active_scenario": self.unknown_active_scenario,
            "has_errors": self.has_errors(),
            "has_warnings": self.has_warnings(),
        }


def validate_plan(plan: FinancialPlan) -> PlanValidationReport:
    """Check a plan for structural problems; never raises for plan content."""
    report = PlanValidationReport()

    ids = [entity.id for entity in plan.entities()]
    report.duplicate_ids = sorted(i for i, n in Counter(ids).items() if n > 1)

    people = {person.id for person in plan.people}
    asset_ids = {asset.id for asset in plan.assets}

    for entity in plan.entities():
        owners = (
            entity.affected_person_ids if entity.kind == K.EVENT else entity.owner_ids
        )
        for owner in owners:
            if owner not in people:
                report.unknown_owner_ids.append(f"{entity.id}:{owner}")

    for asset in plan.assets:
        if asset.current_value < 0:
            report.negative_asset_values.append(asset.id)

    for item in list(plan.income) + list(plan.commitments):
        if item.end_year is not None and item.end_year < item.start_year:
            report.inverted_windows.append(item.id)
        # frequency is normalized on construction but may be reassigned later
        if item.frequency not in FREQUENCY_MULTIPLIERS:
            report.unknown_frequencies.append(item.id)
    for event in plan.events:
        if (
            event.is_recurring
            and event.recurring_end_year is not None
            and event.recurring_end_year < event.year
        ):
            report.inverted_windows.append(event.id)

    for income in plan.income:
        if income.destination == FLOW_ASSET and income.destination_asset_id not in asset_ids:
            report.unknown_asset_links.append(income.id)
    for commitment in plan.commitments:
        if commitment.source == FLOW_ASSET and commitment.source_asset_id not in asset_ids:
            report.unknown_asset_links.append(commitment.id)
    for event in plan.events:
        if event.asset_id is not None and event.asset_id not in asset_ids:
            report.unknown_asset_links.append(event.id)

    override_sets = [("plan", plan.overrides)] + [
        (f"scenario:{s.id}", s.overrides or []) for s in plan.scenarios
    ]
    for owner, overrides in override_sets:
        for index, override in enumerate(overrides):
            label = f"{owner}[{override.id or index}]"
            if override.entity_type not in K.override_targets():
                report.invalid_overrides.append(label)
            elif override.override_type not in RateKind.all_kinds():
                report.invalid_overrides.append(label)
            elif override.entity_type == K.CATEGORY and not override.category:
                report.invalid_overrides.append(label)
            elif override.entity_type != K.CATEGORY and not override.entity_id:
                report.invalid_overrides.append(label)
            elif (
                override.start_year is not None
                and override.end_year is not None
                and override.end_year < override.start_year
            ):
                report.inverted_windows.append(label)

    bases = [s.id for s in plan.scenarios if s.is_base]
    if len(bases) > 1:
        report.multiple_base_scenarios = bases

    if plan.active_scenario_id is not None and plan.active_scenario_id not in {
        s.id for s in plan.scenarios
    }:
        report.unknown_active_scenario = plan.active_scenario_id

    return report
