"""
Core module for FinPlanLab.

This module contains the plan entities, the assumption resolver, the
projection engine and the result structures.
"""

from .assumptions import (
    CATEGORY_OVERRIDE,
    ITEM_OVERRIDE,
    ITEM_SPECIFIC,
    PLAN_DEFAULT,
    RATE_PRECEDENCE,
    CategoryOverrideRule,
    ItemDeclaredRule,
    ItemOverrideRule,
    PlanDefaultRule,
    RatePreview,
    RateRule,
    default_assumptions,
    get_applicable_overrides,
    get_current_rates,
    has_overrides,
    resolve_rate,
    resolve_rate_with_source,
)
from .comparison import ScenarioComparison, compare_scenarios
from .context import ProjectionContext, year_range
from .diagnostics import (
    UNREALISTIC_GROWTH_THRESHOLD,
    ProjectionWarning,
    Severity,
    WarningType,
    warnings_by_severity,
    warnings_by_type,
)
from .engine import (
    ProjectionConfig,
    ProjectionEngine,
    build_snapshot,
    calculate_projections,
)
from .entities import (
    Asset,
    AssumptionOverride,
    Commitment,
    Event,
    FinancialPlan,
    Income,
    Loan,
    Person,
    PlanAssumptions,
    Scenario,
    ValueOverride,
)
from .errors import ConfigError, PlanLoadError
from .interfaces import IItemProjector
from .kinds import KNOWN_CATEGORIES, AssetCategory, K, RateKind
from .plan_loader import load_plan, plan_from_dict, plan_to_dict
from .results import (
    CategoryGroup,
    ProjectionItem,
    ProjectionSummary,
    YearlySnapshot,
    aggregate_snapshot,
    calculate_cash_flow_progression,
    calculate_net_worth_progression,
    get_warnings_by_severity,
    group_projections_by_category,
)
from .utils import annualize, calculate_age, get_retirement_status
from .validation import PlanValidationReport, validate_plan

__all__ = [
    # Errors
    "ConfigError",
    "PlanLoadError",
    # Kinds
    "K",
    "RateKind",
    "AssetCategory",
    "KNOWN_CATEGORIES",
    # Entities
    "Person",
    "Loan",
    "ValueOverride",
    "Asset",
    "Income",
    "Commitment",
    "Event",
    "PlanAssumptions",
    "AssumptionOverride",
    "Scenario",
    "FinancialPlan",
    # Assumptions
    "RateRule",
    "ItemOverrideRule",
    "CategoryOverrideRule",
    "ItemDeclaredRule",
    "PlanDefaultRule",
    "RATE_PRECEDENCE",
    "ITEM_OVERRIDE",
    "CATEGORY_OVERRIDE",
    "ITEM_SPECIFIC",
    "PLAN_DEFAULT",
    "RatePreview",
    "default_assumptions",
    "resolve_rate",
    "resolve_rate_with_source",
    "get_current_rates",
    "get_applicable_overrides",
    "has_overrides",
    # Warnings
    "ProjectionWarning",
    "WarningType",
    "Severity",
    "UNREALISTIC_GROWTH_THRESHOLD",
    "warnings_by_severity",
    "warnings_by_type",
    # Context and interfaces
    "ProjectionContext",
    "year_range",
    "IItemProjector",
    # Engine
    "ProjectionConfig",
    "ProjectionEngine",
    "build_snapshot",
    "calculate_projections",
    # Results
    "ProjectionItem",
    "YearlySnapshot",
    "ProjectionSummary",
    "CategoryGroup",
    "aggregate_snapshot",
    "group_projections_by_category",
    "calculate_net_worth_progression",
    "calculate_cash_flow_progression",
    "get_warnings_by_severity",
    # Scenarios
    "ScenarioComparison",
    "compare_scenarios",
    # Loading and validation
    "load_plan",
    "plan_from_dict",
    "plan_to_dict",
    "PlanValidationReport",
    "validate_plan",
    # Utils
    "annualize",
    "calculate_age",
    "get_retirement_status",
]
