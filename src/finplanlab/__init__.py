"""
FinPlanLab - Year-by-Year Household Financial Projections

FinPlanLab projects a household's assets, recurring income, recurring
commitments and life events over a range of years and aggregates them into
per-year snapshots (totals, cash flow, net worth, warnings).

Key Features:
- **Layered Assumptions**: Item override > category override > item rate > plan default
- **Kind Dispatch**: Every entity carries an explicit ``kind``; one projector per kind
- **Pure Projections**: Same plan in, same numbers out; no global state
- **Scenarios**: Alternative assumptions/overrides compared side by side
- **Warnings, Not Exceptions**: Questionable data becomes typed, severity-tagged warnings

Architecture Overview:
- **Entities**: Person, Asset (with Loans), Income, Commitment, Event
- **Assumption Resolver**: Ordered precedence chain of rate rules
- **Item Projectors**: Asset, income, commitment and event strategies
- **Projection Engine**: Projects items once, folds them into yearly snapshots
- **Results**: ProjectionSummary with pandas views for analysis

Quick Start:
    ```python
    from finplanlab import Asset, FinancialPlan, Income, calculate_projections

    plan = FinancialPlan(
        id="demo",
        name="Demo",
        assets=[Asset(id="isa", name="ISA", type="ISA", current_value=50_000)],
        income=[
            Income(id="salary", name="Salary", amount=5_000,
                   frequency="monthly", start_year=2024)
        ],
    )
    summary = calculate_projections(plan, start_year=2024, end_year=2034)
    print(summary.to_frame()[["total_assets", "cash_flow", "net_worth"]])
    ```

Command Line:
    ``finplanlab run plan.yaml --start 2024 --end 2060``
"""

# Version information
__version__ = "0.1.0"
__author__ = "FinPlanLab Team"
__description__ = "Year-by-year household financial projections"

from .core import (
    KNOWN_CATEGORIES,
    Asset,
    AssetCategory,
    AssumptionOverride,
    Commitment,
    ConfigError,
    Event,
    FinancialPlan,
    IItemProjector,
    Income,
    K,
    Loan,
    Person,
    PlanAssumptions,
    PlanLoadError,
    PlanValidationReport,
    ProjectionConfig,
    ProjectionContext,
    ProjectionEngine,
    ProjectionItem,
    ProjectionSummary,
    ProjectionWarning,
    RateKind,
    RatePreview,
    Scenario,
    ScenarioComparison,
    Severity,
    ValueOverride,
    WarningType,
    YearlySnapshot,
    annualize,
    build_snapshot,
    calculate_age,
    calculate_projections,
    compare_scenarios,
    default_assumptions,
    get_current_rates,
    get_retirement_status,
    load_plan,
    resolve_rate,
    validate_plan,
)
from .kpi import max_drawdown, net_worth_growth, savings_rate
from .projectors import (
    AssetProjector,
    CommitmentProjector,
    EventProjector,
    IncomeProjector,
    default_projectors,
)

__all__ = [
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
    # Kinds
    "K",
    "RateKind",
    "AssetCategory",
    "KNOWN_CATEGORIES",
    # Errors
    "ConfigError",
    "PlanLoadError",
    # Assumptions
    "default_assumptions",
    "resolve_rate",
    "get_current_rates",
    "RatePreview",
    # Engine
    "ProjectionConfig",
    "ProjectionContext",
    "ProjectionEngine",
    "build_snapshot",
    "calculate_projections",
    # Projectors
    "IItemProjector",
    "AssetProjector",
    "IncomeProjector",
    "CommitmentProjector",
    "EventProjector",
    "default_projectors",
    # Results
    "ProjectionItem",
    "YearlySnapshot",
    "ProjectionSummary",
    "ProjectionWarning",
    "WarningType",
    "Severity",
    # Scenarios
    "ScenarioComparison",
    "compare_scenarios",
    # Loading and validation
    "load_plan",
    "PlanValidationReport",
    "validate_plan",
    # Utilities
    "annualize",
    "calculate_age",
    "get_retirement_status",
    # KPI utilities
    "savings_rate",
    "net_worth_growth",
    "max_drawdown",
]
