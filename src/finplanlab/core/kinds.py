"""
FinPlanLab kind constants (entity, rate, override and category taxonomies).
"""

from __future__ import annotations


class K:
    # === Entity kinds (projected items) ===
    ASSET = "asset"  # ISA, SIPP, property, cash, ...
    INCOME = "income"  # Salary, pension, rent-in
    COMMITMENT = "commitment"  # Rent, utilities, school fees
    EVENT = "event"  # One-off or recurring life events

    # === Override target that is not an entity ===
    CATEGORY = "category"

    @classmethod
    def entity_kinds(cls) -> list[str]:
        """Enumerate all projectable entity kinds."""
        return [cls.ASSET, cls.INCOME, cls.COMMITMENT, cls.EVENT]

    @classmethod
    def rate_bearing_kinds(cls) -> list[str]:
        """Kinds whose values are driven by resolved growth/inflation rates."""
        return [cls.ASSET, cls.INCOME, cls.COMMITMENT]

    @classmethod
    def override_targets(cls) -> list[str]:
        """Valid values for ``AssumptionOverride.entity_type``."""
        return [cls.ASSET, cls.INCOME, cls.COMMITMENT, cls.CATEGORY]


class RateKind:
    GROWTH = "growth"
    INFLATION = "inflation"
    INTEREST = "interest"  # display only, never resolved by the engine
    TAX = "tax"  # display only, never resolved by the engine

    @classmethod
    def all_kinds(cls) -> list[str]:
        return [cls.GROWTH, cls.INFLATION, cls.INTEREST, cls.TAX]

    @classmethod
    def resolvable(cls) -> list[str]:
        return [cls.GROWTH, cls.INFLATION]


class AssetCategory:
    ISA = "ISA"
    SIPP = "SIPP"
    PROPERTY = "Property"
    CASH = "Cash"
    PREMIUM_BONDS = "Premium Bonds"
    INVESTMENT = "Investment"
    CRYPTO = "Crypto"
    OTHER = "Other"

    @classmethod
    def all_categories(cls) -> list[str]:
        return [
            cls.ISA,
            cls.SIPP,
            cls.PROPERTY,
            cls.CASH,
            cls.PREMIUM_BONDS,
            cls.INVESTMENT,
            cls.CRYPTO,
            cls.OTHER,
        ]


# Category keys used when matching category-level overrides
INCOME_OVERRIDE_CATEGORY = "income"
COMMITMENT_OVERRIDE_CATEGORY = "commitment"

# Category labels used in projection items and category totals
INCOME_CATEGORY = "Income"
COMMITMENTS_CATEGORY = "Commitments"

KNOWN_CATEGORIES = AssetCategory.all_categories() + [
    INCOME_CATEGORY,
    COMMITMENTS_CATEGORY,
]

# Per-period amount -> annual amount
FREQUENCY_MULTIPLIERS = {
    "weekly": 52,
    "monthly": 12,
    "quarterly": 4,
    "annually": 1,
}

# Flow endpoints for income destinations and commitment sources
FLOW_CASH = "cash"
FLOW_ASSET = "asset"
FLOW_EXTERNAL = "external"
