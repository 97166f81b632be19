"""
Projection warnings.

Warnings are the engine's only channel for data-quality problems: every
projector tags what it finds with a type and a severity, and downstream
reporting groups them. Nothing here holds state; warnings are rebuilt on every
computation.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from .kinds import K

# Absolute effective annual rate (percent) above which growth is flagged
UNREALISTIC_GROWTH_THRESHOLD = 50.0


class WarningType:
    NEGATIVE_BALANCE = "negative_balance"
    NEGATIVE_INCOME = "negative_income"
    NEGATIVE_COMMITMENT = "negative_commitment"
    UNREALISTIC_GROWTH = "unrealistic_growth"

    @classmethod
    def all_types(cls) -> list[str]:
        return [
            cls.NEGATIVE_BALANCE,
            cls.NEGATIVE_INCOME,
            cls.NEGATIVE_COMMITMENT,
            cls.UNREALISTIC_GROWTH,
        ]


class Severity:
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def all_levels(cls) -> list[str]:
        return [cls.LOW, cls.MEDIUM, cls.HIGH]


class ProjectionWarning(NamedTuple):
    """
    Year-stamped, typed and severity-tagged projection annotation.

    Attributes:
        year: Projection year the warning refers to
        type: One of ``WarningType``
        message: Human-readable description
        severity: One of ``Severity``
        item_id: Id of the entity that raised it (None for plan-level warnings)
    """

    year: int
    type: str
    message: str
    severity: str
    item_id: str | None = None


def negative_balance(name: str, year: int, item_id: str | None = None) -> ProjectionWarning:
    return ProjectionWarning(
        year,
        WarningType.NEGATIVE_BALANCE,
        f"{name} balance went negative and was reset to zero",
        Severity.HIGH,
        item_id,
    )


def negative_value(
    kind: str, name: str, year: int, item_id: str | None = None
) -> ProjectionWarning:
    """Negative income or commitment amount (not clamped)."""
    warning_type = (
        WarningType.NEGATIVE_INCOME if kind == K.INCOME else WarningType.NEGATIVE_COMMITMENT
    )
    return ProjectionWarning(
        year, warning_type, f"{name} has negative value", Severity.MEDIUM, item_id
    )


def unrealistic_growth(
    name: str, rate: float, year: int, item_id: str | None = None
) -> ProjectionWarning:
    return ProjectionWarning(
        year,
        WarningType.UNREALISTIC_GROWTH,
        f"{name} has unrealistic growth rate: {rate:.1f}%",
        Severity.MEDIUM,
        item_id,
    )


def is_unrealistic(rate: float) -> bool:
    return abs(rate) > UNREALISTIC_GROWTH_THRESHOLD


def warnings_by_severity(
    warnings: Iterable[ProjectionWarning],
) -> dict[str, list[ProjectionWarning]]:
    """Group warnings into ``{"low": [...], "medium": [...], "high": [...]}``."""
    grouped: dict[str, list[ProjectionWarning]] = {
        level: [] for level in Severity.all_levels()
    }
    for warning in warnings:
        grouped.setdefault(warning.severity, []).append(warning)
    return grouped


def warnings_by_type(
    warnings: Iterable[ProjectionWarning],
) -> dict[str, list[ProjectionWarning]]:
    grouped: dict[str, list[ProjectionWarning]] = {
        kind: [] for kind in WarningType.all_types()
    }
    for warning in warnings:
        grouped.setdefault(warning.type, []).append(warning)
    return grouped
