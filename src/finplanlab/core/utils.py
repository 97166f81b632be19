"""
Utility functions for FinPlanLab.
"""

from __future__ import annotations

from datetime import date

from .entities import Person, normalize_frequency
from .kinds import FREQUENCY_MULTIPLIERS

ADULT_AGE = 18


def annualize(amount: float, frequency: str) -> float:
    """
    Convert a per-period amount to an annual amount.

    **Example:**
        ```python
        annualize(1500, "monthly")  # 18000.0
        annualize(100, "Weekly")    # 5200.0
        ```
    """
    return float(amount) * FREQUENCY_MULTIPLIERS[normalize_frequency(frequency)]


def calculate_age(date_of_birth: date, on: date | None = None) -> int:
    """Age in whole years on ``on`` (default: today)."""
    on = on or date.today()
    age = on.year - date_of_birth.year
    if (on.month, on.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def get_retirement_status(
    person: Person, year: int, retirement_age: int, today: date | None = None
) -> str:
    """
    Working status of ``person`` in ``year``.

    The age in ``year`` is today's age plus the number of years ahead.

    Returns:
        'child' below 18, 'retired' at or above ``retirement_age``,
        otherwise 'working'
    """
    today = today or date.today()
    age = calculate_age(person.date_of_birth, today) + (year - today.year)
    if age < ADULT_AGE:
        return "child"
    if age >= retirement_age:
        return "retired"
    return "working"
