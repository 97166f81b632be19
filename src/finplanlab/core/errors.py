"""
Error classes for FinPlanLab.

The projection engine does not raise for questionable business data; those
problems are reported as projection warnings. The classes below cover the
remaining contract violations and input normalization failures.
"""


class ConfigError(Exception):
    """
    Contract violation detected while configuring or running a projection.

    **Common Causes:**
    - ``end_year`` earlier than ``start_year``
    - Unknown frequency or entity kind with no registered projector
    - Scenario id that does not exist in the plan
    - More than one scenario flagged as base

    **Example Usage:**
        ```python
        from finplanlab.core.errors import ConfigError
        from finplanlab import calculate_projections

        try:
            calculate_projections(plan, start_year=2030, end_year=2024)
        except ConfigError as e:
            print(f"Configuration error: {e}")
        ```
    """

    pass


class PlanLoadError(ValueError):
    """Raised when a plan file or mapping cannot be parsed or normalized."""
