"""
KPI calculation utilities for projection analysis.

All functions operate on the yearly frame produced by
``ProjectionSummary.to_frame()`` and return pandas Series.
"""

from __future__ import annotations

import numpy as np
import pandas as pd


def savings_rate(
    df: pd.DataFrame,
    cash_flow_col: str = "cash_flow",
    income_col: str = "total_income",
) -> pd.Series:
    """
    Share of income left after commitments and events.

    savings_rate = cash_flow / total_income, NaN in years without income.
    """
    income = df[income_col]
    rate = np.where(income != 0, df[cash_flow_col] / income.replace(0, np.nan), np.nan)
    return pd.Series(rate, index=df.index, name="savings_rate")


def net_worth_growth(df: pd.DataFrame, net_worth_col: str = "net_worth") -> pd.Series:
    """Year-on-year change in net worth (first year is 0)."""
    growth = df[net_worth_col].diff().fillna(0.0)
    growth.name = "net_worth_growth"
    return growth


def max_drawdown(series_or_df: pd.Series | pd.DataFrame) -> pd.Series:
    """
    Drawdown from the running peak.

    Args:
        series_or_df: Net worth series, or a frame with a ``net_worth`` column

    Returns:
        Series of drawdowns (<= 0) as a fraction of the running peak; 0 where
        the peak is not positive
    """
    if isinstance(series_or_df, pd.DataFrame):
        series = series_or_df["net_worth"]
    else:
        series = series_or_df
    peak = series.cummax()
    drawdown = np.where(peak > 0, (series - peak) / peak.where(peak > 0), 0.0)
    return pd.Series(drawdown, index=series.index, name="max_drawdown")
