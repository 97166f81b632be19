"""
Loan balance schedule for loans secured against assets.
"""

from __future__ import annotations

import numpy as np

from finplanlab.core.entities import Loan


def project_loan_balance(loan: Loan, years: np.ndarray) -> np.ndarray:
    """
    Outstanding balance at the start of each year.

    The balance is zero before ``start_year``, equals ``amount`` in the start
    year and then amortizes with fixed monthly payments. It never goes below
    zero and is zero once the term has elapsed.

    Args:
        loan: The loan
        years: Year index to evaluate

    Returns:
        Balance per year
    """
    balances = np.zeros(len(years))
    principal = float(loan.amount)
    payment = loan.payment()
    r = float(loan.interest_rate) / 100.0 / 12.0
    term_months = int(loan.term_years) * 12

    for t, year in enumerate(years):
        months = (int(year) - int(loan.start_year)) * 12
        if months < 0:
            continue
        if months >= term_months:
            continue
        if r == 0.0:
            balance = principal - payment * months
        else:
            growth = (1 + r) ** months
            balance = principal * growth - payment * (growth - 1) / r
        balances[t] = max(0.0, balance)
    return balances


def project_loans(loans: list[Loan], years: np.ndarray) -> np.ndarray:
    """Summed balances of several loans."""
    total = np.zeros(len(years))
    for loan in loans:
        total += project_loan_balance(loan, years)
    return total
