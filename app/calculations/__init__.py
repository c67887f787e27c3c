"""
Financial Calculation Engine

Pure calculation modules for property investment analysis.
Every function maps inputs to outputs with no I/O or shared state.
"""

from app.calculations import (
    amortization,
    borrowing,
    feasibility,
    rates,
    rental,
    savings,
    strategy,
)

__all__ = [
    "amortization",
    "borrowing",
    "feasibility",
    "rates",
    "rental",
    "savings",
    "strategy",
]
