"""Price formula evaluation and commission pricing rules."""

from .expressions import FormulaError, parse_formula, evaluate_formula
from .calculator import (
    COMPLEXITY_TIERS,
    OptionSpec,
    LineItem,
    PriceQuote,
    clamp,
    complexity_for_total,
    calculate_price,
    price_from_counts,
    estimate_from_counts,
)

__all__ = [
    'FormulaError',
    'parse_formula',
    'evaluate_formula',
    'COMPLEXITY_TIERS',
    'OptionSpec',
    'LineItem',
    'PriceQuote',
    'clamp',
    'complexity_for_total',
    'calculate_price',
    'price_from_counts',
    'estimate_from_counts',
]
