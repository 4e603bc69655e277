"""
Commission price and complexity calculation.

Two pricing rules live here:

* ``calculate_price`` is table driven: a service's base price plus the
  surcharge of every selected option, each computed from the option's
  formula with the selected value clamped to the option's bounds.
* ``estimate_from_counts`` is the fixed illustration rule (base 35 plus
  character, alternative and pose surcharges). The queue uses it to rate
  pending requests, and request submissions without option selections are
  priced with it.

Both feed the same ``complexity_for_total`` thresholds.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Optional

from .expressions import FormulaError, evaluate_formula

logger = logging.getLogger(__name__)

COMPLEXITY_LOW = 'Low'
COMPLEXITY_MID = 'Mid'
COMPLEXITY_HIGH = 'High'
COMPLEXITY_ULTRA_HIGH = 'Ultra High'
COMPLEXITY_SISTINE_CHAPEL = 'Sistine Chapel'

# (exclusive lower bound, tier), highest first
COMPLEXITY_THRESHOLDS = (
    (Decimal('150'), COMPLEXITY_SISTINE_CHAPEL),
    (Decimal('100'), COMPLEXITY_ULTRA_HIGH),
    (Decimal('70'), COMPLEXITY_HIGH),
    (Decimal('45'), COMPLEXITY_MID),
)

COMPLEXITY_TIERS = (
    COMPLEXITY_LOW,
    COMPLEXITY_MID,
    COMPLEXITY_HIGH,
    COMPLEXITY_ULTRA_HIGH,
    COMPLEXITY_SISTINE_CHAPEL,
)

DEFAULT_VIP_DISCOUNT = Decimal('0.25')

COUNT_BASE_PRICE = Decimal('35')

# Largest amount a stored request total can hold
MAX_PRICE = Decimal('99999999.99')


@dataclass(frozen=True)
class OptionSpec:
    """Pricing-relevant view of a service option."""
    id: int
    name: str
    price_formula: str
    min_value: int
    max_value: int


@dataclass(frozen=True)
class LineItem:
    option_id: int
    name: str
    value: int
    amount: Decimal


@dataclass
class PriceQuote:
    base_price: Decimal
    subtotal: Decimal
    discount: Decimal
    total_price: Decimal
    complexity: str
    line_items: list = field(default_factory=list)


def clamp(value, min_value, max_value):
    """Bound ``value`` to ``[min_value, max_value]``."""
    return max(min_value, min(max_value, value))


def complexity_for_total(total) -> str:
    """
    Map a price total to its complexity tier.

    Totals above 150 are Sistine Chapel, above 100 Ultra High, above 70
    High, above 45 Mid, everything else Low.
    """
    total = Decimal(total)
    for threshold, tier in COMPLEXITY_THRESHOLDS:
        if total > threshold:
            return tier
    return COMPLEXITY_LOW


def vip_discount(subtotal: Decimal, rate: Decimal = DEFAULT_VIP_DISCOUNT) -> Decimal:
    return subtotal * rate


def calculate_price(
    *,
    base_price,
    options: Iterable[OptionSpec],
    selections: Iterable[dict],
    is_vip: bool = False,
    discount_rate: Optional[Decimal] = None,
) -> PriceQuote:
    """
    Price a commission from a service's options.

    Args:
        base_price: Service base price, the seed of the running total
        options: The service's active options
        selections: ``{'option_id': ..., 'value': ...}`` dicts chosen by the client
        is_vip: Apply the VIP discount to the result
        discount_rate: Override for the VIP discount rate

    Returns:
        PriceQuote. The complexity tier is taken from the pre-discount
        subtotal, so the VIP discount never changes it.

    Unknown option ids are ignored. An option whose formula fails to parse
    or evaluate, or whose result would push the total past MAX_PRICE,
    contributes nothing; the failure is logged.
    """
    base_price = Decimal(base_price)
    by_id = {option.id: option for option in options}
    subtotal = base_price
    line_items = []

    for selection in selections:
        option = by_id.get(selection.get('option_id'))
        if option is None:
            continue

        value = clamp(selection.get('value', option.min_value), option.min_value, option.max_value)

        if not option.price_formula:
            continue

        try:
            amount = evaluate_formula(option.price_formula, value)
            if not amount.is_finite() or abs(subtotal + amount) > MAX_PRICE:
                raise FormulaError(f'Result {amount} is out of range')
        except FormulaError as e:
            logger.warning(
                'Error evaluating price formula %r for option %s: %s',
                option.price_formula, option.id, e,
            )
            continue

        subtotal += amount
        line_items.append(LineItem(option.id, option.name, value, amount))

    complexity = complexity_for_total(subtotal)

    discount = Decimal('0')
    if is_vip:
        rate = DEFAULT_VIP_DISCOUNT if discount_rate is None else discount_rate
        discount = vip_discount(subtotal, rate)

    return PriceQuote(
        base_price=base_price,
        subtotal=subtotal,
        discount=discount,
        total_price=subtotal - discount,
        complexity=complexity,
        line_items=line_items,
    )


def price_from_counts(character_count: int, alternative_count: int, pose_count: int) -> Decimal:
    """
    Fixed illustration price for character, alternative and pose counts.

    Base 35; more than one character adds 3 + 2 per extra character;
    every alternative adds 3; more than one pose adds 5 + 1 per extra pose.
    """
    total = COUNT_BASE_PRICE
    if character_count > 1:
        total += 3 + (character_count - 1) * 2
    if alternative_count > 0:
        total += 3 * alternative_count
    if pose_count > 1:
        total += 5 + (pose_count - 1)
    return total


def estimate_from_counts(
    character_count: int,
    alternative_count: int,
    pose_count: int,
    *,
    is_vip: bool = False,
    discount_rate: Optional[Decimal] = None,
) -> PriceQuote:
    """Quote built from :func:`price_from_counts`, with the same tier and VIP rules."""
    subtotal = price_from_counts(character_count, alternative_count, pose_count)

    discount = Decimal('0')
    if is_vip:
        rate = DEFAULT_VIP_DISCOUNT if discount_rate is None else discount_rate
        discount = vip_discount(subtotal, rate)

    return PriceQuote(
        base_price=COUNT_BASE_PRICE,
        subtotal=subtotal,
        discount=discount,
        total_price=subtotal - discount,
        complexity=complexity_for_total(subtotal),
    )
