"""Price quotes for a service and a set of option selections."""

from typing import Iterable, Optional

from django.conf import settings

from apps.catalog.pricing import PriceQuote, calculate_price
from .service_queries import get_active_service


def vip_discount_rate():
    return settings.COMMISSIONS['VIP_DISCOUNT']


def quote_service_price(
    *,
    service_id: int,
    selections: Iterable[dict],
    user=None,
) -> PriceQuote:
    """
    Price a service with the given option selections.

    Args:
        service_id: ID of an active service
        selections: ``{'option_id', 'value'}`` dicts
        user: Requesting user; VIP users get the discount. Anonymous
            callers pass ``None``.

    Raises:
        ServiceNotFoundError: If the service doesn't exist or is inactive
    """
    service = get_active_service(service_id=service_id)
    return quote_for_service(service=service, selections=selections, user=user)


def quote_for_service(*, service, selections: Iterable[dict], user=None) -> PriceQuote:
    """Same as :func:`quote_service_price` for an already loaded service."""
    is_vip = bool(user is not None and getattr(user, 'is_vip', False))
    options = getattr(service, 'active_option_list', None)
    if options is None:
        options = list(service.active_options())

    return calculate_price(
        base_price=service.base_price,
        options=[option.as_spec() for option in options],
        selections=list(selections),
        is_vip=is_vip,
        discount_rate=vip_discount_rate(),
    )
