"""
Catalog services - Business logic layer.

This package contains the operations on the service catalog:
- Active service listing and lookup
- Price quotes from option selections
- Terms of service
"""

from .service_queries import get_active_services, get_active_service
from .price_quotes import quote_service_price, quote_for_service, vip_discount_rate
from .terms import get_terms_of_service
from .exceptions import CatalogServiceError, ServiceNotFoundError

__all__ = [
    'get_active_services',
    'get_active_service',
    'quote_service_price',
    'quote_for_service',
    'vip_discount_rate',
    'get_terms_of_service',
    'CatalogServiceError',
    'ServiceNotFoundError',
]
