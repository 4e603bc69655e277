"""Read access to the service catalog."""

from django.db.models import Prefetch, QuerySet

from apps.catalog.models import Service, ServiceOption
from .exceptions import ServiceNotFoundError


def _with_active_options(queryset: QuerySet) -> QuerySet:
    return queryset.prefetch_related(
        Prefetch(
            'options',
            queryset=ServiceOption.objects.filter(is_active=True),
            to_attr='active_option_list',
        )
    )


def get_active_services() -> QuerySet[Service]:
    """All active services with their active options, ordered by name."""
    return _with_active_options(Service.objects.filter(is_active=True)).order_by('name')


def get_active_service(*, service_id: int) -> Service:
    """
    Retrieve one active service with its active options.

    Raises:
        ServiceNotFoundError: If the service doesn't exist or is inactive
    """
    try:
        return _with_active_options(Service.objects.filter(is_active=True)).get(id=service_id)
    except (Service.DoesNotExist, ValueError, TypeError):
        raise ServiceNotFoundError("Service not found")
