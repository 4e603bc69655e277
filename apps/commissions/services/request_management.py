"""Request lookups and operator decisions (accept / decline)."""

import logging
from datetime import date
from typing import Optional

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.commissions.models import (
    Commission,
    CommissionRequest,
    CommissionStatus,
    RequestStatus,
)
from .exceptions import (
    RequestNotFoundError,
    RequestAccessDeniedError,
    InvalidRequestStateError,
)
from .notifications import notify_status_update

logger = logging.getLogger(__name__)


def get_user_requests(*, user: User) -> QuerySet[CommissionRequest]:
    """The user's own requests, newest first."""
    return (
        CommissionRequest.objects
        .filter(user=user)
        .select_related('service')
        .order_by('-requested_at', '-id')
    )


def get_request_for_user(*, request_id: int, user: User) -> CommissionRequest:
    """
    Retrieve a request its owner (or the operator) may look at.

    Raises:
        RequestNotFoundError: If the request doesn't exist
        RequestAccessDeniedError: If the user is neither owner nor operator
    """
    try:
        commission_request = (
            CommissionRequest.objects
            .select_related('service', 'user')
            .get(id=request_id)
        )
    except CommissionRequest.DoesNotExist:
        raise RequestNotFoundError("Request not found")

    if commission_request.user_id != user.id and not user.is_operator:
        raise RequestAccessDeniedError("Access denied")

    return commission_request


def _lock_pending_request(request_id: int) -> CommissionRequest:
    try:
        commission_request = (
            CommissionRequest.objects
            .select_for_update()
            .get(id=request_id)
        )
    except CommissionRequest.DoesNotExist:
        raise RequestNotFoundError("Request not found")

    if commission_request.status != RequestStatus.REQUESTED:
        raise InvalidRequestStateError(
            f"Only requests in the Requested status can be handled (current: {commission_request.status})"
        )
    return commission_request


@transaction.atomic
def accept_request(
    *,
    request_id: int,
    expected_completion_date: Optional[date] = None,
    progress: str = '',
) -> Commission:
    """
    Accept a pending request and open its commission.

    The commission starts Accepted and inherits the request's complexity.
    The client is notified after commit.

    Raises:
        RequestNotFoundError: If the request doesn't exist
        InvalidRequestStateError: If the request is not in the Requested status
    """
    commission_request = _lock_pending_request(request_id)

    commission = Commission.objects.create(
        request=commission_request,
        status=CommissionStatus.ACCEPTED,
        progress=progress,
        expected_completion_date=expected_completion_date,
        complexity=commission_request.complexity,
    )

    commission_request.status = RequestStatus.ACCEPTED
    commission_request.save(update_fields=['status', 'updated_at'])

    logger.info('Request %s accepted as commission %s', commission_request.pk, commission.pk)
    notify_status_update(commission.pk)

    return commission


@transaction.atomic
def decline_request(*, request_id: int) -> CommissionRequest:
    """
    Decline a pending request.

    Raises:
        RequestNotFoundError: If the request doesn't exist
        InvalidRequestStateError: If the request is not in the Requested status
    """
    commission_request = _lock_pending_request(request_id)

    commission_request.status = RequestStatus.DECLINED
    commission_request.save(update_fields=['status', 'updated_at'])

    logger.info('Request %s declined', commission_request.pk)
    return commission_request
