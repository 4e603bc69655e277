"""
Read side of the commission queue.

Covers the public list and kanban board, per-commission detail and update
log, and a client's own commissions. Visibility rule: anonymous viewers
never receive NSFW work unless the artist marked it as public work.
"""

from typing import Optional

from django.db.models import OuterRef, QuerySet, Subquery

from apps.accounts.models import User
from apps.catalog.pricing import estimate_from_counts
from apps.commissions.models import (
    PIPELINE,
    Commission,
    CommissionRequest,
    CommissionUpdate,
    RequestStatus,
)
from .exceptions import AuthenticationRequiredError, CommissionNotFoundError


def is_authenticated(viewer: Optional[User]) -> bool:
    return viewer is not None and viewer.is_authenticated


def _latest_update_image():
    return Subquery(
        CommissionUpdate.objects
        .filter(commission=OuterRef('pk'))
        .exclude(image_path='')
        .order_by('-created_at', '-id')
        .values('image_path')[:1]
    )


def _commission_queryset(viewer) -> QuerySet[Commission]:
    return (
        Commission.objects
        .visible_to(viewer)
        .select_related('request__service', 'request__user')
        .prefetch_related('tags')
        .annotate(latest_update_image=_latest_update_image())
    )


def list_commissions(*, viewer: Optional[User], status: Optional[str] = None) -> QuerySet[Commission]:
    """
    Commissions visible to ``viewer``, most recently updated first.

    Args:
        viewer: Requesting user or None/AnonymousUser
        status: Optional commission status filter
    """
    queryset = _commission_queryset(viewer)
    if status:
        queryset = queryset.filter(status=status)
    return queryset.order_by('-updated_at', '-id')


def get_pending_requests(*, viewer: Optional[User]) -> list:
    """
    Requests still waiting for a decision, newest first.

    Each request gets an ``estimated_complexity`` attribute rated with the
    character/alternative/pose rule. NSFW requests are left out for
    anonymous viewers.
    """
    queryset = (
        CommissionRequest.objects
        .filter(status=RequestStatus.REQUESTED)
        .select_related('service', 'user')
        .order_by('-requested_at', '-id')
    )
    if not is_authenticated(viewer):
        queryset = queryset.filter(is_nsfw=False)

    pending = list(queryset)
    for commission_request in pending:
        commission_request.estimated_complexity = estimate_from_counts(
            commission_request.character_count,
            commission_request.alternative_count,
            commission_request.pose_count,
        ).complexity
    return pending


def build_kanban(*, viewer: Optional[User]) -> dict:
    """
    Kanban board of the whole pipeline.

    Returns:
        Dict keyed by column name in pipeline order: ``Requested`` holds
        pending CommissionRequests, the other columns hold Commissions.
    """
    board = {column: [] for column in PIPELINE}
    board[RequestStatus.REQUESTED] = get_pending_requests(viewer=viewer)

    for commission in _commission_queryset(viewer).order_by('-updated_at', '-id'):
        board[commission.status].append(commission)

    return board


def get_commission_for_viewer(*, commission_id: int, viewer: Optional[User]) -> Commission:
    """
    Retrieve a commission the viewer may open.

    Raises:
        CommissionNotFoundError: If the commission doesn't exist
        AuthenticationRequiredError: If an anonymous viewer opens NSFW work
            that is not public
    """
    try:
        commission = (
            Commission.objects
            .select_related('request__service', 'request__user')
            .prefetch_related('tags')
            .get(id=commission_id)
        )
    except Commission.DoesNotExist:
        raise CommissionNotFoundError("Commission not found")

    if not is_authenticated(viewer) and commission.is_nsfw and not commission.is_public_work:
        raise AuthenticationRequiredError("Authentication required to view NSFW content")

    return commission


def can_view_full_detail(commission: Commission, viewer: Optional[User]) -> bool:
    """Anonymous viewers only see the full record of public work."""
    return is_authenticated(viewer) or commission.is_public_work


def get_commission_updates(*, commission_id: int, viewer: Optional[User]) -> list:
    """
    The commission's update log, newest first.

    Anonymous viewers get an empty log for work that is not public.

    Raises:
        CommissionNotFoundError: If the commission doesn't exist
        AuthenticationRequiredError: As for get_commission_for_viewer
    """
    commission = get_commission_for_viewer(commission_id=commission_id, viewer=viewer)
    if not can_view_full_detail(commission, viewer):
        return []
    return list(commission.updates.all())


def get_client_commissions(*, user: User) -> QuerySet[Commission]:
    """A client's own commissions, newest first, with the latest update image."""
    return (
        Commission.objects
        .filter(request__user=user)
        .select_related('request__service')
        .annotate(latest_update_image=_latest_update_image())
        .order_by('-created_at', '-id')
    )

