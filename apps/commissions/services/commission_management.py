"""Operator-side commission changes: status, progress and the update log."""

import logging
from typing import Iterable, Optional

from django.db import transaction
from django.utils import timezone

from apps.commissions.models import (
    Commission,
    CommissionStatus,
    CommissionUpdate,
    Tag,
)
from apps.uploads import (
    IMAGE_EXTENSIONS,
    VIDEO_EXTENSIONS,
    InvalidUploadError,
    is_video,
    save_upload,
)
from .exceptions import (
    CommissionNotFoundError,
    InvalidStatusTransitionError,
    InvalidSubmissionError,
)
from .notifications import notify_status_update

logger = logging.getLogger(__name__)

_UNSET = object()


def _lock_commission(commission_id: int) -> Commission:
    try:
        return (
            Commission.objects
            .select_for_update()
            .select_related('request')
            .get(id=commission_id)
        )
    except Commission.DoesNotExist:
        raise CommissionNotFoundError("Commission not found")


@transaction.atomic
def update_commission(
    *,
    commission_id: int,
    status: Optional[str] = None,
    progress: Optional[str] = None,
    expected_completion_date=_UNSET,
    is_public_work: Optional[bool] = None,
    tags: Optional[Iterable[str]] = None,
) -> Commission:
    """
    Apply operator changes to a commission.

    Only the given fields change. A status change must follow the pipeline
    (Accepted -> Working, Working <-> Waiting, Working/Waiting -> Finished);
    the parent request's status follows and finishing stamps today's date as
    the actual completion date. Status or progress changes notify the client.

    Args:
        commission_id: ID of the commission
        status: New commission status
        progress: Free-text progress label
        expected_completion_date: Date or None to clear it
        is_public_work: Show NSFW work to anonymous viewers
        tags: Tag names replacing the current tags; created when missing

    Raises:
        CommissionNotFoundError: If the commission doesn't exist
        InvalidStatusTransitionError: If the status change is not allowed
    """
    commission = _lock_commission(commission_id)
    notify = False

    if status is not None and status != commission.status:
        if not commission.can_transition_to(status):
            raise InvalidStatusTransitionError(
                f"Cannot move commission from {commission.status} to {status}"
            )
        previous = commission.status
        commission.status = status
        if status == CommissionStatus.FINISHED:
            commission.actual_completion_date = timezone.localdate()

        commission.request.status = status
        commission.request.save(update_fields=['status', 'updated_at'])

        logger.info('Commission %s moved from %s to %s', commission.pk, previous, status)
        notify = True

    if progress is not None and progress != commission.progress:
        commission.progress = progress
        notify = True

    if expected_completion_date is not _UNSET:
        commission.expected_completion_date = expected_completion_date

    if is_public_work is not None:
        commission.is_public_work = is_public_work

    commission.save()

    if tags is not None:
        tag_objects = []
        for name in tags:
            name = name.strip()
            if name:
                tag, _ = Tag.objects.get_or_create(name=name)
                tag_objects.append(tag)
        commission.tags.set(tag_objects)

    if notify:
        notify_status_update(commission.pk)

    return commission


@transaction.atomic
def add_commission_update(
    *,
    commission_id: int,
    title: str = '',
    description: str = '',
    uploaded_file=None,
) -> CommissionUpdate:
    """
    Append an entry to a commission's update log.

    An attached video is stored as ``video_path``, an image as
    ``image_path``. The commission's ``updated_at`` is bumped and the
    client is notified.

    Raises:
        CommissionNotFoundError: If the commission doesn't exist
        InvalidSubmissionError: If the attached file is not an allowed image/video
    """
    commission = _lock_commission(commission_id)

    image_path = ''
    video_path = ''
    if uploaded_file is not None:
        try:
            path = save_upload(
                uploaded_file,
                kind='commissions',
                prefix=f'commission-{commission.pk}',
                extensions=IMAGE_EXTENSIONS + VIDEO_EXTENSIONS,
            )
        except InvalidUploadError as e:
            raise InvalidSubmissionError(str(e))
        if is_video(path):
            video_path = path
        else:
            image_path = path

    update = CommissionUpdate.objects.create(
        commission=commission,
        title=title,
        description=description,
        image_path=image_path,
        video_path=video_path,
    )

    commission.save(update_fields=['updated_at'])

    logger.info('Update %s posted on commission %s', update.pk, commission.pk)
    notify_status_update(commission.pk)

    return update
