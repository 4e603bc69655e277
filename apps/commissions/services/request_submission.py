"""Commission request submission service."""

from typing import Iterable, Optional

from django.conf import settings
from django.db import transaction

from apps.accounts.models import User
from apps.accounts.services import register_user
from apps.catalog.pricing import PriceQuote, estimate_from_counts
from apps.catalog.services import get_active_service, quote_for_service, vip_discount_rate
from apps.commissions.models import CommissionRequest
from apps.uploads import InvalidUploadError, save_upload, validate_upload
from .exceptions import InvalidSubmissionError
from .notifications import notify_new_request


def price_submission(
    *,
    service,
    character_count: int,
    alternative_count: int,
    pose_count: int,
    option_selections: Optional[Iterable[dict]],
    user: Optional[User],
) -> PriceQuote:
    """
    Server-side price for a submission.

    With option selections the service's option formulas decide; without
    them the fixed character/alternative/pose rule is used.
    """
    if option_selections:
        return quote_for_service(service=service, selections=option_selections, user=user)

    return estimate_from_counts(
        character_count,
        alternative_count,
        pose_count,
        is_vip=bool(user is not None and user.is_vip),
        discount_rate=vip_discount_rate(),
    )


@transaction.atomic
def submit_request(
    *,
    user: Optional[User],
    service_id: int,
    description: str,
    character_count: int = 1,
    alternative_count: int = 0,
    pose_count: int = 1,
    is_nsfw: bool = False,
    option_selections: Optional[list[dict]] = None,
    reference_files: Optional[list] = None,
    username: str = '',
    password: str = '',
    email: str = '',
) -> tuple[CommissionRequest, Optional[User]]:
    """
    Submit a new commission request.

    This operation:
    1. Validates the service and the reference images
    2. Registers an account for anonymous submitters
    3. Stores reference images under uploads/references/
    4. Prices the request server-side
    5. Creates the request in the Requested status
    6. Schedules the new-request email for after commit

    Args:
        user: Authenticated submitter, or None for anonymous visitors
        service_id: ID of an active service
        description: What the client wants drawn
        character_count: Number of characters (at least 1)
        alternative_count: Number of alternative versions
        pose_count: Number of poses (at least 1)
        is_nsfw: Whether the artwork is NSFW
        option_selections: ``{'option_id', 'value'}`` dicts for option pricing
        reference_files: Uploaded reference images
        username, password, email: Account details, required when user is None

    Returns:
        Tuple of (request, new_user) where new_user is the account created
        for an anonymous submitter, else None

    Raises:
        ServiceNotFoundError: If the service doesn't exist or is inactive
        InvalidSubmissionError: If account details or reference files are invalid
        UserRegistrationError: If the username or email is taken
    """
    service = get_active_service(service_id=service_id)

    reference_files = list(reference_files or [])
    max_references = settings.COMMISSIONS['MAX_REFERENCES']
    if len(reference_files) > max_references:
        raise InvalidSubmissionError(f"At most {max_references} reference images are allowed")

    try:
        for uploaded in reference_files:
            validate_upload(uploaded, kind='references')
    except InvalidUploadError as e:
        raise InvalidSubmissionError(str(e))

    new_user = None
    if user is None:
        if not (username and password and email):
            raise InvalidSubmissionError("Username, password, and email are required for new users")
        new_user = register_user(username=username, email=email, password=password)
        user = new_user

    references = [
        save_upload(uploaded, kind='references', prefix='reference')
        for uploaded in reference_files
    ]

    quote = price_submission(
        service=service,
        character_count=character_count,
        alternative_count=alternative_count,
        pose_count=pose_count,
        option_selections=option_selections,
        user=user,
    )

    commission_request = CommissionRequest.objects.create(
        user=user,
        service=service,
        description=description,
        character_count=character_count,
        alternative_count=alternative_count,
        pose_count=pose_count,
        is_nsfw=is_nsfw,
        references=references,
        total_price=quote.total_price,
        complexity=quote.complexity,
    )

    notify_new_request(commission_request.pk)

    return commission_request, new_user
