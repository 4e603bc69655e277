"""Profile management service."""

from django.db import transaction
from django.contrib.auth import get_user_model

from apps.uploads import save_upload
from .exceptions import UsernameTakenError

User = get_user_model()

_UNSET = object()


@transaction.atomic
def update_profile(*, user: User, username: str, description=_UNSET) -> User:
    """
    Change the user's username and, when given, the free-text description.

    Raises:
        UsernameTakenError: If another user already has this username
    """
    if User.objects.filter(username=username).exclude(pk=user.pk).exists():
        raise UsernameTakenError("Username is already taken")

    user.username = username
    update_fields = ['username', 'updated_at']
    if description is not _UNSET:
        user.description = description or ''
        update_fields.append('description')
    user.save(update_fields=update_fields)
    return user


def set_profile_picture(*, user: User, uploaded_file) -> str:
    """
    Store a new profile picture and point the user at it.

    Returns:
        Public URL path of the stored image

    Raises:
        InvalidUploadError: If the file is not an image or too large
    """
    user.profile_picture = save_upload(uploaded_file, kind='users', prefix=f'user-{user.pk}')
    user.save(update_fields=['profile_picture', 'updated_at'])
    return user.profile_picture


def set_banner(*, user: User, uploaded_file) -> str:
    """Store a new profile banner. Same rules as the profile picture."""
    user.banner = save_upload(uploaded_file, kind='users', prefix=f'user-{user.pk}')
    user.save(update_fields=['banner', 'updated_at'])
    return user.banner
