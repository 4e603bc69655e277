"""User registration service."""

from django.db import transaction
from django.contrib.auth import get_user_model
from django.db.models import Q

from .exceptions import UserRegistrationError

User = get_user_model()


def check_credentials_available(*, username: str, email: str) -> None:
    """
    Make sure neither the username nor the email is in use.

    Raises:
        UserRegistrationError: With flags telling which of the two is taken
    """
    existing = list(
        User.objects
        .filter(Q(username=username) | Q(email__iexact=email))
        .values('username', 'email')
    )
    if existing:
        raise UserRegistrationError(
            "Username or email already exists",
            is_email_taken=any(u['email'].lower() == email.lower() for u in existing),
            is_username_taken=any(u['username'] == username for u in existing),
        )


@transaction.atomic
def register_user(
    *,
    username: str,
    email: str,
    password: str,
) -> User:
    """
    Register a new client account.

    Used by the standalone registration endpoint and by anonymous
    commission request submissions.

    Args:
        username: Unique login name
        email: Unique email address
        password: Raw password (will be hashed)

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the username or email is taken
    """
    check_credentials_available(username=username, email=email)

    return User.objects.create_user(
        username=username,
        email=email,
        password=password,
    )
