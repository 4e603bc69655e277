"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    UsernameTakenError,
)
from .user_registration import register_user, check_credentials_available
from .user_authentication import authenticate_user
from .profile_management import update_profile, set_profile_picture, set_banner

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'UsernameTakenError',
    # Services
    'register_user',
    'check_credentials_available',
    'authenticate_user',
    'update_profile',
    'set_profile_picture',
    'set_banner',
]
