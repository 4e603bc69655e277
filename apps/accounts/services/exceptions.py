"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError):
    """Raised when user registration fails."""

    def __init__(self, message, *, is_email_taken=False, is_username_taken=False):
        super().__init__(message)
        self.is_email_taken = is_email_taken
        self.is_username_taken = is_username_taken


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class UsernameTakenError(AccountsServiceError):
    """Raised when a profile update picks another user's username."""
    pass
