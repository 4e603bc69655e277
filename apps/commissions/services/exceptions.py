"""Domain exceptions for commissions app."""


class CommissionsServiceError(Exception):
    """Base exception for all commissions service errors."""
    pass


class InvalidSubmissionError(CommissionsServiceError):
    """Request submission is missing data or carries invalid files."""
    pass


class RequestNotFoundError(CommissionsServiceError):
    """Commission request does not exist."""
    pass


class RequestAccessDeniedError(CommissionsServiceError):
    """User is neither the request owner nor the operator."""
    pass


class InvalidRequestStateError(CommissionsServiceError):
    """Request cannot be accepted or declined in its current status."""
    pass


class CommissionNotFoundError(CommissionsServiceError):
    """Commission does not exist."""
    pass


class AuthenticationRequiredError(CommissionsServiceError):
    """Anonymous viewer asked for NSFW work that is not public."""
    pass


class InvalidStatusTransitionError(CommissionsServiceError):
    """Commission cannot move to the requested status."""
    pass
