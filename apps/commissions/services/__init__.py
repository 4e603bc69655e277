"""
Commissions services - Business logic layer.

This package contains the commission workflow:
- Request submission and server-side pricing
- Operator decisions on requests (accept / decline)
- Commission status changes and the update log
- Queue, kanban and detail visibility
- Email notifications
"""

from .request_submission import submit_request, price_submission
from .request_management import (
    get_user_requests,
    get_request_for_user,
    accept_request,
    decline_request,
)
from .commission_management import update_commission, add_commission_update
from .queue import (
    is_authenticated,
    list_commissions,
    get_pending_requests,
    build_kanban,
    get_commission_for_viewer,
    can_view_full_detail,
    get_commission_updates,
    get_client_commissions,
)
from .notifications import (
    send_new_request_notification,
    send_status_update_notification,
    notify_new_request,
    notify_status_update,
)
from .exceptions import (
    CommissionsServiceError,
    InvalidSubmissionError,
    RequestNotFoundError,
    RequestAccessDeniedError,
    InvalidRequestStateError,
    CommissionNotFoundError,
    AuthenticationRequiredError,
    InvalidStatusTransitionError,
)

__all__ = [
    # Submission
    'submit_request',
    'price_submission',
    # Requests
    'get_user_requests',
    'get_request_for_user',
    'accept_request',
    'decline_request',
    # Commissions
    'update_commission',
    'add_commission_update',
    # Queue
    'is_authenticated',
    'list_commissions',
    'get_pending_requests',
    'build_kanban',
    'get_commission_for_viewer',
    'can_view_full_detail',
    'get_commission_updates',
    'get_client_commissions',
    # Notifications
    'send_new_request_notification',
    'send_status_update_notification',
    'notify_new_request',
    'notify_status_update',
    # Exceptions
    'CommissionsServiceError',
    'InvalidSubmissionError',
    'RequestNotFoundError',
    'RequestAccessDeniedError',
    'InvalidRequestStateError',
    'CommissionNotFoundError',
    'AuthenticationRequiredError',
    'InvalidStatusTransitionError',
]
