"""
Email notifications for commission events.

Two triggers send mail: a new request (to the artist) and a status update
(to the client). Mail goes out after the surrounding transaction commits,
and a failed send is logged without touching the saved data.
"""

import logging
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction
from django.template.loader import render_to_string

from apps.commissions.models import Commission, CommissionRequest

logger = logging.getLogger(__name__)


def _send(*, to: str, subject: str, template: str, context: dict) -> bool:
    text_body = render_to_string(f'commissions/email/{template}.txt', context)
    html_body = render_to_string(f'commissions/email/{template}.html', context)
    try:
        send_mail(
            subject=subject,
            message=text_body,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[to],
            html_message=html_body,
        )
    except (SMTPException, OSError):
        logger.exception('Email sending failed: %r to %s', subject, to)
        return False

    logger.info('Email sent: %r to %s', subject, to)
    return True


def send_new_request_notification(commission_request: CommissionRequest) -> bool:
    """Tell the artist about a freshly submitted request."""
    return _send(
        to=settings.COMMISSIONS['ARTIST_EMAIL'],
        subject='New Commission Request Received',
        template='new_request',
        context={'request': commission_request},
    )


def send_status_update_notification(commission: Commission) -> bool:
    """Tell the client their commission moved or got a progress update."""
    client = commission.request.user
    return _send(
        to=client.email,
        subject=f'Commission Update: {commission.status}',
        template='status_update',
        context={'commission': commission, 'client': client},
    )


def notify_new_request(request_id: int) -> None:
    """Send the new-request mail once the current transaction commits."""
    def _notify():
        commission_request = (
            CommissionRequest.objects
            .select_related('user', 'service')
            .get(pk=request_id)
        )
        send_new_request_notification(commission_request)

    transaction.on_commit(_notify)


def notify_status_update(commission_id: int) -> None:
    """Send the status mail once the current transaction commits."""
    def _notify():
        commission = (
            Commission.objects
            .select_related('request__user')
            .get(pk=commission_id)
        )
        send_status_update_notification(commission)

    transaction.on_commit(_notify)
