"""API-wide exception handling."""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """
    Wrap DRF's default handler so unhandled errors still answer in JSON.

    Known API exceptions (validation, authentication, permission, not found)
    keep DRF's responses. Anything else is logged and turned into a generic
    500; the exception text is only exposed when DEBUG is on.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get('view')
    logger.error(
        'Unhandled exception in %s',
        view.__class__.__name__ if view else 'unknown view',
        exc_info=exc,
    )

    body = {'error': 'Internal server error'}
    if settings.DEBUG:
        body['detail'] = str(exc)
    return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
