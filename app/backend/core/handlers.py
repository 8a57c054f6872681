"""DRF exception handler: every error becomes ``{"message": ...}``."""

import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .exceptions import GENERIC_ERROR_MESSAGE

logger = logging.getLogger(__name__)


def _first_message(detail):
    if isinstance(detail, list):
        return _first_message(detail[0]) if detail else ""
    if isinstance(detail, dict):
        return _first_message(next(iter(detail.values()))) if detail else ""
    return str(detail)


def _field_errors(detail):
    return {field: _first_message(messages) for field, messages in detail.items()}


def api_exception_handler(exc, context):
    """
    Convert every error into ``{"message": ...}``.

    Field-level validation failures additionally carry ``{"errors": {field: message}}``,
    with the first field's message repeated as the top-level message.
    Anything DRF does not recognise is logged and answered with a generic 500.
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception(f"Unhandled error in {view.__class__.__name__ if view else 'request'}: {exc}")
        return Response({"message": GENERIC_ERROR_MESSAGE}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    detail = exc.detail if isinstance(exc, exceptions.APIException) else response.data
    payload = {"message": _first_message(detail)}

    if isinstance(exc, exceptions.ValidationError) and isinstance(detail, dict):
        errors = _field_errors(detail)
        if set(errors) != {"non_field_errors"}:
            payload["errors"] = errors

    if response.status_code >= 500:
        logger.error(f"{exc.__class__.__name__}: {payload['message']}")

    response.data = payload
    return response
