# -*- coding: utf-8 -*-
"""
DRF exception handler: every error leaves the API as
``{"message": str, "stack": str | None}``.

``stack`` is filled only when DEBUG is on.
"""
from __future__ import annotations
import logging
import traceback
from typing import Optional

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response

logger = logging.getLogger(__name__)


def _stack(exc: Exception) -> Optional[str]:
    if not settings.DEBUG:
        return None
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def _error(exc: Exception, message: str, code: int, **extra) -> Response:
    body = {"message": message}
    body.update(extra)
    body["stack"] = _stack(exc)
    return Response(body, status=code)


def tracker_exception_handler(exc, context):
    # domain errors first: they subclass Django's own exceptions
    if isinstance(exc, DjangoValidationError):
        return _error(exc, "; ".join(exc.messages), status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, Http404):
        return _error(exc, str(exc) or "Not found", status.HTTP_404_NOT_FOUND)

    if isinstance(exc, PermissionDenied):
        return _error(exc, str(exc) or "Forbidden", status.HTTP_403_FORBIDDEN)

    if isinstance(exc, exceptions.ValidationError):
        return _error(exc, "Validation failed", status.HTTP_400_BAD_REQUEST, errors=exc.detail)

    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        response = _error(exc, str(exc.detail), status.HTTP_401_UNAUTHORIZED)
        auth_header = getattr(exc, "auth_header", None)
        if auth_header:
            response["WWW-Authenticate"] = auth_header
        return response

    if isinstance(exc, exceptions.APIException):
        return _error(exc, str(exc.detail), exc.status_code)

    view = context.get("view")
    logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "view")
    return _error(exc, "Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)
