# ============================================
# tracker/exceptions.py
# ============================================
"""
Error taxonomy used by the services.

The classes extend Django's own exceptions so the rest of the stack
(DRF, admin, test client) recognises them:
- ValidationError    -> 400
- NotFoundError      -> 404
- AuthorizationError -> 403
AuditWriteFailure never leaves a side-effect boundary.
"""
from django.core.exceptions import PermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404


class ValidationError(DjangoValidationError):
    status_code = 400

    def __str__(self):
        return '; '.join(self.messages)


class NotFoundError(Http404):
    status_code = 404


class AuthorizationError(PermissionDenied):
    status_code = 403


class AuditWriteFailure(Exception):
    """Activity or notification write failed after the primary mutation."""

    def __init__(self, label: str, original: Exception):
        super().__init__(f"{label}: {original}")
        self.label = label
        self.original = original
