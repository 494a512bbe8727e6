# -*- coding: utf-8 -*-
"""
Isolation boundary for best-effort writes (activity log, notifications).

The primary mutation is already persisted when these run; a failure here
is logged and handed back as a result object instead of an exception.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from django.db import transaction

from tracker.exceptions import AuditWriteFailure

log = logging.getLogger(__name__)


@dataclass
class SideEffectResult:
    label: str
    ok: bool
    value: Any = None
    error: Optional[AuditWriteFailure] = None


def best_effort(label: str, fn: Callable[..., Any], *args, **kwargs) -> SideEffectResult:
    try:
        # savepoint: a failed insert must not poison an enclosing transaction
        with transaction.atomic():
            value = fn(*args, **kwargs)
    except Exception as ex:
        log.warning("[side-effect] %s failed: %s", label, ex, exc_info=True)
        return SideEffectResult(label=label, ok=False, error=AuditWriteFailure(label, ex))
    return SideEffectResult(label=label, ok=True, value=value)
