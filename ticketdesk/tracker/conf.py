# ============================================
# tracker/conf.py
# ============================================
from django.conf import settings

DEFAULTS = {
    'TICKET_NUMBERING': 'global_sequential',
    'DEFAULT_PAGE_SIZE': 20,
    'MAX_PAGE_SIZE': 200,
    'TICKET_PAGE_SIZE': 10,
    'PROJECT_KEY_MIN_LENGTH': 2,
    'PROJECT_KEY_MAX_LENGTH': 10,
}

GLOBAL_SEQUENTIAL = 'global_sequential'
PROJECT_SCOPED = 'project_scoped'
NUMBERING_SCHEMES = (GLOBAL_SEQUENTIAL, PROJECT_SCOPED)


def tracker_setting(name: str):
    """Read a value from settings.TRACKER, falling back to DEFAULTS"""
    overrides = getattr(settings, 'TRACKER', {}) or {}
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
