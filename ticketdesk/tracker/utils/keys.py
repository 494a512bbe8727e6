# ============================================
# tracker/utils/keys.py
# ============================================
import re

from tracker.conf import tracker_setting

_WORD_RE = re.compile(r'[A-Za-z0-9]+')


def derive_project_key(name: str) -> str:
    """
    Project key from its name: uppercase initials of each word.
    Too short -> padded with the remaining letters of the name, then 'X'.
    Too long  -> cut to the maximum length.

    "Customer Portal" -> "CP", "Portal" -> "PO", "A" -> "AX"
    """
    min_len = tracker_setting('PROJECT_KEY_MIN_LENGTH')
    max_len = tracker_setting('PROJECT_KEY_MAX_LENGTH')

    words = _WORD_RE.findall(name or '')
    key = ''.join(word[0] for word in words).upper()

    if len(key) < min_len:
        leftovers = ''.join(word[1:] for word in words).upper()
        key = (key + leftovers)[:min_len]
    if len(key) < min_len:
        key = key.ljust(min_len, 'X')

    return key[:max_len]
