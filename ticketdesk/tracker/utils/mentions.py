# ============================================
# tracker/utils/mentions.py
# ============================================
import re
from typing import List

MENTION_RE = re.compile(r'@(\w+)')


def parse_mentions(content: str) -> List[str]:
    """
    Extract ``@handle`` tokens from comment content, in order, without
    duplicates. Handles are not resolved to users here; unknown handles
    are simply kept as text.
    """
    return list(dict.fromkeys(MENTION_RE.findall(content or '')))
