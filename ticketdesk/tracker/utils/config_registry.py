# ============================================
# tracker/utils/config_registry.py
# ============================================
"""
Per-project allow-lists of ticket types, statuses and priorities.

Every entry is a structured record ``{"name", "color", "order"|"icon"}``;
validation always compares ``entry["name"]`` against the candidate,
case-sensitively.
"""
from typing import Any, Dict, Iterable, List, Optional

TYPE = 'type'
STATUS = 'status'
PRIORITY = 'priority'
KINDS = (TYPE, STATUS, PRIORITY)

# kind -> Project field holding the list
FIELD_BY_KIND = {
    TYPE: 'ticket_types',
    STATUS: 'ticket_statuses',
    PRIORITY: 'ticket_priorities',
}

DEFAULT_COLOR = '#4299E1'

DEFAULT_TICKET_TYPES = [
    {'name': 'Bug', 'icon': 'bug', 'color': '#E53E3E'},
    {'name': 'Feature', 'icon': 'star', 'color': '#38A169'},
    {'name': 'Task', 'icon': 'check-circle', 'color': '#4299E1'},
    {'name': 'Epic', 'icon': 'lightning', 'color': '#805AD5'},
]

DEFAULT_TICKET_STATUSES = [
    {'name': 'To Do', 'color': '#718096', 'order': 0},
    {'name': 'In Progress', 'color': '#4299E1', 'order': 1},
    {'name': 'Review', 'color': '#805AD5', 'order': 2},
    {'name': 'Done', 'color': '#38A169', 'order': 3},
]

DEFAULT_TICKET_PRIORITIES = [
    {'name': 'Low', 'color': '#38A169', 'order': 0},
    {'name': 'Medium', 'color': '#4299E1', 'order': 1},
    {'name': 'High', 'color': '#DD6B20', 'order': 2},
    {'name': 'Critical', 'color': '#E53E3E', 'order': 3},
]

DEFAULTS_BY_KIND = {
    TYPE: DEFAULT_TICKET_TYPES,
    STATUS: DEFAULT_TICKET_STATUSES,
    PRIORITY: DEFAULT_TICKET_PRIORITIES,
}


def default_entries(kind: str) -> List[Dict[str, Any]]:
    """Fresh copy of the default list for a kind"""
    return [dict(entry) for entry in DEFAULTS_BY_KIND[kind]]


def normalize_entries(kind: str, entries: Optional[Iterable[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """
    Turn caller-supplied entries into structured records.
    Types carry an icon, statuses and priorities carry an order
    (defaulting to the entry's position in the list).
    """
    out: List[Dict[str, Any]] = []
    for position, raw in enumerate(entries or []):
        name = (raw.get('name') or '').strip()
        if not name:
            raise ValueError(f"Every ticket {kind} needs a name")
        entry = {'name': name, 'color': raw.get('color') or DEFAULT_COLOR}
        if kind == TYPE:
            entry['icon'] = raw.get('icon') or 'task'
        else:
            order = raw.get('order')
            entry['order'] = position if order is None else int(order)
        out.append(entry)

    names_seen = [e['name'] for e in out]
    if len(set(names_seen)) != len(names_seen):
        raise ValueError(f"Ticket {kind} names must be unique")
    return out


def entry_names(entries: Iterable[Dict[str, Any]]) -> List[str]:
    return [entry['name'] for entry in entries or []]


def is_valid(entries: Iterable[Dict[str, Any]], name: Optional[str]) -> bool:
    if not isinstance(name, str):
        return False
    return any(entry.get('name') == name for entry in entries or [])
