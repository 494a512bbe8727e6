# ============================================
# tracker/models/__init__.py
# ============================================
from .mixins import MemberRole, TimeStampedModel
from .user import User
from .team import Team, TeamMember
from .project import Project, ProjectMember
from .ticket import Ticket, TicketCounter
from .history import TicketHistory
from .comment import Comment
from .activity import Activity
from .notification import Notification

__all__ = [
    'MemberRole',
    'TimeStampedModel',
    'User',
    'Team',
    'TeamMember',
    'Project',
    'ProjectMember',
    'Ticket',
    'TicketCounter',
    'TicketHistory',
    'Comment',
    'Activity',
    'Notification',
]
