# ============================================
# tracker/urls.py
# ============================================
from django.urls import path

from tracker.views.activity import (
    EntityActivityAPIView,
    ProjectActivityAPIView,
    TeamActivityAPIView,
    UserActivityAPIView,
)
from tracker.views.comment import (
    CommentAttachmentDetailAPIView,
    CommentAttachmentListAPIView,
    CommentDetailAPIView,
    CommentListCreateAPIView,
)
from tracker.views.notification import (
    NotificationDetailAPIView,
    NotificationListAPIView,
    NotificationReadAllAPIView,
    NotificationReadAPIView,
    NotificationUnreadCountAPIView,
)
from tracker.views.project import (
    ProjectDetailAPIView,
    ProjectListCreateAPIView,
    ProjectMemberDetailAPIView,
    ProjectMemberListAPIView,
    ProjectTicketPrioritiesAPIView,
    ProjectTicketStatusesAPIView,
    ProjectTicketTypesAPIView,
)
from tracker.views.team import (
    TeamDetailAPIView,
    TeamListCreateAPIView,
    TeamMemberDetailAPIView,
    TeamMemberListAPIView,
)
from tracker.views.ticket import (
    TicketAssignAPIView,
    TicketAttachmentDetailAPIView,
    TicketAttachmentListAPIView,
    TicketDetailAPIView,
    TicketHistoryAPIView,
    TicketListCreateAPIView,
    TicketStatusAPIView,
    TicketWatcherDetailAPIView,
    TicketWatcherListAPIView,
)
from tracker.views.user import (
    UserDetailAPIView,
    UserMeAPIView,
    UserRoleAPIView,
    UserSearchAPIView,
)

app_name = 'tracker'

urlpatterns = [
    # Projects
    path('projects/', ProjectListCreateAPIView.as_view(), name='project-list-create'),
    path('projects/<int:project_id>/', ProjectDetailAPIView.as_view(), name='project-detail'),
    path('projects/<int:project_id>/members/', ProjectMemberListAPIView.as_view(), name='project-member-add'),
    path('projects/<int:project_id>/members/<int:user_id>/', ProjectMemberDetailAPIView.as_view(), name='project-member-detail'),
    path('projects/<int:project_id>/ticket-types/', ProjectTicketTypesAPIView.as_view(), name='project-ticket-types'),
    path('projects/<int:project_id>/ticket-statuses/', ProjectTicketStatusesAPIView.as_view(), name='project-ticket-statuses'),
    path('projects/<int:project_id>/ticket-priorities/', ProjectTicketPrioritiesAPIView.as_view(), name='project-ticket-priorities'),
    path('projects/<int:project_id>/activity/', ProjectActivityAPIView.as_view(), name='project-activity'),

    # Teams
    path('teams/', TeamListCreateAPIView.as_view(), name='team-list-create'),
    path('teams/<int:team_id>/', TeamDetailAPIView.as_view(), name='team-detail'),
    path('teams/<int:team_id>/members/', TeamMemberListAPIView.as_view(), name='team-member-add'),
    path('teams/<int:team_id>/members/<int:user_id>/', TeamMemberDetailAPIView.as_view(), name='team-member-detail'),
    path('teams/<int:team_id>/activity/', TeamActivityAPIView.as_view(), name='team-activity'),

    # Tickets
    path('tickets/', TicketListCreateAPIView.as_view(), name='ticket-list-create'),
    path('tickets/<int:ticket_id>/', TicketDetailAPIView.as_view(), name='ticket-detail'),
    path('tickets/<int:ticket_id>/assign/', TicketAssignAPIView.as_view(), name='ticket-assign'),
    path('tickets/<int:ticket_id>/status/', TicketStatusAPIView.as_view(), name='ticket-status'),
    path('tickets/<int:ticket_id>/history/', TicketHistoryAPIView.as_view(), name='ticket-history'),
    path('tickets/<int:ticket_id>/watchers/', TicketWatcherListAPIView.as_view(), name='ticket-watcher-add'),
    path('tickets/<int:ticket_id>/watchers/<str:user_id>/', TicketWatcherDetailAPIView.as_view(), name='ticket-watcher-remove'),
    path('tickets/<int:ticket_id>/attachments/', TicketAttachmentListAPIView.as_view(), name='ticket-attachment-add'),
    path('tickets/<int:ticket_id>/attachments/<str:attachment_id>/', TicketAttachmentDetailAPIView.as_view(), name='ticket-attachment-remove'),

    # Comments
    path('tickets/<int:ticket_id>/comments/', CommentListCreateAPIView.as_view(), name='comment-list-create'),
    path('comments/<int:comment_id>/', CommentDetailAPIView.as_view(), name='comment-detail'),
    path('comments/<int:comment_id>/attachments/', CommentAttachmentListAPIView.as_view(), name='comment-attachment-add'),
    path('comments/<int:comment_id>/attachments/<str:attachment_id>/', CommentAttachmentDetailAPIView.as_view(), name='comment-attachment-remove'),

    # Activity
    path('activities/user/<int:user_id>/', UserActivityAPIView.as_view(), name='activity-user'),
    path('activities/project/<int:project_id>/', ProjectActivityAPIView.as_view(), name='activity-project'),
    path('activities/team/<int:team_id>/', TeamActivityAPIView.as_view(), name='activity-team'),
    path('activities/entity/<str:entity_type>/<str:entity_id>/', EntityActivityAPIView.as_view(), name='activity-entity'),

    # Notifications
    path('notifications/', NotificationListAPIView.as_view(), name='notification-list'),
    path('notifications/unread/count/', NotificationUnreadCountAPIView.as_view(), name='notification-unread-count'),
    path('notifications/read-all/', NotificationReadAllAPIView.as_view(), name='notification-read-all'),
    path('notifications/<int:notification_id>/read/', NotificationReadAPIView.as_view(), name='notification-read'),
    path('notifications/<int:notification_id>/', NotificationDetailAPIView.as_view(), name='notification-detail'),

    # Users
    path('users/me/', UserMeAPIView.as_view(), name='user-me'),
    path('users/search/', UserSearchAPIView.as_view(), name='user-search'),
    path('users/<int:user_id>/role/', UserRoleAPIView.as_view(), name='user-role'),
    path('users/<int:user_id>/', UserDetailAPIView.as_view(), name='user-detail'),
]
