from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import (
    Activity, Comment, Notification, Project, ProjectMember,
    Team, TeamMember, Ticket, TicketCounter, TicketHistory, User,
)

admin.site.register(TicketCounter)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "name", "email", "role", "is_active")
    list_filter = ("role", "is_active", "is_staff")
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Tracker", {"fields": ("name", "role", "avatar")}),
    )


class ProjectMemberInline(admin.TabularInline):
    model = ProjectMember
    extra = 0
    raw_id_fields = ("user",)


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("key", "name", "owner", "team", "status", "category", "created_at")
    list_filter = ("status", "category")
    search_fields = ("key", "name")
    inlines = [ProjectMemberInline]


class TeamMemberInline(admin.TabularInline):
    model = TeamMember
    extra = 0
    raw_id_fields = ("user",)


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ("name", "owner", "is_active", "created_at")
    search_fields = ("name",)
    inlines = [TeamMemberInline]


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ("ticket_number", "title", "project", "status", "priority", "assignee", "created_at")
    list_filter = ("project", "status", "priority", "type")
    search_fields = ("ticket_number", "title")
    raw_id_fields = ("reporter", "assignee", "watchers")


@admin.register(TicketHistory)
class TicketHistoryAdmin(admin.ModelAdmin):
    list_display = ("ticket", "action", "field", "user", "timestamp")
    list_filter = ("action",)

    # append-only
    def has_change_permission(self, request, obj=None):
        return False


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ("ticket", "author", "is_edited", "created_at")
    search_fields = ("content", "ticket__ticket_number")


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ("user", "action", "entity_type", "entity_id", "project", "created_at")
    list_filter = ("action", "entity_type")


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("recipient", "type", "title", "read", "created_at")
    list_filter = ("type", "read")
