"""
Admin configuration for talents app. History is append-only: no add, change or delete.
"""
from django.contrib import admin
from .models import TalentHistory, TeacherTalentHistory


class ReadOnlyHistoryAdmin(admin.ModelAdmin):
    list_filter = ['type', 'created_at']
    ordering = ['-created_at', '-id']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(TalentHistory)
class TalentHistoryAdmin(ReadOnlyHistoryAdmin):
    list_display = ['student', 'amount', 'before_balance', 'after_balance', 'type', 'reason', 'granted_by', 'created_at']
    search_fields = ['student__name', 'reason']


@admin.register(TeacherTalentHistory)
class TeacherTalentHistoryAdmin(ReadOnlyHistoryAdmin):
    list_display = ['teacher', 'amount', 'before_balance', 'after_balance', 'type', 'reason', 'created_at']
    search_fields = ['teacher__name', 'reason']
