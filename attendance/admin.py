"""
Admin configuration for attendance app.
Status and flags are read-only here: changing them must go through the ledger services.
"""
from django.contrib import admin
from .models import AttendanceRecord, WeeklyActivity


@admin.register(AttendanceRecord)
class AttendanceRecordAdmin(admin.ModelAdmin):
    """Attendance Record Admin"""
    list_display = ['student', 'date', 'status', 'comment', 'marked_by', 'created_at']
    list_filter = ['status', 'date']
    search_fields = ['student__name', 'comment']
    readonly_fields = ['student', 'date', 'status', 'marked_by', 'created_at', 'updated_at']
    ordering = ['-date']

    def has_add_permission(self, request):
        return False


@admin.register(WeeklyActivity)
class WeeklyActivityAdmin(admin.ModelAdmin):
    list_display = ['student', 'date', 'scripture', 'recitation', 'quiet_time', 'phone_check']
    list_filter = ['date']
    search_fields = ['student__name']
    readonly_fields = ['student', 'date', 'scripture', 'recitation', 'quiet_time', 'phone_check', 'created_at', 'updated_at']
    ordering = ['-date']

    def has_add_permission(self, request):
        return False
