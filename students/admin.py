"""
Admin configuration for students app
"""
from django.contrib import admin
from .models import Student, Teacher


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    """Student Admin. Balance is read-only here; adjust it through the talent ledger."""
    list_display = ['name', 'class_name', 'teacher', 'talents', 'created_at']
    list_filter = ['class_name', 'teacher']
    search_fields = ['name', 'teacher', 'user__email']
    readonly_fields = ['talents', 'initial_talents', 'created_at', 'updated_at']
    ordering = ['class_name', 'name']

    def get_readonly_fields(self, request, obj=None):
        # Opening balance can be set on creation only
        if obj is None:
            return ['initial_talents', 'created_at', 'updated_at']
        return self.readonly_fields


@admin.register(Teacher)
class TeacherAdmin(admin.ModelAdmin):
    """Teacher Admin"""
    list_display = ['name', 'class_name', 'talents', 'created_at']
    search_fields = ['name', 'user__email']
    readonly_fields = ['talents', 'initial_talents', 'created_at', 'updated_at']
    ordering = ['name']

    def get_readonly_fields(self, request, obj=None):
        if obj is None:
            return ['initial_talents', 'created_at', 'updated_at']
        return self.readonly_fields
