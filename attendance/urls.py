"""
Attendance record URLs (collection route is mounted at /api/attendance in config.urls)
"""
from django.urls import path
from . import views

app_name = 'attendance'

urlpatterns = [
    path('<int:record_id>/comment', views.attendance_comment_view, name='comment'),
    path('<int:record_id>', views.attendance_delete_view, name='delete'),
]
