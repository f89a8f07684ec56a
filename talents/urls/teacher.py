"""
Teacher talent URLs
"""
from django.urls import path
from ..views import teacher_grant_view, teacher_weekly_grants_view

app_name = 'teacher-talents'

urlpatterns = [
    path('grant', teacher_grant_view, name='grant'),
    path('weekly-grants', teacher_weekly_grants_view, name='weekly-grants'),
]
