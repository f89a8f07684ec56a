"""
Talent ledger URLs (admin / shared)
"""
from django.urls import path
from ..views import talents_adjust_view, talents_history_view

app_name = 'talents'

urlpatterns = [
    path('adjust', talents_adjust_view, name='adjust'),
    path('history', talents_history_view, name='history'),
]
