"""
URL configuration for the talent ledger service
"""
from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods
from django.views.generic import RedirectView
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularSwaggerView,
    SpectacularRedocView,
)

from attendance.views import attendance_view, weekly_activity_view


@require_http_methods(["GET"])
def health_view(request):
    """Minimal health check for connectivity verification. No auth required."""
    return JsonResponse({'status': 'ok', 'service': 'talent-ledger'})


@require_http_methods(["GET"])
def api_root(request):
    """Root endpoint - API information"""
    return JsonResponse({
        'name': 'Talent Ledger API',
        'version': '1.0.0',
        'description': 'Church-school attendance, activities and talent ledger',
        'endpoints': {
            'health': '/api/health/',
            'auth': '/api/auth/',
            'attendance': '/api/attendance',
            'weeklyActivities': '/api/weekly-activities',
            'talents': '/api/talents/',
            'teacher': '/api/teacher/talents/',
            'store': '/api/store/',
            'docs': '/api/docs/',
            'schema': '/api/schema/',
        }
    })


urlpatterns = [
    path('', api_root, name='api-root'),
    path('admin', RedirectView.as_view(url='/admin/', permanent=False)),
    path('admin/', admin.site.urls),
    path('api', RedirectView.as_view(url='/api/', permanent=False)),
    path('api/', api_root),
    path('api/health/', health_view, name='api-health'),

    # API Schema
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),

    # API endpoints
    path('api/auth/', include('accounts.urls')),
    path('api/attendance', attendance_view, name='attendance-collection'),
    path('api/attendance/', include('attendance.urls')),
    path('api/weekly-activities', weekly_activity_view, name='weekly-activities'),
    path('api/talents/', include('talents.urls.admin')),
    path('api/teacher/talents/', include('talents.urls.teacher')),
    path('api/store/', include('store.urls')),
]
