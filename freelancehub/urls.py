"""
URL configuration for the freelancehub project.

This is the main URL configuration that routes all requests to appropriate apps.
Includes API versioning, schema generation and health checks.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.http import JsonResponse
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView


# ==================== Health Check Endpoint ====================

def health_check(request):
    """
    Health check endpoint for load balancers and monitoring.
    Returns basic health status and the database connection state.
    """
    from django.db import connection
    import time

    health_status = {
        'status': 'healthy',
        'timestamp': time.time(),
        'version': getattr(settings, 'APP_VERSION', '1.0.0'),
    }

    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        health_status['database'] = 'connected'
    except Exception as e:
        health_status['database'] = 'error'
        health_status['status'] = 'degraded'
        health_status['database_error'] = str(e)

    status_code = 200 if health_status['status'] == 'healthy' else 503
    return JsonResponse(health_status, status=status_code)


# ==================== API v1 ====================

api_v1_patterns = [
    path('', include('projects.api.urls', namespace='projects')),
    path('', include('applications.api.urls', namespace='applications')),
    path('notifications/', include('notifications.api.urls', namespace='notifications')),
    path('memberships/', include('memberships.api.urls', namespace='memberships')),
    path('dashboard/', include('dashboard.api.urls', namespace='dashboard')),

    # OpenAPI schema
    path('schema/', SpectacularAPIView.as_view(), name='schema'),
    path('docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
]

urlpatterns = [
    path('health/', health_check, name='health_check'),
    path('api/v1/', include(api_v1_patterns)),
]

# Public project files only; application attachments live under
# PRIVATE_MEDIA_ROOT and are served by the attachment endpoint
urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)


"""
URL Structure Overview:
=======================

Health Checks (no auth):
    /health/                        - Health check with DB status

API Endpoints:
    /api/v1/projects/               - Project feed and lifecycle
    /api/v1/comments/               - Comment likes and moderation
    /api/v1/activity/               - Caller's activity log
    /api/v1/applications/           - Applications and attachments
    /api/v1/my-applications/        - Caller's applications
    /api/v1/notifications/          - Notification inbox
    /api/v1/memberships/            - Plans, status, upgrades, commission
    /api/v1/dashboard/              - Client and freelancer dashboards

API Documentation:
    /api/v1/schema/                 - OpenAPI schema
    /api/v1/docs/                   - Swagger UI
"""
