"""URL configuration for Context Chat."""
from django.urls import path, include
from django.http import JsonResponse


def health_check(request):
    """Health check endpoint for container orchestration."""
    return JsonResponse({'status': 'healthy'})


urlpatterns = [
    path('api/health', health_check, name='health_check'),
    path('api/', include('apps.relay.urls')),
]
