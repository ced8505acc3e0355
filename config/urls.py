# config/urls.py

from django.urls import path, include

from apps.core.views import HealthCheckView

urlpatterns = [
    # Authentication
    path('api/auth/', include('apps.core.urls')),

    # Tasks and activity log
    path('api/tasks', include('apps.board.urls')),
    path('api/logs', include('apps.activity.urls')),

    # Monitoring
    path('health', HealthCheckView.as_view(), name='health'),
    path('health/', HealthCheckView.as_view()),
]
