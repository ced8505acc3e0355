# apps/board/urls.py

from django.urls import re_path
from . import views

app_name = 'board'

urlpatterns = [
    # Grouped listing and creation
    re_path(r'^/?$', views.TaskListView.as_view(), name='list'),

    # Smart assign
    re_path(r'^/(?P<task_id>[^/]+)/smart-assign/?$', views.SmartAssignView.as_view(), name='smart_assign'),

    # Update and delete
    re_path(r'^/(?P<task_id>[^/]+)/?$', views.TaskDetailView.as_view(), name='detail'),
]
