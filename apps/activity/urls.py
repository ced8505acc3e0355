# apps/activity/urls.py

from django.urls import re_path
from . import views

app_name = 'activity'

urlpatterns = [
    re_path(r'^/?$', views.LogListView.as_view(), name='list'),
]
