# apps/core/urls.py

from django.urls import re_path
from . import views

app_name = 'core'

urlpatterns = [
    # === AUTHENTICATION ===
    re_path(r'^register/?$', views.RegisterView.as_view(), name='register'),
    re_path(r'^login/?$', views.LoginView.as_view(), name='login'),
]
