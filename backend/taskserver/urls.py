"""
URL configuration for the task list service.

Routes are exact and case-sensitive; anything unmatched, whatever the method,
falls through to the "Invalid api request" handler.
"""
from django.urls import include, path, re_path

from tasks.views import invalid_api_request

urlpatterns = [
    path('', include('tasks.urls')),
    re_path(r'^', invalid_api_request),
]
