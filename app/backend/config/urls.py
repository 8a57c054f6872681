"""URL configuration for the movie library backend."""

from django.urls import include, path

urlpatterns = [
    path("api/", include("core.urls")),
    path("api/", include("users.urls")),
]
