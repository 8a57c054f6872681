"""URL configuration for core app."""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from . import views

router = SimpleRouter(trailing_slash=False)
router.register(r"movie", views.MovieViewSet, basename="movie")

urlpatterns = [
    path("", include(router.urls)),
    path("genre/movie/list", views.movie_genres, name="genre-list"),
    path("health/", views.health_check, name="health-check"),
]
