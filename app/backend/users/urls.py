"""URL configuration for users app."""

from django.urls import path, re_path

from . import views

urlpatterns = [
    path("auth/register", views.register, name="register"),
    path("user/", views.my_profile, name="my-profile"),
    path("user/uid/<str:user_id>", views.user_profile, name="user-profile"),
    path("user/name", views.update_display_name, name="update-display-name"),
    path("user/watchlist", views.add_to_watchlist, name="watchlist-add"),
    path("user/watchlist/<str:movie_id>", views.remove_from_watchlist, name="watchlist-remove"),
    path("user/favorites", views.favorite_movie, name="favorite-add"),
    path("user/favorites/<str:movie_id>", views.unfavorite_movie, name="favorite-remove"),
    path("user/feedback", views.create_feedback, name="feedback-create"),
    path("user/feedback/<str:movie_id>", views.feedback_detail, name="feedback-detail"),
    path("watched/", views.watched_list, name="watched-list"),
    path("watched/<str:movie_id>", views.watched_entry, name="watched-entry"),
    re_path(r"^movie/(?P<movie_id>[0-9]+)$", views.movie_detail, name="movie-detail"),
]
