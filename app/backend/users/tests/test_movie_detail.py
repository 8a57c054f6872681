from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest
from django.urls import reverse
from django.utils import timezone

from core.exceptions import UpstreamFailure
from users.models import Watched
from users.services import get_community_feedback


@pytest.fixture
def omdb():
    instance = MagicMock()
    instance.get_by_imdb_id.return_value = {"imdbID": "tt0000550", "imdbRating": "8.8"}
    with patch("core.services.movie_details.OMDBClient", return_value=instance):
        yield instance


@pytest.mark.django_db
class TestCommunityFeedback:
    def test_skips_records_without_feedback(self, alice, bob):
        Watched.objects.create(user=bob, movie_id=550, rating=0)
        Watched.objects.create(user=alice, movie_id=550, is_favorited=True)
        Watched.objects.create(user=alice, movie_id=551, rating=4)

        feedback = get_community_feedback(550)

        assert [(entry["user"], entry["rating"]) for entry in feedback] == [("Bob", 0)]

    def test_newest_first(self, alice, bob):
        now = timezone.now()
        Watched.objects.create(user=alice, movie_id=550, content="Old", feedback_updated_at=now - timedelta(days=1))
        Watched.objects.create(user=bob, movie_id=550, content="New", feedback_updated_at=now)

        assert [entry["review"] for entry in get_community_feedback(550)] == ["New", "Old"]


@pytest.mark.django_db
class TestMovieDetailEndpoint:
    def test_includes_omdb_and_feedback(self, auth_client, alice, bob, tmdb, omdb):
        tmdb.get_movie_with_extras.return_value = {"id": 550, "imdb_id": "tt0000550"}
        Watched.objects.create(user=bob, movie_id=550, rating=5, content="Classic")
        Watched.objects.create(user=alice, movie_id=550, is_favorited=True)

        response = auth_client(alice).get(reverse("movie-detail", kwargs={"movie_id": 550}))

        assert response.status_code == 200
        assert response.data["omdb"]["imdbRating"] == "8.8"
        assert response.data["feedback"] == [
            {"user": "Bob", "rating": 5, "review": "Classic", "createdAt": None, "updatedAt": None}
        ]
        assert response.data["message"] == "Movie details fetched successfully"
        omdb.get_by_imdb_id.assert_called_once_with("tt0000550")

    def test_survives_omdb_failure(self, auth_client, alice, tmdb, omdb):
        tmdb.get_movie_with_extras.return_value = {"id": 550, "imdb_id": "tt0000550"}
        omdb.get_by_imdb_id.side_effect = UpstreamFailure()

        response = auth_client(alice).get(reverse("movie-detail", kwargs={"movie_id": 550}))

        assert response.status_code == 200
        assert "omdb" not in response.data
        assert response.data["feedback"] == []

    def test_upstream_failure(self, auth_client, alice, tmdb, omdb):
        tmdb.get_movie_with_extras.side_effect = UpstreamFailure()

        response = auth_client(alice).get(reverse("movie-detail", kwargs={"movie_id": 550}))

        assert response.status_code == 500
        assert response.data == {"message": "Something went wrong, please try again later"}

    def test_oversized_id(self, auth_client, alice, tmdb, omdb):
        response = auth_client(alice).get(reverse("movie-detail", kwargs={"movie_id": 10**20}))

        assert response.status_code == 400
        assert response.data["message"] == "Invalid movie ID"
        tmdb.get_movie_with_extras.assert_not_called()

    def test_requires_authentication(self, client):
        response = client.get(reverse("movie-detail", kwargs={"movie_id": 550}))

        assert response.status_code == 401
