import threading
from unittest.mock import MagicMock

import pytest

from core.tests.fakes import failing_for, fake_movie
from core.authentication import Principal
from core.exceptions import NotFound, UpstreamFailure, ValidationError
from users.models import Visit, Watched
from users.services.profile import collect_movie_ids, fetch_movie_details, get_profile


def principal_for(user):
    return Principal(uid=user.firebase_uid, email=user.email)


def movie_ids(profile):
    return {movie["id"] for movie in profile["movies"]}


class TestCollectMovieIds:
    def test_dedupes_in_first_seen_order(self):
        assert collect_movie_ids([3, 1, 2], [2, 4, 3]) == [3, 1, 2, 4]

    def test_empty(self):
        assert collect_movie_ids([], []) == []


class TestFetchMovieDetails:
    def test_failed_fetch_is_dropped(self):
        tmdb = MagicMock()
        tmdb.get_movie.side_effect = failing_for(2, error=UpstreamFailure)

        movies = fetch_movie_details([1, 2, 3], tmdb=tmdb)

        assert [movie["id"] for movie in movies] == [1, 3]

    def test_unexpected_error_is_dropped(self):
        tmdb = MagicMock()
        tmdb.get_movie.side_effect = failing_for(1, error=ZeroDivisionError)

        assert [movie["id"] for movie in fetch_movie_details([1, 2], tmdb=tmdb)] == [2]

    def test_chunks_run_in_order(self):
        started = []
        lock = threading.Lock()
        tmdb = MagicMock()

        def get_movie(movie_id):
            with lock:
                started.append(movie_id)
            return fake_movie(movie_id)

        tmdb.get_movie.side_effect = get_movie

        movies = fetch_movie_details([1, 2, 3, 4, 5], tmdb=tmdb, chunk_size=2)

        assert set(started[:2]) == {1, 2}
        assert set(started[2:4]) == {3, 4}
        assert started[4] == 5
        assert [movie["id"] for movie in movies] == [1, 2, 3, 4, 5]

    def test_chunk_requests_are_in_flight_together(self):
        # Every request blocks until the whole chunk has started; a broken barrier drops the movie.
        barrier = threading.Barrier(3, timeout=5)
        tmdb = MagicMock()

        def get_movie(movie_id):
            barrier.wait()
            return fake_movie(movie_id)

        tmdb.get_movie.side_effect = get_movie

        movies = fetch_movie_details([1, 2, 3, 4, 5, 6], tmdb=tmdb, chunk_size=3)

        assert [movie["id"] for movie in movies] == [1, 2, 3, 4, 5, 6]
        assert not barrier.broken

    def test_no_ids_skips_tmdb(self):
        tmdb = MagicMock()
        assert fetch_movie_details([], tmdb=tmdb) == []
        tmdb.get_movie.assert_not_called()


@pytest.mark.django_db
class TestGetProfile:
    def test_self_profile_merges_watchlist_and_watched(self, alice, tmdb):
        alice.watchlist = [1, 2]
        alice.save()
        Watched.objects.create(user=alice, movie_id=2, is_favorited=True)

        profile = get_profile(principal_for(alice))

        assert movie_ids(profile) == {1, 2}
        assert tmdb.get_movie.call_count == 2
        assert profile["watchlist"] == [1, 2]
        assert [entry["movieId"] for entry in profile["watched"]] == [2]
        assert profile["watched"][0]["isFavorited"] is True

    def test_self_profile_hides_firebase_uid(self, alice, tmdb):
        profile = get_profile(principal_for(alice))

        assert "firebase_uid" not in profile
        assert "firebaseUid" not in profile
        assert profile["displayName"] == "Alice"

    def test_self_view_records_no_visit(self, alice, tmdb):
        get_profile(principal_for(alice))
        get_profile(principal_for(alice), target_user_id=alice.pk)

        assert Visit.objects.count() == 0

    def test_other_view_records_visit_each_call(self, alice, bob, tmdb):
        get_profile(principal_for(alice), target_user_id=bob.pk)
        get_profile(principal_for(alice), target_user_id=str(bob.pk))

        visits = Visit.objects.filter(visitor=alice, visited_user=bob)
        assert visits.count() == 2

    def test_other_view_omits_visits(self, alice, bob, tmdb):
        Visit.objects.create(visitor=alice, visited_user=bob)

        profile = get_profile(principal_for(alice), target_user_id=bob.pk)

        assert "visits" not in profile
        assert profile["email"] == "bob@example.com"

    def test_self_view_lists_recent_visits(self, alice, bob, tmdb, settings):
        settings.PROFILE_VISIT_LIMIT = 3
        for _ in range(5):
            Visit.objects.create(visitor=bob, visited_user=alice)
        newest = Visit.objects.order_by("-visited_at", "-id").first()

        profile = get_profile(principal_for(alice))

        assert len(profile["visits"]) == 3
        assert profile["visits"][0]["id"] == newest.pk
        assert profile["visits"][0]["visitor"]["displayName"] == "Bob"
        assert "createdAt" in profile["visits"][0]["visitor"]

    def test_failed_movie_is_missing_from_profile(self, alice, tmdb):
        alice.watchlist = [1, 2, 3]
        alice.save()
        tmdb.get_movie.side_effect = failing_for(2, error=NotFound)

        profile = get_profile(principal_for(alice))

        assert movie_ids(profile) == {1, 3}

    def test_unknown_target(self, alice, tmdb):
        with pytest.raises(NotFound):
            get_profile(principal_for(alice), target_user_id=9999)

    def test_malformed_target(self, alice, tmdb):
        with pytest.raises(ValidationError):
            get_profile(principal_for(alice), target_user_id="not-an-id")

    def test_unknown_requester(self, db, tmdb):
        with pytest.raises(NotFound):
            get_profile(Principal(uid="ghost"))
