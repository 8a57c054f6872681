from unittest.mock import MagicMock, patch

import pytest
import requests

from core.exceptions import NotFound, UpstreamFailure
from core.services.tmdb_client import TMDBClient, flatten_discover_params


def http_response(status_code, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    return response


@pytest.fixture
def tmdb_client(settings):
    settings.TMDB_API_KEY = "test-key"
    settings.TMDB_READ_ACCESS_TOKEN = "read-token"
    return TMDBClient()


class TestTMDBClient:
    def test_get_movie_sends_credentials(self, tmdb_client):
        with patch("core.services.tmdb_client.requests.get", return_value=http_response(200, {"id": 550})) as get:
            assert tmdb_client.get_movie(550) == {"id": 550}

        url = get.call_args.args[0]
        assert url == "https://api.themoviedb.org/3/movie/550"
        assert get.call_args.kwargs["params"]["api_key"] == "test-key"
        assert get.call_args.kwargs["headers"]["Authorization"] == "Bearer read-token"

    def test_extras_are_appended(self, tmdb_client):
        with patch("core.services.tmdb_client.requests.get", return_value=http_response(200, {"id": 550})) as get:
            tmdb_client.get_movie_with_extras(550)

        assert get.call_args.kwargs["params"]["append_to_response"] == (
            "videos,credits,reviews,images,external_ids,similar"
        )

    def test_404_is_not_found(self, tmdb_client):
        with patch("core.services.tmdb_client.requests.get", return_value=http_response(404)):
            with pytest.raises(NotFound):
                tmdb_client.get_movie(1)

    def test_server_error_is_upstream_failure(self, tmdb_client):
        with patch("core.services.tmdb_client.requests.get", return_value=http_response(503)):
            with pytest.raises(UpstreamFailure):
                tmdb_client.get_movie(1)

    def test_network_error_is_upstream_failure(self, tmdb_client):
        with patch("core.services.tmdb_client.requests.get", side_effect=requests.exceptions.ConnectionError()):
            with pytest.raises(UpstreamFailure):
                tmdb_client.search("alien")

    def test_unknown_category(self, tmdb_client):
        with patch("core.services.tmdb_client.requests.get") as get:
            with pytest.raises(NotFound):
                tmdb_client.get_category("trending")
        get.assert_not_called()

    def test_list_genres(self, tmdb_client):
        payload = {"genres": [{"id": 28, "name": "Action"}]}
        with patch("core.services.tmdb_client.requests.get", return_value=http_response(200, payload)):
            assert tmdb_client.list_genres() == [{"id": 28, "name": "Action"}]


class TestFlattenDiscoverParams:
    def test_nested_dict(self):
        assert flatten_discover_params({"vote_average": {"gte": 7, "lte": 9}, "page": 2}) == {
            "vote_average.gte": 7,
            "vote_average.lte": 9,
            "page": 2,
        }

    def test_bracket_keys(self):
        assert flatten_discover_params({"vote_average[gte]": "6", "with_genres": "28"}) == {
            "vote_average.gte": "6",
            "with_genres": "28",
        }
