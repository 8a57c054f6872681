from unittest.mock import MagicMock, patch

import pytest
import requests

from core.exceptions import UpstreamFailure
from core.services.omdb_client import OMDBClient


@pytest.fixture
def omdb_client(settings):
    settings.OMDB_API_KEY = "omdb-key"
    return OMDBClient()


def test_lookup_by_imdb_id(omdb_client):
    response = MagicMock()
    response.json.return_value = {"imdbID": "tt0137523", "imdbRating": "8.8"}

    with patch("core.services.omdb_client.requests.get", return_value=response) as get:
        assert omdb_client.get_by_imdb_id("tt0137523")["imdbRating"] == "8.8"

    assert get.call_args.kwargs["params"] == {"i": "tt0137523", "apikey": "omdb-key"}


def test_no_match_returns_none(omdb_client):
    response = MagicMock()
    response.json.return_value = {"Response": "False", "Error": "Incorrect IMDb ID."}

    with patch("core.services.omdb_client.requests.get", return_value=response):
        assert omdb_client.get_by_imdb_id("tt0") is None


def test_network_error(omdb_client):
    with patch("core.services.omdb_client.requests.get", side_effect=requests.exceptions.Timeout()):
        with pytest.raises(UpstreamFailure):
            omdb_client.get_by_imdb_id("tt0137523")
