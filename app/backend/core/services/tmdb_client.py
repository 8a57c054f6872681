"""TMDB API client."""

import logging
from typing import Any, Dict, List

import requests
from django.conf import settings

from core.exceptions import NotFound, UpstreamFailure

logger = logging.getLogger(__name__)


class TMDBClient:
    """Client for The Movie Database (TMDB) API."""

    BASE_URL = "https://api.themoviedb.org/3"

    CATEGORIES = ("popular", "top_rated", "upcoming", "now_playing")
    DETAIL_EXTRAS = "videos,credits,reviews,images,external_ids,similar"

    def __init__(self):
        self.api_key = settings.TMDB_API_KEY
        self.read_access_token = settings.TMDB_READ_ACCESS_TOKEN
        self.timeout = settings.HTTP_TIMEOUT
        if not self.api_key and not self.read_access_token:
            logger.warning("Neither TMDB_API_KEY nor TMDB_READ_ACCESS_TOKEN is set")

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.read_access_token:
            headers["Authorization"] = f"Bearer {self.read_access_token}"
        return headers

    def _get(self, endpoint: str, params: Dict = None) -> Dict[str, Any]:
        """Make GET request to TMDB API."""
        url = f"{self.BASE_URL}{endpoint}"
        params = dict(params or {})
        if self.api_key:
            params["api_key"] = self.api_key

        try:
            response = requests.get(url, params=params, headers=self._headers(), timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            logger.error(f"TMDB API error on {endpoint}: {e}")
            if e.response is not None and e.response.status_code == 404:
                raise NotFound(f"TMDB resource not found: {endpoint}") from e
            raise UpstreamFailure() from e
        except requests.exceptions.RequestException as e:
            logger.error(f"TMDB API error on {endpoint}: {e}")
            raise UpstreamFailure() from e

    def get_movie(self, movie_id: int) -> Dict[str, Any]:
        """Get movie details."""
        return self._get(f"/movie/{movie_id}")

    def get_movie_with_extras(self, movie_id: int) -> Dict[str, Any]:
        """Get movie details with videos, credits, reviews, images, external ids and similar titles."""
        return self._get(f"/movie/{movie_id}", params={"append_to_response": self.DETAIL_EXTRAS})

    def get_category(self, category: str, page: int = 1) -> Dict[str, Any]:
        """Get one of the curated movie lists (popular, top rated, upcoming, now playing)."""
        if category not in self.CATEGORIES:
            raise NotFound(f"Unknown movie category: {category}")
        return self._get(f"/movie/{category}", params={"page": page})

    def discover(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Discover movies matching the given filters."""
        return self._get("/discover/movie", params=flatten_discover_params(params))

    def search(self, query: str, page: int = 1) -> Dict[str, Any]:
        """Search for movies by title."""
        return self._get("/search/movie", params={"query": query, "page": page})

    def list_genres(self) -> List[Dict[str, Any]]:
        """Get list of movie genres."""
        data = self._get("/genre/movie/list")
        return data.get("genres", [])


def flatten_discover_params(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Flatten nested filter keys into TMDB's dotted form.

    Both ``{"vote_average": {"gte": 7}}`` and the query-string spelling
    ``vote_average[gte]=7`` become ``vote_average.gte=7``.
    """
    flat = {}
    for key, value in params.items():
        if isinstance(value, dict):
            for op, op_value in value.items():
                flat[f"{key}.{op}"] = op_value
        elif key.endswith("]") and "[" in key:
            field, op = key[:-1].split("[", 1)
            flat[f"{field}.{op}"] = value
        else:
            flat[key] = value
    return flat
