"""OMDb API client for supplementary ratings."""

import logging
from typing import Any, Dict, Optional

import requests
from django.conf import settings

from core.exceptions import UpstreamFailure

logger = logging.getLogger(__name__)


class OMDBClient:
    """Client for the Open Movie Database, keyed by IMDb id."""

    BASE_URL = "https://www.omdbapi.com/"

    def __init__(self):
        self.api_key = settings.OMDB_API_KEY
        self.timeout = settings.HTTP_TIMEOUT
        if not self.api_key:
            logger.warning("OMDB_API_KEY not set")

    def get_by_imdb_id(self, imdb_id: str) -> Optional[Dict[str, Any]]:
        """
        Look up a title by IMDb id.

        Returns:
            The OMDb payload, or None when OMDb answers without a match
            (``{"Response": "False", ...}``).
        """
        try:
            response = requests.get(
                self.BASE_URL,
                params={"i": imdb_id, "apikey": self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"OMDb API error for {imdb_id}: {e}")
            raise UpstreamFailure() from e

        if not data.get("imdbID"):
            return None
        return data
