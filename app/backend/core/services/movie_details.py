"""Movie detail assembly: TMDB details with supplementary OMDb ratings."""

import logging
from typing import Any, Dict, Optional

from .omdb_client import OMDBClient
from .tmdb_client import TMDBClient

logger = logging.getLogger(__name__)


def get_movie_with_details(
    movie_id: int,
    tmdb: Optional[TMDBClient] = None,
    omdb: Optional[OMDBClient] = None,
) -> Dict[str, Any]:
    """
    Fetch a movie with its TMDB extras and OMDb ratings.

    The OMDb lookup is best-effort: when it fails or finds nothing the
    ``omdb`` key is simply left out. A TMDB failure propagates.
    """
    tmdb = tmdb or TMDBClient()
    omdb = omdb or OMDBClient()

    movie = tmdb.get_movie_with_extras(movie_id)

    imdb_id = movie.get("imdb_id") or movie.get("external_ids", {}).get("imdb_id")
    if imdb_id:
        try:
            ratings = omdb.get_by_imdb_id(imdb_id)
        except Exception as e:
            logger.warning(f"OMDb lookup failed for movie {movie_id} ({imdb_id}): {e}")
            ratings = None
        if ratings:
            movie["omdb"] = ratings

    return movie
