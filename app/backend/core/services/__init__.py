"""External service clients."""

from .firebase_auth import FirebaseAuthService
from .omdb_client import OMDBClient
from .tmdb_client import TMDBClient

__all__ = [
    "FirebaseAuthService",
    "OMDBClient",
    "TMDBClient",
]
