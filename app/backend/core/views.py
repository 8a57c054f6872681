"""Core views: TMDB pass-through endpoints and health check."""

from rest_framework import viewsets
from rest_framework.decorators import action, api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .exceptions import ValidationError
from .services import TMDBClient


def _page(request):
    try:
        page = int(request.query_params.get("page", 1))
    except ValueError:
        raise ValidationError({"page": "Page must be a positive integer"})
    if page < 1:
        raise ValidationError({"page": "Page must be a positive integer"})
    return page


class MovieViewSet(viewsets.ViewSet):
    """ViewSet for movie lookups, proxied to TMDB."""

    @action(detail=False, methods=["get"])
    def search(self, request):
        """Search movies via TMDB."""
        query = request.query_params.get("query", "").strip()
        if not query:
            raise ValidationError({"query": "Search query is required"})

        data = TMDBClient().search(query, page=_page(request))
        return Response({**data, "message": f'Movies matching query "{query}" fetched successfully'})

    @action(detail=False, methods=["get"])
    def discover(self, request):
        """Discover movies with TMDB filters passed through from the query string."""
        params = request.query_params.dict()
        data = TMDBClient().discover(params)
        return Response({**data, "message": "Movies matching filters fetched successfully"})

    @action(detail=False, methods=["get"], url_path=r"(?P<category>popular|top_rated|upcoming|now_playing)")
    def category(self, request, category=None):
        """Get popular, top rated, upcoming or now playing movies."""
        data = TMDBClient().get_category(category, page=_page(request))
        label = category.replace("_", " ")
        return Response({**data, "message": f"{label.capitalize()} movies fetched successfully"})


@api_view(["GET"])
def movie_genres(request):
    """Get the TMDB movie genre list."""
    genres = TMDBClient().list_genres()
    return Response({"genres": genres, "message": "Genres fetched successfully"})


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def health_check(request):
    """Health check endpoint."""
    return Response({"status": "healthy"})
