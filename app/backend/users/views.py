"""User views: registration, profiles, watchlist, favorites, feedback and the movie page."""

from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from core.exceptions import NotFound
from core.services.movie_details import get_movie_with_details

from . import services
from .serializers import (
    DisplayNameSerializer,
    FeedbackCreateSerializer,
    FeedbackInputSerializer,
    FeedbackSerializer,
    MovieIdSerializer,
    RegisterSerializer,
    WatchedSerializer,
    parse_movie_id,
)


def _current_user(request):
    return services.get_user_by_uid(request.user.uid)


@api_view(["POST"])
@authentication_classes([])
@permission_classes([AllowAny])
def register(request):
    """Create a Firebase identity and the matching local user; returns a custom token."""
    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    token = services.register_user(
        email=serializer.validated_data["email"],
        password=serializer.validated_data["password"],
        display_name=serializer.validated_data["displayName"],
    )

    return Response(
        {"token": token, "message": "User registered successfully"},
        status=status.HTTP_201_CREATED,
    )


@api_view(["GET"])
def my_profile(request):
    """Get the requester's own profile, including recent visits."""
    return Response(services.get_profile(request.user))


@api_view(["GET"])
def user_profile(request, user_id):
    """Get another user's profile. Records a visit when the viewer is not the owner."""
    return Response(services.get_profile(request.user, target_user_id=user_id))


@api_view(["PATCH"])
def update_display_name(request):
    serializer = DisplayNameSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = _current_user(request)
    user.display_name = serializer.validated_data["displayName"]
    user.save(update_fields=["display_name", "updated_at"])

    return Response(
        {
            "message": "Display name updated successfully",
            "displayName": user.display_name,
        }
    )


@api_view(["POST"])
def add_to_watchlist(request):
    serializer = MovieIdSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    watchlist = services.set_watchlist_membership(
        _current_user(request), serializer.validated_data["movieId"], present=True
    )
    return Response({"message": "Movie added to watchlist successfully", "watchlist": watchlist})


@api_view(["DELETE"])
def remove_from_watchlist(request, movie_id):
    movie_id = parse_movie_id(movie_id)
    watchlist = services.set_watchlist_membership(_current_user(request), movie_id, present=False)
    return Response({"message": "Movie removed from watchlist successfully", "watchlist": watchlist})


@api_view(["POST"])
def favorite_movie(request):
    """Favorite a movie, creating its watched record if needed."""
    serializer = MovieIdSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    watched = services.set_favorite(_current_user(request), serializer.validated_data["movieId"], favorited=True)
    return Response({"message": "Movie added to favorites successfully", "isFavorited": watched.is_favorited})


@api_view(["DELETE"])
def unfavorite_movie(request, movie_id):
    movie_id = parse_movie_id(movie_id)
    watched = services.set_favorite(_current_user(request), movie_id, favorited=False)
    return Response({"message": "Movie removed from favorites successfully", "isFavorited": watched.is_favorited})


@api_view(["POST"])
def create_feedback(request):
    """Submit a rating and/or review, creating the watched record if needed."""
    serializer = FeedbackCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    watched = services.create_feedback(
        _current_user(request), serializer.validated_data["movieId"], serializer.validated_data
    )
    return Response(
        {
            "message": "Review and rating submitted successfully",
            "feedback": FeedbackSerializer(watched).data,
        }
    )


@api_view(["PUT", "DELETE"])
def feedback_detail(request, movie_id):
    """Update (PUT) or remove (DELETE) the requester's feedback for a movie."""
    movie_id = parse_movie_id(movie_id)
    user = _current_user(request)

    if request.method == "DELETE":
        watched = services.delete_feedback(user, movie_id)
        message = "Review and rating removed successfully"
    else:
        serializer = FeedbackInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        watched = services.update_feedback(user, movie_id, serializer.validated_data)
        message = "Review and rating updated successfully"

    return Response({"message": message, "feedback": FeedbackSerializer(watched).data})


@api_view(["GET"])
def watched_list(request):
    """Get all of the requester's watched records."""
    watched = services.list_watched(_current_user(request))
    return Response(WatchedSerializer(watched, many=True).data)


@api_view(["GET"])
def watched_entry(request, movie_id):
    """Get the requester's watched record for one movie."""
    movie_id = parse_movie_id(movie_id)
    watched = services.get_watched(_current_user(request), movie_id)
    if watched is None:
        raise NotFound("Movie not found in watched list")
    return Response(WatchedSerializer(watched).data)


@api_view(["GET"])
def movie_detail(request, movie_id):
    """Get movie details with extras, OMDb ratings and community feedback."""
    movie_id = parse_movie_id(movie_id)
    movie = get_movie_with_details(movie_id)
    movie["feedback"] = services.get_community_feedback(movie_id)
    return Response({**movie, "message": "Movie details fetched successfully"})
