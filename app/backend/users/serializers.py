"""Serializers for user models and request payloads."""

from rest_framework import serializers

from core.exceptions import ValidationError

from .models import (
    FEEDBACK_CONTENT_MAX_LENGTH,
    MOVIE_ID_MAX,
    RATING_MAX,
    RATING_MIN,
    AppUser,
    Visit,
    Watched,
)

INVALID_MOVIE_ID = "Invalid movie ID"
INVALID_RATING = f"Rating must be between {RATING_MIN}-{RATING_MAX}"


def parse_movie_id(raw) -> int:
    """Parse a movie id taken from the URL; it must be a positive integer that fits the column."""
    try:
        movie_id = int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationError({"movieId": INVALID_MOVIE_ID})
    if not 0 < movie_id <= MOVIE_ID_MAX:
        raise ValidationError({"movieId": INVALID_MOVIE_ID})
    return movie_id


def movie_id_field():
    return serializers.IntegerField(
        min_value=1,
        max_value=MOVIE_ID_MAX,
        error_messages={
            "required": INVALID_MOVIE_ID,
            "null": INVALID_MOVIE_ID,
            "invalid": INVALID_MOVIE_ID,
            "min_value": INVALID_MOVIE_ID,
            "max_value": INVALID_MOVIE_ID,
            "max_string_length": INVALID_MOVIE_ID,
        },
    )


# =============================================================================
# Read serializers
# =============================================================================


class FeedbackSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source="feedback_created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="feedback_updated_at", read_only=True)

    class Meta:
        model = Watched
        fields = ["rating", "content", "createdAt", "updatedAt"]


class WatchedSerializer(serializers.ModelSerializer):
    movieId = serializers.IntegerField(source="movie_id", read_only=True)
    isFavorited = serializers.BooleanField(source="is_favorited", read_only=True)
    feedback = FeedbackSerializer(source="*", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Watched
        fields = ["id", "movieId", "isFavorited", "feedback", "createdAt"]


class VisitorSerializer(serializers.ModelSerializer):
    displayName = serializers.CharField(source="display_name", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = AppUser
        fields = ["id", "displayName", "createdAt"]


class VisitSerializer(serializers.ModelSerializer):
    visitor = VisitorSerializer(read_only=True)
    visitedAt = serializers.DateTimeField(source="visited_at", read_only=True)

    class Meta:
        model = Visit
        fields = ["id", "visitor", "visitedAt"]


class AppUserSerializer(serializers.ModelSerializer):
    """Public user fields. The Firebase uid is never exposed."""

    displayName = serializers.CharField(source="display_name", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = AppUser
        fields = ["id", "email", "displayName", "watchlist", "createdAt", "updatedAt"]


class CommunityFeedbackSerializer(serializers.ModelSerializer):
    """Another user's review of a movie, as shown on the movie page."""

    user = serializers.CharField(source="user.display_name", read_only=True)
    review = serializers.CharField(source="content", read_only=True, allow_null=True)
    createdAt = serializers.DateTimeField(source="feedback_created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="feedback_updated_at", read_only=True)

    class Meta:
        model = Watched
        fields = ["user", "rating", "review", "createdAt", "updatedAt"]


# =============================================================================
# Request serializers
# =============================================================================


class MovieIdSerializer(serializers.Serializer):
    movieId = movie_id_field()


class FeedbackInputSerializer(serializers.Serializer):
    """
    Rating and review payload.

    Content is trimmed; an empty review is stored as None rather than "".
    """

    rating = serializers.IntegerField(
        min_value=RATING_MIN,
        max_value=RATING_MAX,
        required=False,
        allow_null=True,
        error_messages={
            "invalid": INVALID_RATING,
            "min_value": INVALID_RATING,
            "max_value": INVALID_RATING,
        },
    )
    content = serializers.CharField(
        max_length=FEEDBACK_CONTENT_MAX_LENGTH,
        required=False,
        allow_null=True,
        allow_blank=True,
        trim_whitespace=True,
    )

    def validate_content(self, value):
        return value or None


class FeedbackCreateSerializer(FeedbackInputSerializer):
    movieId = movie_id_field()


class DisplayNameSerializer(serializers.Serializer):
    displayName = serializers.CharField(
        min_length=2,
        max_length=255,
        trim_whitespace=True,
        error_messages={
            "required": "Display name must be at least 2 characters",
            "blank": "Display name must be at least 2 characters",
            "min_length": "Display name must be at least 2 characters",
        },
    )


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True, trim_whitespace=False)
    displayName = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
