"""Feedback lifecycle: create, update and delete a user's rating and review of a movie."""

from typing import Any, Dict, List

from users.models import AppUser, Watched
from users.serializers import CommunityFeedbackSerializer

from .watch_state import FEEDBACK_CLEAR, FEEDBACK_CREATE, FEEDBACK_UPDATE, UNSET, upsert_feedback


def _feedback_fields(validated_data: Dict[str, Any]) -> Dict[str, Any]:
    # Keys missing from the payload stay UNSET so the store leaves them alone.
    return {
        "rating": validated_data.get("rating", UNSET),
        "content": validated_data.get("content", UNSET),
    }


def create_feedback(user: AppUser, movie_id: int, validated_data: Dict[str, Any]) -> Watched:
    """Submit feedback, creating the watched record when needed."""
    return upsert_feedback(user, movie_id, FEEDBACK_CREATE, **_feedback_fields(validated_data))


def update_feedback(user: AppUser, movie_id: int, validated_data: Dict[str, Any]) -> Watched:
    """Change existing feedback. The watched record must already exist."""
    return upsert_feedback(user, movie_id, FEEDBACK_UPDATE, **_feedback_fields(validated_data))


def delete_feedback(user: AppUser, movie_id: int) -> Watched:
    """Clear rating and review; the record and its favorite flag survive."""
    return upsert_feedback(user, movie_id, FEEDBACK_CLEAR)


def get_community_feedback(movie_id: int) -> List[Dict[str, Any]]:
    """Every user's rating/review of a movie, newest first, skipping records without feedback."""
    entries = (
        Watched.objects.filter(movie_id=movie_id)
        .exclude(rating__isnull=True, content__isnull=True)
        .select_related("user")
        .order_by("-feedback_updated_at", "-id")
    )
    return CommunityFeedbackSerializer(entries, many=True).data
