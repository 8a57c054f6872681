"""User services: watch state, feedback, profile aggregation and registration."""

from .feedback import create_feedback, delete_feedback, get_community_feedback, update_feedback
from .profile import collect_movie_ids, fetch_movie_details, get_profile
from .registration import register_user
from .watch_state import get_user_by_uid, get_watched, list_watched, set_favorite, set_watchlist_membership

__all__ = [
    "collect_movie_ids",
    "create_feedback",
    "delete_feedback",
    "fetch_movie_details",
    "get_community_feedback",
    "get_profile",
    "get_user_by_uid",
    "get_watched",
    "list_watched",
    "register_user",
    "set_favorite",
    "set_watchlist_membership",
    "update_feedback",
]
