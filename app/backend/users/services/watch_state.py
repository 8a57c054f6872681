"""
Watch-state store: watchlist membership, favorite flags and feedback.

Every operation is scoped to one ``(user, movie_id)`` pair and writes a
single row. Concurrent writes to the same pair are last-write-wins.
"""

import logging
from typing import List, Optional

from django.db import transaction
from django.utils import timezone

from core.exceptions import NotFound, ValidationError
from users.models import RATING_MAX, RATING_MIN, AppUser, Watched

logger = logging.getLogger(__name__)

# Marks a feedback field the caller did not mention, as opposed to an explicit None.
UNSET = object()

FEEDBACK_CREATE = "create"
FEEDBACK_UPDATE = "update"
FEEDBACK_CLEAR = "clear"
FEEDBACK_MODES = (FEEDBACK_CREATE, FEEDBACK_UPDATE, FEEDBACK_CLEAR)


def get_user_by_uid(uid: str) -> AppUser:
    """Resolve the local user paired with a Firebase uid."""
    try:
        return AppUser.objects.get(firebase_uid=uid)
    except AppUser.DoesNotExist:
        raise NotFound("User not found")


def validate_rating(rating) -> None:
    if rating is UNSET or rating is None:
        return
    if isinstance(rating, bool) or not isinstance(rating, int) or not RATING_MIN <= rating <= RATING_MAX:
        raise ValidationError({"rating": f"Rating must be between {RATING_MIN}-{RATING_MAX}"})


def set_watchlist_membership(user: AppUser, movie_id: int, present: bool) -> List[int]:
    """
    Add or remove a movie from the user's watchlist.

    Adding a movie already present, or removing one that is absent, leaves the
    list untouched. Returns the resulting watchlist.
    """
    with transaction.atomic():
        locked = AppUser.objects.select_for_update().get(pk=user.pk)
        watchlist = list(locked.watchlist)

        if present and movie_id not in watchlist:
            watchlist.append(movie_id)
        elif not present and movie_id in watchlist:
            watchlist = [mid for mid in watchlist if mid != movie_id]
        else:
            return watchlist

        locked.watchlist = watchlist
        locked.save(update_fields=["watchlist", "updated_at"])

    user.watchlist = watchlist
    logger.info(f"User {user.pk} watchlist {'+' if present else '-'}{movie_id}")
    return watchlist


def get_watched(user: AppUser, movie_id: int) -> Optional[Watched]:
    return Watched.objects.filter(user=user, movie_id=movie_id).first()


def list_watched(user: AppUser) -> List[Watched]:
    return list(Watched.objects.filter(user=user).order_by("created_at", "id"))


def set_favorite(user: AppUser, movie_id: int, favorited: bool) -> Watched:
    """
    Set the favorite flag for a movie.

    Favoriting creates the watched record when needed. Unfavoriting only
    clears the flag and fails with NotFound when the record does not exist.
    """
    if favorited:
        watched, created = Watched.objects.update_or_create(
            user=user, movie_id=movie_id, defaults={"is_favorited": True}
        )
        if created:
            logger.info(f"Created watched record for user {user.pk}, movie {movie_id}")
        return watched

    watched = get_watched(user, movie_id)
    if watched is None:
        raise NotFound("Movie not found in watched list")

    watched.is_favorited = False
    watched.save(update_fields=["is_favorited", "updated_at"])
    return watched


def upsert_feedback(
    user: AppUser,
    movie_id: int,
    mode: str,
    rating=UNSET,
    content=UNSET,
) -> Watched:
    """
    Write the rating/review of one movie.

    Modes:
    - ``create``: upsert the watched record; feedback timestamps are set on
      the record's first feedback.
    - ``update``: requires an existing watched record (NotFound otherwise).
    - ``clear``: requires an existing record; rating and content become None,
      the favorite flag and the record itself stay.

    Only fields passed explicitly are written; None clears a field.
    """
    if mode not in FEEDBACK_MODES:
        raise ValueError(f"Unknown feedback mode: {mode}")
    validate_rating(rating)

    now = timezone.now()

    with transaction.atomic():
        if mode == FEEDBACK_CREATE:
            watched, created = Watched.objects.select_for_update().get_or_create(user=user, movie_id=movie_id)
            if created:
                logger.info(f"Created watched record for user {user.pk}, movie {movie_id}")
        else:
            watched = Watched.objects.select_for_update().filter(user=user, movie_id=movie_id).first()
            if watched is None:
                if mode == FEEDBACK_UPDATE:
                    raise NotFound("Movie not watched. Add to watched first.")
                raise NotFound("Movie not found in watched list")

        if mode == FEEDBACK_CLEAR:
            watched.rating = None
            watched.content = None
        else:
            if mode == FEEDBACK_CREATE and not watched.has_feedback:
                watched.feedback_created_at = now
            if rating is not UNSET:
                watched.rating = rating
            if content is not UNSET:
                watched.content = content
            if watched.feedback_created_at is None:
                watched.feedback_created_at = now

        watched.feedback_updated_at = now
        watched.save()

    return watched
