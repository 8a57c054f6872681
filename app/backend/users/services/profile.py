"""
Profile aggregation.

Builds one denormalized profile payload: user fields, watched records, the
details of every movie the user has watchlisted or watched, and (for the
owner only) the most recent profile visits.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional

from django.conf import settings

from core.authentication import Principal
from core.exceptions import NotFound, ValidationError
from core.services import TMDBClient
from users.models import AppUser, Visit
from users.serializers import AppUserSerializer, VisitSerializer, WatchedSerializer

from .watch_state import get_user_by_uid

logger = logging.getLogger(__name__)


def collect_movie_ids(watchlist_ids: Iterable[int], watched_ids: Iterable[int]) -> List[int]:
    """Union of watchlist and watched movie ids, de-duplicated in first-seen order."""
    seen = set()
    movie_ids = []
    for movie_id in list(watchlist_ids) + list(watched_ids):
        movie_id = int(movie_id)
        if movie_id not in seen:
            seen.add(movie_id)
            movie_ids.append(movie_id)
    return movie_ids


def _fetch_movie(tmdb: TMDBClient, movie_id: int) -> Optional[Dict[str, Any]]:
    try:
        return tmdb.get_movie(movie_id)
    except Exception as e:
        logger.error(f"Error fetching movie {movie_id}: {e}")
        return None


def fetch_movie_details(
    movie_ids: List[int],
    tmdb: Optional[TMDBClient] = None,
    chunk_size: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Fetch full details for each movie id from TMDB.

    Ids are processed in fixed-size chunks: requests within a chunk run
    concurrently, and a chunk completes before the next one starts. A movie
    that fails to load is logged and left out of the result.
    """
    if not movie_ids:
        return []

    tmdb = tmdb or TMDBClient()
    chunk_size = chunk_size or settings.MOVIE_FETCH_CONCURRENCY

    details = []
    with ThreadPoolExecutor(max_workers=chunk_size) as executor:
        for start in range(0, len(movie_ids), chunk_size):
            chunk = movie_ids[start : start + chunk_size]
            results = list(executor.map(lambda movie_id: _fetch_movie(tmdb, movie_id), chunk))
            details.extend(movie for movie in results if movie is not None)

    if len(details) < len(movie_ids):
        logger.warning(f"Fetched {len(details)} of {len(movie_ids)} movies")
    return details


def resolve_user(user_id) -> AppUser:
    """Look up a user by internal id."""
    try:
        pk = int(str(user_id))
    except (TypeError, ValueError):
        raise ValidationError("Invalid user ID")

    try:
        return AppUser.objects.get(pk=pk)
    except AppUser.DoesNotExist:
        raise NotFound("User not found")


def record_visit(visitor: AppUser, visited_user: AppUser) -> Visit:
    visit = Visit.objects.create(visitor=visitor, visited_user=visited_user)
    logger.info(f"User {visitor.pk} visited profile of user {visited_user.pk}")
    return visit


def get_profile(principal: Principal, target_user_id=None, tmdb: Optional[TMDBClient] = None) -> Dict[str, Any]:
    """
    Assemble a user's profile.

    Without ``target_user_id`` the requester's own profile is returned,
    including their latest visits. Viewing someone else's profile records a
    visit on every call and omits the visit history.
    """
    requester = get_user_by_uid(principal.uid)
    target = requester if target_user_id is None else resolve_user(target_user_id)
    is_self = target.pk == requester.pk

    if not is_self:
        record_visit(requester, target)

    watched = list(target.watched.order_by("created_at", "id"))
    movie_ids = collect_movie_ids(target.watchlist, [entry.movie_id for entry in watched])

    profile = dict(AppUserSerializer(target).data)
    profile["watched"] = WatchedSerializer(watched, many=True).data

    if is_self:
        visits = target.visits.select_related("visitor")[: settings.PROFILE_VISIT_LIMIT]
        profile["visits"] = VisitSerializer(visits, many=True).data

    profile["movies"] = fetch_movie_details(movie_ids, tmdb=tmdb)
    return profile
