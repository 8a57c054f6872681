"""User models for the movie library."""

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

RATING_MIN = 0
RATING_MAX = 5
FEEDBACK_CONTENT_MAX_LENGTH = 1000
# Upper bound of the movie_id IntegerField column.
MOVIE_ID_MAX = 2**31 - 1


class AppUser(models.Model):
    """Application user, paired 1:1 with a Firebase identity."""

    firebase_uid = models.CharField(max_length=128, unique=True)
    email = models.EmailField(unique=True)
    display_name = models.CharField(max_length=255, blank=True, default="")
    # TMDB movie ids, de-duplicated, in insertion order
    watchlist = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "app_users"

    def __str__(self):
        return self.display_name or self.email


class Watched(models.Model):
    """One user's relationship to one movie: favorite flag plus optional feedback."""

    user = models.ForeignKey(AppUser, on_delete=models.CASCADE, related_name="watched")
    movie_id = models.IntegerField()
    is_favorited = models.BooleanField(default=False)
    rating = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(RATING_MIN), MaxValueValidator(RATING_MAX)],
    )
    content = models.TextField(null=True, blank=True, max_length=FEEDBACK_CONTENT_MAX_LENGTH)
    feedback_created_at = models.DateTimeField(null=True, blank=True)
    feedback_updated_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "watched"
        constraints = [
            models.UniqueConstraint(fields=["user", "movie_id"], name="watched_user_movie_unique"),
        ]
        indexes = [
            models.Index(fields=["movie_id"], name="watched_movie_idx"),
        ]

    def __str__(self):
        return f"{self.user} watched {self.movie_id}"

    @property
    def has_feedback(self):
        return self.rating is not None or self.content is not None


class Visit(models.Model):
    """A user viewing another user's profile. Repeated visits accumulate."""

    visitor = models.ForeignKey(AppUser, on_delete=models.CASCADE, related_name="visits_made")
    visited_user = models.ForeignKey(AppUser, on_delete=models.CASCADE, related_name="visits")
    visited_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "visits"
        ordering = ["-visited_at", "-id"]
        indexes = [
            models.Index(fields=["visitor", "visited_user"], name="visit_pair_idx"),
        ]

    def __str__(self):
        return f"{self.visitor} visited {self.visited_user}"
