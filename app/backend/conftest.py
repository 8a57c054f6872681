from unittest.mock import MagicMock, patch

import pytest
from rest_framework.test import APIClient

from core.services import FirebaseAuthService
from core.tests.fakes import fake_movie


@pytest.fixture
def verify_token():
    """Treat any bearer token as the Firebase uid it names; 'bad' tokens are rejected."""

    def decode(token):
        if token.startswith("bad"):
            raise ValueError("Token has expired")
        return {"uid": token, "email": f"{token}@example.com"}

    with patch.object(FirebaseAuthService, "verify_id_token", side_effect=decode) as mock:
        yield mock


@pytest.fixture
def tmdb():
    """Patch TMDB everywhere it is constructed; movies come back as ``{"id": n, ...}``."""
    instance = MagicMock()
    instance.get_movie.side_effect = fake_movie
    with patch("users.services.profile.TMDBClient", return_value=instance), patch(
        "core.views.TMDBClient", return_value=instance
    ), patch("core.services.movie_details.TMDBClient", return_value=instance):
        yield instance


@pytest.fixture
def alice(db):
    from users.models import AppUser

    return AppUser.objects.create(firebase_uid="uid-alice", email="alice@example.com", display_name="Alice")


@pytest.fixture
def bob(db):
    from users.models import AppUser

    return AppUser.objects.create(firebase_uid="uid-bob", email="bob@example.com", display_name="Bob")


@pytest.fixture
def client():
    return APIClient()


@pytest.fixture
def auth_client(verify_token):
    """Return a factory producing an APIClient authenticated as the given user."""

    def make(user):
        api_client = APIClient()
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {user.firebase_uid}")
        return api_client

    return make
