"""User registration across Firebase and the local database."""

import logging
from typing import Optional

from django.db import transaction

from core.exceptions import UpstreamFailure
from core.services import FirebaseAuthService
from users.models import AppUser

logger = logging.getLogger(__name__)


def register_user(
    email: str,
    password: str,
    display_name: str = "",
    identity: Optional[FirebaseAuthService] = None,
) -> str:
    """
    Register a user and return a Firebase custom token.

    Steps:
    1. Create the Firebase identity.
    2. Inside one database transaction, create the local user and mint the
       custom token.

    If step 2 fails, its transaction is rolled back first and the Firebase
    identity from step 1 is deleted second. A failure in step 1 leaves
    nothing to undo.
    """
    identity = identity or FirebaseAuthService()

    try:
        firebase_user = identity.create_user(email=email, password=password, display_name=display_name)
    except Exception as e:
        logger.error(f"Registration failed creating Firebase user for {email}: {e}")
        raise UpstreamFailure("Registration failed") from e

    try:
        with transaction.atomic():
            AppUser.objects.create(firebase_uid=firebase_user.uid, email=email, display_name=display_name)
            token = identity.create_custom_token(firebase_user.uid)
    except Exception as e:
        logger.error(f"Registration failed for {email}, rolling back: {e}")
        _delete_identity(identity, firebase_user.uid)
        raise UpstreamFailure("Registration failed") from e

    logger.info(f"Registered user {firebase_user.uid}")
    return token


def _delete_identity(identity: FirebaseAuthService, uid: str) -> None:
    try:
        identity.delete_user(uid)
        logger.info(f"Firebase user {uid} deleted during rollback")
    except Exception as e:
        logger.error(f"Error deleting Firebase user {uid} during rollback: {e}")
