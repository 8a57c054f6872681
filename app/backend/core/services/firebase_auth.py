"""Firebase identity provider wrapper."""

import logging
import threading
from typing import Any, Dict

import firebase_admin
from django.conf import settings
from firebase_admin import auth, credentials

logger = logging.getLogger(__name__)


class FirebaseAuthService:
    """
    Thin wrapper over ``firebase_admin.auth``.

    The Firebase app is initialised once per process, on first use, from the
    service-account file named by ``FIREBASE_CREDENTIALS`` (or the default
    application credentials when unset).
    """

    _app = None
    _lock = threading.Lock()

    @classmethod
    def _get_app(cls):
        if cls._app is not None:
            return cls._app

        with cls._lock:
            if cls._app is None:
                options = {"projectId": settings.FIREBASE_PROJECT_ID} if settings.FIREBASE_PROJECT_ID else None
                if settings.FIREBASE_CREDENTIALS:
                    cred = credentials.Certificate(settings.FIREBASE_CREDENTIALS)
                else:
                    cred = credentials.ApplicationDefault()
                logger.info("Initialising Firebase app")
                cls._app = firebase_admin.initialize_app(cred, options)
        return cls._app

    def verify_id_token(self, token: str) -> Dict[str, Any]:
        """Verify a Firebase ID token and return its decoded claims."""
        return auth.verify_id_token(token, app=self._get_app())

    def create_user(self, email: str, password: str, display_name: str) -> auth.UserRecord:
        return auth.create_user(email=email, password=password, display_name=display_name, app=self._get_app())

    def delete_user(self, uid: str) -> None:
        auth.delete_user(uid, app=self._get_app())

    def create_custom_token(self, uid: str) -> str:
        token = auth.create_custom_token(uid, app=self._get_app())
        return token.decode("utf-8") if isinstance(token, bytes) else token
