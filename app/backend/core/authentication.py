"""Bearer-token authentication against Firebase."""

import logging
from dataclasses import dataclass
from typing import Optional

from firebase_admin.exceptions import FirebaseError
from rest_framework.authentication import BaseAuthentication, get_authorization_header

from core.exceptions import Unauthenticated
from core.services import FirebaseAuthService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """Verified identity attached to a request."""

    uid: str
    email: Optional[str] = None

    @property
    def is_authenticated(self):
        return True


class FirebaseAuthentication(BaseAuthentication):
    """
    Authenticate ``Authorization: Bearer <Firebase ID token>`` requests.

    Requests without an Authorization header stay anonymous, so the
    permission layer answers them with 401.
    """

    keyword = "Bearer"

    def authenticate(self, request):
        header = get_authorization_header(request).split()
        if not header:
            return None

        if header[0].decode("latin-1") != self.keyword or len(header) != 2:
            raise Unauthenticated()

        token = header[1].decode("latin-1")
        try:
            decoded = FirebaseAuthService().verify_id_token(token)
        except (ValueError, FirebaseError) as e:
            logger.info(f"Rejected bearer token: {e}")
            raise Unauthenticated("User token is invalid") from e

        return Principal(uid=decoded["uid"], email=decoded.get("email")), token

    def authenticate_header(self, request):
        return self.keyword
