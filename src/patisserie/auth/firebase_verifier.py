"""Firebase Authentication verifier (firebase-admin SDK)."""

import firebase_admin
import structlog
from firebase_admin import auth, credentials, exceptions

from patisserie.auth.exceptions import AuthenticationError
from patisserie.auth.port import TokenVerifier

logger = structlog.get_logger(__name__)


class FirebaseTokenVerifier(TokenVerifier):
    def __init__(self, credentials_path: str | None = None) -> None:
        if not firebase_admin._apps:
            credential = credentials.Certificate(credentials_path) if credentials_path else None
            firebase_admin.initialize_app(credential)

    def verify(self, token: str) -> dict:
        try:
            decoded = auth.verify_id_token(token)
        except (ValueError, exceptions.FirebaseError) as exc:
            logger.info("Token verification failed", error=str(exc))
            raise AuthenticationError("Not authorized, token failed") from exc

        return {
            "uid": decoded["uid"],
            "email": decoded.get("email"),
            "name": decoded.get("name"),
            "phone": decoded.get("phone_number"),
        }

    def delete_account(self, uid: str) -> bool:
        try:
            auth.delete_user(uid)
        except exceptions.FirebaseError as exc:
            logger.warning("Identity provider deletion failed", uid=uid, error=str(exc))
            return False
        return True
