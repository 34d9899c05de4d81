"""Token verifier factory.

``AUTH_PROVIDER`` selects the verifier (``firebase`` or ``fake``); tests swap
it with :func:`set_verifier`.
"""

from patisserie.auth.exceptions import AuthenticationError, PermissionDeniedError
from patisserie.auth.port import TokenVerifier
from patisserie.config import setting

_current_verifier: TokenVerifier | None = None


def _build_verifier() -> TokenVerifier:
    if setting("AUTH_PROVIDER", "fake") == "firebase":
        from patisserie.auth.firebase_verifier import FirebaseTokenVerifier

        return FirebaseTokenVerifier(credentials_path=setting("FIREBASE_CREDENTIALS"))

    from patisserie.auth.fake_verifier import FakeTokenVerifier

    return FakeTokenVerifier()


def get_verifier() -> TokenVerifier:
    global _current_verifier
    if _current_verifier is None:
        _current_verifier = _build_verifier()
    return _current_verifier


def set_verifier(verifier: TokenVerifier) -> None:
    global _current_verifier
    _current_verifier = verifier


def reset_verifier() -> None:
    global _current_verifier
    _current_verifier = None


__all__ = [
    "AuthenticationError",
    "PermissionDeniedError",
    "TokenVerifier",
    "get_verifier",
    "reset_verifier",
    "set_verifier",
]
