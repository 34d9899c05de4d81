"""Fake token verifier: ``test-token:<uid>`` is accepted as the account ``uid``."""

from patisserie.auth.exceptions import AuthenticationError
from patisserie.auth.port import TokenVerifier

TOKEN_PREFIX = "test-token:"


class FakeTokenVerifier(TokenVerifier):
    def __init__(self) -> None:
        self.claims: dict[str, dict] = {}
        self.deleted: list[str] = []

    def register(self, uid: str, email: str | None = None, name: str | None = None) -> str:
        """Remember extra claims for ``uid`` and return a token for it."""
        self.claims[uid] = {"email": email, "name": name}
        return f"{TOKEN_PREFIX}{uid}"

    def verify(self, token: str) -> dict:
        if not token or not token.startswith(TOKEN_PREFIX):
            raise AuthenticationError("Not authorized, token failed")

        uid = token[len(TOKEN_PREFIX) :]
        if not uid:
            raise AuthenticationError("Not authorized, token failed")
        return {"uid": uid, **self.claims.get(uid, {})}

    def delete_account(self, uid: str) -> bool:
        self.deleted.append(uid)
        self.claims.pop(uid, None)
        return True

    def reset(self) -> None:
        self.claims.clear()
        self.deleted.clear()
