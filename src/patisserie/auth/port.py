"""Identity token verifier port."""

from abc import ABC, abstractmethod


class TokenVerifier(ABC):
    @abstractmethod
    def verify(self, token: str) -> dict:
        """Return the token's claims (``uid``, ``email``, ``name``, ...).

        Raises AuthenticationError when the token is invalid or expired.
        """
        ...

    @abstractmethod
    def delete_account(self, uid: str) -> bool:
        """Remove the account from the identity provider. Returns False when it could not."""
        ...
