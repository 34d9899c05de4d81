"""Request dependencies: bearer authentication, admin guard and paging."""

from dataclasses import dataclass

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from protean.exceptions import ObjectNotFoundError

from patisserie.auth import AuthenticationError, PermissionDeniedError, get_verifier
from patisserie.config import int_setting
from patisserie.identity.registration import find_by_uid
from patisserie.identity.user import User
from patisserie.utils.pagination import DEFAULT_LIMIT, MAX_LIMIT

bearer_scheme = HTTPBearer(auto_error=False)


async def verified_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    """Claims of a valid identity-provider token; the account may not exist yet."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return get_verifier().verify(credentials.credentials)


async def current_user(claims: dict = Depends(verified_claims)) -> User:
    user = find_by_uid(claims["uid"])
    if user is None:
        raise ObjectNotFoundError("User not found")
    if not user.is_active:
        raise AuthenticationError("Account is deactivated")
    return user


async def admin_user(user: User = Depends(current_user)) -> User:
    if not user.is_admin:
        raise PermissionDeniedError()
    return user


@dataclass
class Page:
    page: int
    limit: int


async def page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
) -> Page:
    return Page(page=page, limit=limit)


def client_ip(request: Request) -> str:
    """Address of the caller as seen by the last trusted proxy.

    ``X-Forwarded-For`` is only read when ``TRUSTED_PROXY_HOPS`` is set; each
    trusted proxy appends the address it received the request from, so the
    entry that many hops from the right is the one a client cannot forge.
    """
    peer = request.client.host if request.client else "unknown"
    hops = int_setting("TRUSTED_PROXY_HOPS", 0)
    if hops <= 0:
        return peer

    forwarded = [hop.strip() for hop in request.headers.get("X-Forwarded-For", "").split(",") if hop.strip()]
    if not forwarded:
        return peer
    return forwarded[-min(hops, len(forwarded))]
