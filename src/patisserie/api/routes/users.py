"""Login and account management."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from patisserie.api.dependencies import Page, admin_user, current_user, page_params, verified_claims
from patisserie.api.responses import envelope
from patisserie.api.schemas import ChangeRoleRequest, UpdateProfileRequest
from patisserie.auth import PermissionDeniedError
from patisserie.identity.deletion import delete_account
from patisserie.identity.queries import get_user, list_users, user_data
from patisserie.identity.registration import ChangeUserRole, RegisterUser, UpdateProfile
from patisserie.identity.user import User
from patisserie.utils.serialization import compact

auth_router = APIRouter(prefix="/api/auth", tags=["auth"])
user_router = APIRouter(prefix="/api/users", tags=["users"])


def _ensure_self_or_admin(user: User, user_id: str) -> None:
    if str(user.id) != user_id and not user.is_admin:
        raise PermissionDeniedError("Not authorized to manage this account")


@auth_router.post("/verify")
async def verify(claims: dict = Depends(verified_claims)):
    """Exchange a valid identity token for the storefront account, creating it on first login."""
    command = RegisterUser(
        **compact(uid=claims["uid"], email=claims.get("email"), name=claims.get("name"), phone=claims.get("phone"))
    )
    user_id = current_domain.process(command, asynchronous=False)
    return envelope(user_data(get_user(user_id)), "Authentication successful")


@user_router.get("/me")
async def me(user: User = Depends(current_user)):
    return envelope(user_data(user))


@user_router.get("", dependencies=[Depends(admin_user)])
async def users(role: str | None = None, paging: Page = Depends(page_params)):
    data, pagination = list_users(role=role, page=paging.page, limit=paging.limit)
    return envelope(data, pagination=pagination)


@user_router.get("/{user_id}", dependencies=[Depends(admin_user)])
async def user_detail(user_id: str):
    return envelope(user_data(get_user(user_id)))


@user_router.put("/{user_id}")
async def update_user(user_id: str, body: UpdateProfileRequest, user: User = Depends(current_user)):
    _ensure_self_or_admin(user, user_id)
    command = UpdateProfile(
        **compact(
            user_id=user_id,
            name=body.name,
            phone=body.phone,
            location_id=body.location_id,
            hostel_name=body.hostel_name,
        )
    )
    current_domain.process(command, asynchronous=False)
    return envelope(user_data(get_user(user_id)), "Profile updated successfully")


@user_router.patch("/{user_id}/role", dependencies=[Depends(admin_user)])
async def change_role(user_id: str, body: ChangeRoleRequest):
    current_domain.process(ChangeUserRole(user_id=user_id, role=body.role), asynchronous=False)
    return envelope(user_data(get_user(user_id)), "User role updated successfully")


@user_router.delete("/{user_id}")
async def delete_user(user_id: str, user: User = Depends(current_user)):
    _ensure_self_or_admin(user, user_id)
    result = await delete_account(user_id)
    return envelope(result, "User deleted successfully")
