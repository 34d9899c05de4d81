"""Account deletion and the cleanup of everything the account owns.

The account row goes first, synchronously. Owned data is then purged through
``user_deletion_queue`` one collection at a time, each step retried with
backoff, so two cascades never interleave.
"""

from collections.abc import Callable

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from patisserie.auth import get_verifier
from patisserie.domain import patisserie
from patisserie.identity.queries import get_user
from patisserie.identity.user import User
from patisserie.utils.queue import user_deletion_queue, with_retry

logger = structlog.get_logger(__name__)


@patisserie.command(part_of="User")
class DeleteUser:
    user_id: Identifier(required=True)


@patisserie.command_handler(part_of=User)
class DeleteUserHandler:
    @handle(DeleteUser)
    def delete_user(self, command):
        user = get_user(command.user_id)
        account = {"user_id": str(user.id), "uid": user.uid, "email": user.email}

        current_domain.repository_for(User)._dao.delete(user)
        logger.info("User deleted", user_id=account["user_id"])
        return account


def _purge(aggregate_cls, **filters) -> int:
    dao = current_domain.repository_for(aggregate_cls)._dao
    records = dao.query.filter(**filters).limit(None).all().items
    for record in records:
        dao.delete(record)
    return len(records)


def _cleanup_steps(user_id: str, email: str | None) -> list[tuple[str, Callable[[], int]]]:
    from patisserie.cart.cart import Cart
    from patisserie.donation.donation import Donation
    from patisserie.newsletter.subscriber import Subscriber
    from patisserie.notification.notification import Notification
    from patisserie.order.order import Order
    from patisserie.payment.payment import Payment

    steps = [
        ("carts", lambda: _purge(Cart, user_id=user_id)),
        ("orders", lambda: _purge(Order, user_id=user_id)),
        ("notifications", lambda: _purge(Notification, user_id=user_id)),
        ("payments", lambda: _purge(Payment, user_id=user_id)),
    ]
    if email:
        steps.append(("subscribers", lambda: _purge(Subscriber, email=email.lower())))
    else:
        steps.append(("subscribers", lambda: 0))
    steps.append(("donations", lambda: _purge(Donation, user_id=user_id)))
    return steps


async def purge_user_data(user_id: str, email: str | None) -> dict:
    counts = {}
    for name, step in _cleanup_steps(user_id, email):
        counts[name] = await with_retry(step, label=f"delete {name}")
    return counts


async def delete_account(user_id: str) -> dict:
    """Delete the account, cascade its data and drop the identity-provider login.

    Returns the number of records removed per collection.
    """
    account = current_domain.process(DeleteUser(user_id=user_id), asynchronous=False)

    counts = await user_deletion_queue.add(lambda: purge_user_data(account["user_id"], account["email"]))
    counts = {"users": 1, **counts}

    identity_deleted = get_verifier().delete_account(account["uid"])
    logger.info("Account deleted", user_id=account["user_id"], counts=counts, identity_deleted=identity_deleted)
    return {"deletedCounts": counts, "identityDeleted": identity_deleted}
