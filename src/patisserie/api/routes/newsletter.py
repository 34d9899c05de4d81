"""Newsletter sign-up and subscriber administration."""

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from patisserie.api.dependencies import Page, admin_user, page_params
from patisserie.api.responses import envelope
from patisserie.api.schemas import EmailRequest, SendNewsletterRequest, SubscribeRequest, UpdateSubscriberRequest
from patisserie.newsletter.administration import AddSubscriber, DeleteSubscriber, UpdateSubscriber
from patisserie.newsletter.mailing import SendNewsletter
from patisserie.newsletter.queries import list_subscribers, subscriber_stats
from patisserie.newsletter.subscription import Subscribe, Unsubscribe, find_by_email
from patisserie.utils.serialization import compact, to_data

router = APIRouter(prefix="/api/newsletter", tags=["newsletter"])


@router.post("/subscribe")
async def subscribe(body: SubscribeRequest):
    result = current_domain.process(Subscribe(**compact(email=body.email, source=body.source)), asynchronous=False)
    if result["outcome"] == "created":
        return envelope(message="Successfully subscribed to newsletter!", status_code=201)
    return envelope(message="Successfully resubscribed to newsletter!")


@router.post("/unsubscribe")
async def unsubscribe(body: EmailRequest):
    current_domain.process(Unsubscribe(**compact(email=body.email)), asynchronous=False)
    return envelope(message="Successfully unsubscribed from newsletter")


# --- Admin ---


@router.get("/admin/subscribers", dependencies=[Depends(admin_user)])
async def subscribers(status: str | None = None, paging: Page = Depends(page_params)):
    data, pagination, counts = list_subscribers(status=status, page=paging.page, limit=paging.limit)
    return envelope(data, pagination=pagination, counts=counts)


@router.get("/admin/stats", dependencies=[Depends(admin_user)])
async def stats():
    return envelope(subscriber_stats())


@router.get("/admin/user/{email}", dependencies=[Depends(admin_user)])
async def subscriber_by_email(email: str):
    subscriber = find_by_email(email)
    if subscriber is None:
        raise ObjectNotFoundError("Email not found in our subscriber list")
    return envelope(to_data(subscriber))


@router.post("/admin/add", dependencies=[Depends(admin_user)])
async def add_subscriber(body: EmailRequest):
    result = current_domain.process(AddSubscriber(**compact(email=body.email)), asynchronous=False)
    if result["outcome"] == "created":
        return envelope({"id": result["subscriber_id"]}, "Subscriber added successfully", status_code=201)
    return envelope({"id": result["subscriber_id"]}, "Subscriber reactivated successfully")


@router.post("/admin/send", dependencies=[Depends(admin_user)])
async def send_newsletter(body: SendNewsletterRequest):
    result = current_domain.process(SendNewsletter(**compact(subject=body.subject, body=body.body)), asynchronous=False)
    return envelope(result, f"Newsletter sent to {result['sent']} subscribers")


@router.put("/admin/{subscriber_id}", dependencies=[Depends(admin_user)])
async def update_subscriber(subscriber_id: str, body: UpdateSubscriberRequest):
    command = UpdateSubscriber(**compact(subscriber_id=subscriber_id, email=body.email, status=body.status))
    current_domain.process(command, asynchronous=False)
    return envelope(message="Subscriber updated successfully")


@router.delete("/admin/{subscriber_id}", dependencies=[Depends(admin_user)])
async def delete_subscriber(subscriber_id: str):
    current_domain.process(DeleteSubscriber(subscriber_id=subscriber_id), asynchronous=False)
    return envelope(message="Subscriber deleted successfully")
