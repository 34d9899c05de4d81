"""Domain events for the Payment aggregate."""

from protean.fields import Float, Identifier, String

from patisserie.domain import patisserie


@patisserie.event(part_of="Payment")
class PaymentRecorded:
    __version__ = 1

    payment_id: Identifier(required=True)
    order_number: String(required=True)
    amount: Float(required=True)
    payment_method: String(required=True)
    payment_status: String(required=True)


@patisserie.event(part_of="Payment")
class PaymentSucceeded:
    """A pending payment was settled (cash collected, manual reconciliation)."""

    __version__ = 1

    payment_id: Identifier(required=True)
    order_number: String(required=True)
    amount: Float(required=True)
