from protean.fields import Float, Identifier, String

from patisserie.domain import patisserie


@patisserie.event(part_of="Donation")
class DonationRecorded:
    donation_id = Identifier(required=True)
    order_number = String(required=True)
    donation_amount = Float(required=True)
    payment_method = String(required=True)
