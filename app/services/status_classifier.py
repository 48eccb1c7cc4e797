from app.models.ledger import PaymentStatus
from app.models.money import Money


def classify_status(procedure_price: Money, total_paid: Money) -> PaymentStatus:
    """
    Map (procedure_price, total_paid) to a payment status.

    - nothing paid                    -> pending
    - something paid, less than price -> partial
    - price reached or exceeded       -> paid
    """
    if total_paid <= Money.zero():
        return PaymentStatus.PENDING
    if total_paid < procedure_price:
        return PaymentStatus.PARTIAL
    return PaymentStatus.PAID
