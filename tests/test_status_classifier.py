import pytest

from app.models.ledger import PaymentStatus
from app.models.money import Money
from app.services.status_classifier import classify_status


@pytest.mark.parametrize(
    "price, paid, expected",
    [
        (160000, 0, PaymentStatus.PENDING),
        (160000, 100000, PaymentStatus.PARTIAL),
        (160000, 160000, PaymentStatus.PAID),
        (160000, 200000, PaymentStatus.PAID),
        (0, 0, PaymentStatus.PENDING),
        (0, 50000, PaymentStatus.PAID),
        (1, 1, PaymentStatus.PAID),
    ],
)
def test_classify_status(price, paid, expected):
    assert classify_status(Money(price), Money(paid)) == expected


def test_status_rank_orders_for_display():
    ordered = sorted(PaymentStatus, key=lambda s: s.rank)
    assert ordered == [PaymentStatus.PENDING, PaymentStatus.PARTIAL, PaymentStatus.PAID]


def test_status_is_monotonic_in_total_paid():
    price = Money(160000)
    ranks = [classify_status(price, Money(paid)).rank for paid in range(0, 200001, 10000)]
    assert ranks == sorted(ranks)
