from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple, Union

from bistro.core.config import settings
from bistro.schemas.cart import CheckoutSummary
from bistro.schemas.dine_in import Bill

Number = Union[Decimal, int, str]
CENT = Decimal("0.01")

def to_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)

def _subtotal(lines: Iterable[Tuple[Number, int]]) -> Decimal:
    return sum((Decimal(price) * quantity for price, quantity in lines), Decimal("0"))

class BillService:
    @staticmethod
    def compute_bill(lines: Iterable[Tuple[Number, int]], tip_percentage: Number = 0) -> Bill:
        """Derive subtotal, tax, tip and total from ``(price, quantity)`` pairs.

        Every field is computed from the unrounded subtotal and rounded on its
        own, so changing the tip never drifts from previously rounded values.
        """
        tip_percentage = Decimal(tip_percentage)
        if tip_percentage < 0:
            raise ValueError("tip percentage must be non-negative")
        
        subtotal = _subtotal(lines)
        tax = subtotal * settings.TAX_RATE
        tip = subtotal * tip_percentage / 100
        total = subtotal + tax + tip
        return Bill(
            subtotal=to_money(subtotal),
            tax=to_money(tax),
            tip=to_money(tip),
            total=to_money(total),
        )
    
    @staticmethod
    def compute_checkout(lines: Iterable[Tuple[Number, int]]) -> CheckoutSummary:
        """Totals for an online order: delivery fee and tax on top of the items."""
        lines = list(lines)
        subtotal = _subtotal(lines)
        delivery_fee = settings.DELIVERY_FEE if lines else Decimal("0")
        tax = subtotal * settings.ONLINE_TAX_RATE
        total = subtotal + delivery_fee + tax
        return CheckoutSummary(
            subtotal=to_money(subtotal),
            delivery_fee=to_money(delivery_fee),
            tax=to_money(tax),
            total=to_money(total),
        )

bill_service = BillService()
