from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Literal

from deliverydesk.domain.orders.pricing import ZERO, to_decimal

logger = logging.getLogger(__name__)

PaymentMethod = Literal["efectivo", "eft_trans", "tarjeta", "cuenta_corriente", "no_pago"]
PaymentStatus = Literal["pendiente", "pagado", "parcial", "no_pago"]

PAYMENT_METHODS: tuple[str, ...] = ("efectivo", "eft_trans", "tarjeta", "cuenta_corriente", "no_pago")


class PaymentError(ValueError):
    pass


@dataclass(frozen=True)
class PaymentOutcome:
    method: str
    status: PaymentStatus
    applied: Decimal
    change_due: Decimal
    account_charge: Decimal

    def to_dict(self) -> dict[str, str]:
        return {
            "method": self.method,
            "status": self.status,
            "applied": str(self.applied),
            "change_due": str(self.change_due),
            "account_charge": str(self.account_charge),
        }


def settle_payment(total: Any, method: str, amount: Any = None) -> PaymentOutcome:
    """Settle a delivered order's ``total`` with what the driver collected.

    Cash may exceed the total (the difference is change); other methods must
    not. ``cuenta_corriente`` collects nothing now and charges the whole total
    to the client's running account.
    """
    if method not in PAYMENT_METHODS:
        raise PaymentError(f"unknown payment method={method}")

    due = to_decimal(total)
    if not due.is_finite() or due < ZERO:
        raise PaymentError("order total must be a non-negative number")

    if method == "no_pago":
        return PaymentOutcome(method, "no_pago", ZERO, ZERO, ZERO)
    if method == "cuenta_corriente":
        return PaymentOutcome(method, "pendiente", ZERO, ZERO, due)

    paid = to_decimal(amount)
    if not paid.is_finite() or paid <= ZERO:
        raise PaymentError("payment amount must be greater than zero")

    change = ZERO
    if paid > due:
        if method != "efectivo":
            raise PaymentError(f"amount exceeds order total for method={method}")
        change = paid - due
        paid = due

    status: PaymentStatus = "pagado" if paid >= due else "parcial"
    if status == "parcial":
        logger.warning("partial payment: method=%s paid=%s due=%s", method, paid, due)
    return PaymentOutcome(method, status, paid, change, ZERO)
