from deliverydesk.domain.payments.settlement import (
    PAYMENT_METHODS,
    PaymentError,
    PaymentOutcome,
    settle_payment,
)

__all__ = ["PAYMENT_METHODS", "PaymentError", "PaymentOutcome", "settle_payment"]
