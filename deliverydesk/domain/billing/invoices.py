from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Literal

from deliverydesk.domain.orders.pricing import to_decimal

InvoiceType = Literal["A", "B", "C", "REMITO"]
IVA_CONDITIONS = ("responsable_inscripto", "monotributo", "consumidor_final", "exento")
DEFAULT_IVA_RATE = Decimal("0.21")

_NON_DIGITS = re.compile(r"[^0-9]")


@dataclass(frozen=True)
class IvaBreakdown:
    net: Decimal
    iva: Decimal
    total: Decimal

    def to_dict(self) -> dict[str, str]:
        return {"net": str(self.net), "iva": str(self.iva), "total": str(self.total)}


@dataclass
class FiscalClient:
    razon_social: str | None = None
    cuit: str | None = None
    iva_condition: str | None = None
    address: str | None = None


def calculate_iva(amount: Any, rate: Any = DEFAULT_IVA_RATE) -> IvaBreakdown:
    """Split a gross (IVA-included) amount into net and tax, rounded to whole units."""
    gross = to_decimal(amount)
    net = gross / (Decimal(1) + to_decimal(rate))
    iva = gross - net
    return IvaBreakdown(
        net=net.quantize(Decimal(1), rounding=ROUND_HALF_UP),
        iva=iva.quantize(Decimal(1), rounding=ROUND_HALF_UP),
        total=gross,
    )


def generate_invoice_number(point_of_sale: int, invoice_number: int) -> str:
    return f"{point_of_sale:04d}-{invoice_number:08d}"


def _digits(value: str | None) -> str:
    return _NON_DIGITS.sub("", value or "")


def validate_cuit(cuit: str | None) -> bool:
    return len(_digits(cuit)) == 11


def format_cuit(cuit: str | None) -> str:
    if not cuit:
        return ""
    digits = _digits(cuit)
    if len(digits) != 11:
        return cuit
    return f"{digits[:2]}-{digits[2:10]}-{digits[10:]}"


def has_complete_fiscal_data(client: FiscalClient | None) -> bool:
    if client is None:
        return False
    return bool(client.razon_social and client.cuit and client.iva_condition and client.address)


def select_invoice_type(client: FiscalClient | None) -> InvoiceType:
    if not has_complete_fiscal_data(client):
        return "REMITO"
    if client.iva_condition == "responsable_inscripto":
        return "A"
    return "B"
