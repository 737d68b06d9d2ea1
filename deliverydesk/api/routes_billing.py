from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter
from pydantic import BaseModel, Field

from deliverydesk.core.config import get_settings
from deliverydesk.domain.billing import (
    FiscalClient,
    calculate_iva,
    format_cuit,
    generate_invoice_number,
    has_complete_fiscal_data,
    select_invoice_type,
    validate_cuit,
)

router = APIRouter(tags=["billing"])


class IvaRequest(BaseModel):
    amount: Decimal = Field(ge=0)


class InvoiceTypeRequest(BaseModel):
    razon_social: str | None = None
    cuit: str | None = None
    iva_condition: str | None = None
    address: str | None = None
    invoice_number: int | None = Field(default=None, ge=1)


@router.post("/billing/iva")
def iva_breakdown(request: IvaRequest):
    return calculate_iva(request.amount, get_settings().iva_rate).to_dict()


@router.post("/billing/invoice-type")
def invoice_type(request: InvoiceTypeRequest):
    client = FiscalClient(
        razon_social=request.razon_social,
        cuit=request.cuit,
        iva_condition=request.iva_condition,
        address=request.address,
    )
    result = {
        "invoice_type": select_invoice_type(client),
        "complete_fiscal_data": has_complete_fiscal_data(client),
        "cuit_valid": validate_cuit(request.cuit),
        "cuit": format_cuit(request.cuit),
    }
    if request.invoice_number is not None:
        result["invoice_number"] = generate_invoice_number(get_settings().point_of_sale, request.invoice_number)
    return result
