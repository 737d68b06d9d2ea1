from deliverydesk.domain.billing.invoices import (
    FiscalClient,
    IvaBreakdown,
    calculate_iva,
    format_cuit,
    generate_invoice_number,
    has_complete_fiscal_data,
    select_invoice_type,
    validate_cuit,
)

__all__ = [
    "FiscalClient",
    "IvaBreakdown",
    "calculate_iva",
    "format_cuit",
    "generate_invoice_number",
    "has_complete_fiscal_data",
    "select_invoice_type",
    "validate_cuit",
]
