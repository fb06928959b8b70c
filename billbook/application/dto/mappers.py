"""Entity to response DTO conversion."""

from billbook.application.dto.responses import (
    CustomerResponse,
    InvoiceItemResponse,
    InvoiceResponse,
    ProductResponse,
)
from billbook.core.entities import Customer, Invoice, Product


def product_to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        rate=product.rate,
        unit=product.unit,
        stock=product.stock,
        is_active=product.is_active,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def customer_to_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse(
        id=customer.id,  # type: ignore[arg-type]
        name=customer.name,
        phone=customer.phone,
        created_at=customer.created_at,
        updated_at=customer.updated_at,
    )


def invoice_to_response(invoice: Invoice) -> InvoiceResponse:
    return InvoiceResponse(
        id=invoice.id,  # type: ignore[arg-type]
        invoice_number=invoice.invoice_number,
        customer_id=invoice.customer_id,
        customer_name=invoice.customer_name,
        status=invoice.status.value,
        total=invoice.total,
        items=[
            InvoiceItemResponse(
                id=item.id,  # type: ignore[arg-type]
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity,
                rate=item.rate,
                amount=item.amount,
            )
            for item in invoice.items
        ],
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
    )
