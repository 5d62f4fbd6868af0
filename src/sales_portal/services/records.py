"""Mapping of raw Odoo rows into typed records."""

from collections.abc import Iterable
from decimal import Decimal

from sales_portal.domain.coercion import (
    decimal_of,
    flag_of,
    integer_of,
    relation_label,
    string_of,
)
from sales_portal.domain.models import Order, OrderLine, Product


def product_from_row(row: dict[str, object]) -> Product:
    """Build a product from a ``product.template`` row."""
    return Product(
        id=_int(row.get("id")),
        name=string_of(row.get("name")),
        kind=string_of(row.get("type")),
        code=string_of(row.get("default_code")),
        category_label=relation_label(row.get("categ_id")),
        list_price=_decimal(row.get("list_price")),
        quantity_available=_decimal(row.get("qty_available")),
        max_guests=_int(row.get("max_guests")),
        beds=_int(row.get("beds")),
        bedrooms=_int(row.get("bedrooms")),
        bathrooms=_int(row.get("bathrooms")),
        pool_available=flag_of(row.get("pool_available")),
        air_conditioning_available=flag_of(row.get("air_conditioning_available")),
    )


def order_line_from_row(row: dict[str, object]) -> OrderLine:
    """Build an order line from a ``sale.order.line`` row."""
    return OrderLine(
        product_name=relation_label(row.get("product_id")),
        quantity=_decimal(row.get("product_uom_qty")),
        unit_price=_decimal(row.get("price_unit")),
        subtotal=_decimal(row.get("price_subtotal")),
    )


def order_from_rows(
    order_id: int, row: dict[str, object], line_rows: Iterable[dict[str, object]]
) -> Order:
    """Build an order from its header row and line rows, keeping line order."""
    return Order(
        id=order_id,
        name=string_of(row.get("name")),
        customer_label=relation_label(row.get("partner_id")),
        status=string_of(row.get("state")),
        order_date=string_of(row.get("date_order")),
        total=_decimal(row.get("amount_total")),
        lines=tuple(order_line_from_row(line) for line in line_rows),
    )


def rows_of(result: object) -> list[dict[str, object]]:
    """Return the object rows of a ``search_read`` result, skipping anything else."""
    if not isinstance(result, list):
        return []
    return [row for row in result if isinstance(row, dict)]


def _decimal(value: object) -> Decimal:
    parsed = decimal_of(value)
    return parsed if parsed is not None else Decimal(0)


def _int(value: object) -> int:
    parsed = integer_of(value)
    return parsed if parsed is not None else 0
