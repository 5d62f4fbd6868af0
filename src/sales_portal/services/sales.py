"""Sales catalog and order operations built on Odoo ``call_kw``."""

import logging
from dataclasses import dataclass

from sales_portal.adapters.odoo_client import OdooClient
from sales_portal.domain.coercion import integer_of
from sales_portal.domain.models import AuthenticatedSession, Order, Product
from sales_portal.errors import NotFoundError, ProtocolError
from sales_portal.services.records import order_from_rows, product_from_row, rows_of

PRODUCT_MODEL = "product.template"
ORDER_MODEL = "sale.order"
ORDER_LINE_MODEL = "sale.order.line"
PARTNER_MODEL = "res.partner"

PRODUCT_FIELDS = [
    "id",
    "name",
    "list_price",
    "type",
    "default_code",
    "categ_id",
    "qty_available",
]
RENTAL_FIELDS = [
    "max_guests",
    "beds",
    "bedrooms",
    "bathrooms",
    "pool_available",
    "air_conditioning_available",
]
ORDER_FIELDS = ["id", "name", "partner_id", "date_order", "state", "amount_total"]
ORDER_LINE_FIELDS = ["product_id", "product_uom_qty", "price_unit", "price_subtotal"]
PARTNER_FIELDS = ["id", "name"]

_logger = logging.getLogger(__name__)


@dataclass
class SalesService:
    """Reads and writes catalog and sales records for one Odoo session."""

    client: OdooClient
    product_limit: int = 50
    order_line_limit: int = 200
    include_rental_fields: bool = True

    async def list_products(self, session: AuthenticatedSession) -> list[Product]:
        """Return catalog products in server order."""
        fields = list(PRODUCT_FIELDS)
        if self.include_rental_fields:
            fields.extend(RENTAL_FIELDS)
        result = await self.client.call_kw(
            session,
            PRODUCT_MODEL,
            "search_read",
            [[]],
            {"fields": fields, "limit": self.product_limit},
        )
        return [product_from_row(row) for row in rows_of(result)]

    async def read_order(self, session: AuthenticatedSession, order_id: int) -> Order:
        """Return an order with its lines, or raise ``NotFoundError``."""
        header = await self.client.call_kw(
            session,
            ORDER_MODEL,
            "search_read",
            [[["id", "=", order_id]]],
            {"fields": ORDER_FIELDS, "limit": 1},
        )
        header_rows = rows_of(header)
        if not header_rows:
            raise NotFoundError(f"Order {order_id} not found")

        lines = await self.client.call_kw(
            session,
            ORDER_LINE_MODEL,
            "search_read",
            [[["order_id", "=", order_id]]],
            {"fields": ORDER_LINE_FIELDS, "limit": self.order_line_limit},
        )
        return order_from_rows(order_id, header_rows[0], rows_of(lines))

    async def resolve_partner_by_name(
        self, session: AuthenticatedSession, name: str
    ) -> int:
        """Return the id of the partner whose name matches exactly."""
        result = await self.client.call_kw(
            session,
            PARTNER_MODEL,
            "search_read",
            [[["name", "=", name]]],
            {"fields": PARTNER_FIELDS, "limit": 1},
        )
        rows = rows_of(result)
        partner_id = integer_of(rows[0].get("id")) if rows else None
        if partner_id is None:
            raise NotFoundError(f"Partner '{name}' not found ({PARTNER_MODEL})")
        return partner_id

    async def create_order(self, session: AuthenticatedSession, partner_id: int) -> int:
        """Create a draft sales order and return its id."""
        order_id = await self._create(session, ORDER_MODEL, {"partner_id": partner_id})
        _logger.info("Created %s id=%s partner_id=%s", ORDER_MODEL, order_id, partner_id)
        return order_id

    async def create_order_line(
        self,
        session: AuthenticatedSession,
        order_id: int,
        product_id: int,
        quantity: float,
    ) -> int:
        """Add a product line to an order and return the line id."""
        line_id = await self._create(
            session,
            ORDER_LINE_MODEL,
            {
                "order_id": order_id,
                "product_id": product_id,
                "product_uom_qty": quantity,
            },
        )
        _logger.info(
            "Created %s id=%s order_id=%s product_id=%s",
            ORDER_LINE_MODEL,
            line_id,
            order_id,
            product_id,
        )
        return line_id

    async def _create(
        self, session: AuthenticatedSession, model: str, values: dict[str, object]
    ) -> int:
        # create expects args = [values] and answers with the new id.
        result = await self.client.call_kw(session, model, "create", [values], {})
        record_id = integer_of(result)
        if record_id is None:
            raise ProtocolError(f"Unexpected create response shape for {model}")
        return record_id
