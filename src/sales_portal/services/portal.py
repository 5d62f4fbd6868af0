"""User-facing portal workflows.

Each workflow opens its own Odoo client, logs in with the submitted
credentials and closes the client when done. Nothing is cached between
workflows, so every user action re-authenticates.
"""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass

from sales_portal.adapters.odoo_client import OdooClient
from sales_portal.domain.models import (
    AuthenticatedSession,
    Credentials,
    Order,
    Product,
)
from sales_portal.errors import ValidationError
from sales_portal.services.sales import SalesService


@dataclass(frozen=True)
class ConnectResult:
    """Outcome of a successful connect action."""

    session: AuthenticatedSession
    products: list[Product]


@dataclass(frozen=True)
class PlacedOrder:
    """Outcome of a successful order placement."""

    order_id: int
    line_id: int
    products: list[Product]


@dataclass
class PortalService:
    """Runs the connect, order and tracking actions against Odoo."""

    client_factory: Callable[[str], OdooClient]
    partner_name: str = "Administrator"
    product_limit: int = 50
    order_line_limit: int = 200
    include_rental_fields: bool = True

    async def connect(self, credentials: Credentials) -> ConnectResult:
        """Log in and load the product catalog."""
        async with self._open(credentials) as (sales, session):
            products = await sales.list_products(session)
        return ConnectResult(session=session, products=products)

    async def place_order(
        self, credentials: Credentials, product_id: int, quantity: float
    ) -> PlacedOrder:
        """Create an order for the default partner with a single product line."""
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than zero.")
        async with self._open(credentials) as (sales, session):
            partner_id = await sales.resolve_partner_by_name(session, self.partner_name)
            order_id = await sales.create_order(session, partner_id)
            line_id = await sales.create_order_line(
                session, order_id, product_id, quantity
            )
            products = await sales.list_products(session)
        return PlacedOrder(order_id=order_id, line_id=line_id, products=products)

    async def track_order(self, credentials: Credentials, order_id: int) -> Order:
        """Load an order and its lines."""
        async with self._open(credentials) as (sales, session):
            return await sales.read_order(session, order_id)

    @asynccontextmanager
    async def _open(
        self, credentials: Credentials
    ) -> AsyncIterator[tuple[SalesService, AuthenticatedSession]]:
        validate_credentials(credentials)
        client = self.client_factory(credentials.base_url)
        try:
            session = await client.authenticate(
                credentials.database, credentials.login, credentials.password
            )
            yield (
                SalesService(
                    client=client,
                    product_limit=self.product_limit,
                    order_line_limit=self.order_line_limit,
                    include_rental_fields=self.include_rental_fields,
                ),
                session,
            )
        finally:
            await client.close()


def validate_credentials(credentials: Credentials) -> None:
    """Ensure every connection field was filled in."""
    values = (
        credentials.base_url,
        credentials.database,
        credentials.login,
        credentials.password,
    )
    if any(not value or not value.strip() for value in values):
        raise ValidationError("Please fill in all configuration fields.")
