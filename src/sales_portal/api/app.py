"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request

from sales_portal.api.portal_models import (
    ConnectForm,
    FormEcho,
    OrderForm,
    OrderPage,
    OrderView,
    PortalPage,
    ProductView,
)
from sales_portal.app_logging import configure_logging
from sales_portal.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/")
    async def index(request: Request) -> PortalPage:
        """Return an empty catalog page prefilled with default settings."""
        settings = request.app.state.container.settings
        return PortalPage(
            form=FormEcho(
                odoo_url=settings.odoo_url,
                odoo_db=settings.odoo_db,
                odoo_login=settings.odoo_login,
            )
        )

    @app.post("/connect")
    async def connect(form: ConnectForm, request: Request) -> PortalPage:
        """Log in and list the product catalog."""
        state_container: AppContainer = request.app.state.container
        echo = FormEcho.from_form(form)
        try:
            result = await state_container.portal_service.connect(form.credentials())
        except Exception as exc:
            logger.exception("Failed to connect to Odoo")
            return PortalPage(success=False, message=f"Error: {exc}", form=echo)
        return PortalPage(
            success=True,
            message=(
                f"Connected (uid = {result.session.uid}). "
                f"{len(result.products)} product(s) loaded."
            ),
            form=echo,
            products=[ProductView.from_record(p) for p in result.products],
        )

    @app.post("/orders")
    async def create_order(form: OrderForm, request: Request) -> PortalPage:
        """Create a sales order with one product line."""
        state_container: AppContainer = request.app.state.container
        logger.info(
            "Create order received product_id=%s quantity=%s",
            form.product_id,
            form.quantity,
        )
        echo = FormEcho.from_form(form)
        try:
            placed = await state_container.portal_service.place_order(
                form.credentials(), form.product_id, form.quantity
            )
        except Exception as exc:
            logger.exception("Failed to create order")
            return PortalPage(success=False, message=f"Error: {exc}", form=echo)
        return PortalPage(
            success=True,
            message=(
                f"Order created (order_id = {placed.order_id}) "
                f"for product_id = {form.product_id}."
            ),
            form=echo,
            products=[ProductView.from_record(p) for p in placed.products],
            created_order_id=placed.order_id,
        )

    @app.post("/orders/{order_id}/track")
    async def track_order(
        order_id: int, form: ConnectForm, request: Request
    ) -> OrderPage:
        """Return an order with its lines."""
        state_container: AppContainer = request.app.state.container
        echo = FormEcho.from_form(form)
        try:
            order = await state_container.portal_service.track_order(
                form.credentials(), order_id
            )
        except Exception as exc:
            logger.exception("Failed to track order", extra={"order_id": order_id})
            return OrderPage(success=False, message=f"Error: {exc}", form=echo)
        return OrderPage(success=True, form=echo, order=OrderView.from_record(order))

    return app
