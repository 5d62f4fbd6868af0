"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass

from sales_portal.adapters.odoo_client import HttpxOdooClient, OdooClient
from sales_portal.config import Settings
from sales_portal.services.portal import PortalService


@dataclass
class AppContainer:
    """Holds application-wide dependencies.

    Odoo clients are not held here: the portal service opens one per user
    action and closes it when the action completes.
    """

    settings: Settings
    portal_service: PortalService


def build_container(
    settings: Settings | None = None,
    client_factory: Callable[[str], OdooClient] | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    portal_service = PortalService(
        client_factory=client_factory or HttpxOdooClient.create,
        partner_name=resolved_settings.default_partner_name,
        product_limit=resolved_settings.product_limit,
        order_line_limit=resolved_settings.order_line_limit,
        include_rental_fields=resolved_settings.include_rental_fields,
    )
    return AppContainer(settings=resolved_settings, portal_service=portal_service)
