"""Domain models for the sales portal."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class Credentials:
    """Connection settings submitted by the user for one action."""

    base_url: str
    database: str
    login: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class AuthenticatedSession:
    """Handle returned by a successful Odoo login."""

    uid: int
    session_token: str = field(repr=False)


@dataclass(frozen=True)
class Product:
    """Catalog entry read from ``product.template``."""

    id: int
    name: str = ""
    kind: str = ""
    code: str = ""
    category_label: str = ""
    list_price: Decimal = Decimal(0)
    quantity_available: Decimal = Decimal(0)
    max_guests: int = 0
    beds: int = 0
    bedrooms: int = 0
    bathrooms: int = 0
    pool_available: bool = False
    air_conditioning_available: bool = False


@dataclass(frozen=True)
class OrderLine:
    """Line of a sales order."""

    product_name: str = ""
    quantity: Decimal = Decimal(0)
    unit_price: Decimal = Decimal(0)
    subtotal: Decimal = Decimal(0)


@dataclass(frozen=True)
class Order:
    """Sales order header with its lines."""

    id: int
    name: str = ""
    customer_label: str = ""
    status: str = ""
    order_date: str = ""
    total: Decimal = Decimal(0)
    lines: tuple[OrderLine, ...] = ()
