"""Pydantic models for portal requests and rendered pages."""

from decimal import Decimal

from pydantic import BaseModel, Field

from sales_portal.domain.models import Credentials, Order, OrderLine, Product


class ConnectForm(BaseModel):
    """Connection fields submitted with every portal action."""

    odoo_url: str = ""
    odoo_db: str = ""
    odoo_login: str = ""
    odoo_password: str = ""

    def credentials(self) -> Credentials:
        """Return the submitted values as domain credentials."""
        return Credentials(
            base_url=self.odoo_url,
            database=self.odoo_db,
            login=self.odoo_login,
            password=self.odoo_password,
        )


class OrderForm(ConnectForm):
    """Order placement form."""

    product_id: int
    quantity: int = Field(default=1)


class FormEcho(BaseModel):
    """Submitted form values sent back for re-display; never the password."""

    odoo_url: str
    odoo_db: str
    odoo_login: str

    @classmethod
    def from_form(cls, form: ConnectForm) -> "FormEcho":
        return cls(
            odoo_url=form.odoo_url, odoo_db=form.odoo_db, odoo_login=form.odoo_login
        )


class ProductView(BaseModel):
    """Product row as displayed in the catalog table."""

    id: int
    name: str
    kind: str
    code: str
    category_label: str
    list_price: Decimal
    quantity_available: Decimal
    max_guests: int
    beds: int
    bedrooms: int
    bathrooms: int
    pool_available: bool
    air_conditioning_available: bool

    @classmethod
    def from_record(cls, product: Product) -> "ProductView":
        return cls(
            id=product.id,
            name=product.name,
            kind=product.kind,
            code=product.code,
            category_label=product.category_label,
            list_price=product.list_price,
            quantity_available=product.quantity_available,
            max_guests=product.max_guests,
            beds=product.beds,
            bedrooms=product.bedrooms,
            bathrooms=product.bathrooms,
            pool_available=product.pool_available,
            air_conditioning_available=product.air_conditioning_available,
        )


class OrderLineView(BaseModel):
    """Order line as displayed on the tracking page."""

    product_name: str
    quantity: Decimal
    unit_price: Decimal
    subtotal: Decimal

    @classmethod
    def from_record(cls, line: OrderLine) -> "OrderLineView":
        return cls(
            product_name=line.product_name,
            quantity=line.quantity,
            unit_price=line.unit_price,
            subtotal=line.subtotal,
        )


class OrderView(BaseModel):
    """Order as displayed on the tracking page."""

    id: int
    name: str
    customer_label: str
    status: str
    order_date: str
    total: Decimal
    lines: list[OrderLineView]

    @classmethod
    def from_record(cls, order: Order) -> "OrderView":
        return cls(
            id=order.id,
            name=order.name,
            customer_label=order.customer_label,
            status=order.status,
            order_date=order.order_date,
            total=order.total,
            lines=[OrderLineView.from_record(line) for line in order.lines],
        )


class PortalPage(BaseModel):
    """Catalog page returned by the connect and order actions."""

    success: bool | None = None
    message: str = ""
    form: FormEcho
    products: list[ProductView] | None = None
    created_order_id: int | None = None


class OrderPage(BaseModel):
    """Order tracking page."""

    success: bool
    message: str = ""
    form: FormEcho
    order: OrderView | None = None
