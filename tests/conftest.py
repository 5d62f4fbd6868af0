"""Shared test fixtures."""

import json
from collections.abc import Callable
from dataclasses import dataclass, field

import httpx
import pytest

from sales_portal.adapters.odoo_client import HttpxOdooClient
from sales_portal.config import Settings
from sales_portal.containers import AppContainer, build_container
from sales_portal.domain.models import AuthenticatedSession, Credentials

BASE_URL = "http://odoo.test"


def _default_products() -> list[dict[str, object]]:
    return [
        {
            "id": 7,
            "name": "Sea View Villa",
            "type": "service",
            "default_code": "VILLA-7",
            "categ_id": [3, "Villas"],
            "list_price": 250.0,
            "qty_available": 0.0,
            "max_guests": 6,
            "beds": 3,
            "bedrooms": 3,
            "bathrooms": 2,
            "pool_available": True,
            "air_conditioning_available": False,
        },
        {
            "id": 8,
            "name": "Cleaning Kit",
            "type": "consu",
            "default_code": False,
            "categ_id": False,
            "list_price": 12.5,
            "qty_available": 40,
        },
    ]


@dataclass
class FakeOdooServer:
    """In-memory Odoo server answering the two JSON-RPC endpoints."""

    uid: int | None = 2
    session_token: str | None = "abc123"
    auth_error: str | None = None
    products: list[dict[str, object]] = field(default_factory=_default_products)
    partners: list[dict[str, object]] = field(
        default_factory=lambda: [{"id": 3, "name": "Administrator"}]
    )
    orders: list[dict[str, object]] = field(default_factory=list)
    order_lines: list[dict[str, object]] = field(default_factory=list)
    next_order_id: int = 42
    next_line_id: int = 101
    requests: list[httpx.Request] = field(default_factory=list)
    calls: list[dict[str, object]] = field(default_factory=list)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        payload = json.loads(request.content.decode())
        if request.url.path == "/web/session/authenticate":
            return self._authenticate(payload)
        if request.url.path == "/web/dataset/call_kw":
            if request.headers.get("X-Openerp-Session-Id") != self.session_token:
                return _rpc_error(payload, "Session expired")
            return self._call_kw(payload)
        return httpx.Response(404, text="Not Found")

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def client_factory(self) -> Callable[[str], HttpxOdooClient]:
        def factory(base_url: str) -> HttpxOdooClient:
            return HttpxOdooClient(
                base_url=base_url.rstrip("/"),
                http_client=httpx.AsyncClient(transport=self.transport()),
            )

        return factory

    def create_calls(self) -> list[dict[str, object]]:
        return [call for call in self.calls if call["method"] == "create"]

    def _authenticate(self, payload: dict[str, object]) -> httpx.Response:
        if self.auth_error:
            return _rpc_error(payload, self.auth_error)
        headers = {}
        if self.session_token:
            headers["Set-Cookie"] = f"session_id={self.session_token}; Path=/; HttpOnly"
        return httpx.Response(
            200,
            json={
                "jsonrpc": "2.0",
                "id": payload["id"],
                "result": {"uid": self.uid, "name": "Mitchell Admin"},
            },
            headers=headers,
        )

    def _call_kw(self, payload: dict[str, object]) -> httpx.Response:
        params = payload["params"]
        self.calls.append(params)
        model, method = params["model"], params["method"]
        if method == "search_read":
            result = self._search_read(model, params["args"][0], params["kwargs"])
        elif method == "create" and model == "sale.order":
            result = self._create_order(params["args"][0])
        elif method == "create" and model == "sale.order.line":
            result = self._create_line(params["args"][0])
        else:
            return _rpc_error(payload, f"Unsupported call {model}.{method}")
        return httpx.Response(
            200, json={"jsonrpc": "2.0", "id": payload["id"], "result": result}
        )

    def _search_read(
        self, model: str, domain: list[list[object]], kwargs: dict[str, object]
    ) -> list[dict[str, object]]:
        tables = {
            "product.template": self.products,
            "res.partner": self.partners,
            "sale.order": self.orders,
            "sale.order.line": self.order_lines,
        }
        rows = [row for row in tables[model] if _matches(row, domain)]
        fields = kwargs.get("fields") or []
        limit = kwargs.get("limit")
        if limit:
            rows = rows[:limit]
        return [
            {key: row[key] for key in ["id", *fields] if key in row} for row in rows
        ]

    def _create_order(self, values: dict[str, object]) -> int:
        order_id = self.next_order_id
        self.next_order_id += 1
        partner = next(p for p in self.partners if p["id"] == values["partner_id"])
        self.orders.append(
            {
                "id": order_id,
                "name": f"S{order_id:05d}",
                "partner_id": [partner["id"], partner["name"]],
                "state": "draft",
                "date_order": "2026-10-19 09:30:00",
                "amount_total": 0.0,
            }
        )
        return order_id

    def _create_line(self, values: dict[str, object]) -> int:
        line_id = self.next_line_id
        self.next_line_id += 1
        order = next(o for o in self.orders if o["id"] == values["order_id"])
        product = next(p for p in self.products if p["id"] == values["product_id"])
        quantity = values["product_uom_qty"]
        subtotal = quantity * product["list_price"]
        self.order_lines.append(
            {
                "id": line_id,
                "order_id": [order["id"], order["name"]],
                "product_id": [product["id"], product["name"]],
                "product_uom_qty": quantity,
                "price_unit": product["list_price"],
                "price_subtotal": subtotal,
            }
        )
        order["amount_total"] = order["amount_total"] + subtotal
        return line_id


def _matches(row: dict[str, object], domain: list[list[object]]) -> bool:
    for field_name, _operator, value in domain:
        current = row.get(field_name)
        if isinstance(current, list):
            current = current[0]
        if current != value:
            return False
    return True


def _rpc_error(payload: dict[str, object], message: str) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "jsonrpc": "2.0",
            "id": payload.get("id"),
            "error": {
                "code": 200,
                "message": "Odoo Server Error",
                "data": {"name": "odoo.exceptions.AccessDenied", "message": message},
            },
        },
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(environment="test")


@pytest.fixture
def odoo_server() -> FakeOdooServer:
    return FakeOdooServer()


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(
        base_url=BASE_URL, database="odoo_lab", login="admin", password="admin"
    )


@pytest.fixture
def session() -> AuthenticatedSession:
    return AuthenticatedSession(uid=2, session_token="abc123")


@pytest.fixture
def container(settings: Settings, odoo_server: FakeOdooServer) -> AppContainer:
    return build_container(settings, client_factory=odoo_server.client_factory())
