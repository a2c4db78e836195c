import json
from urllib.parse import unquote

import httpx
import pytest

from scaffold_rental.agents.context import ServiceContext
from scaffold_rental.notifications import Notifier
from scaffold_rental.schemas.customer import Customer
from scaffold_rental.schemas.inventory import ConditionStatus, InventoryItem, ItemType
from scaffold_rental.schemas.rental_order import RentalOrder, RentalOrderStatus
from scaffold_rental.schemas.vendor import Vendor

DATA_SERVICE_URL = "http://data.test"


class FakeDataService:
    """In-memory stand-in for the remote CRUD service."""

    KEYS = {"customers": "npwp", "vendors": "npwp", "inventory": "itemId", "orders": "orderId"}

    def __init__(self):
        self.collections = {name: {} for name in self.KEYS}
        self.requests = []
        self.on_request = None

    def seed(self, collection, *records):
        for record in records:
            self.collections[collection][record.key] = record.to_wire()

    def count(self, method, path):
        return sum(1 for request in self.requests if request == (method, path))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        raw_path = request.url.raw_path.decode().split("?")[0]
        parts = [unquote(part) for part in raw_path.strip("/").split("/")]
        self.requests.append((request.method, raw_path))
        if self.on_request:
            self.on_request(request)

        collection = parts[0]
        if collection not in self.collections:
            return httpx.Response(404, json={"detail": "Unknown collection"})
        records = self.collections[collection]
        key_field = self.KEYS[collection]

        if len(parts) == 1:
            if request.method == "GET":
                return httpx.Response(200, json=list(records.values()))
            if request.method == "POST":
                body = json.loads(request.content)
                key = body[key_field]
                if key in records:
                    return httpx.Response(409, json={"detail": f"{key} sudah terdaftar"})
                records[key] = body
                return httpx.Response(201)
            return httpx.Response(405)

        key = parts[1]
        if key not in records:
            return httpx.Response(404, json={"detail": f"{key} tidak ditemukan"})
        if request.method == "GET":
            return httpx.Response(200, json=records[key])
        if request.method == "PUT":
            records[key] = json.loads(request.content)
            return httpx.Response(200)
        if request.method == "DELETE":
            del records[key]
            return httpx.Response(204)
        return httpx.Response(405)


def make_customer(**overrides) -> Customer:
    values = {
        "name": "PT. Bangun Jaya",
        "npwp": "012345678901234",
        "contact_person": "Budi Santoso",
        "phone": "081234567890",
        "email": "budi@bangunjaya.co.id",
        "address": "Jl. Sudirman No. 1, Jakarta",
        "credit_limit": 50000000,
    }
    values.update(overrides)
    return Customer(**values)


def make_vendor(**overrides) -> Vendor:
    values = {
        "company_name": "CV. Baja Perkasa",
        "npwp": "987654321098765",
        "contact_person": "Sari Wulandari",
        "phone": "0215551234",
        "email": "sales@bajaperkasa.id",
        "address": "Jl. Industri 7, Bekasi",
        "bank_account": "BCA 1234567890",
        "payment_terms": 30,
    }
    values.update(overrides)
    return Vendor(**values)


def make_item(**overrides) -> InventoryItem:
    values = {
        "item_id": "FRM-001",
        "item_type": ItemType.FRAME,
        "quantity": 120,
        "location": "Gudang Cikarang",
        "condition": ConditionStatus.GOOD,
        "acquisition_cost": 350000,
    }
    values.update(overrides)
    return InventoryItem(**values)


def make_order(**overrides) -> RentalOrder:
    values = {
        "order_id": "ORD-001",
        "customer_id": "012345678901234",
        "item_ids": ["FRM-001"],
        "start_date": "2026-01-05",
        "end_date": "2026-02-05",
        "status": RentalOrderStatus.BOOKED,
    }
    values.update(overrides)
    return RentalOrder(**values)


@pytest.fixture
def service():
    return FakeDataService()


@pytest.fixture
def transport(service):
    return httpx.MockTransport(service)


@pytest.fixture
async def context(transport):
    context = ServiceContext(base_url=DATA_SERVICE_URL, transport=transport)
    await context.connect()
    yield context
    await context.close()


@pytest.fixture
def notifier():
    return Notifier()
