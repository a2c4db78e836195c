import logging
from typing import Generic, TypeVar
from urllib.parse import quote

import httpx

from scaffold_rental.agents.context import ServiceContext
from scaffold_rental.errors import (
    ConnectionUnavailable,
    RemoteConflict,
    RemoteNotFound,
    RemoteServiceError,
)
from scaffold_rental.schemas.base import Record
from scaffold_rental.schemas.customer import Customer
from scaffold_rental.schemas.inventory import InventoryItem
from scaffold_rental.schemas.rental_order import RentalOrder
from scaffold_rental.schemas.vendor import Vendor

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=Record)


class RecordStore(Generic[RecordT]):
    """list/get/add/update/delete for one collection of the data service.

    Reads return an empty collection while the context is not connected.
    Writes raise; nothing is retried or queued.
    """

    collection: str
    model: type[RecordT]
    label: str

    def __init__(self, context: ServiceContext):
        self.context = context

    def _path(self, key: str | None = None) -> str:
        if key is None:
            return f"/{self.collection}"
        return f"/{self.collection}/{quote(str(key), safe='')}"

    def _detail(self, response: httpx.Response) -> str | None:
        try:
            data = response.json()
        except ValueError:
            return response.text or None
        if isinstance(data, dict):
            return data.get("detail") or data.get("message") or data.get("error")
        return None

    def _raise_for_status(self, response: httpx.Response, key: str | None = None):
        if response.status_code < 400:
            return
        detail = self._detail(response)
        if response.status_code == 404:
            raise RemoteNotFound(detail or f"{self.label} {key} tidak ditemukan", self.collection, key)
        if response.status_code == 409:
            raise RemoteConflict(detail or f"{self.label} {key} sudah ada", self.collection, key)
        raise RemoteServiceError(
            detail or f"Layanan data menolak permintaan ({response.status_code})",
            response.status_code,
            self.collection,
            key,
        )

    async def _send(self, method: str, key: str | None = None, body: dict | None = None) -> httpx.Response:
        client = self.context.client
        try:
            response = await client.request(method, self._path(key), json=body)
        except httpx.TransportError as e:
            raise ConnectionUnavailable(f"Tidak dapat menghubungi layanan data: {e}", self.collection, key) from e
        self._raise_for_status(response, key)
        return response

    async def fetch(self) -> list[RecordT]:
        """Same as list() but raises ConnectionUnavailable instead of reading as empty."""
        slot = self.context.cache.slot(self.collection)
        if slot.fresh:
            return list(slot.records)

        generation = slot.generation
        response = await self._send("GET")
        records = [self.model.model_validate(item) for item in response.json()]
        self.context.cache.store(self.collection, records, generation)
        return records

    async def list(self) -> list[RecordT]:
        if not self.context.is_connected:
            return []

        try:
            return await self.fetch()
        except ConnectionUnavailable as e:
            logger.warning(f"Listing {self.collection} failed, showing empty collection: {e.message}")
            return []

    async def get(self, key: str) -> RecordT:
        response = await self._send("GET", key)
        return self.model.model_validate(response.json())

    async def add(self, record: RecordT):
        await self._send("POST", body=record.to_wire())
        logger.info(f"Added {self.collection} record {record.key}")
        self.context.cache.invalidate(self.collection)

    async def update(self, key: str, record: RecordT):
        await self._send("PUT", key, record.to_wire())
        logger.info(f"Updated {self.collection} record {key}")
        self.context.cache.invalidate(self.collection)

    async def delete(self, key: str):
        await self._send("DELETE", key)
        logger.info(f"Deleted {self.collection} record {key}")
        self.context.cache.invalidate(self.collection)


class CustomerStore(RecordStore[Customer]):
    collection = "customers"
    model = Customer
    label = "Pelanggan"


class VendorStore(RecordStore[Vendor]):
    collection = "vendors"
    model = Vendor
    label = "Vendor"


class InventoryStore(RecordStore[InventoryItem]):
    collection = "inventory"
    model = InventoryItem
    label = "Item"


class RentalOrderStore(RecordStore[RentalOrder]):
    collection = "orders"
    model = RentalOrder
    label = "Pesanan"
