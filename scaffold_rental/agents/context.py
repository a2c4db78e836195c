import logging
from dataclasses import dataclass, field

import httpx

from scaffold_rental.config import settings
from scaffold_rental.errors import ConnectionUnavailable

logger = logging.getLogger(__name__)


@dataclass
class CacheSlot:
    records: list = field(default_factory=list)
    fresh: bool = False
    generation: int = 0


class CollectionCache:
    """Per-collection cache of the last fetched records.

    Invalidation bumps the slot generation; a fetch that started before an
    invalidation may still return its records but never marks the slot fresh.
    """

    def __init__(self):
        self.slots: dict[str, CacheSlot] = {}

    def slot(self, collection: str) -> CacheSlot:
        if collection not in self.slots:
            self.slots[collection] = CacheSlot()
        return self.slots[collection]

    def store(self, collection: str, records: list, generation: int) -> bool:
        slot = self.slot(collection)
        if slot.generation != generation:
            logger.debug(f"Discarding superseded fetch of {collection}")
            return False
        slot.records = list(records)
        slot.fresh = True
        return True

    def invalidate(self, collection: str):
        slot = self.slot(collection)
        slot.fresh = False
        slot.generation += 1

    def clear(self):
        for collection in list(self.slots):
            self.invalidate(collection)


class ServiceContext:
    """Connection to the data service plus the collection cache.

    Created once at the application boundary and handed to every store.
    """

    def __init__(self, base_url: str | None = None, access_token: str | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url or settings.DATA_SERVICE_URL
        self.access_token = access_token
        self.transport = transport
        self.cache = CollectionCache()
        self._client: httpx.AsyncClient | None = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None and not self._client.is_closed

    @property
    def client(self) -> httpx.AsyncClient:
        if not self.is_connected:
            raise ConnectionUnavailable("Koneksi ke layanan data belum tersedia")
        return self._client

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    async def connect(self):
        if self.is_connected:
            return self
        # no timeout: a hung call stays pending until the service answers
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers(),
            transport=self.transport,
            timeout=None,
        )
        logger.info(f"Connected to data service at {self.base_url}")
        return self

    def set_access_token(self, access_token: str | None):
        self.access_token = access_token
        if self.is_connected:
            if access_token:
                self._client.headers["Authorization"] = f"Bearer {access_token}"
            else:
                self._client.headers.pop("Authorization", None)
        self.cache.clear()

    async def close(self):
        if self._client is not None:
            await self._client.aclose()
            logger.info("Closed data service connection")
        self._client = None
        self.cache.clear()

    async def __aenter__(self):
        return await self.connect()

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
