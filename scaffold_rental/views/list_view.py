import logging
from typing import Generic, TypeVar

from scaffold_rental.agents.records import RecordStore
from scaffold_rental.errors import StoreError
from scaffold_rental.forms.base import FormController, SubmitResult
from scaffold_rental.notifications import Notifier
from scaffold_rental.schemas.base import Record
from scaffold_rental.views.table import DataTable, Row, TableSchema

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=Record)


class ListView(Generic[RecordT]):
    """Searchable table of one collection with edit and confirmed delete.

    Results of a load that finishes after ``unmount()`` are dropped.
    """

    def __init__(
        self,
        store: RecordStore[RecordT],
        schema: TableSchema,
        form: FormController[RecordT],
        notifier: Notifier | None = None,
        deleted_message: str = "Data berhasil dihapus",
        delete_failed_message: str = "Gagal menghapus data",
    ):
        self.store = store
        self.table = DataTable(schema)
        self.form = form
        self.notifier = notifier or form.notifier
        self.deleted_message = deleted_message
        self.delete_failed_message = delete_failed_message
        self.records: list[RecordT] = []
        self.query = ""
        self.pending_delete: str | None = None
        self.last_error: StoreError | None = None
        self.loading = False
        self.mounted = True

    @property
    def schema(self) -> TableSchema:
        return self.table.schema

    @property
    def rows(self) -> list[Row]:
        return self.table.rows(self.records, self.query)

    @property
    def is_empty(self) -> bool:
        return not self.records

    async def load(self) -> list[RecordT]:
        self.loading = True
        try:
            records = await self.store.list()
        finally:
            self.loading = False
        if not self.mounted:
            logger.debug(f"View for {self.store.collection} unmounted, dropping loaded records")
            return records
        self.records = records
        return records

    def search(self, query: str) -> list[Row]:
        self.query = query or ""
        return self.rows

    def find(self, key: str) -> RecordT | None:
        return next((record for record in self.records if record.key == key), None)

    def start_create(self):
        self.form.open_create()

    def start_edit(self, key: str):
        record = self.find(key)
        if record is None:
            raise KeyError(key)
        self.form.open_edit(record)

    async def save(self) -> SubmitResult:
        result = await self.form.submit()
        if result.ok:
            await self.load()
        return result

    def request_delete(self, key: str):
        self.pending_delete = key

    def cancel_delete(self):
        self.pending_delete = None

    async def confirm_delete(self) -> bool:
        if self.pending_delete is None:
            return False

        key = self.pending_delete
        try:
            await self.store.delete(key)
        except StoreError as e:
            self.last_error = e
            self.notifier.error(e.message or self.delete_failed_message)
            return False

        self.notifier.success(self.deleted_message)
        self.pending_delete = None
        self.last_error = None
        await self.load()
        return True

    def unmount(self):
        self.mounted = False
