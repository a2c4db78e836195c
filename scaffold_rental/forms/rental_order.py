from datetime import date

from scaffold_rental.agents.records import CustomerStore, InventoryStore, RecordStore
from scaffold_rental.forms.base import FormController, FormState
from scaffold_rental.notifications import Notifier
from scaffold_rental.schemas.rental_order import RentalOrder, RentalOrderStatus
from scaffold_rental.validation import validate_date_range, validate_required


class RentalOrderForm(FormController[RentalOrder]):
    """Order form; customer and items are picked from the fetched collections."""

    model = RentalOrder

    created_message = "Pesanan berhasil dibuat"
    updated_message = "Pesanan berhasil diperbarui"
    save_failed_message = "Gagal menyimpan pesanan"

    def __init__(self, store: RecordStore[RentalOrder], customers: CustomerStore, inventory: InventoryStore, notifier: Notifier | None = None, on_close=None):
        super().__init__(store, notifier, on_close)
        self.customers = customers
        self.inventory = inventory

    def defaults(self):
        today = date.today().isoformat()
        return {
            "order_id": "",
            "customer_id": "",
            "item_ids": [],
            "start_date": today,
            "end_date": today,
            "status": RentalOrderStatus.BOOKED,
        }

    async def options(self) -> dict:
        return {
            "customers": await self.customers.list(),
            "inventory": await self.inventory.list(),
        }

    def set_field(self, name, value):
        super().set_field(name, value)
        if name in ("start_date", "end_date"):
            self.errors.pop("dates", None)
            if self.state == FormState.SHOWING_ERRORS and not self.errors:
                self.state = FormState.EDITING

    def toggle_item(self, item_id: str, checked: bool):
        if not self.is_open:
            raise RuntimeError("Form is not open")
        selected = [existing for existing in self.draft["item_ids"] if existing != item_id]
        if checked:
            selected.append(item_id)
        self.draft["item_ids"] = selected
        self.errors.pop("item_ids", None)
        if self.state == FormState.SHOWING_ERRORS and not self.errors:
            self.state = FormState.EDITING

    def validate(self, draft):
        errors = {}

        result = validate_required(draft["order_id"], "ID pesanan tidak boleh kosong")
        if not result.valid:
            errors["order_id"] = result.message

        if not draft["customer_id"]:
            errors["customer_id"] = "Pelanggan harus dipilih"

        if not draft["item_ids"]:
            errors["item_ids"] = "Minimal satu item harus dipilih"

        result = validate_date_range(draft["start_date"], draft["end_date"])
        if not result.valid:
            errors["dates"] = result.message

        try:
            RentalOrderStatus(draft["status"])
        except ValueError:
            errors["status"] = "Status tidak valid"

        return errors

    async def validate_references(self, draft):
        errors = {}

        # an unreachable service must not read as unknown references
        customer_ids = {customer.npwp for customer in await self.customers.fetch()}
        if draft["customer_id"] not in customer_ids:
            errors["customer_id"] = "Pelanggan tidak ditemukan"

        item_ids = {item.item_id for item in await self.inventory.fetch()}
        missing = [item_id for item_id in draft["item_ids"] if item_id not in item_ids]
        if missing:
            errors["item_ids"] = f"Item tidak ditemukan: {', '.join(missing)}"

        return errors
