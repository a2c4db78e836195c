from scaffold_rental.agents.context import ServiceContext
from scaffold_rental.agents.records import CustomerStore, InventoryStore, RentalOrderStore, VendorStore
from scaffold_rental.forms.customer import CustomerForm
from scaffold_rental.forms.inventory import InventoryForm
from scaffold_rental.forms.rental_order import RentalOrderForm
from scaffold_rental.forms.vendor import VendorForm
from scaffold_rental.notifications import Notifier
from scaffold_rental.views.columns import CUSTOMER_TABLE, INVENTORY_TABLE, RENTAL_ORDER_TABLE, VENDOR_TABLE
from scaffold_rental.views.list_view import ListView


def customer_screen(context: ServiceContext, notifier: Notifier | None = None) -> ListView:
    notifier = notifier or Notifier()
    store = CustomerStore(context)
    return ListView(
        store,
        CUSTOMER_TABLE,
        CustomerForm(store, notifier),
        notifier,
        deleted_message="Pelanggan berhasil dihapus",
        delete_failed_message="Gagal menghapus pelanggan",
    )


def vendor_screen(context: ServiceContext, notifier: Notifier | None = None) -> ListView:
    notifier = notifier or Notifier()
    store = VendorStore(context)
    return ListView(
        store,
        VENDOR_TABLE,
        VendorForm(store, notifier),
        notifier,
        deleted_message="Vendor berhasil dihapus",
        delete_failed_message="Gagal menghapus vendor",
    )


def inventory_screen(context: ServiceContext, notifier: Notifier | None = None) -> ListView:
    notifier = notifier or Notifier()
    store = InventoryStore(context)
    return ListView(
        store,
        INVENTORY_TABLE,
        InventoryForm(store, notifier),
        notifier,
        deleted_message="Item berhasil dihapus",
        delete_failed_message="Gagal menghapus item",
    )


def rental_order_screen(context: ServiceContext, notifier: Notifier | None = None) -> ListView:
    notifier = notifier or Notifier()
    store = RentalOrderStore(context)
    form = RentalOrderForm(store, CustomerStore(context), InventoryStore(context), notifier)
    return ListView(
        store,
        RENTAL_ORDER_TABLE,
        form,
        notifier,
        deleted_message="Pesanan berhasil dihapus",
        delete_failed_message="Gagal menghapus pesanan",
    )


SCREENS = {
    "customers": customer_screen,
    "vendors": vendor_screen,
    "inventory": inventory_screen,
    "orders": rental_order_screen,
}
