import pytest

from scaffold_rental.agents.context import ServiceContext
from scaffold_rental.notifications import NoticeLevel
from scaffold_rental.views.screens import customer_screen, inventory_screen, rental_order_screen, vendor_screen

from tests.conftest import DATA_SERVICE_URL, make_customer, make_item, make_order, make_vendor


@pytest.fixture
def customers(context, notifier, service):
    service.seed(
        "customers",
        make_customer(),
        make_customer(name="CV. Maju Bersama", npwp="111111111111111", contact_person="Rina"),
    )
    return customer_screen(context, notifier)


async def test_load_and_render(customers):
    await customers.load()

    rows = customers.rows
    assert [row.key for row in rows] == ["012345678901234", "111111111111111"]
    assert rows[0].cells["npwp"] == "01.234.567.8-901.234"
    assert rows[0].cells["credit_limit"] == "Rp 50.000.000"
    assert customers.schema.labels[0] == "Nama Perusahaan"


async def test_search_is_case_insensitive(customers):
    await customers.load()

    assert [row.key for row in customers.search("maju")] == ["111111111111111"]
    assert [row.key for row in customers.search("BUDI")] == ["012345678901234"]
    assert customers.search("tidak ada") == []
    assert len(customers.search("")) == 2


async def test_empty_collection(context):
    view = vendor_screen(context)
    await view.load()

    assert view.is_empty
    assert view.schema.empty_message == "Belum ada data vendor"


async def test_disconnected_view_is_empty():
    view = customer_screen(ServiceContext(base_url=DATA_SERVICE_URL))

    assert await view.load() == []
    assert view.is_empty


async def test_delete_needs_confirmation(customers, service, notifier):
    await customers.load()

    customers.request_delete("111111111111111")
    assert "111111111111111" in service.collections["customers"]

    assert await customers.confirm_delete()
    assert "111111111111111" not in service.collections["customers"]
    assert [record.key for record in customers.records] == ["012345678901234"]
    assert customers.pending_delete is None
    assert notifier.last.message == "Pelanggan berhasil dihapus"


async def test_cancel_delete(customers, service):
    await customers.load()
    customers.request_delete("111111111111111")
    customers.cancel_delete()

    assert not await customers.confirm_delete()
    assert "111111111111111" in service.collections["customers"]


async def test_failed_delete_reports_error(customers, service, notifier):
    await customers.load()
    del service.collections["customers"]["111111111111111"]
    customers.request_delete("111111111111111")

    assert not await customers.confirm_delete()
    assert customers.pending_delete == "111111111111111"
    assert customers.last_error.key == "111111111111111"
    assert notifier.last.level == NoticeLevel.ERROR


async def test_edit_from_list_then_save_reloads(customers, service):
    await customers.load()
    customers.start_edit("111111111111111")
    customers.form.set_field("contact_person", "Rina Wijaya")

    result = await customers.save()

    assert result.ok
    assert customers.find("111111111111111").contact_person == "Rina Wijaya"
    assert service.collections["customers"]["111111111111111"]["contactPerson"] == "Rina Wijaya"


async def test_start_edit_unknown_key(customers):
    await customers.load()
    with pytest.raises(KeyError):
        customers.start_edit("000000000000000")


async def test_load_after_unmount_is_dropped(customers):
    customers.unmount()

    records = await customers.load()

    assert len(records) == 2
    assert customers.records == []


async def test_inventory_and_order_cells(context, service):
    service.seed("inventory", make_item(quantity=1500))
    service.seed("orders", make_order(item_ids=["FRM-001", "PIP-002"]))
    inventory = inventory_screen(context)
    orders = rental_order_screen(context)
    await inventory.load()
    await orders.load()

    item_row = inventory.rows[0]
    assert item_row.cells["quantity"] == "1.500"
    assert item_row.cells["condition"] == "Baik"
    order_row = orders.rows[0]
    assert order_row.cells["item_ids"] == "2 item"
    assert order_row.cells["start_date"] == "05 Januari 2026"
    assert order_row.cells["status"] == "Dipesan"
    assert [row.key for row in orders.search("dipesan")] == ["ORD-001"]
    assert item_row.badges == {"condition": "secondary"}
    assert order_row.badges == {"status": "outline"}


async def test_vendor_terms_cell(context, service):
    service.seed("vendors", make_vendor(payment_terms=14))
    view = vendor_screen(context)
    await view.load()

    assert view.rows[0].cells["payment_terms"] == "14 hari"
