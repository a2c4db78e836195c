from datetime import date

import httpx
import pytest

from scaffold_rental.agents.context import ServiceContext
from scaffold_rental.agents.records import CustomerStore, InventoryStore, RentalOrderStore, VendorStore
from scaffold_rental.errors import ConnectionUnavailable, ReadOnlyFieldError, RemoteConflict, RemoteServiceError
from scaffold_rental.forms.base import FormMode, FormState
from scaffold_rental.forms.customer import CustomerForm
from scaffold_rental.forms.inventory import InventoryForm
from scaffold_rental.forms.rental_order import RentalOrderForm
from scaffold_rental.forms.vendor import VendorForm
from scaffold_rental.notifications import NoticeLevel

from tests.conftest import DATA_SERVICE_URL, make_customer, make_item, make_order, make_vendor


def fill(form, record):
    for name, value in record.model_dump().items():
        form.set_field(name, value)


@pytest.fixture
def closed():
    return []


@pytest.fixture
def customer_form(context, notifier, closed):
    return CustomerForm(CustomerStore(context), notifier, on_close=closed.append)


@pytest.fixture
def order_form(context, notifier):
    return RentalOrderForm(RentalOrderStore(context), CustomerStore(context), InventoryStore(context), notifier)


async def test_create_customer(customer_form, service, notifier, closed):
    customer_form.open_create()
    fill(customer_form, make_customer())

    result = await customer_form.submit()

    assert result.ok
    assert "012345678901234" in service.collections["customers"]
    assert notifier.last.level == NoticeLevel.SUCCESS
    assert notifier.last.message == "Pelanggan berhasil ditambahkan"
    assert customer_form.state == FormState.IDLE
    assert closed == [result.record]


async def test_invalid_draft_never_reaches_the_service(customer_form, service):
    customer_form.open_create()
    fill(customer_form, make_customer())
    customer_form.set_field("npwp", "12.345")
    customer_form.set_field("email", "budi@")
    customer_form.set_field("name", "  ")

    result = await customer_form.submit()

    assert not result.ok
    assert result.errors == {
        "npwp": "NPWP harus 15 digit",
        "email": "Format email tidak valid",
        "name": "Nama perusahaan tidak boleh kosong",
    }
    assert customer_form.state == FormState.SHOWING_ERRORS
    assert service.requests == []


async def test_editing_a_field_clears_its_error(customer_form):
    customer_form.open_create()
    fill(customer_form, make_customer(npwp="123", phone="12"))
    await customer_form.submit()

    customer_form.set_field("npwp", "012345678901234")
    assert "npwp" not in customer_form.errors
    assert customer_form.state == FormState.SHOWING_ERRORS

    customer_form.set_field("phone", "081234567890")
    assert customer_form.errors == {}
    assert customer_form.state == FormState.EDITING


async def test_numeric_text_is_converted(customer_form, service):
    customer_form.open_create()
    fill(customer_form, make_customer())
    customer_form.set_field("credit_limit", "2500000")

    result = await customer_form.submit()

    assert result.ok
    assert service.collections["customers"]["012345678901234"]["creditLimit"] == 2500000


async def test_duplicate_npwp_keeps_draft(customer_form, service, notifier, closed):
    service.seed("customers", make_customer())
    customer_form.open_create()
    fill(customer_form, make_customer(name="PT. Duplikat"))

    result = await customer_form.submit()

    assert not result.ok
    assert isinstance(result.error, RemoteConflict)
    assert customer_form.is_open
    assert customer_form.state == FormState.EDITING
    assert customer_form.draft["name"] == "PT. Duplikat"
    assert customer_form.last_error is result.error
    assert notifier.last.level == NoticeLevel.ERROR
    assert closed == []


async def test_edit_mode_key_is_read_only(customer_form, service):
    customer = make_customer()
    service.seed("customers", customer)
    customer_form.open_edit(customer)

    assert customer_form.mode == FormMode.EDIT
    with pytest.raises(ReadOnlyFieldError):
        customer_form.set_field("npwp", "999999999999999")

    customer_form.set_field("address", "Jl. Thamrin 10")
    result = await customer_form.submit()

    assert result.ok
    assert service.collections["customers"]["012345678901234"]["address"] == "Jl. Thamrin 10"


def test_set_field_on_closed_form(customer_form):
    with pytest.raises(RuntimeError):
        customer_form.set_field("name", "PT. X")


def test_unknown_field(customer_form):
    customer_form.open_create()
    with pytest.raises(KeyError):
        customer_form.set_field("fax", "021")


def test_cancel_discards_draft(customer_form, closed):
    customer_form.open_create()
    customer_form.set_field("name", "PT. Batal")

    customer_form.cancel()

    assert customer_form.state == FormState.IDLE
    assert customer_form.draft == {}
    assert closed == [None]


async def test_vendor_defaults_and_messages(context, notifier, service):
    form = VendorForm(VendorStore(context), notifier)
    form.open_create()
    assert form.draft["payment_terms"] == 30

    fill(form, make_vendor())
    result = await form.submit()

    assert result.ok
    assert notifier.last.message == "Vendor berhasil ditambahkan"


async def test_vendor_requires_bank_account(context):
    form = VendorForm(VendorStore(context))
    form.open_create()
    fill(form, make_vendor(bank_account=""))

    result = await form.submit()

    assert result.errors == {"bank_account": "Nomor rekening tidak boleh kosong"}


async def test_inventory_rejects_negative_and_unknown_values(context):
    form = InventoryForm(InventoryStore(context))
    form.open_create()
    fill(form, make_item())
    form.set_field("quantity", -5)
    form.set_field("acquisition_cost", "mahal")
    form.set_field("item_type", "Tangga")

    result = await form.submit()

    assert result.errors == {
        "quantity": "Nilai tidak boleh negatif",
        "acquisition_cost": "Nilai harus berupa angka",
        "item_type": "Tipe item tidak valid",
    }


def test_order_defaults_to_today(order_form):
    order_form.open_create()
    today = date.today().isoformat()

    assert order_form.draft["start_date"] == today
    assert order_form.draft["end_date"] == today
    assert order_form.draft["item_ids"] == []


async def test_order_without_items(order_form, service):
    order_form.open_create()
    order_form.set_field("order_id", "ORD-001")
    order_form.set_field("customer_id", "012345678901234")

    result = await order_form.submit()

    assert result.errors == {"item_ids": "Minimal satu item harus dipilih"}
    assert service.requests == []


async def test_order_date_error_clears_when_either_date_changes(order_form):
    order_form.open_create()
    fill(order_form, make_order(start_date="2026-03-01", end_date="2026-02-01"))

    result = await order_form.submit()
    assert result.errors == {"dates": "Tanggal akhir harus setelah tanggal mulai"}

    order_form.set_field("end_date", "2026-04-01")
    assert order_form.errors == {}
    assert order_form.state == FormState.EDITING


async def test_order_references_must_exist(order_form, service):
    service.seed("customers", make_customer())
    service.seed("inventory", make_item())
    order_form.open_create()
    fill(order_form, make_order(customer_id="000000000000000"))
    order_form.toggle_item("PIP-404", True)

    result = await order_form.submit()

    assert result.errors == {
        "customer_id": "Pelanggan tidak ditemukan",
        "item_ids": "Item tidak ditemukan: PIP-404",
    }
    assert "ORD-001" not in service.collections["orders"]


async def test_create_order(order_form, service, notifier):
    service.seed("customers", make_customer())
    service.seed("inventory", make_item(), make_item(item_id="PIP-002"))
    order_form.open_create()
    fill(order_form, make_order())
    order_form.toggle_item("PIP-002", True)
    order_form.toggle_item("FRM-001", False)

    options = await order_form.options()
    result = await order_form.submit()

    assert [item.item_id for item in options["inventory"]] == ["FRM-001", "PIP-002"]
    assert result.ok
    assert service.collections["orders"]["ORD-001"]["itemIds"] == ["PIP-002"]
    assert notifier.last.message == "Pesanan berhasil dibuat"


async def test_infinite_amount_is_not_a_number(customer_form, service):
    customer_form.open_create()
    fill(customer_form, make_customer())
    customer_form.set_field("credit_limit", "Infinity")

    result = await customer_form.submit()

    assert result.errors == {"credit_limit": "Nilai harus berupa angka"}
    assert service.requests == []


async def test_failed_reference_lookup_keeps_draft_for_retry(service, notifier):
    service.seed("customers", make_customer())
    service.seed("inventory", make_item())
    inventory_down = [True]

    def handler(request):
        if inventory_down[0] and request.url.path == "/inventory":
            return httpx.Response(500, json={"detail": "Inventori sedang bermasalah"})
        return service(request)

    async with ServiceContext(base_url=DATA_SERVICE_URL, transport=httpx.MockTransport(handler)) as context:
        form = RentalOrderForm(RentalOrderStore(context), CustomerStore(context), InventoryStore(context), notifier)
        form.open_create()
        fill(form, make_order())

        result = await form.submit()

        assert not result.ok
        assert isinstance(result.error, RemoteServiceError)
        assert form.state == FormState.EDITING
        assert form.last_error is result.error
        assert form.draft["order_id"] == "ORD-001"
        assert notifier.last.level == NoticeLevel.ERROR
        assert notifier.last.message == "Inventori sedang bermasalah"
        assert "ORD-001" not in service.collections["orders"]

        inventory_down[0] = False
        retry = await form.submit()

        assert retry.ok
        assert "ORD-001" in service.collections["orders"]


async def test_order_without_connection_is_not_an_input_error(notifier):
    context = ServiceContext(base_url=DATA_SERVICE_URL)
    form = RentalOrderForm(RentalOrderStore(context), CustomerStore(context), InventoryStore(context), notifier)
    form.open_create()
    fill(form, make_order())

    result = await form.submit()

    assert not result.ok
    assert isinstance(result.error, ConnectionUnavailable)
    assert result.errors == {}
    assert form.state == FormState.EDITING
    assert notifier.last.level == NoticeLevel.ERROR
