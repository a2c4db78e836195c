from scaffold_rental.formatters import format_currency, format_date, format_npwp, format_number
from scaffold_rental.labels import CONDITION_BADGES, CONDITION_LABELS, ITEM_TYPE_LABELS, STATUS_BADGES, STATUS_LABELS
from scaffold_rental.views.table import Column, TableSchema

CUSTOMER_TABLE = TableSchema(
    title="Manajemen Pelanggan",
    search_placeholder="Cari pelanggan...",
    empty_message="Belum ada data pelanggan",
    columns=(
        Column("name", "Nama Perusahaan"),
        Column("npwp", "NPWP", lambda customer: format_npwp(customer.npwp)),
        Column("contact_person", "Kontak Person"),
        Column("phone", "Telepon"),
        Column("credit_limit", "Limit Kredit", lambda customer: format_currency(customer.credit_limit)),
    ),
)

VENDOR_TABLE = TableSchema(
    title="Manajemen Vendor",
    search_placeholder="Cari vendor...",
    empty_message="Belum ada data vendor",
    columns=(
        Column("company_name", "Nama Perusahaan"),
        Column("npwp", "NPWP", lambda vendor: format_npwp(vendor.npwp)),
        Column("contact_person", "Kontak Person"),
        Column("phone", "Telepon"),
        Column("payment_terms", "Termin Pembayaran", lambda vendor: f"{vendor.payment_terms} hari"),
    ),
)

INVENTORY_TABLE = TableSchema(
    title="Manajemen Inventori",
    search_placeholder="Cari item...",
    empty_message="Belum ada data inventori",
    columns=(
        Column("item_id", "ID Item"),
        Column("item_type", "Tipe", lambda item: ITEM_TYPE_LABELS[item.item_type]),
        Column("quantity", "Jumlah", lambda item: format_number(item.quantity)),
        Column("condition", "Kondisi", lambda item: CONDITION_LABELS[item.condition], lambda item: CONDITION_BADGES[item.condition]),
        Column("location", "Lokasi"),
        Column("acquisition_cost", "Harga Satuan", lambda item: format_currency(item.acquisition_cost)),
    ),
)

RENTAL_ORDER_TABLE = TableSchema(
    title="Manajemen Pesanan Sewa",
    search_placeholder="Cari pesanan...",
    empty_message="Belum ada pesanan",
    columns=(
        Column("order_id", "ID Pesanan"),
        Column("customer_id", "Pelanggan"),
        Column("item_ids", "Jumlah Item", lambda order: f"{len(order.item_ids)} item"),
        Column("start_date", "Tanggal Mulai", lambda order: format_date(order.start_date)),
        Column("end_date", "Tanggal Selesai", lambda order: format_date(order.end_date)),
        Column("status", "Status", lambda order: STATUS_LABELS[order.status], lambda order: STATUS_BADGES[order.status]),
    ),
)
