from dataclasses import dataclass, field

from scaffold_rental.schemas.user import UserRole

STAFF = (UserRole.ADMIN, UserRole.USER)


@dataclass(frozen=True)
class MenuItem:
    label: str
    path: str | None = None
    roles: tuple[UserRole, ...] = STAFF
    children: tuple["MenuItem", ...] = field(default_factory=tuple)


MENU = (
    MenuItem("Dashboard", "/dashboard"),
    MenuItem("Operasional", children=(
        MenuItem("Pelanggan", "/customers"),
        MenuItem("Vendor", "/vendors"),
        MenuItem("Inventori", "/inventory"),
        MenuItem("Pesanan Sewa", "/orders"),
    )),
    MenuItem("Keuangan", children=(
        MenuItem("Faktur & Pembayaran", "/invoices"),
        MenuItem("Akuntansi", "/accounting"),
        MenuItem("Laporan Keuangan", "/reports"),
    )),
    MenuItem("Perpajakan", "/tax"),
    MenuItem("Pengaturan", "/profile", roles=(UserRole.ADMIN,)),
)


def visible_menu(role: UserRole | None, items=MENU) -> list[dict]:
    role = role or UserRole.GUEST
    visible = []
    for item in items:
        if role not in item.roles:
            continue
        entry = {"label": item.label}
        if item.path:
            entry["path"] = item.path
        if item.children:
            entry["children"] = visible_menu(role, item.children)
        visible.append(entry)
    return visible
