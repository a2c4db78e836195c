"""Display labels and badge variants for the enum-valued fields.

Every table must cover every member of its enum; a missing entry fails at
import time rather than rendering a blank cell.
"""
from enum import Enum

from scaffold_rental.schemas.inventory import ConditionStatus, ItemType
from scaffold_rental.schemas.rental_order import RentalOrderStatus
from scaffold_rental.schemas.user import UserRole


class BadgeVariant(str, Enum):
    DEFAULT = "default"
    SECONDARY = "secondary"
    DESTRUCTIVE = "destructive"
    OUTLINE = "outline"


def exhaustive(enum_type: type[Enum], table: dict) -> dict:
    missing = [member.name for member in enum_type if member not in table]
    extra = [key for key in table if not isinstance(key, enum_type)]
    if missing or extra:
        raise TypeError(f"{enum_type.__name__} table is not exhaustive: missing={missing} extra={extra}")
    return dict(table)


STATUS_LABELS = exhaustive(RentalOrderStatus, {
    RentalOrderStatus.BOOKED: "Dipesan",
    RentalOrderStatus.QUOTATION_APPROVED: "Disetujui",
    RentalOrderStatus.DELIVERED: "Dikirim",
    RentalOrderStatus.ACTIVE: "Aktif",
    RentalOrderStatus.RETURNED: "Dikembalikan",
})

STATUS_BADGES = exhaustive(RentalOrderStatus, {
    RentalOrderStatus.BOOKED: BadgeVariant.OUTLINE,
    RentalOrderStatus.QUOTATION_APPROVED: BadgeVariant.SECONDARY,
    RentalOrderStatus.DELIVERED: BadgeVariant.DEFAULT,
    RentalOrderStatus.ACTIVE: BadgeVariant.DEFAULT,
    RentalOrderStatus.RETURNED: BadgeVariant.SECONDARY,
})

CONDITION_LABELS = exhaustive(ConditionStatus, {
    ConditionStatus.NEW: "Baru",
    ConditionStatus.GOOD: "Baik",
    ConditionStatus.FAIR: "Cukup",
    ConditionStatus.DAMAGED: "Rusak",
})

CONDITION_BADGES = exhaustive(ConditionStatus, {
    ConditionStatus.NEW: BadgeVariant.DEFAULT,
    ConditionStatus.GOOD: BadgeVariant.SECONDARY,
    ConditionStatus.FAIR: BadgeVariant.OUTLINE,
    ConditionStatus.DAMAGED: BadgeVariant.DESTRUCTIVE,
})

ITEM_TYPE_LABELS = exhaustive(ItemType, {
    ItemType.PIPE: "Pipe",
    ItemType.BOARD: "Board",
    ItemType.FRAME: "Frame",
    ItemType.ACCESSORY: "Accessory",
    ItemType.CLAMP: "Clamp",
})

ROLE_LABELS = exhaustive(UserRole, {
    UserRole.ADMIN: "Administrator",
    UserRole.USER: "Pengguna",
    UserRole.GUEST: "Tamu",
})
