from scaffold_rental.forms.base import FormController
from scaffold_rental.schemas.inventory import ConditionStatus, InventoryItem, ItemType
from scaffold_rental.validation import validate_positive_number, validate_required

def _is_member(enum_type, value) -> bool:
    try:
        enum_type(value)
    except ValueError:
        return False
    return True

class InventoryForm(FormController[InventoryItem]):
    model = InventoryItem
    numeric_fields = ("quantity", "acquisition_cost")

    created_message = "Item berhasil ditambahkan"
    updated_message = "Item berhasil diperbarui"
    save_failed_message = "Gagal menyimpan item"

    def defaults(self):
        return {
            "item_id": "",
            "item_type": ItemType.FRAME,
            "quantity": 0,
            "condition": ConditionStatus.NEW,
            "location": "",
            "acquisition_cost": 0,
        }

    def validate(self, draft):
        errors = {}

        result = validate_required(draft["item_id"], "ID item tidak boleh kosong")
        if not result.valid:
            errors["item_id"] = result.message

        if not _is_member(ItemType, draft["item_type"]):
            errors["item_type"] = "Tipe item tidak valid"

        if not _is_member(ConditionStatus, draft["condition"]):
            errors["condition"] = "Kondisi tidak valid"

        result = validate_required(draft["location"], "Lokasi tidak boleh kosong")
        if not result.valid:
            errors["location"] = result.message

        for name in self.numeric_fields:
            result = validate_positive_number(draft[name])
            if not result.valid:
                errors[name] = result.message

        return errors
