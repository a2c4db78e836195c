from scaffold_rental.forms.base import FormController
from scaffold_rental.schemas.vendor import Vendor
from scaffold_rental.validation import (
    validate_email,
    validate_npwp,
    validate_phone,
    validate_positive_number,
    validate_required,
)

class VendorForm(FormController[Vendor]):
    model = Vendor
    numeric_fields = ("payment_terms",)

    created_message = "Vendor berhasil ditambahkan"
    updated_message = "Vendor berhasil diperbarui"
    save_failed_message = "Gagal menyimpan vendor"

    def defaults(self):
        return {
            "company_name": "",
            "npwp": "",
            "address": "",
            "contact_person": "",
            "phone": "",
            "email": "",
            "bank_account": "",
            "payment_terms": 30,
        }

    def validate(self, draft):
        checks = {
            "company_name": validate_required(draft["company_name"], "Nama perusahaan tidak boleh kosong"),
            "npwp": validate_npwp(draft["npwp"]),
            "address": validate_required(draft["address"], "Alamat tidak boleh kosong"),
            "contact_person": validate_required(draft["contact_person"], "Kontak person tidak boleh kosong"),
            "phone": validate_phone(draft["phone"]),
            "email": validate_email(draft["email"]),
            "bank_account": validate_required(draft["bank_account"], "Nomor rekening tidak boleh kosong"),
            "payment_terms": validate_positive_number(draft["payment_terms"]),
        }
        return {name: result.message for name, result in checks.items() if not result.valid}
