from scaffold_rental.forms.base import FormController
from scaffold_rental.schemas.customer import Customer
from scaffold_rental.validation import (
    validate_email,
    validate_npwp,
    validate_phone,
    validate_positive_number,
    validate_required,
)

class CustomerForm(FormController[Customer]):
    model = Customer
    numeric_fields = ("credit_limit",)

    created_message = "Pelanggan berhasil ditambahkan"
    updated_message = "Pelanggan berhasil diperbarui"
    save_failed_message = "Gagal menyimpan pelanggan"

    def defaults(self):
        return {
            "name": "",
            "npwp": "",
            "address": "",
            "contact_person": "",
            "phone": "",
            "email": "",
            "credit_limit": 0,
        }

    def validate(self, draft):
        checks = {
            "name": validate_required(draft["name"], "Nama perusahaan tidak boleh kosong"),
            "npwp": validate_npwp(draft["npwp"]),
            "address": validate_required(draft["address"], "Alamat tidak boleh kosong"),
            "contact_person": validate_required(draft["contact_person"], "Kontak person tidak boleh kosong"),
            "phone": validate_phone(draft["phone"]),
            "email": validate_email(draft["email"]),
            "credit_limit": validate_positive_number(draft["credit_limit"]),
        }
        return {name: result.message for name, result in checks.items() if not result.valid}
