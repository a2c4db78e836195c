"""Field-level business rules shared by every entity form.

Each validator is pure and returns a ValidationResult instead of raising, so a
form can collect one message per field and decide whether to submit.
"""
import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

NPWP_LENGTH = 15
PHONE_MIN_DIGITS = 10
PHONE_MAX_DIGITS = 15


class ValidationFailure(str, Enum):
    EMPTY_FIELD = "EmptyField"
    WRONG_LENGTH = "WrongLength"
    INVALID_FORMAT = "InvalidFormat"
    NOT_A_NUMBER = "NotANumber"
    NEGATIVE = "Negative"
    ORDER_VIOLATION = "OrderViolation"


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    message: str | None = None
    failure: ValidationFailure | None = None

    def __bool__(self):
        return self.valid


PASSED = ValidationResult(valid=True)


def _fail(failure: ValidationFailure, message: str) -> ValidationResult:
    return ValidationResult(valid=False, message=message, failure=failure)


def strip_non_digits(value) -> str:
    return re.sub(r"\D", "", str(value or ""))


def validate_required(value, message: str) -> ValidationResult:
    if value is None or not str(value).strip():
        return _fail(ValidationFailure.EMPTY_FIELD, message)
    return PASSED


def validate_npwp(value) -> ValidationResult:
    cleaned = strip_non_digits(value)

    if len(cleaned) == 0:
        return _fail(ValidationFailure.EMPTY_FIELD, "NPWP tidak boleh kosong")

    if len(cleaned) != NPWP_LENGTH:
        return _fail(ValidationFailure.WRONG_LENGTH, "NPWP harus 15 digit")

    return PASSED


def validate_email(value) -> ValidationResult:
    if not value:
        return _fail(ValidationFailure.EMPTY_FIELD, "Email tidak boleh kosong")

    if not EMAIL_PATTERN.match(str(value)):
        return _fail(ValidationFailure.INVALID_FORMAT, "Format email tidak valid")

    return PASSED


def validate_phone(value) -> ValidationResult:
    cleaned = strip_non_digits(value)

    if len(cleaned) == 0:
        return _fail(ValidationFailure.EMPTY_FIELD, "Nomor telepon tidak boleh kosong")

    if len(cleaned) < PHONE_MIN_DIGITS or len(cleaned) > PHONE_MAX_DIGITS:
        return _fail(ValidationFailure.WRONG_LENGTH, "Nomor telepon harus 10-15 digit")

    return PASSED


def parse_number(value) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except (TypeError, ValueError):
            return None
    # NaN and +/-inf are not amounts
    if not math.isfinite(number):
        return None
    return number


def validate_positive_number(value) -> ValidationResult:
    number = parse_number(value)

    if number is None:
        return _fail(ValidationFailure.NOT_A_NUMBER, "Nilai harus berupa angka")

    if number < 0:
        return _fail(ValidationFailure.NEGATIVE, "Nilai tidak boleh negatif")

    return PASSED


def parse_date(value) -> datetime | None:
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip()).replace(tzinfo=None)
    except ValueError:
        return None


def validate_date_range(start, end) -> ValidationResult:
    start_date = parse_date(start)
    end_date = parse_date(end)

    if start_date is None or end_date is None:
        return _fail(ValidationFailure.INVALID_FORMAT, "Format tanggal tidak valid")

    if end_date < start_date:
        return _fail(ValidationFailure.ORDER_VIOLATION, "Tanggal akhir harus setelah tanggal mulai")

    return PASSED
