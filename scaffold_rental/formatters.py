from scaffold_rental.validation import NPWP_LENGTH, parse_date, parse_number, strip_non_digits

MONTHS_ID = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
]


def digits_only(value) -> str:
    return strip_non_digits(value)


def format_number(value) -> str:
    number = parse_number(value)
    if number is None:
        return str(value)
    rounded = int(round(number))
    grouped = f"{abs(rounded):,}".replace(",", ".")
    return f"-{grouped}" if rounded < 0 else grouped


def format_currency(amount) -> str:
    """IDR without decimals, e.g. ``Rp 1.500.000``."""
    number = parse_number(amount)
    if number is None:
        return str(amount)
    rounded = int(round(number))
    grouped = f"{abs(rounded):,}".replace(",", ".")
    return f"-Rp {grouped}" if rounded < 0 else f"Rp {grouped}"


def format_date(value) -> str:
    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    return f"{parsed.day:02d} {MONTHS_ID[parsed.month - 1]} {parsed.year}"


def format_npwp(value) -> str:
    # XX.XXX.XXX.X-XXX.XXX
    cleaned = strip_non_digits(value)
    if len(cleaned) != NPWP_LENGTH:
        return value

    return f"{cleaned[0:2]}.{cleaned[2:5]}.{cleaned[5:8]}.{cleaned[8:9]}-{cleaned[9:12]}.{cleaned[12:15]}"
