"""Display formatting helpers.

Every helper here is pure and never raises: malformed input yields a zero
or identity value so that rendering a list of records cannot fail on one
bad field.
"""

import math
import re
import unicodedata
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation

# (thousands separator, decimal separator, symbol after amount)
LOCALE_NUMBER_FORMATS: dict[str, tuple[str, str, bool]] = {
    "es-ES": (".", ",", True),
    "es-CO": (".", ",", False),
    "de-DE": (".", ",", True),
    "fr-FR": (" ", ",", True),
    "en-US": (",", ".", False),
    "en-GB": (",", ".", False),
}

CURRENCY_SYMBOLS = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "COP": "$",
}

MONTH_NAMES = {
    "es": [
        "enero", "febrero", "marzo", "abril", "mayo", "junio",
        "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
    ],
    "en": [
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
}

FILE_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]
FILE_SIZE_MULTIPLIERS = {
    "B": 1,
    "BYTES": 1,
    "KB": 1024,
    "MB": 1024**2,
    "GB": 1024**3,
}

_FILE_SIZE_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*([A-Z]+)$", re.IGNORECASE)


def _group_thousands(integer_part: str, separator: str) -> str:
    groups = []
    while len(integer_part) > 3:
        groups.insert(0, integer_part[-3:])
        integer_part = integer_part[:-3]
    groups.insert(0, integer_part)
    return separator.join(groups)


def format_currency(
    amount, currency: str = "EUR", locale: str = "es-ES", decimals: int = 2
) -> str:
    """Format an amount as currency for the given locale.

    Examples:
        >>> format_currency(1234.5)
        '1.234,50 €'
        >>> format_currency(1234.5, "USD", "en-US")
        '$1,234.50'
    """
    thousands, decimal_sep, symbol_after = LOCALE_NUMBER_FORMATS.get(
        locale, LOCALE_NUMBER_FORMATS["en-US"]
    )
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), currency.upper())

    try:
        value = Decimal(str(amount)) if amount is not None else Decimal(0)
    except (InvalidOperation, ValueError):
        value = Decimal(0)
    if not value.is_finite():
        value = Decimal(0)

    sign = "-" if value < 0 else ""
    text = f"{abs(value):.{decimals}f}"
    integer_part, _, fraction = text.partition(".")
    number = _group_thousands(integer_part, thousands)
    if fraction:
        number = f"{number}{decimal_sep}{fraction}"

    if symbol_after:
        return f"{sign}{number} {symbol}"
    return f"{sign}{symbol}{number}"


def parse_currency(text: str | None) -> float:
    """Parse a currency string back into a number; malformed input gives 0."""
    if not text:
        return 0.0
    cleaned = re.sub(r"[^\d.\-]", "", str(text))
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def format_file_size(size) -> str:
    """Human readable file size using 1024 steps.

    Examples:
        >>> format_file_size(0)
        '0 Bytes'
        >>> format_file_size(1536)
        '1.5 KB'
    """
    try:
        size = float(size)
    except (TypeError, ValueError):
        return "0 Bytes"
    if size <= 0 or not math.isfinite(size):
        return "0 Bytes"

    index = 0
    while size >= 1024 ** (index + 1) and index < len(FILE_SIZE_UNITS) - 1:
        index += 1
    scaled = round(size / (1024**index), 2)
    if scaled.is_integer():
        scaled = int(scaled)
    return f"{scaled} {FILE_SIZE_UNITS[index]}"


def parse_file_size(text: str | None) -> float:
    """Parse strings like ``"2.5 MB"`` into bytes; malformed input gives 0."""
    if not text:
        return 0
    match = _FILE_SIZE_RE.match(str(text).strip())
    if not match:
        return 0
    size, unit = match.groups()
    return float(size) * FILE_SIZE_MULTIPLIERS.get(unit.upper(), 1)


def format_phone_number(phone: str | None) -> str | None:
    """Format 10 digits as ``(XXX) XXX-XXXX``; anything else is returned as is."""
    if not phone:
        return phone
    digits = re.sub(r"\D", "", phone)
    if len(digits) == 10:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    return phone


def generate_slug(text: str | None) -> str:
    """Build a URL slug, folding accented characters to ASCII."""
    if not text:
        return ""
    folded = unicodedata.normalize("NFKD", text.lower())
    folded = "".join(ch for ch in folded if not unicodedata.combining(ch))
    slug = re.sub(r"[^a-z0-9\s-]", "", folded)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def sanitize_string(text: str | None) -> str:
    """Remove markup and script fragments from free text."""
    if not text:
        return ""
    text = re.sub(r"[<>]", "", text)
    text = re.sub(r"javascript:", "", text, flags=re.IGNORECASE)
    text = re.sub(r"on\w+=", "", text, flags=re.IGNORECASE)
    return text.strip()


def timestamp_to_iso(value: datetime | None) -> str:
    """Render a stored timestamp as an ISO 8601 string in UTC."""
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def iso_to_timestamp(text: str | None) -> datetime | None:
    """Parse an ISO 8601 string into an aware timestamp; None when malformed."""
    if not text:
        return None
    try:
        value = datetime.fromisoformat(text.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def format_date_for_input(value: date | datetime | None) -> str:
    """``YYYY-MM-DD`` for HTML date inputs."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def format_timestamp(value: datetime | None, locale: str = "es-ES") -> str:
    """Long date with time, e.g. ``15 de enero de 2024, 10:30``."""
    if value is None:
        return ""
    language = locale.split("-")[0]
    months = MONTH_NAMES.get(language, MONTH_NAMES["en"])
    month = months[value.month - 1]
    clock = value.strftime("%H:%M")
    if language == "es":
        return f"{value.day} de {month} de {value.year}, {clock}"
    return f"{month} {value.day}, {value.year}, {clock}"
