from __future__ import annotations
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


CONFIDENTIAL = "Confidencial"
NOT_AVAILABLE = "N/A"
UNSPECIFIED = "No especificada"

# "." groups thousands, "," marks decimals: 60.000 / 1.500,50 / 2000000 / 1500,5
SALARY_NUMBER_RE = re.compile(r"\d{1,3}(?:\.\d{3})+(?:,\d+)?|\d+(?:,\d+)?")
CURRENCY_MARKERS = (("usd", "USD"), ("eur", "EUR"), ("cop", "COP"), ("brl", "BRL"))

YEARS_RE = re.compile(r"(\d+)\+?\s*(años|año|years|year)", re.IGNORECASE)

RELATIVE_UNITS = {
    "hora": "hours",
    "horas": "hours",
    "hour": "hours",
    "hours": "hours",
    "día": "days",
    "días": "days",
    "dia": "days",
    "dias": "days",
    "day": "days",
    "days": "days",
    "semana": "weeks",
    "semanas": "weeks",
    "week": "weeks",
    "weeks": "weeks",
    "mes": "months",
    "meses": "months",
    "month": "months",
    "months": "months",
    "año": "years",
    "años": "years",
    "year": "years",
    "years": "years",
}
_UNIT_PATTERN = "|".join(sorted(RELATIVE_UNITS, key=len, reverse=True))
_COUNT_PATTERN = r"\d+|una|un|an|a"
# "hace 3 días", "hace 3días", "Hace 30+ días", "Hace más de 30 días"
RELATIVE_AGO_RE = re.compile(
    rf"hace\s*(?:m[aá]s\s+de\s*)?({_COUNT_PATTERN})\+?\s*({_UNIT_PATTERN})\b", re.IGNORECASE
)
RELATIVE_EN_RE = re.compile(rf"\b({_COUNT_PATTERN})\+?\s*({_UNIT_PATTERN})\b(?:\s+ago)?", re.IGNORECASE)

TODAY_MARKERS = ("hoy", "justo ahora", "today", "just posted", "just now")
YESTERDAY_MARKERS = ("ayer", "yesterday")


def clean_text(value) -> str:
    if not isinstance(value, str) or not value:
        return ""
    return " ".join(value.split())


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


@dataclass(frozen=True)
class Salary:
    """Canonical salary: a sentinel, a single amount or a low/high range."""

    kind: str
    low: Decimal | None = None
    high: Decimal | None = None
    currency: str = ""

    @classmethod
    def confidential(cls) -> "Salary":
        return cls(kind="confidential")

    @classmethod
    def unknown(cls) -> "Salary":
        return cls(kind="unknown")

    @property
    def text(self) -> str:
        if self.kind == "confidential":
            return CONFIDENTIAL
        if self.kind == "single":
            return f"{_format_amount(self.low)} {self.currency}".strip()
        if self.kind == "range":
            return f"{_format_amount(self.low)} - {_format_amount(self.high)} {self.currency}".strip()
        return NOT_AVAILABLE

    def __str__(self) -> str:
        return self.text


def _format_amount(value: Decimal | None) -> str:
    if value is None:
        return ""
    if value == value.to_integral_value():
        return str(value.quantize(Decimal(1)))
    return format(value.normalize(), "f").replace(".", ",")


def _parse_amount(token: str) -> Decimal | None:
    try:
        return Decimal(token.replace(".", "").replace(",", "."))
    except InvalidOperation:
        return None


def detect_currency(text: str) -> str:
    lower = text.lower()
    for marker, code in CURRENCY_MARKERS:
        if marker in lower:
            return code
    return ""


def parse_salary(value) -> Salary:
    if isinstance(value, Salary):
        return value

    text = clean_text(value)
    lower = text.lower()
    if not lower or lower == "n/a" or "confidencial" in lower:
        return Salary.confidential()

    amounts = [a for a in (_parse_amount(tok) for tok in SALARY_NUMBER_RE.findall(lower)) if a is not None]
    if not amounts:
        return Salary.unknown()

    currency = detect_currency(lower)
    if len(amounts) == 1:
        return Salary(kind="single", low=amounts[0], currency=currency)
    return Salary(kind="range", low=amounts[0], high=amounts[1], currency=currency)


class Modality(str, Enum):
    REMOTE = "Remoto"
    ON_SITE = "Presencial"
    HYBRID = "Híbrido"
    UNSPECIFIED = "No especificada"

    def __str__(self) -> str:
        return self.value


def normalize_modality(value) -> Modality:
    if isinstance(value, Modality):
        return value
    lower = clean_text(value).lower()
    if "remot" in lower or "teletrabajo" in lower:
        return Modality.REMOTE
    if "presencial" in lower or "on-site" in lower or "in-person" in lower:
        return Modality.ON_SITE
    if "híbrid" in lower or "hybrid" in lower:
        return Modality.HYBRID
    return Modality.UNSPECIFIED


def normalize_experience(value) -> str:
    lower = clean_text(value).lower()
    if "junior" in lower:
        return "Junior"
    if "mid" in lower or "semi-senior" in lower:
        return "Semi-Senior"
    if "senior" in lower:
        return "Senior"
    match = YEARS_RE.search(lower)
    if match:
        return f"{int(match.group(1))}+ años de experiencia"
    return UNSPECIFIED


def _count(token: str) -> int:
    return int(token) if token.isdigit() else 1


def _shift(now: datetime, amount: int, unit: str) -> datetime:
    return now - relativedelta(**{unit: amount})


def resolve_relative_date(text, now: datetime | None = None) -> datetime | None:
    """Turn "hoy", "ayer", "hace 3 días" or "Posted 2 days ago" into a date.

    ``now`` is the anchor; it defaults to the current UTC time.
    """
    lower = clean_text(text).lower()
    if not lower:
        return None
    now = _as_naive_utc(now) if now else utcnow()

    if any(marker in lower for marker in TODAY_MARKERS):
        return now
    if any(marker in lower for marker in YESTERDAY_MARKERS):
        return now - timedelta(days=1)

    match = RELATIVE_AGO_RE.search(lower)
    if not match and ("ago" in lower or "posted" in lower):
        match = RELATIVE_EN_RE.search(lower)
    if not match:
        return None

    unit = RELATIVE_UNITS[match.group(2).lower()]
    return _shift(now, _count(match.group(1)), unit)


def normalize_date(value, now: datetime | None = None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return _as_naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None

    text = clean_text(value)
    if not text:
        return None
    relative = resolve_relative_date(text, now)
    if relative is not None:
        return relative

    try:
        parsed = date_parser.parse(text, dayfirst="/" in text)
    except (ValueError, OverflowError):
        return None
    return _as_naive_utc(parsed)
