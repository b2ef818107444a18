"""
Display formatting for the Bills page.

Dates are stored canonically as `YYYY-MM-DD` and shown as `4 Avr. 04`.
"""
from datetime import datetime
from typing import Optional

from billed.bills.models import BillStatus

CANONICAL_DATE_FORMAT = "%Y-%m-%d"

# Short French month names, capitalised and cut to three letters
MONTHS = ["Jan", "Fév", "Mar", "Avr", "Mai", "Jui", "Jui", "Aoû", "Sep", "Oct", "Nov", "Déc"]

STATUS_LABELS = {
    BillStatus.PENDING.value: "En attente",
    BillStatus.ACCEPTED.value: "Accepté",
    BillStatus.REFUSED.value: "Refusé",
}


def parse_canonical_date(value: str) -> datetime:
    """
    Parse a canonical `YYYY-MM-DD` date.

    Raises:
        ValueError: If the value is not a well-formed calendar date
    """
    if not isinstance(value, str) or len(value) != 10:
        raise ValueError(f"Not a canonical date: {value!r}")
    return datetime.strptime(value, CANONICAL_DATE_FORMAT)


def format_date(value: str) -> str:
    """
    Examples:
        format_date("2004-04-04") -> "4 Avr. 04"
        format_date("2023-08-20") -> "20 Aoû. 23"
    """
    parsed = parse_canonical_date(value)
    return f"{parsed.day} {MONTHS[parsed.month - 1]}. {parsed.year % 100:02d}"


def format_status(status: Optional[str]) -> Optional[str]:
    # Unknown statuses are shown as-is
    return STATUS_LABELS.get(status, status)
