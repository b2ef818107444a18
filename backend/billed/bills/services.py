import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional, TypeVar

from pydantic import ValidationError

from billed.bills.formatting import format_date, format_status
from billed.bills.schemas import BillRecord, DisplayBill, ReceiptPreview
from billed.config import settings
from billed.constants.routes import ROUTES_PATH, Navigate
from billed.store.base import Store
from billed.users.schemas import UserSession

logger = logging.getLogger(__name__)

BillT = TypeVar("BillT")


def _date_of(bill: Any) -> str:
    if isinstance(bill, Mapping):
        value = bill.get("date")
    else:
        value = getattr(bill, "date", None)
    # Non-string raw dates (malformed records) are compared as text
    return str(value) if value else ""


def sort_bills(bills: Iterable[BillT]) -> list[BillT]:
    """
    Order bills from the most recent to the oldest.

    Compares canonical `YYYY-MM-DD` strings, which are zero-padded and fixed
    width so lexical order equals calendar order. Bills with the same date keep
    their input order; bills without a date go last. The input is not modified.

    Args:
        bills: BillRecord instances or plain mappings carrying a `date`

    Returns:
        A new list
    """
    return sorted(bills, key=_date_of, reverse=True)


class BillsCollection:
    """
    Read side of the Bills page: fetches the user's bills from the store and
    prepares them for display.
    """

    def __init__(
        self,
        store: Store,
        session: Optional[UserSession] = None,
        on_navigate: Optional[Navigate] = None,
    ):
        self.store = store
        self.session = session
        self.on_navigate = on_navigate

    async def fetch_formatted(self) -> list[DisplayBill]:
        """
        Fetch bills and format each of them, keeping the store order.

        A bill whose date cannot be formatted is kept with its raw date and
        reported in the logs; it never aborts the rest of the list.

        Raises:
            Whatever the store raises on `list()`; fetch failures are left to the caller
        """
        records = await self._list_records()
        return [self.format_bill(record) for record in records]

    async def get_bills(self) -> list[DisplayBill]:
        """Bills for the Bills page: sorted on the raw dates, then formatted."""
        records = await self._list_records()
        return [self.format_bill(record) for record in sort_bills(records)]

    def format_bill(self, record: BillRecord) -> DisplayBill:
        data = record.model_dump(by_alias=True)
        data["statusLabel"] = format_status(record.status)
        try:
            data["date"] = format_date(record.date)
        except (TypeError, ValueError) as e:
            logger.warning(
                f"Could not format date {record.date!r} of bill {record.id} "
                f"(owner: {self._owner()}): {e}"
            )
        try:
            return DisplayBill.model_validate(data)
        except ValidationError:
            # Already reported when the record was read
            return DisplayBill.model_construct(**data)

    def preview_receipt(self, bill: BillRecord, modal_width: int) -> ReceiptPreview:
        """Receipt image shown in the modal, sized relative to the modal."""
        width = int(modal_width * settings.RECEIPT_MODAL_RATIO)
        return ReceiptPreview(file_url=bill.file_url, width=max(width, 0))

    def new_bill(self) -> None:
        if self.on_navigate is None:
            raise RuntimeError("No router configured for the Bills page")
        self.on_navigate(ROUTES_PATH["NewBill"])

    async def _list_records(self) -> list[BillRecord]:
        raw = await self.store.bills().list()
        records = [self._to_record(item) for item in raw]
        logger.debug(f"Fetched {len(records)} bills")
        return records

    def _to_record(self, item: Any) -> BillRecord:
        """
        Read one store item. An item that does not validate is kept as sent
        so a single bad record never loses the rest of the list.
        """
        if isinstance(item, BillRecord):
            return item
        try:
            return BillRecord.model_validate(item)
        except ValidationError as e:
            data = dict(item) if isinstance(item, Mapping) else dict(vars(item))
            logger.warning(
                f"Bill {data.get('id')!r} (owner: {self._owner()}) kept unvalidated, "
                f"{e.error_count()} invalid field(s): {e}"
            )
            return BillRecord.model_construct(**data)

    def _owner(self) -> Optional[str]:
        return self.session.email if self.session else None
