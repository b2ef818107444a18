"""
Contract of the remote bills store consumed by the bills services.

Any object exposing `bills()` with these three coroutines can be used:
the HTTP client in `billed.store.service`, or a mock in tests.
"""
from typing import Any, Optional, Protocol, Sequence

from billed.bills.schemas import ReceiptUpload


class BillsResource(Protocol):

    async def list(self) -> Sequence[Any]:
        """Return every bill visible to the current user."""
        ...

    async def create(self, payload: ReceiptUpload) -> Any:
        """Upload a receipt and create the bill entry. Returns `{fileUrl, key}`."""
        ...

    async def update(self, *, id: Optional[str], data: dict[str, Any]) -> Any:
        """Write the final field values of bill `id`. Returns the stored bill."""
        ...


class Store(Protocol):

    def bills(self) -> BillsResource:
        ...
