import logging
from typing import Any, Optional

import httpx

from billed.bills.schemas import ReceiptUpload
from billed.common.exceptions import StoreError
from billed.config import settings

logger = logging.getLogger(__name__)


class ApiBillsResource:
    """
    `bills` resource of the REST store.

    Endpoints:
        GET   /bills        -> list
        POST  /bills        -> create (multipart: file, email)
        PATCH /bills/{id}   -> update (JSON)
    """

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def list(self) -> list[dict[str, Any]]:
        response = await self._request("GET", "bills")
        return self._json(response)

    async def create(self, payload: ReceiptUpload) -> dict[str, Any]:
        receipt = payload.file
        files = {"file": (receipt.base_name, receipt.content, receipt.content_type)}
        data = {"email": payload.email} if payload.email else {}
        response = await self._request("POST", "bills", files=files, data=data)
        return self._json(response)

    async def update(self, *, id: Optional[str], data: dict[str, Any]) -> dict[str, Any]:
        if not id:
            raise StoreError("Cannot update a bill without an identifier")
        response = await self._request("PATCH", f"bills/{id}", json=data)
        return self._json(response)

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """
        Send a request and translate failures into StoreError.

        Raises:
            StoreError: On transport errors or non-2xx responses
        """
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Store request {method} {url} failed: {e}")
            raise StoreError(str(e) or e.__class__.__name__) from e

        if response.is_success:
            return response

        raise StoreError(self._error_message(response), status=response.status_code)

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        # Empty body (204) on update
        if not response.content:
            return {}
        return response.json()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return response.reason_phrase or "Store error"


class ApiStore:
    """
    HTTP client of the remote bills store.
    Sends the JWT of the current user as a Bearer token when one is configured.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self.client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/",
            headers=headers,
            timeout=timeout,
        )
        self._bills = ApiBillsResource(self.client)

    def bills(self) -> ApiBillsResource:
        return self._bills

    async def aclose(self) -> None:
        await self.client.aclose()

_store: Optional[ApiStore] = None

def get_store() -> ApiStore:
    global _store
    if _store is None:
        _store = ApiStore(
            base_url=settings.STORE_API_URL,
            token=settings.STORE_API_TOKEN,
            timeout=settings.STORE_API_TIMEOUT,
        )
        logger.info(f"Store client initialized for {settings.STORE_API_URL}")
    return _store

async def close_store() -> None:
    global _store
    if _store is not None:
        await _store.aclose()
        _store = None
