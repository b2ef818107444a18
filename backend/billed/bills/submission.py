"""
Write side of the New Bill page.

A new bill reaches the store in two independent steps:
1. attaching a receipt uploads it and creates the bill entry (`create`)
2. submitting the form writes the final field values (`update`)

The steps are not atomic. If the upload succeeded and the update fails, the
store keeps an incomplete entry; the failure is reported and not rolled back.
Nothing orders a pending upload before a submit either: the update uses
whatever attachment is set at that moment.
"""

import logging
from typing import Any, Optional

from billed.bills.models import BillStatus, SubmissionState
from billed.bills.schemas import (
    BillForm,
    ReceiptFile,
    ReceiptUpload,
    SubmissionSnapshot,
    UploadedReceipt,
)
from billed.common.schemas import OperationResult
from billed.constants.routes import ROUTES_PATH, Navigate
from billed.store.base import Store
from billed.users.schemas import UserSession

logger = logging.getLogger(__name__)


class BillSubmission:
    """
    State machine of one bill draft: DRAFT -> UPLOADED -> PERSISTED.

    Store failures never escape `handle_file_selected` / `handle_submit`:
    they are logged, kept in `last_error` and returned as a failed
    OperationResult, and the state stays where it was.
    """

    def __init__(
        self,
        store: Store,
        session: UserSession,
        on_navigate: Navigate,
        snapshot: Optional[SubmissionSnapshot] = None,
    ):
        self.store = store
        self.session = session
        self.on_navigate = on_navigate

        snapshot = snapshot or SubmissionSnapshot()
        self.state: SubmissionState = snapshot.state
        self.key: Optional[str] = snapshot.key
        self.file_url: Optional[str] = snapshot.file_url
        self.file_name: Optional[str] = snapshot.file_name
        self.last_error: Optional[Exception] = None

    def snapshot(self) -> SubmissionSnapshot:
        return SubmissionSnapshot(
            state=self.state,
            key=self.key,
            file_url=self.file_url,
            file_name=self.file_name,
        )

    async def handle_file_selected(self, file: ReceiptFile) -> OperationResult:
        """
        Upload the receipt and create the bill entry.

        The file type is not checked here. On success the returned `key` is
        the bill targeted by the final update; a second upload replaces it.
        """
        payload = ReceiptUpload(file=file, email=self.session.email)

        try:
            response = await self.store.bills().create(payload)
            uploaded = (
                response if isinstance(response, UploadedReceipt)
                else UploadedReceipt.model_validate(response)
            )
        except Exception as e:
            logger.error(e, exc_info=True)
            self.last_error = e
            return OperationResult.failure(e)

        self.key = uploaded.key
        self.file_url = uploaded.file_url
        self.file_name = file.base_name
        self.state = SubmissionState.UPLOADED
        self.last_error = None
        logger.info(f"Receipt {self.file_name} uploaded as bill {self.key}")
        return OperationResult.success(uploaded)

    def build_bill(self, form: BillForm) -> dict[str, Any]:
        """Bill document sent to the store: form values, attachment, pending status."""
        return {
            "email": self.session.email,
            "type": form.type,
            "name": form.name,
            "date": form.date,
            "amount": form.amount,
            "vat": form.vat,
            "pct": form.pct,
            "commentary": form.commentary,
            "fileUrl": self.file_url,
            "fileName": self.file_name,
            "status": BillStatus.PENDING.value,
        }

    async def handle_submit(self, form: BillForm) -> OperationResult:
        """
        Write the bill and go back to the Bills page.

        On failure the user stays on the form; there is no retry.
        """
        bill = self.build_bill(form)

        try:
            stored = await self.store.bills().update(id=self.key, data=bill)
        except Exception as e:
            status = getattr(e, "status", None)
            message = getattr(e, "message", None) or str(e)
            logger.error(
                f"Failed to update bill {self.key} (status={status}): {message}",
                exc_info=True
            )
            self.last_error = e
            return OperationResult.failure(e)

        self.state = SubmissionState.PERSISTED
        self.last_error = None
        self.on_navigate(ROUTES_PATH["Bills"])
        return OperationResult.success(stored)
