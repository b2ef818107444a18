from fastapi import APIRouter, File, HTTPException, UploadFile, status

from billed.bills.exceptions import ReceiptValidationError
from billed.bills.schemas import (
    DisplayBill,
    NewBillRequest,
    NewBillResponse,
    ReceiptFile,
    SubmissionSnapshot,
)
from billed.bills.services import BillsCollection
from billed.bills.submission import BillSubmission
from billed.config import settings
from billed.deps import CurrentSession, StoreDependency
from billed.error_handler import store_error_detail

router = APIRouter()


@router.get("/", response_model=list[DisplayBill], status_code=status.HTTP_200_OK, summary="List bills, most recent first")
async def get_bills(store: StoreDependency, session: CurrentSession):
    # Store failures propagate to the global exception handler
    collection = BillsCollection(store, session)
    return await collection.get_bills()


@router.post("/receipt", response_model=SubmissionSnapshot, status_code=status.HTTP_201_CREATED, summary="Upload a receipt and create the bill entry")
async def upload_receipt(store: StoreDependency, session: CurrentSession, file: UploadFile = File(..., description="Receipt image (JPG, JPEG, PNG)")):
    receipt = ReceiptFile(
        filename=file.filename or "receipt",
        content=await file.read(),
        content_type=file.content_type or "application/octet-stream",
    )
    if receipt.extension not in settings.ALLOWED_RECEIPT_EXTENSIONS:
        raise ReceiptValidationError(receipt.base_name, settings.ALLOWED_RECEIPT_EXTENSIONS)

    navigated: list[str] = []
    submission = BillSubmission(store, session, on_navigate=navigated.append)
    result = await submission.handle_file_selected(receipt)
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=store_error_detail(result.error))
    return submission.snapshot()


@router.post("/", response_model=NewBillResponse, status_code=status.HTTP_201_CREATED, summary="Submit the new bill form")
async def submit_bill(data: NewBillRequest, store: StoreDependency, session: CurrentSession):
    navigated: list[str] = []
    submission = BillSubmission(store, session, on_navigate=navigated.append, snapshot=data.to_snapshot())
    result = await submission.handle_submit(data.to_form())
    if not result.ok:
        # The user stays on the form
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=store_error_detail(result.error))

    bill = result.value or None
    return NewBillResponse(
        state=submission.state,
        redirect_to=navigated[-1] if navigated else None,
        bill=bill,
    )
