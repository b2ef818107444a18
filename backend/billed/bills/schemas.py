import re
from typing import Any, Optional, Union
from pydantic import ConfigDict, Field, field_validator

from billed.bills.models import SubmissionState
from billed.common.schemas import AppBaseModel


PCT_PATTERN = re.compile(r"\s*([+-]?\d+)")

class StoreModel(AppBaseModel):
    """
    Base for documents exchanged with the remote store.
    The store speaks camelCase (`fileUrl`); Python code uses snake_case.
    """
    model_config = ConfigDict(
        strict=False,
        populate_by_name=True,
        str_strip_whitespace=False,  # Raw store values are passed through unchanged
    )

# --- RECORDS ---
class BillRecord(StoreModel):
    """
    A persisted expense claim as returned by the store.
    Lenient on purpose: a record with a malformed date or an unknown status is kept.
    """
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(None, description="Identifier assigned by the store")
    email: Optional[str] = Field(None, description="Owner identifier")
    type: Optional[str] = Field(None, description="Expense category label")
    name: Optional[str] = Field(None, description="Short description")
    date: Optional[Any] = Field(None, description="Canonical YYYY-MM-DD date, kept raw when malformed")
    amount: Optional[Union[float, str]] = Field(None, description="Amount in currency units")
    vat: Optional[Union[float, str]] = Field(None, description="VAT in currency units")
    pct: Optional[Union[float, str]] = Field(None, description="VAT percentage")
    commentary: Optional[str] = Field(None, description="Free-form comment")
    file_url: Optional[str] = Field(None, alias="fileUrl", description="Receipt URL")
    file_name: Optional[str] = Field(None, alias="fileName", description="Receipt file name")
    status: Optional[str] = Field(None, description="pending | accepted | refused")

    @field_validator('id', mode='before')
    @classmethod
    def validate_id(cls, v):
        # Some stores hand out numeric ids
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator('amount', 'vat', 'pct', mode='before')
    @classmethod
    def numeric_or_raw(cls, v):
        # Numeric strings become numbers, anything else is kept as sent
        if isinstance(v, str):
            if not v.strip():
                return None
            try:
                return float(v)
            except ValueError:
                return v
        return v

class DisplayBill(BillRecord):
    """Bill ready for rendering: formatted date (or the raw one) and a status label."""
    status_label: Optional[str] = Field(
        None,
        alias="statusLabel",
        description="Human readable status"
    )

class ReceiptPreview(AppBaseModel):
    file_url: Optional[str] = Field(None, description="Image shown in the modal")
    width: int = Field(..., ge=0, description="Image width in pixels")

# --- FORM ---
class BillForm(StoreModel):
    """Values typed in the New Bill form. Numeric fields arrive as strings."""
    model_config = ConfigDict(str_strip_whitespace=True)

    type: str = Field(..., description="Expense category label")
    name: Optional[str] = Field(None, description="Short description")
    date: str = Field(..., description="Canonical YYYY-MM-DD date")
    amount: float = Field(..., description="Amount in currency units")
    vat: float = Field(0, description="VAT in currency units")
    pct: int = Field(20, description="VAT percentage (default: 20)")
    commentary: Optional[str] = Field(None, description="Free-form comment")

    @field_validator('vat', 'pct', mode='before')
    @classmethod
    def blank_as_default(cls, v, info):
        if v is None or (isinstance(v, str) and not v.strip()):
            return cls.model_fields[info.field_name].default
        return v

    @field_validator('pct', mode='before')
    @classmethod
    def leading_integer(cls, v):
        """
        Read the percentage like the web form does: leading integer digits only.

        Examples:
            "20.5" -> 20, "15%" -> 15, "abc" -> 20 (default)
        """
        if isinstance(v, float):
            return int(v)
        if isinstance(v, str):
            match = PCT_PATTERN.match(v)
            return int(match.group(1)) if match else cls.model_fields["pct"].default
        return v

# --- UPLOAD ---
class ReceiptFile(AppBaseModel):
    filename: str = Field(..., min_length=1, description="Name reported by the file input")
    content: bytes = Field(..., description="Raw file content")
    content_type: str = Field("application/octet-stream", description="MIME type")

    @property
    def base_name(self) -> str:
        """Last path segment; browsers report `C:\\fakepath\\name.png`."""
        return self.filename.replace("\\", "/").rsplit("/", 1)[-1]

    @property
    def extension(self) -> str:
        name = self.base_name
        return name.rsplit(".", 1)[-1].lower() if "." in name else ""

class ReceiptUpload(AppBaseModel):
    """Multipart payload sent to `bills().create`."""
    file: ReceiptFile
    email: Optional[str] = None

class UploadedReceipt(StoreModel):
    file_url: Optional[str] = Field(None, alias="fileUrl")
    key: Optional[str] = Field(None, description="Identifier targeted by the final update")

    @field_validator('key', mode='before')
    @classmethod
    def validate_key(cls, v):
        if isinstance(v, int):
            return str(v)
        return v

# --- SUBMISSION ---
class SubmissionSnapshot(StoreModel):
    state: SubmissionState = Field(SubmissionState.DRAFT)
    key: Optional[str] = Field(None, description="Bill identifier returned by the upload")
    file_url: Optional[str] = Field(None, alias="fileUrl")
    file_name: Optional[str] = Field(None, alias="fileName")

class NewBillRequest(BillForm):
    """Form values plus the attachment obtained from a previous upload."""
    key: Optional[str] = None
    file_url: Optional[str] = Field(None, alias="fileUrl")
    file_name: Optional[str] = Field(None, alias="fileName")

    def to_snapshot(self) -> SubmissionSnapshot:
        state = SubmissionState.UPLOADED if self.key else SubmissionState.DRAFT
        return SubmissionSnapshot(
            state=state,
            key=self.key,
            file_url=self.file_url,
            file_name=self.file_name,
        )

    def to_form(self) -> BillForm:
        return BillForm.model_validate(self.model_dump(include=set(BillForm.model_fields)))

class NewBillResponse(StoreModel):
    state: SubmissionState
    redirect_to: Optional[str] = Field(None, alias="redirectTo")
    bill: Optional[BillRecord] = None
