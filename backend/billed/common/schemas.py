from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field

class AppBaseModel(BaseModel):
    """
    Global base model for the application.
    Centralizes Pydantic configuration (strict mode, stripping, etc.).
    """
    model_config = ConfigDict(
        strict=True,                # No implicit type coercion (ex: "1" != 1)
        str_strip_whitespace=True,  # Auto-strip whitespace from strings
        validate_assignment=True,   # Validate values even when setting attributes after creation
        from_attributes=True,       # Enable reading from plain objects
        frozen=False                # Allow mutation (default)
    )

class OperationResult(AppBaseModel):
    """
    Tagged outcome of a fallible store round trip.

    Usage:
        result = await submission.handle_submit(form)
        if not result.ok:
            show(result.error)
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    ok: bool = Field(
        ...,
        description="True when the store call succeeded"
    )

    value: Any = Field(
        None,
        description="Payload returned by the store on success"
    )

    error: Optional[Exception] = Field(
        None,
        description="Exception raised by the store on failure"
    )

    @classmethod
    def success(cls, value: Any = None) -> "OperationResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: Exception) -> "OperationResult":
        return cls(ok=False, error=error)
