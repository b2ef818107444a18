import json
from typing import Mapping, Optional
from pydantic import ConfigDict, Field, ValidationError, field_validator

from billed.common.exceptions import InvalidSessionError
from billed.common.schemas import AppBaseModel

USER_STORAGE_KEY = "user"


class UserSession(AppBaseModel):
    """
    Current user as kept by the web client under the `user` storage key.
    Passed explicitly to the bills services instead of being read from ambient state.
    """
    model_config = ConfigDict(extra="ignore")

    email: Optional[str] = Field(
        None,
        description="Owner identifier attached to uploads and bills"
    )

    type: Optional[str] = Field(
        None,
        description="Account type (Employee / Admin)"
    )

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @classmethod
    def from_json(cls, raw: Optional[str]) -> "UserSession":
        """
        Parse the JSON document stored under the `user` key.

        Raises:
            InvalidSessionError: If the value is missing or is not a JSON object
        """
        if not raw:
            raise InvalidSessionError("aucun utilisateur connecté")
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise InvalidSessionError(f"JSON invalide ({e.msg})") from e
        if not isinstance(data, dict):
            raise InvalidSessionError("l'utilisateur doit être un objet JSON")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidSessionError(str(e)) from e

    @classmethod
    def from_storage(cls, storage: Mapping[str, str]) -> "UserSession":
        """Read the session from a local-storage-like mapping."""
        return cls.from_json(storage.get(USER_STORAGE_KEY))
