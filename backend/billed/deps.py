import logging
from typing import Annotated, Optional

from fastapi import Depends, Header

from billed.store.base import Store
from billed.store.service import get_store
from billed.users.schemas import UserSession

logger = logging.getLogger(__name__)


async def get_current_session(
    x_user: Annotated[Optional[str], Header(alias="X-User")] = None
) -> UserSession:
    """
    Dependency reading the current user from the `X-User` header.

    The header carries the JSON document the web client keeps under the
    `user` local storage key, e.g. `{"type": "Employee", "email": "a@a"}`.

    Raises:
        InvalidSessionError: If the header is missing or malformed (mapped to 401)
    """
    return UserSession.from_json(x_user)


def get_store_dependency() -> Store:
    return get_store()


CurrentSession = Annotated[UserSession, Depends(get_current_session)]
StoreDependency = Annotated[Store, Depends(get_store_dependency)]
