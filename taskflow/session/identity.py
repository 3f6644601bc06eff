"""Identity provider contract and a static implementation for local use."""

import logging
from typing import Optional, Protocol, runtime_checkable

from pydantic import Field

from taskflow.core.models import StrictBaseModel

logger = logging.getLogger(__name__)


class UserIdentity(StrictBaseModel):
    """The signed-in user as reported by an identity provider."""

    uid: str = Field(..., min_length=1, description="Stable user id")
    display_name: Optional[str] = Field(default=None, description="Name shown in the interface")
    email: Optional[str] = Field(default=None, description="Email address")


@runtime_checkable
class IdentityProvider(Protocol):
    """Source of the current user with a sign-in/sign-out lifecycle."""

    def current_user(self) -> Optional[UserIdentity]: ...

    def sign_in(self, user: UserIdentity) -> UserIdentity: ...

    def sign_out(self) -> None: ...


class StaticIdentityProvider:
    """Identity provider holding a single local user in memory."""

    def __init__(self, user: Optional[UserIdentity] = None):
        self._user = user

    def current_user(self) -> Optional[UserIdentity]:
        return self._user

    def sign_in(self, user: UserIdentity) -> UserIdentity:
        self._user = user
        logger.info(f"Signed in as {user.uid}")
        return user

    def sign_out(self) -> None:
        if self._user is not None:
            logger.info(f"Signed out {self._user.uid}")
        self._user = None
