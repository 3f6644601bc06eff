"""User session and identity."""

from .identity import IdentityProvider, StaticIdentityProvider, UserIdentity
from .session import Session

__all__ = ["IdentityProvider", "Session", "StaticIdentityProvider", "UserIdentity"]
