"""
Identity Provider

The sync engine only needs to know who is signed in. Sign-up, password
handling and token refresh belong to the cloud identity service.
"""

from abc import ABC, abstractmethod
from typing import Optional

import structlog

from artha.models.backup import UserIdentity


logger = structlog.get_logger(__name__)


class IdentityProviderInterface(ABC):
    """Reports the currently signed-in user."""

    @abstractmethod
    def current_user(self) -> Optional[UserIdentity]:
        """Return the signed-in user, or None when signed out."""
        pass


class SessionIdentityProvider(IdentityProviderInterface):
    """
    Holds the signed-in identity for the lifetime of the process.

    The sign-in flow calls sign_in() once the cloud identity service has
    authenticated the user.
    """

    def __init__(self, user: Optional[UserIdentity] = None):
        self._user = user

    def current_user(self) -> Optional[UserIdentity]:
        return self._user

    def sign_in(self, user: UserIdentity) -> None:
        self._user = user
        logger.info("identity_signed_in", user_id=user.id)

    def sign_out(self) -> None:
        if self._user is not None:
            logger.info("identity_signed_out", user_id=self._user.id)
        self._user = None
