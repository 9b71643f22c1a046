"""Identity provider package."""

from artha.services.identity.provider import (
    IdentityProviderInterface,
    SessionIdentityProvider,
)

__all__ = ["IdentityProviderInterface", "SessionIdentityProvider"]
