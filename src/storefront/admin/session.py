"""AdminSession aggregate: holds the admin credential token.

State Machine:
    UNAUTHENTICATED → AUTHENTICATED   (successful login)
    AUTHENTICATED → UNAUTHENTICATED   (logout, token cleared externally,
                                       or backend rejection)

Tokens are opaque: never inspected, renewed or expired client-side.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String, Text

from storefront.admin.events import AdminSignedIn, AdminSignedOut
from storefront.domain import storefront


class SessionStatus(Enum):
    UNAUTHENTICATED = "Unauthenticated"
    AUTHENTICATED = "Authenticated"


@storefront.aggregate
class AdminSession:
    token = Text()
    status = String(choices=SessionStatus, default=SessionStatus.UNAUTHENTICATED.value)

    @invariant.post
    def authenticated_session_holds_token(self):
        if self.status == SessionStatus.AUTHENTICATED.value and not self.token:
            raise ValidationError({"token": ["An authenticated session must hold a token"]})

    @classmethod
    def create(cls):
        return cls(status=SessionStatus.UNAUTHENTICATED.value)

    @classmethod
    def restore(cls, token):
        """Rebuild a session from a stored token without raising events."""
        if token:
            return cls(token=token, status=SessionStatus.AUTHENTICATED.value)
        return cls.create()

    @property
    def is_authenticated(self) -> bool:
        return self.status == SessionStatus.AUTHENTICATED.value

    def sign_in(self, token):
        if not token:
            raise ValidationError({"token": ["Login response did not include a token"]})

        self.token = token
        self.status = SessionStatus.AUTHENTICATED.value
        self.raise_(AdminSignedIn(session_id=str(self.id), signed_in_at=datetime.now(UTC)))

    def sign_out(self, reason="logout"):
        if not self.is_authenticated:
            return

        self.status = SessionStatus.UNAUTHENTICATED.value
        self.token = None
        self.raise_(
            AdminSignedOut(
                session_id=str(self.id),
                reason=reason,
                signed_out_at=datetime.now(UTC),
            )
        )
