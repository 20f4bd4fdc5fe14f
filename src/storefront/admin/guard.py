"""SessionGuard: decides whether admin views may render.

The guard is the explicit session context for admin-scoped work: callers
log in and out through it and ask it for the bearer headers, instead of
reading the token from ambient storage. Admission is evaluated on every
view entry against the stored token, so clearing storage demotes the session.
"""

from dataclasses import dataclass

import structlog

from storefront.admin.session import AdminSession
from storefront.exceptions import InvalidCredentials, LoginRequired, StorageCorrupted, UnauthorizedError

logger = structlog.get_logger(__name__)

DEFAULT_TOKEN_KEY = "handestiy_admin_token"
ADMIN_PREFIX = "/admin"
LOGIN_ROUTE = "/admin/login"
DASHBOARD_ROUTE = "/admin"


@dataclass(frozen=True)
class Admission:
    allowed: bool
    redirect_to: str | None = None


def is_protected(route: str) -> bool:
    route = route.rstrip("/") or "/"
    if route == LOGIN_ROUTE:
        return False
    return route == ADMIN_PREFIX or route.startswith(f"{ADMIN_PREFIX}/")


class SessionGuard:
    def __init__(self, storage, key: str = DEFAULT_TOKEN_KEY, demote_on_unauthorized: bool = True):
        self.storage = storage
        self.key = key
        self.demote_on_unauthorized = demote_on_unauthorized
        self.session = AdminSession.restore(self._stored_token())

    def _stored_token(self) -> str | None:
        try:
            return self.storage.get(self.key)
        except StorageCorrupted as exc:
            logger.warning("admin_token_unreadable", key=self.key, error=str(exc))
            return None

    def _sync(self) -> None:
        """Follow the stored token: an externally cleared token signs the session out."""
        stored = self._stored_token()
        if self.session.is_authenticated and not stored:
            self.session.sign_out(reason="token_cleared")
            logger.info("admin_session_cleared_externally")
        elif stored and stored != self.session.token:
            self.session = AdminSession.restore(stored)

    @property
    def is_authenticated(self) -> bool:
        self._sync()
        return self.session.is_authenticated

    def current_token(self) -> str | None:
        self._sync()
        return self.session.token if self.session.is_authenticated else None

    def login(self, client, email: str, password: str) -> Admission:
        try:
            response = client.login(email, password)
        except UnauthorizedError as exc:
            logger.info("admin_login_rejected", email=email)
            raise InvalidCredentials("Invalid credentials") from exc

        self.session.sign_in(response.token)
        self.storage.set(self.key, response.token)
        logger.info("admin_signed_in", email=email)
        return Admission(allowed=True, redirect_to=DASHBOARD_ROUTE)

    def logout(self) -> Admission:
        self.session.sign_out(reason="logout")
        self.storage.remove(self.key)
        logger.info("admin_signed_out")
        return Admission(allowed=False, redirect_to=LOGIN_ROUTE)

    def enter(self, route: str) -> Admission:
        """Decide whether ``route`` may render now."""
        if not is_protected(route):
            return Admission(allowed=True)
        if self.is_authenticated:
            return Admission(allowed=True)
        return Admission(allowed=False, redirect_to=LOGIN_ROUTE)

    def require(self) -> str:
        """Token for an admin-scoped request, or ``LoginRequired``."""
        token = self.current_token()
        if token is None:
            raise LoginRequired(redirect_to=LOGIN_ROUTE)
        return token

    def handle_unauthorized(self) -> bool:
        """React to a backend rejection of the current token. Returns True if the session was signed out."""
        if not self.demote_on_unauthorized:
            logger.warning("admin_token_rejected_kept")
            return False

        self.session.sign_out(reason="rejected")
        self.storage.remove(self.key)
        logger.warning("admin_token_rejected_session_cleared")
        return True
