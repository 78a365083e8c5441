"""Identity provider adapter and an in-process implementation."""
import logging
import re
import uuid
from dataclasses import dataclass
from urllib.parse import quote

from werkzeug.security import check_password_hash, generate_password_hash

from studygenie.models import UserIdentity

logger = logging.getLogger(__name__)

AVATAR_URL = "https://api.dicebear.com/7.x/avataaars/svg?seed={email}"
MIN_PASSWORD_LENGTH = 6
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class AuthError(Exception):
    """Authentication failure carrying the provider's message text."""


def to_identity(uid: str, email: str, display_name: str | None = None,
                photo_url: str | None = None) -> UserIdentity:
    """Normalize provider user fields into a :class:`UserIdentity`."""
    name = display_name or (email.split("@")[0] if email else "") or "User"
    return UserIdentity(
        id=uid,
        email=email or "",
        display_name=name,
        avatar_url=photo_url or AVATAR_URL.format(email=quote(email or "", safe="@")),
    )


class IdentityProvider:
    """Sign-up/sign-in/sign-out with state-change subscriptions."""

    def __init__(self):
        self.current_user: UserIdentity | None = None
        self._listeners = []

    def on_auth_state_changed(self, callback):
        """Call ``callback`` now and on every change; returns an unsubscribe function."""
        self._listeners.append(callback)
        callback(self.current_user)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _set_user(self, user: UserIdentity | None) -> None:
        self.current_user = user
        for callback in list(self._listeners):
            callback(user)

    def sign_up(self, email: str, password: str, display_name: str) -> UserIdentity:
        raise NotImplementedError

    def sign_in(self, email: str, password: str) -> UserIdentity:
        raise NotImplementedError

    def sign_out(self) -> None:
        if self.current_user is not None:
            logger.info("Signed out %s", self.current_user.email)
        self._set_user(None)


@dataclass
class _Account:
    uid: str
    email: str
    display_name: str
    password_hash: str


class LocalIdentityProvider(IdentityProvider):
    """Accounts held in memory for the life of the process."""

    def __init__(self):
        super().__init__()
        self._accounts: dict[str, _Account] = {}

    def sign_up(self, email: str, password: str, display_name: str) -> UserIdentity:
        email = email.strip().lower()
        if not EMAIL_RE.match(email):
            raise AuthError("auth/invalid-email")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthError("auth/weak-password")
        if email in self._accounts:
            raise AuthError("auth/email-already-in-use")
        account = _Account(
            uid=uuid.uuid4().hex,
            email=email,
            display_name=display_name.strip(),
            password_hash=generate_password_hash(password),
        )
        self._accounts[email] = account
        logger.info("Created account for %s", email)
        user = to_identity(account.uid, account.email, account.display_name)
        self._set_user(user)
        return user

    def sign_in(self, email: str, password: str) -> UserIdentity:
        email = email.strip().lower()
        account = self._accounts.get(email)
        if account is None or not check_password_hash(account.password_hash, password):
            raise AuthError("auth/invalid-credential")
        logger.info("Signed in %s", email)
        user = to_identity(account.uid, account.email, account.display_name)
        self._set_user(user)
        return user
