"""
Admin session handling and the top-level view state machine.

The view is one of ``portfolio``, ``login`` or ``admin`` and is decided by
the URL fragment plus a session-scoped login flag. The flag holds a signed
access token, so a forged or expired value counts as logged out.
"""

import logging
import secrets
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

import settings
from storage import KeyValueStorage

logger = logging.getLogger(__name__)

ADMIN_FRAGMENT = "#/admin"
ROOT_FRAGMENT = "#"
SESSION_FLAG_KEY = "isAdminLoggedIn"
LOGIN_ERROR = "Invalid username or password."

# Use pbkdf2_sha256 to avoid external bcrypt dependency issues
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class View(str, Enum):
    PORTFOLIO = "portfolio"
    LOGIN = "login"
    ADMIN = "admin"


# =====================
# Credentials / tokens
# =====================
class CredentialVerifier:
    def __init__(self, username: str, password_hash: str):
        self.username = username
        self.password_hash = password_hash

    @classmethod
    def from_settings(cls) -> "CredentialVerifier":
        password_hash = settings.ADMIN_PASSWORD_HASH or pwd_context.hash(settings.ADMIN_PASSWORD)
        return cls(settings.ADMIN_USERNAME, password_hash)

    def verify(self, username: str, password: str) -> bool:
        username_ok = secrets.compare_digest(username.encode(), self.username.encode())
        # hash check runs even when the username is wrong
        password_ok = pwd_context.verify(password, self.password_hash)
        return username_ok and password_ok


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Claims of a valid admin token, or None."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if payload.get("role") != "admin" or not payload.get("sub"):
        return None
    return payload


def issue_admin_token(username: str) -> str:
    return create_access_token({"sub": username, "role": "admin"})


# =============
# Session state
# =============
class SessionContext:
    """URL fragment plus session storage for one browsing session."""

    def __init__(self, fragment: str = "", storage: Optional[KeyValueStorage] = None):
        self.fragment = fragment
        self.storage = storage if storage is not None else KeyValueStorage()

    def end(self) -> None:
        self.storage.clear()


class ViewStateMachine:
    def __init__(self, context: SessionContext, verifier: CredentialVerifier):
        self.context = context
        self.verifier = verifier
        self.state = View.PORTFOLIO
        self.authenticated = False
        self.login_error: Optional[str] = None

    def _flag_valid(self) -> bool:
        token = self.context.storage.get(SESSION_FLAG_KEY)
        return bool(token) and decode_access_token(token) is not None

    def start(self) -> View:
        self.authenticated = self._flag_valid()
        # a bare first visit to the admin route lands on the public site
        if self.context.fragment == ADMIN_FRAGMENT and self.authenticated:
            self.state = View.ADMIN
        else:
            self.state = View.PORTFOLIO
        return self.state

    def navigate(self, fragment: str) -> View:
        self.context.fragment = fragment
        if fragment == ADMIN_FRAGMENT:
            self.authenticated = self._flag_valid()
            self.state = View.ADMIN if self.authenticated else View.LOGIN
        else:
            self.state = View.PORTFOLIO
        return self.state

    def request_login(self) -> View:
        self.state = View.LOGIN
        self.context.fragment = ADMIN_FRAGMENT
        return self.state

    def login(self, username: str, password: str) -> bool:
        if not self.verifier.verify(username, password):
            logger.info("Rejected admin login for '%s'", username)
            self.login_error = LOGIN_ERROR
            return False
        self.context.storage.set(SESSION_FLAG_KEY, issue_admin_token(self.verifier.username))
        self.login_error = None
        self.authenticated = True
        self.state = View.ADMIN
        self.context.fragment = ADMIN_FRAGMENT
        return True

    def logout(self) -> View:
        self.authenticated = False
        self.context.storage.remove(SESSION_FLAG_KEY)
        self.state = View.PORTFOLIO
        self.context.fragment = ROOT_FRAGMENT
        return self.state
