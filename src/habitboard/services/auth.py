"""Authentication: local accounts and the hosted Supabase auth service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol

import httpx
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlmodel import Session, select
from supabase import AuthApiError, Client

from ..logging_config import get_logger
from ..models.user import User

logger = get_logger(__name__)

SessionFactory = Callable[[], Session]

_hasher = PasswordHasher()
LOCAL_EMAIL = "local@habitboard.invalid"


@dataclass(frozen=True)
class AuthSession:
    """Identity of the signed-in user; every habit query is scoped to ``user_id``."""

    user_id: str
    email: str


class AuthProvider(Protocol):
    def sign_in(self, email: str, password: str) -> Optional[AuthSession]: ...

    def current(self) -> Optional[AuthSession]: ...

    def sign_out(self) -> None: ...


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def create_user(*, email: str, password: str, session_factory: SessionFactory) -> User:
    """Create a local user with a hashed password."""

    email = _normalize_email(email)
    if not email:
        raise ValueError("Email is required")
    if not password:
        raise ValueError("Password is required")
    password_hash = _hasher.hash(password)
    with session_factory() as session:
        existing = session.exec(select(User).where(User.email == email)).first()
        if existing:
            raise ValueError("A user with that email already exists")
        user = User(email=email, password_hash=password_hash)
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user


def authenticate(*, email: str, password: str, session_factory: SessionFactory) -> Optional[User]:
    """Validate credentials and return the user when correct."""

    email = _normalize_email(email)
    if not email:
        return None
    with session_factory() as session:
        user = session.exec(select(User).where(User.email == email)).first()
        if user is None:
            return None
        try:
            _hasher.verify(user.password_hash, password)
        except (VerifyMismatchError, InvalidHash, VerificationError):
            return None

        user.last_login = datetime.now(timezone.utc)
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user


def ensure_local_user(session_factory: SessionFactory) -> User:
    """Create or return the default local profile (passwordless desktop mode)."""

    with session_factory() as session:
        user = session.exec(select(User).where(User.email == LOCAL_EMAIL)).first()
        if user:
            session.expunge(user)
            return user
        user = User(email=LOCAL_EMAIL, password_hash=_hasher.hash(LOCAL_EMAIL))
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user


class LocalAuth:
    """Auth provider over the local user table."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory
        self._session: Optional[AuthSession] = None

    def sign_in(self, email: str, password: str) -> Optional[AuthSession]:
        user = authenticate(email=email, password=password, session_factory=self.session_factory)
        if user is None:
            logger.warning("Local sign-in rejected", extra={"email": _normalize_email(email)})
            return None
        self._session = AuthSession(user_id=user.id, email=user.email)
        return self._session

    def sign_in_local(self) -> AuthSession:
        """Sign in as the default offline profile."""
        user = ensure_local_user(self.session_factory)
        self._session = AuthSession(user_id=user.id, email=user.email)
        return self._session

    def current(self) -> Optional[AuthSession]:
        return self._session

    def sign_out(self) -> None:
        self._session = None


class SupabaseAuth:
    """Auth provider delegating to Supabase Auth."""

    def __init__(self, client: Client):
        self.client = client
        self._session: Optional[AuthSession] = None

    def sign_in(self, email: str, password: str) -> Optional[AuthSession]:
        try:
            res = self.client.auth.sign_in_with_password(
                {"email": email.strip(), "password": password}
            )
        except AuthApiError as exc:
            logger.warning("Supabase sign-in rejected", extra={"reason": exc.message})
            return None
        if res is None or res.user is None:
            return None
        self._session = AuthSession(user_id=str(res.user.id), email=res.user.email or "")
        logger.info("Signed in", extra={"user_id": self._session.user_id})
        return self._session

    def current(self) -> Optional[AuthSession]:
        """Return the cached session, restoring it from the client when possible."""
        if self._session is not None:
            return self._session
        try:
            res = self.client.auth.get_user()
        except (AuthApiError, httpx.HTTPError):
            logger.info("No Supabase session to restore", exc_info=True)
            return None
        if res is None or res.user is None:
            return None
        self._session = AuthSession(user_id=str(res.user.id), email=res.user.email or "")
        return self._session

    def sign_out(self) -> None:
        try:
            self.client.auth.sign_out()
        except (AuthApiError, httpx.HTTPError):
            logger.warning("Supabase sign-out failed; clearing local session", exc_info=True)
        self._session = None


__all__ = [
    "AuthProvider",
    "AuthSession",
    "LocalAuth",
    "SupabaseAuth",
    "authenticate",
    "create_user",
    "ensure_local_user",
]
