"""Tests for local accounts and the Supabase auth adapter."""

from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest
from supabase import AuthApiError

from habitboard.services.auth import (
    LOCAL_EMAIL,
    LocalAuth,
    SupabaseAuth,
    authenticate,
    create_user,
    ensure_local_user,
)


class TestLocalAccounts:
    def test_create_then_authenticate(self, session_factory):
        created = create_user(
            email=" Person@Example.com ", password="s3cret", session_factory=session_factory
        )

        assert created.email == "person@example.com"
        assert created.password_hash != "s3cret"

        user = authenticate(
            email="person@example.com", password="s3cret", session_factory=session_factory
        )
        assert user is not None
        assert user.id == created.id
        assert user.last_login is not None

    def test_wrong_password_rejected(self, session_factory):
        create_user(email="p@example.com", password="right", session_factory=session_factory)

        assert (
            authenticate(email="p@example.com", password="wrong", session_factory=session_factory)
            is None
        )

    def test_unknown_email_rejected(self, session_factory):
        assert authenticate(email="nobody@example.com", password="x", session_factory=session_factory) is None

    def test_duplicate_email_rejected(self, session_factory):
        create_user(email="dup@example.com", password="pw", session_factory=session_factory)

        with pytest.raises(ValueError):
            create_user(email="DUP@example.com", password="pw", session_factory=session_factory)

    @pytest.mark.parametrize("email,password", [("", "pw"), ("a@example.com", "")])
    def test_missing_credentials_rejected(self, session_factory, email, password):
        with pytest.raises(ValueError):
            create_user(email=email, password=password, session_factory=session_factory)

    def test_local_profile_is_reused(self, session_factory):
        first = ensure_local_user(session_factory)
        second = ensure_local_user(session_factory)

        assert first.email == LOCAL_EMAIL
        assert first.id == second.id


class TestLocalAuth:
    def test_sign_in_sets_current_session(self, session_factory):
        user = create_user(email="me@example.com", password="pw", session_factory=session_factory)
        auth = LocalAuth(session_factory)

        session = auth.sign_in("me@example.com", "pw")

        assert session is not None
        assert session.user_id == user.id
        assert auth.current() == session

    def test_failed_sign_in_leaves_no_session(self, session_factory):
        auth = LocalAuth(session_factory)

        assert auth.sign_in("me@example.com", "pw") is None
        assert auth.current() is None

    def test_offline_profile_and_sign_out(self, session_factory):
        auth = LocalAuth(session_factory)

        session = auth.sign_in_local()
        assert session.email == LOCAL_EMAIL

        auth.sign_out()
        assert auth.current() is None


class FakeGoTrue:
    def __init__(self, *, user=None, error=None):
        self.user = user
        self.error = error
        self.signed_out = False

    def sign_in_with_password(self, credentials):
        if self.error is not None:
            raise self.error
        self.credentials = credentials
        return SimpleNamespace(user=self.user)

    def get_user(self):
        if self.error is not None:
            raise self.error
        return None if self.user is None else SimpleNamespace(user=self.user)

    def sign_out(self):
        self.signed_out = True


def _client(**kwargs):
    return SimpleNamespace(auth=FakeGoTrue(**kwargs))


SUPABASE_USER = SimpleNamespace(id="6f1c2b1e-user", email="me@example.com")


class TestSupabaseAuth:
    def test_sign_in_returns_session(self):
        client = _client(user=SUPABASE_USER)
        auth = SupabaseAuth(client)

        session = auth.sign_in(" me@example.com ", "pw")

        assert session is not None
        assert session.user_id == "6f1c2b1e-user"
        assert client.auth.credentials == {"email": "me@example.com", "password": "pw"}

    def test_rejected_credentials_return_none(self):
        auth = SupabaseAuth(_client(error=AuthApiError("Invalid login credentials", 400, None)))

        assert auth.sign_in("me@example.com", "bad") is None
        assert auth.current() is None

    def test_current_restores_existing_session(self):
        auth = SupabaseAuth(_client(user=SUPABASE_USER))

        session = auth.current()

        assert session is not None
        assert session.email == "me@example.com"

    def test_current_tolerates_network_failure(self):
        auth = SupabaseAuth(_client(error=httpx.ConnectError("offline")))

        assert auth.current() is None

    def test_sign_out_clears_session(self):
        client = _client(user=SUPABASE_USER)
        auth = SupabaseAuth(client)
        auth.sign_in("me@example.com", "pw")

        auth.sign_out()

        assert client.auth.signed_out
        assert auth._session is None
