"""Tests for the AdminSession aggregate state machine."""

import pytest
from protean.exceptions import ValidationError
from storefront.admin.events import AdminSignedIn, AdminSignedOut
from storefront.admin.session import AdminSession, SessionStatus


class TestCreation:
    def test_new_session_is_unauthenticated(self):
        session = AdminSession.create()
        assert session.status == SessionStatus.UNAUTHENTICATED.value
        assert session.token is None
        assert not session.is_authenticated

    def test_restore_with_token(self):
        session = AdminSession.restore("tok-1")
        assert session.is_authenticated
        assert session.token == "tok-1"
        assert session._events == []

    def test_restore_without_token(self):
        assert not AdminSession.restore(None).is_authenticated


class TestSignIn:
    def test_sign_in(self):
        session = AdminSession.create()
        session.sign_in("tok-1")
        assert session.is_authenticated
        assert session.token == "tok-1"
        assert isinstance(session._events[-1], AdminSignedIn)

    def test_sign_in_requires_token(self):
        session = AdminSession.create()
        with pytest.raises(ValidationError):
            session.sign_in("")
        assert not session.is_authenticated


class TestSignOut:
    def test_sign_out(self):
        session = AdminSession.restore("tok-1")
        session.sign_out()
        assert not session.is_authenticated
        assert session.token is None
        event = session._events[-1]
        assert isinstance(event, AdminSignedOut)
        assert event.reason == "logout"

    def test_sign_out_when_unauthenticated_is_noop(self):
        session = AdminSession.create()
        session.sign_out()
        assert session._events == []
