"""Tests for session.py — view/auth state machine and admin credentials."""
from datetime import timedelta

import pytest

from session import (
    ADMIN_FRAGMENT,
    LOGIN_ERROR,
    SESSION_FLAG_KEY,
    CredentialVerifier,
    SessionContext,
    View,
    ViewStateMachine,
    create_access_token,
    decode_access_token,
    pwd_context,
)

USERNAME = "admin@511"
PASSWORD = "Pw@2000"


@pytest.fixture(scope="module")
def verifier():
    return CredentialVerifier(USERNAME, pwd_context.hash(PASSWORD))


def test_verifier_accepts_only_exact_credentials(verifier):
    assert verifier.verify(USERNAME, PASSWORD) is True
    assert verifier.verify(USERNAME, "wrong") is False
    assert verifier.verify("someone", PASSWORD) is False
    assert verifier.verify("", "") is False


def test_fresh_session_starts_on_portfolio(verifier):
    machine = ViewStateMachine(SessionContext(fragment=""), verifier)
    assert machine.start() == View.PORTFOLIO
    assert machine.authenticated is False


def test_bare_visit_to_admin_route_shows_portfolio(verifier):
    machine = ViewStateMachine(SessionContext(fragment=ADMIN_FRAGMENT), verifier)
    assert machine.start() == View.PORTFOLIO


def test_navigating_to_admin_unauthenticated_shows_login(verifier):
    machine = ViewStateMachine(SessionContext(), verifier)
    machine.start()
    assert machine.navigate(ADMIN_FRAGMENT) == View.LOGIN
    assert machine.navigate("#/anything-else") == View.PORTFOLIO


def test_request_login_sets_admin_fragment(verifier):
    context = SessionContext()
    machine = ViewStateMachine(context, verifier)
    machine.start()
    assert machine.request_login() == View.LOGIN
    assert context.fragment == ADMIN_FRAGMENT


def test_failed_login_stays_on_login_with_message(verifier):
    context = SessionContext()
    machine = ViewStateMachine(context, verifier)
    machine.request_login()
    assert machine.login(USERNAME, "nope") is False
    assert machine.state == View.LOGIN
    assert machine.login_error == LOGIN_ERROR
    assert SESSION_FLAG_KEY not in context.storage


def test_login_reload_logout_scenario(verifier):
    context = SessionContext(fragment="")
    machine = ViewStateMachine(context, verifier)
    assert machine.start() == View.PORTFOLIO

    machine.request_login()
    assert machine.login(USERNAME, PASSWORD) is True
    assert machine.state == View.ADMIN
    assert machine.login_error is None
    assert context.fragment == "#/admin"
    assert SESSION_FLAG_KEY in context.storage

    # reload within the same session keeps the flag
    reloaded = ViewStateMachine(SessionContext(context.fragment, context.storage), verifier)
    assert reloaded.start() == View.ADMIN
    assert reloaded.authenticated is True

    assert reloaded.logout() == View.PORTFOLIO
    assert reloaded.context.fragment == "#"
    assert SESSION_FLAG_KEY not in context.storage
    assert reloaded.navigate(ADMIN_FRAGMENT) == View.LOGIN


def test_session_end_clears_flag(verifier):
    context = SessionContext()
    machine = ViewStateMachine(context, verifier)
    machine.login(USERNAME, PASSWORD)
    context.end()

    fresh = ViewStateMachine(SessionContext(ADMIN_FRAGMENT, context.storage), verifier)
    assert fresh.start() == View.PORTFOLIO
    assert fresh.navigate(ADMIN_FRAGMENT) == View.LOGIN


def test_forged_or_expired_flag_counts_as_logged_out(verifier):
    context = SessionContext(ADMIN_FRAGMENT)
    context.storage.set(SESSION_FLAG_KEY, "true")
    assert ViewStateMachine(context, verifier).start() == View.PORTFOLIO

    expired = create_access_token({"sub": USERNAME, "role": "admin"}, expires_delta=timedelta(minutes=-5))
    context.storage.set(SESSION_FLAG_KEY, expired)
    assert ViewStateMachine(context, verifier).navigate(ADMIN_FRAGMENT) == View.LOGIN


def test_token_without_admin_role_is_rejected():
    token = create_access_token({"sub": USERNAME, "role": "viewer"})
    assert decode_access_token(token) is None
    assert decode_access_token(create_access_token({"sub": USERNAME, "role": "admin"}))["sub"] == USERNAME
