import uuid
from types import SimpleNamespace

import pytest

from estoque.errors import NotSignedIn
from estoque.session import SessionContext, SessionStore


def make_user(role="user"):
    return SimpleNamespace(
        id=uuid.uuid4(),
        full_name="Maria",
        email="maria@example.com",
        setor_id=uuid.uuid4(),
        role=role,
    )


def test_context_from_user():
    user = make_user(role="admin")
    context = SessionContext.from_user(user)

    assert context.user_id == user.id
    assert context.setor_id == user.setor_id
    assert context.is_admin


def test_context_is_read_only():
    context = SessionContext.from_user(make_user())

    with pytest.raises(Exception):
        context.role = "admin"


def test_store_lifecycle():
    store = SessionStore()
    with pytest.raises(NotSignedIn):
        store.current

    context = store.sign_in(SessionContext.from_user(make_user()))
    assert store.is_signed_in
    assert store.current is context

    store.sign_out()
    assert not store.is_signed_in
    with pytest.raises(NotSignedIn):
        store.current
