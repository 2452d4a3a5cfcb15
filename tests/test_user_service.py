"""UserService behaviour against an in-memory database."""
from datetime import datetime

import pytest

from catalog_api.auth import verify_password
from catalog_api.errors import ConflictError, NotFoundError
from catalog_api.models.user import User, UserRole
from catalog_api.schemas.user import UserUpdate
from catalog_api.services.users import USER_DEFAULTS, UserService, apply_defaults


def test_apply_defaults_fills_missing_and_none():
    merged = apply_defaults({"username": "x", "role": None}, USER_DEFAULTS)
    assert merged["role"] == UserRole.USER
    assert isinstance(merged["created_at"], datetime)


def test_apply_defaults_keeps_supplied_values():
    merged = apply_defaults({"role": UserRole.ADMIN}, {"role": UserRole.USER, "n": lambda: 3})
    assert merged == {"role": UserRole.ADMIN, "n": 3}


def test_create_applies_defaults_and_hashes(db, make_user):
    user = make_user()

    assert user.id is not None
    assert user.role == UserRole.USER
    assert user.is_active is True
    assert user.created_at is not None
    assert user.hashed_password != "secret123"
    assert verify_password("secret123", user.hashed_password)


@pytest.mark.parametrize("clash", ["username", "email"])
def test_create_duplicate_conflicts(db, make_user, clash):
    make_user(username="alice", email="alice@example.com")
    kwargs = {"username": "other", "email": "other@example.com"}
    kwargs[clash] = "alice" if clash == "username" else "alice@example.com"

    with pytest.raises(ConflictError):
        make_user(**kwargs)

    # session still usable after the rollback
    assert db.query(User).count() == 1


def test_find_by_username(db, make_user):
    make_user()
    service = UserService(db)
    assert service.find_by_username("alice").email == "alice@example.com"
    assert service.find_by_username("nobody") is None


def test_find_by_id_missing(db):
    with pytest.raises(NotFoundError, match="User not found"):
        UserService(db).find_by_id(404)


def test_list_and_search(db, make_user):
    make_user("alice")
    make_user("alicia")
    make_user("bob")
    service = UserService(db)

    assert [u.username for u in service.list()] == ["alice", "alicia", "bob"]
    assert [u.username for u in service.search_by_username("ALI")] == ["alice", "alicia"]
    assert service.search_by_username("zed") == []


def test_update_partial_preserves_other_fields(db, make_user):
    user = make_user()
    updated = UserService(db).update(user.id, UserUpdate(email="new@example.com"))

    assert updated.email == "new@example.com"
    assert updated.username == "alice"
    assert updated.role == UserRole.USER
    assert verify_password("secret123", updated.hashed_password)


def test_update_rehashes_password(db, make_user):
    user = make_user()
    updated = UserService(db).update(user.id, UserUpdate(password="changed99"))

    assert verify_password("changed99", updated.hashed_password)
    assert not verify_password("secret123", updated.hashed_password)


def test_update_missing_user(db):
    with pytest.raises(NotFoundError):
        UserService(db).update(99, UserUpdate(email="x@example.com"))


def test_update_to_taken_username_conflicts(db, make_user):
    make_user("alice")
    bob = make_user("bob")
    with pytest.raises(ConflictError):
        UserService(db).update(bob.id, UserUpdate(username="alice"))


def test_remove_is_hard_delete(db, make_user):
    user = make_user()
    service = UserService(db)
    service.remove(user.id)

    assert db.query(User).count() == 0
    with pytest.raises(NotFoundError):
        service.remove(user.id)


def test_activate_deactivate(db, make_user):
    user = make_user()
    service = UserService(db)

    assert service.deactivate(user.id).is_active is False
    assert service.activate(user.id).is_active is True
    with pytest.raises(NotFoundError):
        service.deactivate(12345)


@pytest.mark.parametrize("term", ["%", "_", "\\"])
def test_search_treats_wildcards_literally(db, make_user, term):
    make_user("alice")
    make_user("bob")
    assert UserService(db).search_by_username(term) == []


def test_search_matches_literal_underscore(db, make_user):
    make_user("a_b")
    make_user("axb")
    assert [u.username for u in UserService(db).search_by_username("_")] == ["a_b"]
