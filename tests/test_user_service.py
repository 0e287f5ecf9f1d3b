# File: tests/test_user_service.py

import math
import time

import pytest
from sqlalchemy.exc import IntegrityError

from user_api.core.exceptions import ForbiddenError, NotFoundError, UnauthorizedError
from user_api.models.user import User, UserRole
from user_api.schemas.user import UserCreate, UserUpdate


def make_users(service, count):
    return [
        service.create(UserCreate(name=f"User {i}", email=f"user{i}@x.com", password="pw"))
        for i in range(count)
    ]


def test_create_defaults_role_and_hides_password(service, alice):
    assert alice.id > 0
    assert alice.role == UserRole.USER
    assert "password" not in alice.model_dump()


def test_create_stores_hash_not_plaintext(service, db, alice):
    row = db.get(User, alice.id)
    assert row.password != "secret1"
    assert row.password.startswith("$2")
    assert service.validate_password("secret1", row.password)


def test_create_with_explicit_role(admin):
    assert admin.role == UserRole.ADMIN


def test_find_one_matches_created_record(service, alice):
    found = service.find_one(alice.id)
    assert (found.name, found.email, found.role) == (alice.name, alice.email, alice.role)


def test_find_one_is_idempotent(service, alice):
    assert service.find_one(alice.id) == service.find_one(alice.id)


def test_find_one_missing_raises_translated_not_found(service):
    with pytest.raises(NotFoundError) as exc:
        service.find_one(999)
    assert exc.value.message == "User not found"

    with pytest.raises(NotFoundError) as exc:
        service.find_one(999, lang="id")
    assert exc.value.message == "Pengguna tidak ditemukan"


def test_find_by_email(service, alice):
    user = service.find_by_email("a@x.com")
    assert user is not None
    assert user.id == alice.id
    assert service.find_by_email("nobody@x.com") is None


def test_duplicate_email_propagates_from_database(service, alice):
    with pytest.raises(IntegrityError):
        service.create(UserCreate(name="Other", email="a@x.com", password="pw"))


def test_find_all_pagination(service):
    make_users(service, 25)

    first = service.find_all(page=1, limit=10)
    assert [u.email for u in first.data] == [f"user{i}@x.com" for i in range(10)]
    assert first.total == 25
    assert first.totalPages == 3

    last = service.find_all(page=3, limit=10)
    assert len(last.data) == 5

    beyond = service.find_all(page=4, limit=10)
    assert beyond.data == []
    assert beyond.total == 25


@pytest.mark.parametrize("limit", [1, 3, 7, 50])
def test_find_all_bounds(service, limit):
    make_users(service, 8)
    result = service.find_all(page=1, limit=limit)
    assert len(result.data) <= limit
    assert result.totalPages == math.ceil(result.total / limit)


def test_find_all_empty_table(service):
    result = service.find_all()
    assert result.data == []
    assert result.total == 0
    assert result.totalPages == 0
    assert (result.page, result.limit) == (1, 10)


def test_update_partial_fields(service, alice):
    updated = service.update(alice.id, UserUpdate(email="a2@x.com"))
    assert updated.email == "a2@x.com"
    assert updated.name == "Alice"
    assert service.find_one(alice.id).email == "a2@x.com"


def test_update_rehashes_password(service, db, alice):
    service.update(alice.id, UserUpdate(password="newsecret"))
    row = db.get(User, alice.id)
    assert row.password != "newsecret"
    assert service.validate_password("newsecret", row.password)
    assert not service.validate_password("secret1", row.password)


def test_update_refreshes_updated_at_only(service, alice):
    # SQLite CURRENT_TIMESTAMP has one second resolution
    time.sleep(1.1)
    updated = service.update(alice.id, UserUpdate(name="Alicia"))
    assert updated.updated_at > alice.updated_at
    assert updated.created_at == alice.created_at


def test_update_role(service, alice):
    updated = service.update(alice.id, UserUpdate(role="admin"))
    assert updated.role == UserRole.ADMIN
    assert service.find_one(alice.id).role == UserRole.ADMIN


def test_update_missing_user_raises_not_found(service):
    with pytest.raises(NotFoundError):
        service.update(404, UserUpdate(name="Ghost"))


def test_delete_by_non_admin_is_forbidden_even_for_missing_id(service, alice, as_user):
    with pytest.raises(ForbiddenError) as exc:
        service.delete(alice.id, as_user)
    assert exc.value.message == "Only admins can delete users"

    with pytest.raises(ForbiddenError):
        service.delete(12345, as_user)

    assert service.find_one(alice.id).id == alice.id


def test_delete_by_admin(service, alice, as_admin):
    service.delete(alice.id, as_admin)
    with pytest.raises(NotFoundError):
        service.find_one(alice.id)


def test_delete_missing_by_admin_raises_not_found(service, as_admin):
    with pytest.raises(NotFoundError):
        service.delete(12345, as_admin, lang="id")


def test_login_returns_token_with_claims(service, alice):
    token = service.login("a@x.com", "secret1").access_token
    claims = service.tokens.decode_access_token(token)
    assert claims["sub"] == str(alice.id)
    assert claims["email"] == "a@x.com"
    assert claims["role"] == "user"
    assert claims["exp"] - claims["iat"] == 3600


def test_login_failures_are_indistinguishable(service, alice):
    with pytest.raises(UnauthorizedError) as unknown:
        service.login("nobody@x.com", "secret1")
    with pytest.raises(UnauthorizedError) as wrong:
        service.login("a@x.com", "wrong")

    assert unknown.value.message == wrong.value.message == "Invalid email or password"


def test_alice_scenario(service, as_admin):
    alice = service.create(UserCreate(name="Alice", email="a@x.com", password="secret1"))
    assert alice.id and alice.role == UserRole.USER

    assert service.login("a@x.com", "secret1").access_token
    with pytest.raises(UnauthorizedError):
        service.login("a@x.com", "wrong")

    service.update(alice.id, UserUpdate(email="a2@x.com"))
    assert service.find_one(alice.id).email == "a2@x.com"

    service.delete(alice.id, as_admin)
    with pytest.raises(NotFoundError):
        service.find_one(alice.id)
