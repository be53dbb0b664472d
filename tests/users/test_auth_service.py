from __future__ import annotations

from datetime import timedelta

import jwt
import pytest

from src.kintai_system.kintai_system.core.enums import Role
from src.kintai_system.kintai_system.core.exceptions import (
    AuthenticationError,
    DuplicateError,
    NotFoundError,
    ValidationError,
)
from src.kintai_system.kintai_system.users.service import AuthService, UserService
from src.kintai_system.kintai_system.users.tokens import TokenService
from tests.fakes import PASSWORD, FakeDepartmentRepo, FakeUserRepo, make_user


def _tokens(**kwargs):
    return TokenService(secret="access-secret", refresh_secret="refresh-secret", **kwargs)


def _auth(users=None, tokens=None):
    users = users or FakeUserRepo([make_user(1), make_user(2, role=Role.ADMIN, email="admin@company.com")])
    return AuthService(users, tokens or _tokens()), users


def test_login_returns_user_and_both_tokens():
    auth, _ = _auth()
    tokens = _tokens()

    result = auth.authenticate("admin@company.com", PASSWORD)

    assert result.user.user_id == 2
    claims = tokens.decode_access(result.token)
    assert claims.user_id == 2 and claims.is_admin
    assert tokens.decode_refresh(result.refresh_token).email == "admin@company.com"
    assert "password_hash" not in result.to_dict()["user"]


def test_login_requires_both_fields():
    auth, _ = _auth()
    with pytest.raises(ValidationError):
        auth.authenticate("", PASSWORD)
    with pytest.raises(ValidationError):
        auth.authenticate("user1@company.com", "")
    with pytest.raises(ValidationError):
        auth.authenticate(123, "x")
    with pytest.raises(ValidationError):
        auth.authenticate("user1@company.com", 1234567)


@pytest.mark.parametrize("email,password", [("nobody@company.com", PASSWORD), ("user1@company.com", "wrong")])
def test_login_rejects_bad_credentials(email, password):
    auth, _ = _auth()
    with pytest.raises(AuthenticationError) as exc:
        auth.authenticate(email, password)
    assert exc.value.status_code == 401


def test_access_and_refresh_tokens_are_not_interchangeable():
    tokens = _tokens()
    user = make_user(1)

    with pytest.raises(AuthenticationError):
        tokens.decode_access(tokens.issue_refresh(user))
    with pytest.raises(AuthenticationError):
        tokens.decode_refresh(tokens.issue_access(user))


def test_expired_token_is_rejected():
    tokens = _tokens(access_ttl=timedelta(seconds=-1))

    with pytest.raises(AuthenticationError) as exc:
        tokens.decode_access(tokens.issue_access(make_user(1)))
    assert exc.value.message == "Token has expired"


def test_tokens_are_hs256_with_type_claim():
    token = _tokens().issue_access(make_user(1))
    payload = jwt.decode(token, "access-secret", algorithms=["HS256"])

    assert payload["type"] == "access"
    assert payload["role"] == "employee"
    assert payload["exp"] - payload["iat"] == 24 * 3600


def test_refresh_issues_new_access_token():
    auth, _ = _auth()
    refresh = _tokens().issue_refresh(make_user(1))

    token = auth.refresh(refresh)

    assert _tokens().decode_access(token).user_id == 1


def test_refresh_rejects_missing_invalid_and_deleted_user():
    auth, _ = _auth()
    with pytest.raises(ValidationError):
        auth.refresh("")
    with pytest.raises(AuthenticationError):
        auth.refresh("garbage")
    with pytest.raises(AuthenticationError):
        auth.refresh(_tokens().issue_refresh(make_user(42)))


def test_current_user_not_found():
    auth, _ = _auth()
    with pytest.raises(NotFoundError):
        auth.get_current_user(42)


def test_create_account_validates_and_hashes():
    users = FakeUserRepo([make_user(1)])
    service = UserService(users, FakeDepartmentRepo())

    user = service.create_account(
        employee_code="E010",
        full_name="Tanaka",
        email="tanaka@company.com",
        password="secret1",
        dept_id=1,
    )

    assert user.role == Role.EMPLOYEE
    assert user.password_hash != "secret1"


@pytest.mark.parametrize(
    "overrides,error",
    [
        ({"email": "user1@company.com"}, DuplicateError),
        ({"employee_code": "E001"}, DuplicateError),
        ({"password": "12345"}, ValidationError),
        ({"dept_id": 9}, ValidationError),
        ({"full_name": " "}, ValidationError),
        ({"password": 1234567}, ValidationError),
        ({"email": 42}, ValidationError),
    ],
)
def test_create_account_rejections(overrides, error):
    service = UserService(FakeUserRepo([make_user(1)]), FakeDepartmentRepo())
    kwargs = {
        "employee_code": "E010",
        "full_name": "Tanaka",
        "email": "tanaka@company.com",
        "password": "secret1",
        "dept_id": 1,
    }
    kwargs.update(overrides)

    with pytest.raises(error):
        service.create_account(**kwargs)
