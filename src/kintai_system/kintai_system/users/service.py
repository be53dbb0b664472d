from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DuplicateError, NotFoundError, ValidationError
from .department_repository import DepartmentRepository
from .model import User
from .repository import UserRepository
from .tokens import TokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    """What the client keeps after login."""

    user: User
    token: str
    refresh_token: str

    def to_dict(self) -> dict:
        return {"user": self.user.to_dict(), "token": self.token, "refresh_token": self.refresh_token}


class AuthService:
    """Use case: authenticate user (login) and renew tokens."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def authenticate(self, email: str, password: str) -> LoginResult:
        if not email or not password:
            raise ValidationError("Email and password are required")
        if not isinstance(email, str) or not isinstance(password, str):
            raise ValidationError("Email and password must be strings")

        user = self._users.get_by_email(email.strip())
        if not user:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        logger.info("user %s logged in", user.user_id)
        return LoginResult(
            user=user,
            token=self._tokens.issue_access(user),
            refresh_token=self._tokens.issue_refresh(user),
        )

    def refresh(self, refresh_token: str) -> str:
        if not refresh_token:
            raise ValidationError("Refresh token is required")

        try:
            claims = self._tokens.decode_refresh(refresh_token)
        except AuthenticationError:
            raise AuthenticationError("Invalid refresh token")

        user = self._users.get_by_id(claims.user_id)
        if not user:
            raise AuthenticationError("Invalid refresh token")
        return self._tokens.issue_access(user)

    def get_current_user(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user


class UserService:
    """Use case: manage employees (admin)."""

    def __init__(self, users: UserRepository, departments: DepartmentRepository):
        self._users = users
        self._departments = departments

    def list_admin_view(self):
        return self._users.list_admin_view()

    def create_account(
        self,
        *,
        employee_code: str,
        full_name: str,
        email: str,
        password: str,
        role: Role = Role.EMPLOYEE,
        dept_id: Optional[int] = None,
    ) -> User:
        employee_code = require_non_empty(employee_code, "Employee code")
        full_name = require_non_empty(full_name, "Name")
        email = require_non_empty(email, "Email")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if "@" not in email:
            raise ValidationError("Email is invalid")
        if self._users.get_by_email(email):
            raise DuplicateError("Email already exists")
        if self._users.get_by_employee_code(employee_code):
            raise DuplicateError("Employee code already exists")
        if dept_id is not None and not self._departments.get_by_id(dept_id):
            raise ValidationError("Department does not exist")

        user_id = self._users.create_user(
            employee_code=employee_code,
            full_name=full_name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            dept_id=dept_id,
        )
        logger.info("created user %s (%s)", user_id, role.value)
        created = self._users.get_by_id(user_id)
        if not created:
            raise NotFoundError("User not found")
        return created
