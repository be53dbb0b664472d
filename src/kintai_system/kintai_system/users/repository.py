from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_employee_code(self, employee_code: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        employee_code: str,
        full_name: str,
        email: str,
        password_hash: str,
        role: Role,
        dept_id: Optional[int],
    ) -> int:
        raise NotImplementedError

    def list_admin_view(self) -> Sequence[dict]:
        raise NotImplementedError
