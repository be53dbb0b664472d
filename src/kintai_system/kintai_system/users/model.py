from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: employee account.

    Plain data object; no database access here.
    """

    user_id: int
    employee_code: str
    full_name: str
    email: str
    password_hash: str
    role: Role
    dept_id: Optional[int]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "employee_code": self.employee_code,
            "full_name": self.full_name,
            "email": self.email,
            "role": self.role.value,
            "dept_id": self.dept_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
