from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from ..core.constants import ACCESS_TOKEN_HOURS, JWT_ALGORITHM, REFRESH_TOKEN_DAYS
from ..core.enums import Role, TokenType
from ..core.exceptions import AuthenticationError
from .model import User


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a bearer token."""

    user_id: int
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class TokenService:
    """Issue and verify HS256 access/refresh tokens (PyJWT)."""

    def __init__(
        self,
        *,
        secret: str,
        refresh_secret: str,
        access_ttl: timedelta = timedelta(hours=ACCESS_TOKEN_HOURS),
        refresh_ttl: timedelta = timedelta(days=REFRESH_TOKEN_DAYS),
    ):
        if not secret or not refresh_secret:
            raise ValueError("JWT secrets must be configured")
        self._secret = secret
        self._refresh_secret = refresh_secret
        self._access_ttl = access_ttl
        self._refresh_ttl = refresh_ttl

    def issue_access(self, user: User) -> str:
        return self._encode(user, TokenType.ACCESS, self._secret, self._access_ttl)

    def issue_refresh(self, user: User) -> str:
        return self._encode(user, TokenType.REFRESH, self._refresh_secret, self._refresh_ttl)

    def decode_access(self, token: str) -> TokenClaims:
        return self._decode(token, TokenType.ACCESS, self._secret)

    def decode_refresh(self, token: str) -> TokenClaims:
        return self._decode(token, TokenType.REFRESH, self._refresh_secret)

    @staticmethod
    def _encode(user: User, token_type: TokenType, secret: str, ttl: timedelta) -> str:
        issued = datetime.now(timezone.utc)
        payload = {
            "user_id": user.user_id,
            "email": user.email,
            "role": user.role.value,
            "type": token_type.value,
            "iat": issued,
            "exp": issued + ttl,
        }
        return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)

    @staticmethod
    def _decode(token: str, token_type: TokenType, secret: str) -> TokenClaims:
        try:
            payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token")

        if payload.get("type") != token_type.value:
            raise AuthenticationError("Invalid token")
        try:
            return TokenClaims(
                user_id=int(payload["user_id"]),
                email=str(payload["email"]),
                role=Role(payload["role"]),
            )
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token")
