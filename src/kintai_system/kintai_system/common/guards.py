from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Callable

from flask import g, request

from ..core.exceptions import AuthenticationError, AuthorizationError
from ..users.tokens import TokenClaims, TokenService


@dataclass(frozen=True)
class Guards:
    login_required: Callable
    admin_required: Callable


def current_user() -> TokenClaims:
    """Claims of the authenticated caller (set by the guards)."""
    return g.current_user


def build_guards(tokens: TokenService) -> Guards:
    def _authenticate() -> TokenClaims:
        header = request.headers.get("Authorization", "")
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise AuthenticationError("Access token is missing")
        claims = tokens.decode_access(token.strip())
        g.current_user = claims
        return claims

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            _authenticate()
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            claims = _authenticate()
            if not claims.is_admin:
                raise AuthorizationError("Administrator permission is required")
            return view(*args, **kwargs)

        return wrapper

    return Guards(login_required=login_required, admin_required=admin_required)
