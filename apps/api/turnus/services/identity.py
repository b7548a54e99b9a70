# apps/api/turnus/services/identity.py
"""
Identity providers.

A provider maps an incoming request to a ``Caller`` (or ``None`` when the
request carries no usable identity). The core only ever sees the Caller, so a
real identity provider can replace the development user switcher without
touching any service.
"""
from __future__ import annotations

from typing import Callable, Optional

from fastapi import Request
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from turnus.core.config import Settings
from turnus.core.permissions import Caller
from turnus.models.models import User

IdentityProvider = Callable[[Request, Session], Optional[Caller]]


def _caller_for(db: Session, raw_id) -> Optional[Caller]:
    try:
        user_id = int(raw_id)
    except (TypeError, ValueError):
        return None
    user = db.get(User, user_id)
    if not user:
        return None
    return Caller(user_id=user.id, role=user.role, team_id=user.team_id)


def mock_identity(request: Request, db: Session) -> Optional[Caller]:
    """Development user switcher: ``X-User-Id`` names the acting user."""
    return _caller_for(db, request.headers.get("x-user-id"))


def jwt_identity(secret: str, algorithm: str = "HS256") -> IdentityProvider:
    def provider(request: Request, db: Session) -> Optional[Caller]:
        auth = request.headers.get("authorization") or ""
        if not auth.lower().startswith("bearer "):
            return None
        try:
            payload = jwt.decode(auth.split(" ", 1)[1], secret, algorithms=[algorithm])
        except JWTError:
            return None
        return _caller_for(db, payload.get("sub"))
    return provider


def provider_from_settings(cfg: Settings) -> IdentityProvider:
    if cfg.AUTH_MODE == "jwt":
        return jwt_identity(cfg.JWT_SECRET, cfg.JWT_ALGO)
    return mock_identity
