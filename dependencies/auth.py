from typing import Any, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from supabase import Client

from core.logging_config import logger
from core.roles import parse_role
from core.supabase_client import get_supabase_client
from models.enums import Role
from services.usuarios import fetch_usuario


bearer_scheme = HTTPBearer()


# ============================================================
# Current User Model (usuarios row behind the token)
# ============================================================
class CurrentUser(BaseModel):
    id: str
    email: str
    role: Role
    empresa_id: Optional[int] = None
    nome: Optional[str] = None
    ativo: bool = True

    # usuarios.permissoes: None means "role defaults"
    permissoes: Optional[Any] = None


def current_user_from_row(row: dict, email: Optional[str] = None) -> CurrentUser:
    """
    Build the identity from a usuarios row.
    An unknown stored role raises InvalidRole (no silent fallback).
    """
    return CurrentUser(
        id=row["id"],
        email=row.get("email") or email or "",
        role=parse_role(row.get("role")),
        empresa_id=row.get("empresa_id"),
        nome=row.get("nome"),
        ativo=bool(row.get("ativo", True)),
        permissoes=row.get("permissoes"),
    )


# ============================================================
# AUTH DECODING (Supabase: validates JWT + loads usuarios row)
# ============================================================
def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> CurrentUser:

    token = credentials.credentials

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    client: Client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    # ---------------------------------------------------------
    # Validate JWT via Supabase GoTrue
    # ---------------------------------------------------------
    try:
        auth_resp = client.auth.get_user(token)
    except Exception as e:
        logger.info(f"Token validation failed: {e}")
        raise unauthorized

    if not auth_resp or not auth_resp.user:
        raise unauthorized
    auth_user = auth_resp.user

    # ---------------------------------------------------------
    # Load role / permissoes / tenant
    # ---------------------------------------------------------
    row = fetch_usuario(auth_user.id)
    if not row:
        raise HTTPException(403, "User is not registered in any company")

    user = current_user_from_row(row, email=auth_user.email)
    if not user.ativo:
        raise HTTPException(403, "User is inactive")

    return user


# ============================================================
# ROLE CHECKER (basic role list guard)
# ============================================================
def requires_role(allowed_roles: list):
    allowed = [parse_role(r) for r in allowed_roles]

    def checker(current_user: CurrentUser = Depends(get_current_user)):
        if current_user.role not in allowed:
            raise HTTPException(
                status_code=403,
                detail=f"Requires one of: {[r.value for r in allowed]}",
            )
        return current_user
    return checker


# ============================================================
# PERMISSION CHECK (DELEGATES TO permission_helpers)
# ============================================================
def requires_permission(module, action):
    """
    Thin wrapper so routes can still import from dependencies.auth.
    Real policy logic lives in core.permission_helpers.
    """
    from core.permission_helpers import requires_permission as new_checker
    return new_checker(module, action)

