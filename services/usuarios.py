# services/usuarios.py

"""
Data access for the usuarios table: role, permissoes override and
tenant (empresa_id) per user. Thin wrappers over the Supabase client.
"""

from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from supabase import Client

from core.cache import cache_delete, cache_get, cache_set
from core.config import settings
from core.errors import handle_supabase_error
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from models.enums import Role


USUARIO_COLUMNS = "id, email, nome, empresa_id, role, permissoes, ativo, cargo, avatar_url, created_at"


def _client() -> Client:
    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")
    return client


def _cache_key(usuario_id: str) -> str:
    return f"usuario:{usuario_id}"


def invalidate_usuario(usuario_id: str):
    cache_delete(_cache_key(usuario_id))


# -----------------------------------------------------
# Reads
# -----------------------------------------------------
def fetch_usuario(usuario_id: str) -> Optional[Dict[str, Any]]:
    cached = cache_get(_cache_key(usuario_id))
    if cached is not None:
        return cached

    client = _client()
    try:
        result = (
            client.table(settings.USERS_TABLE)
            .select(USUARIO_COLUMNS)
            .eq("id", usuario_id)
            .limit(1)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to load user")

    rows = result.data or []
    if not rows:
        return None

    cache_set(_cache_key(usuario_id), rows[0], ttl_seconds=settings.PERMISSIONS_CACHE_TTL)
    return rows[0]


def list_usuarios(empresa_id: int) -> List[Dict[str, Any]]:
    client = _client()
    try:
        result = (
            client.table(settings.USERS_TABLE)
            .select(USUARIO_COLUMNS)
            .eq("empresa_id", empresa_id)
            .order("created_at", desc=True)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to list users")

    return result.data or []


def count_admins(empresa_id: int) -> int:
    """Active admins of a tenant."""
    client = _client()
    try:
        result = (
            client.table(settings.USERS_TABLE)
            .select("id")
            .eq("empresa_id", empresa_id)
            .eq("role", Role.admin.value)
            .eq("ativo", True)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to count admins")

    return len(result.data or [])


# -----------------------------------------------------
# Writes (always scoped to the caller's tenant)
# -----------------------------------------------------
def update_usuario(usuario_id: str, empresa_id: int, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    client = _client()
    try:
        result = (
            client.table(settings.USERS_TABLE)
            .update(changes)
            .eq("id", usuario_id)
            .eq("empresa_id", empresa_id)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to update user")

    invalidate_usuario(usuario_id)

    rows = result.data or []
    if not rows:
        return None

    logger.info(f"Updated usuario {usuario_id} (empresa {empresa_id}): {sorted(changes)}")
    return rows[0]
