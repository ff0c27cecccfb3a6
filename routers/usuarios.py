# routers/usuarios.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from core.config import settings
from core.logging_config import logger
from core.permissions import (
    get_default_permissions,
    get_effective_permissions,
    is_customized,
    normalize_permissions,
)
from core.roles import get_role_label, parse_role
from dependencies.auth import CurrentUser, requires_permission
from models.enums import Action, Module, Role
from models.permissions import PermissionMatrix
from models.user import (
    UpdateAtivoRequest,
    UpdatePermissoesRequest,
    UpdateRoleRequest,
    UsuarioBase,
    UsuarioPermissoesRead,
    UsuarioRead,
)
from services.usuarios import (
    count_admins,
    fetch_usuario,
    list_usuarios,
    update_usuario,
)

router = APIRouter(
    prefix="/usuarios",
    tags=["Users & Permissions"],
)

# Managing users = editing the company settings module
requires_settings_edit = requires_permission(Module.settings, Action.edit)


def manage_users(current_user: CurrentUser = Depends(requires_settings_edit)) -> CurrentUser:
    if current_user.empresa_id is None:
        raise HTTPException(403, "User is not linked to a company")
    return current_user


# -----------------------------------------------------
# Helpers
# -----------------------------------------------------
def _load_tenant_user(usuario_id: str, current_user: CurrentUser) -> dict:
    usuario = fetch_usuario(usuario_id)
    if not usuario or usuario.get("empresa_id") != current_user.empresa_id:
        raise HTTPException(404, "User not found")
    return usuario


def _guard_self(usuario_id: str, current_user: CurrentUser):
    if usuario_id == current_user.id:
        raise HTTPException(400, "You cannot change your own role, permissions or status.")


def _guard_last_admin(usuario: dict, empresa_id: int, new_role: Role = Role.admin, ativo: bool = True):
    """Refuse writes that leave the company without an active admin."""
    if parse_role(usuario.get("role")) != Role.admin or not usuario.get("ativo", True):
        return
    if new_role == Role.admin and ativo:
        return
    if count_admins(empresa_id) <= 1:
        raise HTTPException(400, "Cannot demote the last remaining admin of the company.")


def _stored_override(role: Role, stored) -> Optional[PermissionMatrix]:
    # shown complete, gaps filled from the user's own role
    if not is_customized(stored):
        return None
    return normalize_permissions(stored, baseline=role)


def _usuario_read(usuario: dict) -> UsuarioRead:
    role = parse_role(usuario.get("role"))
    stored = usuario.get("permissoes")
    fields = {k: v for k, v in usuario.items() if k in UsuarioBase.model_fields}
    fields["role"] = role
    return UsuarioRead(
        **fields,
        role_label=get_role_label(role),
        personalizado=is_customized(stored),
        permissoes=_stored_override(role, stored),
        efetivas=get_effective_permissions(role, stored),
    )


def _permissoes_read(usuario: dict) -> UsuarioPermissoesRead:
    role = parse_role(usuario.get("role"))
    stored = usuario.get("permissoes")
    return UsuarioPermissoesRead(
        usuario_id=usuario["id"],
        role=role,
        role_label=get_role_label(role),
        personalizado=is_customized(stored),
        permissoes=_stored_override(role, stored),
        defaults=get_default_permissions(role),
        efetivas=get_effective_permissions(role, stored),
    )


def _save(usuario_id: str, current_user: CurrentUser, changes: dict) -> dict:
    updated = update_usuario(usuario_id, current_user.empresa_id, changes)
    if not updated:
        raise HTTPException(404, "User not found")
    return updated


# -----------------------------------------------------
# LIST USERS OF THE CALLER'S COMPANY
# -----------------------------------------------------
@router.get("", response_model=List[UsuarioRead], summary="List company users with effective permissions")
def get_usuarios(current_user: CurrentUser = Depends(manage_users)):
    return [_usuario_read(u) for u in list_usuarios(current_user.empresa_id)]


# -----------------------------------------------------
# READ ONE USER'S PERMISSIONS
# -----------------------------------------------------
@router.get("/{usuario_id}/permissoes", response_model=UsuarioPermissoesRead, summary="Permissions of a user")
def get_usuario_permissoes(
    usuario_id: str,
    current_user: CurrentUser = Depends(manage_users),
):
    return _permissoes_read(_load_tenant_user(usuario_id, current_user))


# -----------------------------------------------------
# SAVE ROLE + OVERRIDE (permissions modal)
# -----------------------------------------------------
@router.put("/{usuario_id}/permissoes", response_model=UsuarioPermissoesRead, summary="Set role and custom permissions")
def put_usuario_permissoes(
    usuario_id: str,
    payload: UpdatePermissoesRequest,
    current_user: CurrentUser = Depends(manage_users),
):
    _guard_self(usuario_id, current_user)
    usuario = _load_tenant_user(usuario_id, current_user)
    _guard_last_admin(usuario, current_user.empresa_id, new_role=payload.role)

    normalized = normalize_permissions(payload.permissoes, baseline=payload.role)
    stored = normalized.to_dict() if normalized is not None else None

    updated = _save(usuario_id, current_user, {"role": payload.role.value, "permissoes": stored})
    logger.info(
        f"User {current_user.id} set role={payload.role.value} "
        f"customized={stored is not None} on usuario {usuario_id}"
    )
    return _permissoes_read(updated)


# -----------------------------------------------------
# CHANGE ROLE ONLY
# -----------------------------------------------------
@router.patch("/{usuario_id}/role", response_model=UsuarioPermissoesRead, summary="Change a user's role")
def patch_usuario_role(
    usuario_id: str,
    payload: UpdateRoleRequest,
    current_user: CurrentUser = Depends(manage_users),
):
    _guard_self(usuario_id, current_user)
    usuario = _load_tenant_user(usuario_id, current_user)
    _guard_last_admin(usuario, current_user.empresa_id, new_role=payload.role)

    changes = {"role": payload.role.value}
    role_changed = parse_role(usuario.get("role")) != payload.role
    if role_changed and settings.CLEAR_OVERRIDES_ON_ROLE_CHANGE:
        changes["permissoes"] = None

    updated = _save(usuario_id, current_user, changes)
    logger.info(
        f"User {current_user.id} changed role of usuario {usuario_id} "
        f"to {payload.role.value} (override cleared: {'permissoes' in changes})"
    )
    return _permissoes_read(updated)


# -----------------------------------------------------
# RESET TO ROLE DEFAULTS
# -----------------------------------------------------
@router.delete("/{usuario_id}/permissoes", response_model=UsuarioPermissoesRead, summary="Reset to role defaults")
def delete_usuario_permissoes(
    usuario_id: str,
    current_user: CurrentUser = Depends(manage_users),
):
    _guard_self(usuario_id, current_user)
    _load_tenant_user(usuario_id, current_user)

    updated = _save(usuario_id, current_user, {"permissoes": None})
    logger.info(f"User {current_user.id} reset permissions of usuario {usuario_id} to role defaults")
    return _permissoes_read(updated)


# -----------------------------------------------------
# ACTIVATE / DEACTIVATE
# -----------------------------------------------------
@router.patch("/{usuario_id}/ativo", response_model=UsuarioRead, summary="Activate or deactivate a user")
def patch_usuario_ativo(
    usuario_id: str,
    payload: UpdateAtivoRequest,
    current_user: CurrentUser = Depends(manage_users),
):
    _guard_self(usuario_id, current_user)
    usuario = _load_tenant_user(usuario_id, current_user)
    _guard_last_admin(usuario, current_user.empresa_id, ativo=payload.ativo)

    updated = _save(usuario_id, current_user, {"ativo": payload.ativo})
    logger.info(f"User {current_user.id} set ativo={payload.ativo} on usuario {usuario_id}")
    return _usuario_read(updated)
