# routers/permissoes.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from core.errors import PermissionsError
from core.permission_helpers import get_user_permissions, has_permission
from core.permissions import get_default_permissions, is_customized
from core.roles import (
    CatalogEntry,
    get_role_label,
    list_actions,
    list_modules,
    list_roles,
    parse_action,
    parse_module,
    parse_role,
)
from dependencies.auth import get_current_user, CurrentUser
from models.permissions import PermissionMatrix
from models.user import MinhasPermissoesRead, PermissaoCheckRead

router = APIRouter(
    prefix="/permissoes",
    tags=["Permissions"],
    dependencies=[Depends(get_current_user)],
)


# ============================================================
# Catalogs (drive the permission matrix UI)
# ============================================================
@router.get("/roles", response_model=List[CatalogEntry], summary="List roles")
def get_roles():
    return list_roles()


@router.get("/modulos", response_model=List[CatalogEntry], summary="List protected modules")
def get_modules():
    return list_modules()


@router.get("/acoes", response_model=List[CatalogEntry], summary="List actions")
def get_actions():
    return list_actions()


# ============================================================
# Defaults for a role (shown while editing a user)
# ============================================================
@router.get("/defaults/{role}", response_model=PermissionMatrix, summary="Default matrix for a role")
def get_role_defaults(role: str):
    try:
        return get_default_permissions(parse_role(role))
    except PermissionsError as e:
        raise HTTPException(400, e.message)


# ============================================================
# Caller's own permissions
# ============================================================
@router.get("/me", response_model=MinhasPermissoesRead, summary="Effective permissions of the caller")
def get_my_permissions(current_user: CurrentUser = Depends(get_current_user)):
    return MinhasPermissoesRead(
        role=current_user.role,
        role_label=get_role_label(current_user.role),
        personalizado=is_customized(current_user.permissoes),
        efetivas=get_user_permissions(current_user),
    )


@router.get("/me/{modulo}/{acao}", response_model=PermissaoCheckRead, summary="Can the caller do <acao> in <modulo>?")
def check_my_permission(
    modulo: str,
    acao: str,
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        module = parse_module(modulo)
        action = parse_action(acao)
    except PermissionsError as e:
        raise HTTPException(400, e.message)

    return PermissaoCheckRead(
        modulo=module.value,
        acao=action.value,
        permitido=has_permission(current_user, module, action),
    )
