# models/user.py

from typing import Any, Optional
from datetime import datetime
from pydantic import BaseModel, field_validator

from core.roles import parse_role
from models.enums import Role
from models.permissions import PermissionMatrix


# ===============================================================
# usuarios ROW
# ===============================================================

class UsuarioBase(BaseModel):
    """
    Mirrors a row of the usuarios table (one per auth.users id).
    """
    id: str
    email: str
    nome: Optional[str] = None
    empresa_id: Optional[int] = None
    role: Role
    ativo: bool = True
    cargo: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None


class UsuarioRead(UsuarioBase):
    """
    Returned to the settings screen: the stored override (or None)
    plus the matrix actually enforced.
    """
    role_label: str
    personalizado: bool = False
    permissoes: Optional[PermissionMatrix] = None
    efetivas: PermissionMatrix


# ===============================================================
# PERMISSION VIEWS
# ===============================================================

class UsuarioPermissoesRead(BaseModel):
    usuario_id: str
    role: Role
    role_label: str
    personalizado: bool
    permissoes: Optional[PermissionMatrix] = None
    defaults: PermissionMatrix
    efetivas: PermissionMatrix


class MinhasPermissoesRead(BaseModel):
    role: Role
    role_label: str
    personalizado: bool
    efetivas: PermissionMatrix


class PermissaoCheckRead(BaseModel):
    modulo: str
    acao: str
    permitido: bool


# ===============================================================
# ADMIN PAYLOADS
# ===============================================================

class _RolePayload(BaseModel):
    role: Role

    @field_validator("role", mode="before")
    @classmethod
    def _accept_role_names(cls, value: Any) -> Role:
        # "membro" and "member" are both accepted
        return parse_role(value)


class UpdatePermissoesRequest(_RolePayload):
    """
    Save from the permissions modal.
    permissoes = None → use the role defaults;
    otherwise a possibly partial matrix, normalized before it is stored.
    """
    permissoes: Optional[Any] = None


class UpdateRoleRequest(_RolePayload):
    pass


class UpdateAtivoRequest(BaseModel):
    ativo: bool
