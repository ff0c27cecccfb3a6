# models/permissions.py

from typing import Any, Dict, Iterator, Tuple

from pydantic import BaseModel, ConfigDict

from core.roles import parse_action, parse_module
from models.enums import Module


# ===============================================================
# PERMISSION CELL: the four actions of one module
# ===============================================================
class PermissionCell(BaseModel):
    model_config = ConfigDict(frozen=True)

    ver: bool = False
    criar: bool = False
    editar: bool = False
    excluir: bool = False

    def allows(self, action: Any) -> bool:
        return getattr(self, parse_action(action).value)


# ===============================================================
# PERMISSION MATRIX: one cell per catalog module
#
# Field names are the stored module ids, so model_dump() is the
# exact JSON persisted in usuarios.permissoes.
# ===============================================================
class PermissionMatrix(BaseModel):
    model_config = ConfigDict(frozen=True)

    dashboard: PermissionCell
    financeiro: PermissionCell
    medicoes: PermissionCell
    compras: PermissionCell
    contas_a_pagar: PermissionCell
    contas_a_receber: PermissionCell
    negociacoes: PermissionCell
    fornecedores: PermissionCell
    relatorios: PermissionCell
    orcamento: PermissionCell
    configuracoes: PermissionCell

    def __getitem__(self, module: Any) -> PermissionCell:
        return getattr(self, parse_module(module).value)

    def allows(self, module: Any, action: Any) -> bool:
        """matrix.allows("compras", "editar") / matrix.allows(Module.purchasing, Action.edit)"""
        return self[module].allows(action)

    def cells(self) -> Iterator[Tuple[Module, PermissionCell]]:
        """Cells in catalog order."""
        for module in Module:
            yield module, self[module]

    def to_dict(self) -> Dict[str, Dict[str, bool]]:
        return self.model_dump()
