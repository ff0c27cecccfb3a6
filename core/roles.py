# ============================================
# ROLE / MODULE / ACTION CATALOGS
#
# Static configuration, in display order.
# ============================================
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict

from core.errors import InvalidAction, InvalidModule, InvalidRole
from models.enums import Action, Module, Role


class CatalogEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    description: Optional[str] = None


# =====================================================
# ROLES
# =====================================================
ROLES: List[CatalogEntry] = [
    CatalogEntry(
        id=Role.admin.value,
        label="Administrador",
        description="Acesso total, incluindo exclusões e gerenciamento de usuários",
    ),
    CatalogEntry(
        id=Role.member.value,
        label="Membro",
        description="Visualizar, criar e editar; sem excluir em módulos sensíveis",
    ),
    CatalogEntry(
        id=Role.viewer.value,
        label="Visualizador",
        description="Apenas visualização em todos os módulos",
    ),
]


# =====================================================
# MODULES: aligned with the sidebar menu and RLS
# =====================================================
MODULES: List[CatalogEntry] = [
    CatalogEntry(id=Module.dashboard.value, label="Dashboard", description="Visão geral e indicadores"),
    CatalogEntry(id=Module.cost_control.value, label="Controle de Insumo", description="Etapas, grupos e itens de custo"),
    CatalogEntry(id=Module.measurements.value, label="Medições", description="Boletins de medição"),
    CatalogEntry(id=Module.purchasing.value, label="Compras", description="Pedidos de compra"),
    CatalogEntry(id=Module.payables.value, label="Contas a Pagar", description="Vencimentos e desembolso"),
    CatalogEntry(id=Module.receivables.value, label="Contas a Receber", description="Receitas e recebimentos"),
    CatalogEntry(id=Module.contracts.value, label="Contratos", description="Negociações e contratos"),
    CatalogEntry(id=Module.suppliers.value, label="Fornecedores", description="Cadastro de fornecedores"),
    CatalogEntry(id=Module.reports.value, label="Relatórios", description="Relatórios e exportações"),
    CatalogEntry(id=Module.budgeting.value, label="Orçamento", description="Orçamento da obra"),
    CatalogEntry(id=Module.settings.value, label="Configurações", description="Configurações e usuários da empresa"),
]


# =====================================================
# ACTIONS
# =====================================================
ACTIONS: List[CatalogEntry] = [
    CatalogEntry(id=Action.view.value, label="Ver"),
    CatalogEntry(id=Action.create.value, label="Criar"),
    CatalogEntry(id=Action.edit.value, label="Editar"),
    CatalogEntry(id=Action.delete.value, label="Excluir"),
]


def list_roles() -> List[CatalogEntry]:
    return list(ROLES)


def list_modules() -> List[CatalogEntry]:
    return list(MODULES)


def list_actions() -> List[CatalogEntry]:
    return list(ACTIONS)


# -----------------------------------------------------
# Parsing (fail fast on anything outside the catalogs)
# -----------------------------------------------------
def parse_role(value: Any) -> Role:
    role = Role.lookup(value)
    if role is None:
        raise InvalidRole(value)
    return role


def parse_module(value: Any) -> Module:
    module = Module.lookup(value)
    if module is None:
        raise InvalidModule(value)
    return module


def parse_action(value: Any) -> Action:
    action = Action.lookup(value)
    if action is None:
        raise InvalidAction(value)
    return action


def get_role_label(role: Any) -> str:
    """Display label for a role; unknown values are returned as-is."""
    known = Role.lookup(role)
    if known is None:
        return str(role)
    return next(entry.label for entry in ROLES if entry.id == known.value)
