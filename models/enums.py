from enum import Enum
from typing import Any, Optional


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]

    @classmethod
    def lookup(cls, value: Any) -> Optional["BaseStrEnum"]:
        """
        Resolve a member from its stored value ("membro")
        or its Python name ("member"). Returns None when unknown.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None

        key = value.strip()
        for item in cls:
            if key == item.value or key == item.name:
                return item
        return None


# -----------------------------------------------------
# ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Coarse permission tier stored in usuarios.role."""

    admin = "admin"
    member = "membro"
    viewer = "visualizador"


# -----------------------------------------------------
# MODULE
# -----------------------------------------------------
class Module(BaseStrEnum):
    """Protected functional areas, aligned with the menu and RLS policies."""

    dashboard = "dashboard"
    cost_control = "financeiro"
    measurements = "medicoes"
    purchasing = "compras"
    payables = "contas_a_pagar"
    receivables = "contas_a_receber"
    contracts = "negociacoes"
    suppliers = "fornecedores"
    reports = "relatorios"
    budgeting = "orcamento"
    settings = "configuracoes"


# -----------------------------------------------------
# ACTION
# -----------------------------------------------------
class Action(BaseStrEnum):
    """Unit of permission granularity inside a module."""

    view = "ver"
    create = "criar"
    edit = "editar"
    delete = "excluir"
